"""
Mark All Notifications Read use case.
"""

from splyt.application.use_cases.validation import require_wallet_address
from splyt.domain.repositories.i_notification_repository import (
    INotificationRepository,
)
from splyt.infrastructure.monitoring.logger import get_logger

logger = get_logger(__name__)


class MarkAllNotificationsRead:
    def __init__(self, notification_repository: INotificationRepository):
        self.notification_repository = notification_repository

    async def execute(self, recipient_address: str) -> int:
        """
        Mark every unread notification of a wallet as read.

        Returns:
            Number of notifications updated
        """
        recipient = require_wallet_address(recipient_address)
        updated = await self.notification_repository.mark_all_as_read(recipient)
        logger.debug(f"Marked {updated} notifications read for {recipient}")
        return updated
