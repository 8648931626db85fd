"""
Mark Notification Read use case.
"""

from uuid import UUID

from splyt.application.use_cases.validation import require_wallet_address
from splyt.domain.entities.notification import Notification
from splyt.domain.exceptions import EntityNotFoundError
from splyt.domain.repositories.i_notification_repository import (
    INotificationRepository,
)


class MarkNotificationRead:
    """
    Mark one notification as read.

    Notifications addressed to another wallet are reported as not
    found so their existence is not disclosed.
    """

    def __init__(self, notification_repository: INotificationRepository):
        self.notification_repository = notification_repository

    async def execute(
        self, notification_id: UUID, recipient_address: str
    ) -> Notification:
        """
        Raises:
            EntityNotFoundError: If absent or addressed to another wallet
        """
        recipient = require_wallet_address(recipient_address)

        notification = await self.notification_repository.get_by_id(
            notification_id
        )
        if not notification or notification.recipient_address != recipient:
            raise EntityNotFoundError("Notification", str(notification_id))

        if notification.is_read:
            return notification

        notification.mark_as_read()
        return await self.notification_repository.update(notification)
