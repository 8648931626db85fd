"""
List Notifications use case.
"""

from typing import List, Optional

from splyt.application.use_cases.validation import require_wallet_address
from splyt.domain.entities.notification import Notification, NotificationType
from splyt.domain.repositories.i_notification_repository import (
    INotificationRepository,
)


class ListNotifications:
    """List notifications addressed to a wallet, newest first."""

    def __init__(self, notification_repository: INotificationRepository):
        self.notification_repository = notification_repository

    async def execute(
        self,
        recipient_address: str,
        unread_only: bool = False,
        type: Optional[NotificationType] = None,
        limit: Optional[int] = None,
        skip: int = 0,
    ) -> List[Notification]:
        """
        Execute notification listing.

        Args:
            recipient_address: Authenticated wallet
            unread_only: Only return unread notifications
            type: Optional notification type filter
            limit: Maximum results
            skip: Results to skip

        Returns:
            Notifications for the wallet
        """
        recipient = require_wallet_address(recipient_address)
        return await self.notification_repository.list_by_recipient(
            recipient,
            is_read=False if unread_only else None,
            type=type,
            limit=limit,
            skip=skip,
        )
