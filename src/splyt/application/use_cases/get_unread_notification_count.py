"""
Get Unread Notification Count use case.
"""

from splyt.application.use_cases.validation import require_wallet_address
from splyt.domain.repositories.i_notification_repository import (
    INotificationRepository,
)


class GetUnreadNotificationCount:
    def __init__(self, notification_repository: INotificationRepository):
        self.notification_repository = notification_repository

    async def execute(self, recipient_address: str) -> int:
        recipient = require_wallet_address(recipient_address)
        return await self.notification_repository.count_unread(recipient)
