"""
Notification repository interface.
"""

from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from splyt.domain.entities.notification import Notification, NotificationType


class INotificationRepository(ABC):
    """Interface for notification persistence operations."""

    @abstractmethod
    async def create(self, notification: Notification) -> Notification:
        """Store a new notification."""

    @abstractmethod
    async def update(self, notification: Notification) -> Notification:
        """Save read/sent state changes."""

    @abstractmethod
    async def get_by_id(self, notification_id: UUID) -> Optional[Notification]:
        """Get notification by ID."""

    @abstractmethod
    async def list_by_recipient(
        self,
        recipient_address: str,
        is_read: Optional[bool] = None,
        type: Optional[NotificationType] = None,
        limit: Optional[int] = None,
        skip: int = 0,
    ) -> List[Notification]:
        """
        List notifications for a wallet, newest first.

        Args:
            recipient_address: Recipient wallet address
            is_read: Filter by read flag (None = all)
            type: Optional type filter
            limit: Maximum results (None = unbounded)
            skip: Results to skip

        Returns:
            List of notifications
        """

    @abstractmethod
    async def list_by_split(
        self, split_id: UUID, limit: int = 100
    ) -> List[Notification]:
        """Notifications tied to a split, newest first."""

    @abstractmethod
    async def count_unread(self, recipient_address: str) -> int:
        """Number of unread notifications for a wallet."""

    @abstractmethod
    async def mark_all_as_read(self, recipient_address: str) -> int:
        """
        Mark every unread notification of a wallet as read.

        Returns:
            Number of notifications changed
        """
