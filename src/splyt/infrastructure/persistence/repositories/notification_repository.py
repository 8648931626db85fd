"""
Notification repository implementation using SQLAlchemy.
"""

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from splyt.domain.entities.notification import (
    Notification,
    NotificationChannel,
    NotificationPriority,
    NotificationType,
)
from splyt.domain.exceptions import EntityNotFoundError
from splyt.domain.repositories.i_notification_repository import (
    INotificationRepository,
)
from splyt.infrastructure.persistence.models import NotificationModel


class NotificationRepository(INotificationRepository):
    """SQLAlchemy implementation of notification repository."""

    def __init__(self, session: AsyncSession):
        """
        Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def create(self, notification: Notification) -> Notification:
        """
        Store a new notification.

        Args:
            notification: Notification entity

        Returns:
            Created notification entity
        """
        model = NotificationModel(
            id=notification.id,
            recipient_address=notification.recipient_address,
            split_id=notification.split_id,
            type=notification.type.value,
            title=notification.title,
            message=notification.message,
            channels=[c.value for c in notification.channels],
            is_read=notification.is_read,
            read_at=notification.read_at,
            is_sent=notification.is_sent,
            sent_at=notification.sent_at,
            send_attempts=notification.send_attempts,
            last_send_attempt_at=notification.last_send_attempt_at,
            data=dict(notification.data),
            priority=notification.priority.value,
            created_at=notification.created_at,
            updated_at=notification.updated_at,
        )

        self.session.add(model)
        await self.session.flush()

        return self._to_entity(model)

    async def update(self, notification: Notification) -> Notification:
        """
        Save read and delivery state.

        Raises:
            EntityNotFoundError: If notification not found
        """
        stmt = select(NotificationModel).where(
            NotificationModel.id == notification.id
        )
        result = await self.session.execute(stmt)
        model = result.scalar_one_or_none()

        if not model:
            raise EntityNotFoundError("Notification", str(notification.id))

        model.is_read = notification.is_read
        model.read_at = notification.read_at
        model.is_sent = notification.is_sent
        model.sent_at = notification.sent_at
        model.send_attempts = notification.send_attempts
        model.last_send_attempt_at = notification.last_send_attempt_at
        model.data = dict(notification.data)
        model.updated_at = notification.updated_at

        await self.session.flush()

        return self._to_entity(model)

    async def get_by_id(self, notification_id: UUID) -> Optional[Notification]:
        stmt = select(NotificationModel).where(NotificationModel.id == notification_id)
        result = await self.session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

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
            List of notification entities
        """
        stmt = select(NotificationModel).where(
            NotificationModel.recipient_address == recipient_address.strip().lower()
        )

        if is_read is not None:
            stmt = stmt.where(NotificationModel.is_read.is_(is_read))
        if type:
            stmt = stmt.where(NotificationModel.type == NotificationType(type).value)

        stmt = stmt.order_by(NotificationModel.created_at.desc())

        if skip:
            stmt = stmt.offset(skip)
        if limit:
            stmt = stmt.limit(limit)

        result = await self.session.execute(stmt)
        return [self._to_entity(m) for m in result.scalars().all()]

    async def list_by_split(
        self, split_id: UUID, limit: int = 100
    ) -> List[Notification]:
        stmt = (
            select(NotificationModel)
            .where(NotificationModel.split_id == split_id)
            .order_by(NotificationModel.created_at.desc())
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return [self._to_entity(m) for m in result.scalars().all()]

    async def count_unread(self, recipient_address: str) -> int:
        stmt = select(func.count(NotificationModel.id)).where(
            NotificationModel.recipient_address == recipient_address.strip().lower(),
            NotificationModel.is_read.is_(False),
        )
        result = await self.session.execute(stmt)
        return result.scalar_one()

    async def mark_all_as_read(self, recipient_address: str) -> int:
        """
        Mark every unread notification of a wallet as read.

        Returns:
            Number of notifications changed
        """
        now = datetime.now()
        stmt = (
            update(NotificationModel)
            .where(
                NotificationModel.recipient_address
                == recipient_address.strip().lower(),
                NotificationModel.is_read.is_(False),
            )
            .values(is_read=True, read_at=now, updated_at=now)
            .execution_options(synchronize_session="fetch")
        )
        result = await self.session.execute(stmt)
        return result.rowcount

    def _to_entity(self, model: NotificationModel) -> Notification:
        """Convert ORM model to domain entity."""
        return Notification(
            id=model.id,
            recipient_address=model.recipient_address,
            split_id=model.split_id,
            type=NotificationType(model.type),
            title=model.title,
            message=model.message,
            channels=[NotificationChannel(c) for c in model.channels],
            is_read=model.is_read,
            read_at=model.read_at,
            is_sent=model.is_sent,
            sent_at=model.sent_at,
            send_attempts=model.send_attempts or 0,
            last_send_attempt_at=model.last_send_attempt_at,
            data=dict(model.data or {}),
            priority=NotificationPriority(model.priority),
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
