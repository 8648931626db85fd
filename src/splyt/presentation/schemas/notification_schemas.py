"""
Notification API schemas.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from splyt.domain.entities.notification import Notification
from splyt.presentation.schemas.common import CamelModel


class NotificationResponse(CamelModel):
    id: str
    type: str
    title: str
    message: str
    split_id: Optional[str] = None
    channels: List[str]
    priority: str
    is_read: bool
    read_at: Optional[datetime] = None
    data: Dict[str, Any]
    created_at: datetime

    @classmethod
    def from_entity(cls, notification: Notification) -> "NotificationResponse":
        return cls(
            id=str(notification.id),
            type=notification.type.value,
            title=notification.title,
            message=notification.message,
            split_id=str(notification.split_id) if notification.split_id else None,
            channels=[c.value for c in notification.channels],
            priority=notification.priority.value,
            is_read=notification.is_read,
            read_at=notification.read_at,
            data=notification.data,
            created_at=notification.created_at,
        )


class UnreadCountResponse(CamelModel):
    count: int


class MarkAllReadResponse(CamelModel):
    updated: int
