"""
Notification entity - Domain model for messages addressed to a wallet.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional
from uuid import UUID, uuid4

from splyt.domain.value_objects.wallet_address import normalize_address

MAX_TITLE_LENGTH = 200
MAX_MESSAGE_LENGTH = 1000


class NotificationType(str, Enum):
    """Events a notification can describe."""

    SPLIT_CREATED = "split_created"
    PAYMENT_RECEIVED = "payment_received"
    PAYMENT_REMINDER = "payment_reminder"
    SPLIT_COMPLETED = "split_completed"
    SPLIT_CANCELLED = "split_cancelled"
    REFUND_ISSUED = "refund_issued"
    INVITATION_SENT = "invitation_sent"
    PARTICIPANT_ADDED = "participant_added"
    PARTICIPANT_REMOVED = "participant_removed"


class NotificationChannel(str, Enum):
    """Delivery channels."""

    WHATSAPP = "whatsapp"
    PUSH = "push"
    EMAIL = "email"
    SMS = "sms"
    IN_APP = "in_app"


class NotificationPriority(str, Enum):
    """Delivery priority."""

    LOW = "low"
    NORMAL = "normal"
    HIGH = "high"
    URGENT = "urgent"


@dataclass
class Notification:
    """
    Notification entity.

    Business rules:
    - Recipient address stored lowercase
    - Title 1-200 characters, message 1-1000 characters
    - At least one delivery channel
    - Read and sent flags flip once; later calls are no-ops
    """

    id: UUID = field(default_factory=uuid4)
    recipient_address: str = field(default="")
    split_id: Optional[UUID] = field(default=None)
    type: NotificationType = field(default=NotificationType.SPLIT_CREATED)
    title: str = field(default="")
    message: str = field(default="")
    channels: List[NotificationChannel] = field(
        default_factory=lambda: [NotificationChannel.IN_APP]
    )
    is_read: bool = field(default=False)
    read_at: Optional[datetime] = field(default=None)
    is_sent: bool = field(default=False)
    sent_at: Optional[datetime] = field(default=None)
    send_attempts: int = field(default=0)
    last_send_attempt_at: Optional[datetime] = field(default=None)
    data: Dict[str, Any] = field(default_factory=dict)
    priority: NotificationPriority = field(default=NotificationPriority.NORMAL)
    created_at: datetime = field(default_factory=datetime.now)
    updated_at: datetime = field(default_factory=datetime.now)

    def __post_init__(self):
        """Validate notification after initialization."""
        self.recipient_address = normalize_address(self.recipient_address)
        self.type = NotificationType(self.type)
        self.priority = NotificationPriority(self.priority)

        self.title = (self.title or "").strip()
        if not 1 <= len(self.title) <= MAX_TITLE_LENGTH:
            raise ValueError(
                f"Title must be between 1 and {MAX_TITLE_LENGTH} characters"
            )

        self.message = (self.message or "").strip()
        if not 1 <= len(self.message) <= MAX_MESSAGE_LENGTH:
            raise ValueError(
                f"Message must be between 1 and {MAX_MESSAGE_LENGTH} characters"
            )

        if not self.channels:
            raise ValueError("At least one channel is required")
        self.channels = [NotificationChannel(c) for c in self.channels]

        if self.send_attempts < 0:
            raise ValueError("Send attempts cannot be negative")

    @property
    def is_unread(self) -> bool:
        return not self.is_read

    @property
    def is_delivered(self) -> bool:
        return self.is_sent and self.sent_at is not None

    @property
    def age_in_hours(self) -> int:
        """Whole hours since creation."""
        return int((datetime.now() - self.created_at).total_seconds() // 3600)

    def mark_as_read(self) -> None:
        """Mark as read; no-op when already read."""
        if self.is_read:
            return
        self.is_read = True
        self.read_at = datetime.now()
        self.updated_at = self.read_at

    def mark_as_sent(self) -> None:
        """Mark as sent and count the attempt; no-op when already sent."""
        if self.is_sent:
            return
        now = datetime.now()
        self.is_sent = True
        self.sent_at = now
        self.send_attempts += 1
        self.last_send_attempt_at = now
        self.updated_at = now

    def increment_send_attempts(self) -> None:
        now = datetime.now()
        self.send_attempts += 1
        self.last_send_attempt_at = now
        self.updated_at = now

    def mark_as_failed(self) -> None:
        """Flag delivery failure in the data payload."""
        now = datetime.now()
        self.data = {**self.data, "failed": True, "failed_at": now.isoformat()}
        self.updated_at = now

    def to_dict(self) -> dict:
        """Convert entity to dictionary representation."""
        return {
            "id": str(self.id),
            "recipient_address": self.recipient_address,
            "split_id": str(self.split_id) if self.split_id else None,
            "type": self.type.value,
            "title": self.title,
            "message": self.message,
            "channels": [c.value for c in self.channels],
            "is_read": self.is_read,
            "read_at": self.read_at.isoformat() if self.read_at else None,
            "is_sent": self.is_sent,
            "priority": self.priority.value,
            "data": self.data,
            "created_at": self.created_at.isoformat(),
        }
