"""Domain entities."""

from splyt.domain.entities.notification import (
    Notification,
    NotificationChannel,
    NotificationPriority,
    NotificationType,
)
from splyt.domain.entities.split import (
    Currency,
    Participant,
    Split,
    SplitCategory,
    SplitStatus,
)
from splyt.domain.entities.transaction_log import (
    TransactionLog,
    TransactionLogStatus,
    TransactionLogType,
)
from splyt.domain.entities.user import User

__all__ = [
    "User",
    "Split",
    "Participant",
    "SplitStatus",
    "SplitCategory",
    "Currency",
    "TransactionLog",
    "TransactionLogType",
    "TransactionLogStatus",
    "Notification",
    "NotificationType",
    "NotificationChannel",
    "NotificationPriority",
]
