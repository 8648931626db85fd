"""Repository implementations."""

from splyt.infrastructure.persistence.repositories.notification_repository import (
    NotificationRepository,
)
from splyt.infrastructure.persistence.repositories.split_repository import (
    SplitRepository,
)
from splyt.infrastructure.persistence.repositories.transaction_log_repository import (
    TransactionLogRepository,
)
from splyt.infrastructure.persistence.repositories.user_repository import (
    UserRepository,
)

__all__ = [
    "UserRepository",
    "SplitRepository",
    "TransactionLogRepository",
    "NotificationRepository",
]
