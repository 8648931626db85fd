"""Domain repository interfaces."""

from splyt.domain.repositories.i_notification_repository import (
    INotificationRepository,
)
from splyt.domain.repositories.i_split_repository import ISplitRepository
from splyt.domain.repositories.i_transaction_log_repository import (
    ITransactionLogRepository,
)
from splyt.domain.repositories.i_user_repository import IUserRepository

__all__ = [
    "IUserRepository",
    "ISplitRepository",
    "ITransactionLogRepository",
    "INotificationRepository",
]
