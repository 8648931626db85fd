"""
Application use cases.
"""

from splyt.application.use_cases.authenticate_wallet import (
    AUTH_CHALLENGE_MESSAGE,
    AuthenticateWallet,
)
from splyt.application.use_cases.cancel_split import CancelSplit
from splyt.application.use_cases.create_split import CreateSplit
from splyt.application.use_cases.create_user import CreateUser
from splyt.application.use_cases.get_split_by_id import GetSplitById
from splyt.application.use_cases.get_split_transactions import (
    GetSplitTransactions,
)
from splyt.application.use_cases.get_splits import GetSplits
from splyt.application.use_cases.get_splits_by_creator import GetSplitsByCreator
from splyt.application.use_cases.get_splits_by_participant import (
    GetSplitsByParticipant,
)
from splyt.application.use_cases.get_unread_notification_count import (
    GetUnreadNotificationCount,
)
from splyt.application.use_cases.list_notifications import ListNotifications
from splyt.application.use_cases.mark_all_notifications_read import (
    MarkAllNotificationsRead,
)
from splyt.application.use_cases.mark_notification_read import (
    MarkNotificationRead,
)
from splyt.application.use_cases.record_participant_payment import (
    RecordParticipantPayment,
)
from splyt.application.use_cases.send_payment_reminder import (
    SendPaymentReminder,
)
from splyt.application.use_cases.split_enrichment import SplitEnricher

__all__ = [
    "AUTH_CHALLENGE_MESSAGE",
    "AuthenticateWallet",
    "CancelSplit",
    "CreateSplit",
    "CreateUser",
    "GetSplitById",
    "GetSplitTransactions",
    "GetSplits",
    "GetSplitsByCreator",
    "GetSplitsByParticipant",
    "GetUnreadNotificationCount",
    "ListNotifications",
    "MarkAllNotificationsRead",
    "MarkNotificationRead",
    "RecordParticipantPayment",
    "SendPaymentReminder",
    "SplitEnricher",
]
