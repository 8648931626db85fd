"""
Unit tests for SendPaymentReminder, CancelSplit and
GetSplitTransactions use cases.
"""

from unittest.mock import AsyncMock

import pytest

from splyt.application.use_cases.cancel_split import CancelSplit
from splyt.application.use_cases.get_split_transactions import (
    GetSplitTransactions,
)
from splyt.application.use_cases.send_payment_reminder import (
    SendPaymentReminder,
)
from splyt.domain.entities.notification import (
    NotificationChannel,
    NotificationType,
)
from splyt.domain.entities.split import SplitStatus
from splyt.domain.exceptions import (
    EntityNotFoundError,
    InvalidSplitStateError,
    PermissionDeniedError,
)
from tests.helpers.factories import (
    CREATOR,
    PAYER_A,
    PAYER_B,
    PAYER_C,
    make_participants,
    make_split,
    random_tx_hash,
)


def _repositories(split):
    split_repository = AsyncMock()
    split_repository.get_by_split_id.return_value = split
    split_repository.update.side_effect = lambda s: s
    notification_repository = AsyncMock()
    notification_repository.create.side_effect = lambda n: n
    return split_repository, notification_repository


class TestSendPaymentReminder:
    """Unit tests for SendPaymentReminder use case."""

    async def test_reminder_sent(self):
        """Test reminder increments the count and stores an in-app notice."""
        # Mock dependencies
        split = make_split(split_id=4)
        split_repository, notification_repository = _repositories(split)
        use_case = SendPaymentReminder(split_repository, notification_repository)

        # Execute use case
        notification = await use_case.execute(4, CREATOR, PAYER_A)

        # Verify
        assert notification.type == NotificationType.PAYMENT_REMINDER
        assert notification.recipient_address == PAYER_A
        assert notification.channels == [NotificationChannel.IN_APP]
        assert notification.data == {"splitId": 4, "reminderCount": 1}
        saved = split_repository.update.call_args.args[0]
        assert saved.find_participant(PAYER_A).reminder_count == 1

    async def test_only_creator_may_remind(self):
        split_repository, notification_repository = _repositories(make_split())
        use_case = SendPaymentReminder(split_repository, notification_repository)

        with pytest.raises(PermissionDeniedError):
            await use_case.execute(1, PAYER_B, PAYER_A)

        notification_repository.create.assert_not_called()

    async def test_paid_participant_not_reminded(self):
        split = make_split()
        split.mark_participant_paid(PAYER_A, random_tx_hash())
        split_repository, notification_repository = _repositories(split)
        use_case = SendPaymentReminder(split_repository, notification_repository)

        with pytest.raises(InvalidSplitStateError, match="already paid"):
            await use_case.execute(1, CREATOR, PAYER_A)

        split_repository.update.assert_not_called()

    async def test_closed_split_not_reminded(self):
        split = make_split()
        split.update_status(SplitStatus.CANCELLED)
        split_repository, notification_repository = _repositories(split)
        use_case = SendPaymentReminder(split_repository, notification_repository)

        with pytest.raises(InvalidSplitStateError, match="cancelled"):
            await use_case.execute(1, CREATOR, PAYER_A)

    async def test_unknown_participant(self):
        split_repository, notification_repository = _repositories(make_split())
        use_case = SendPaymentReminder(split_repository, notification_repository)

        with pytest.raises(EntityNotFoundError, match="Participant"):
            await use_case.execute(1, CREATOR, PAYER_C)

    async def test_unknown_split(self):
        split_repository, notification_repository = _repositories(None)
        use_case = SendPaymentReminder(split_repository, notification_repository)

        with pytest.raises(EntityNotFoundError, match="Split"):
            await use_case.execute(1, CREATOR, PAYER_A)


class TestCancelSplit:
    """Unit tests for CancelSplit use case."""

    async def test_cancel_notifies_participants(self):
        """Test cancel sets flags and notifies everyone but the creator."""
        # Mock dependencies
        split = make_split(participants=make_participants([CREATOR, PAYER_A, PAYER_B]))
        split_repository, notification_repository = _repositories(split)
        use_case = CancelSplit(split_repository, notification_repository)

        # Execute use case
        result = await use_case.execute(1, CREATOR)

        # Verify
        assert result.status == SplitStatus.CANCELLED
        assert result.is_cancelled is True
        assert result.cancelled_at is not None
        recipients = [
            call.args[0].recipient_address
            for call in notification_repository.create.call_args_list
        ]
        assert recipients == [PAYER_A, PAYER_B]

    async def test_cancel_twice_is_noop(self):
        split = make_split()
        split.update_status(SplitStatus.CANCELLED)
        split_repository, notification_repository = _repositories(split)
        use_case = CancelSplit(split_repository, notification_repository)

        result = await use_case.execute(1, CREATOR)

        assert result is split
        split_repository.update.assert_not_called()
        notification_repository.create.assert_not_called()

    async def test_completed_split_cannot_be_cancelled(self):
        split = make_split(participants=make_participants([PAYER_A]))
        split.mark_participant_paid(PAYER_A, random_tx_hash())
        split_repository, notification_repository = _repositories(split)
        use_case = CancelSplit(split_repository, notification_repository)

        with pytest.raises(InvalidSplitStateError, match="completed"):
            await use_case.execute(1, CREATOR)

    async def test_only_creator_may_cancel(self):
        split_repository, notification_repository = _repositories(make_split())
        use_case = CancelSplit(split_repository, notification_repository)

        with pytest.raises(PermissionDeniedError):
            await use_case.execute(1, PAYER_A)

    async def test_unknown_split(self):
        split_repository, notification_repository = _repositories(None)
        use_case = CancelSplit(split_repository, notification_repository)

        with pytest.raises(EntityNotFoundError):
            await use_case.execute(1, CREATOR)


class TestGetSplitTransactions:
    """Unit tests for GetSplitTransactions use case."""

    async def test_lists_logs_by_internal_split_id(self):
        split = make_split(split_id=6)
        split_repository = AsyncMock()
        split_repository.get_by_split_id.return_value = split
        transaction_log_repository = AsyncMock()
        transaction_log_repository.list_by_split.return_value = []
        use_case = GetSplitTransactions(split_repository, transaction_log_repository)

        result = await use_case.execute(6, limit=10, skip=2)

        assert result == []
        transaction_log_repository.list_by_split.assert_called_once_with(
            split.id, limit=10, skip=2
        )

    async def test_unknown_split(self):
        split_repository = AsyncMock()
        split_repository.get_by_split_id.return_value = None
        use_case = GetSplitTransactions(split_repository, AsyncMock())

        with pytest.raises(EntityNotFoundError):
            await use_case.execute(6)
