"""
Unit tests for RecordParticipantPayment use case.

Tests payment recording, split completion and its notifications.
"""

from decimal import Decimal
from unittest.mock import AsyncMock

import pytest

from splyt.application.use_cases.record_participant_payment import (
    RecordParticipantPayment,
)
from splyt.domain.entities.notification import (
    NotificationPriority,
    NotificationType,
)
from splyt.domain.entities.split import SplitStatus
from splyt.domain.entities.transaction_log import (
    TransactionLogStatus,
    TransactionLogType,
)
from splyt.domain.exceptions import (
    DuplicateTransactionError,
    EntityNotFoundError,
    InvalidSplitStateError,
    ValidationError,
)
from tests.helpers.factories import (
    CREATOR,
    PAYER_A,
    PAYER_B,
    PAYER_C,
    make_split,
    random_tx_hash,
)


class TestRecordParticipantPayment:
    """Unit tests for RecordParticipantPayment use case."""

    # ================================================================
    # Helper Methods
    # ================================================================

    def _make_use_case(self, split=None):
        split_repository = AsyncMock()
        split_repository.get_by_split_id.return_value = split
        split_repository.update.side_effect = lambda s: s

        transaction_log_repository = AsyncMock()
        transaction_log_repository.get_by_tx_hash.return_value = None
        transaction_log_repository.create.side_effect = lambda log: log

        notification_repository = AsyncMock()
        notification_repository.create.side_effect = lambda n: n

        user_repository = AsyncMock()

        use_case = RecordParticipantPayment(
            split_repository=split_repository,
            transaction_log_repository=transaction_log_repository,
            notification_repository=notification_repository,
            user_repository=user_repository,
        )
        return (
            use_case,
            split_repository,
            transaction_log_repository,
            notification_repository,
            user_repository,
        )

    def _notification_types(self, notification_repository):
        return [
            call.args[0].type for call in notification_repository.create.call_args_list
        ]

    # ================================================================
    # Test Methods
    # ================================================================

    async def test_partial_payment(self):
        """Test first of two payments: logged, creator notified, not complete."""
        # Mock dependencies
        split = make_split(split_id=3)
        (
            use_case,
            split_repository,
            transaction_log_repository,
            notification_repository,
            user_repository,
        ) = self._make_use_case(split)
        tx_hash = random_tx_hash()

        # Execute use case
        result = await use_case.execute(3, PAYER_A, tx_hash.upper().replace("0X", "0x"))

        # Verify
        assert result.status == SplitStatus.ACTIVE
        participant = result.find_participant(PAYER_A)
        assert participant.has_paid is True
        assert participant.payment_tx_hash == tx_hash
        split_repository.update.assert_called_once()

        log = transaction_log_repository.create.call_args.args[0]
        assert log.tx_hash == tx_hash
        assert log.type == TransactionLogType.PAYMENT
        assert log.status == TransactionLogStatus.PENDING
        assert log.amount == Decimal("10")
        assert log.split_id == split.id

        assert self._notification_types(notification_repository) == [
            NotificationType.PAYMENT_RECEIVED
        ]
        notification = notification_repository.create.call_args.args[0]
        assert notification.recipient_address == CREATOR
        user_repository.increment_split_joined.assert_called_once_with(
            PAYER_A, Decimal("10")
        )

    async def test_last_payment_completes_split(self):
        """Test completing payment adds a high-priority completion notice."""
        # Mock dependencies
        split = make_split(split_id=3)
        split.mark_participant_paid(PAYER_A, random_tx_hash())
        use_case, _, _, notification_repository, _ = self._make_use_case(split)

        # Execute use case
        result = await use_case.execute(3, PAYER_B, random_tx_hash())

        # Verify
        assert result.status == SplitStatus.COMPLETED
        assert result.is_completed is True
        assert self._notification_types(notification_repository) == [
            NotificationType.PAYMENT_RECEIVED,
            NotificationType.SPLIT_COMPLETED,
        ]
        completed = notification_repository.create.call_args_list[1].args[0]
        assert completed.priority == NotificationPriority.HIGH

    async def test_split_not_found(self):
        use_case, *_ = self._make_use_case(split=None)

        with pytest.raises(EntityNotFoundError, match="Split"):
            await use_case.execute(99, PAYER_A, random_tx_hash())

    async def test_cancelled_split_rejects_payment(self):
        split = make_split()
        split.update_status(SplitStatus.CANCELLED)
        use_case, split_repository, *_ = self._make_use_case(split)

        with pytest.raises(InvalidSplitStateError):
            await use_case.execute(1, PAYER_A, random_tx_hash())

        split_repository.update.assert_not_called()

    async def test_non_participant_rejected(self):
        use_case, *_ = self._make_use_case(make_split())

        with pytest.raises(EntityNotFoundError, match="Participant"):
            await use_case.execute(1, PAYER_C, random_tx_hash())

    async def test_already_paid_rejected(self):
        split = make_split()
        split.mark_participant_paid(PAYER_A, random_tx_hash())
        use_case, *_ = self._make_use_case(split)

        with pytest.raises(InvalidSplitStateError, match="already paid"):
            await use_case.execute(1, PAYER_A, random_tx_hash())

    async def test_reused_tx_hash_rejected(self):
        """Test a payment hash already in the log is refused."""
        (
            use_case,
            split_repository,
            transaction_log_repository,
            _,
            _,
        ) = self._make_use_case(make_split())
        transaction_log_repository.get_by_tx_hash.return_value = object()

        with pytest.raises(DuplicateTransactionError):
            await use_case.execute(1, PAYER_A, random_tx_hash())

        split_repository.update.assert_not_called()

    async def test_malformed_tx_hash(self):
        use_case, *_ = self._make_use_case(make_split())

        with pytest.raises(ValidationError) as exc_info:
            await use_case.execute(1, PAYER_A, "0x1234")

        assert exc_info.value.field == "txHash"

    async def test_stats_failure_does_not_fail_payment(self):
        split = make_split()
        use_case, _, _, _, user_repository = self._make_use_case(split)
        user_repository.increment_split_joined.side_effect = RuntimeError("boom")

        result = await use_case.execute(1, PAYER_A, random_tx_hash())

        assert result.find_participant(PAYER_A).has_paid is True
