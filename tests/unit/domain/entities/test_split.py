"""
Unit tests for Split and Participant entities.

Tests validation, derived totals and lifecycle transitions.
"""

from datetime import datetime, timedelta
from decimal import Decimal

import pytest

from splyt.domain.entities.split import (
    Currency,
    Participant,
    Split,
    SplitCategory,
    SplitStatus,
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


class TestParticipant:
    """Unit tests for Participant entity."""

    def test_address_normalized_to_lowercase(self):
        """Test mixed-case address is stored lowercase."""
        participant = Participant(
            wallet_address="0x" + "AbCdEf" * 6 + "AbCd", amount_due=Decimal("5")
        )

        assert participant.wallet_address == "0x" + "abcdef" * 6 + "abcd"

    def test_negative_amount_rejected(self):
        """Test negative amount due raises ValueError."""
        with pytest.raises(ValueError, match="negative"):
            Participant(wallet_address=PAYER_A, amount_due=Decimal("-1"))

    def test_invalid_address_rejected(self):
        """Test malformed address raises ValueError."""
        with pytest.raises(ValueError, match="Invalid wallet address"):
            Participant(wallet_address="0x1234", amount_due=Decimal("1"))

    def test_name_too_long_rejected(self):
        """Test participant name over 100 characters."""
        with pytest.raises(ValueError, match="100"):
            Participant(
                wallet_address=PAYER_A, amount_due=Decimal("1"), name="x" * 101
            )

    def test_dict_round_trip_keeps_payment_state(self):
        """Test stored document rebuilds an equal participant."""
        participant = Participant(
            wallet_address=PAYER_A,
            amount_due=Decimal("12.345678"),
            name="Alice",
            has_paid=True,
            paid_at=datetime(2026, 3, 1, 12, 0),
            payment_tx_hash=random_tx_hash(),
            reminder_count=2,
        )

        restored = Participant.from_dict(participant.to_dict())

        assert restored == participant


class TestSplit:
    """Unit tests for Split entity."""

    # ================================================================
    # Validation
    # ================================================================

    def test_create_split_defaults(self):
        """Test defaults: USDC, pending flags off, 30 day expiry."""
        split = make_split(status=SplitStatus.PENDING)

        assert split.currency == Currency.USDC
        assert split.is_completed is False
        assert split.is_cancelled is False
        assert split.expires_at == split.created_at + timedelta(days=30)

    def test_split_id_must_be_positive(self):
        with pytest.raises(ValueError, match="positive"):
            make_split(split_id=0)

    def test_tx_hash_format_enforced(self):
        with pytest.raises(ValueError, match="tx hash"):
            make_split(tx_hash="0xdeadbeef")

    def test_tx_hash_stored_lowercase(self):
        tx_hash = "0x" + "AB" * 32
        split = make_split(tx_hash=tx_hash)

        assert split.tx_hash == tx_hash.lower()

    def test_minimum_total_amount(self):
        """Test total below 0.01 is rejected."""
        with pytest.raises(ValueError, match="at least"):
            make_split(
                participants=make_participants([PAYER_A], Decimal("0")),
                total_amount=Decimal("0.001"),
            )

    def test_participant_count_bounds(self):
        """Test 0 and 51 participants are rejected, 50 accepted."""
        with pytest.raises(ValueError, match="between"):
            make_split(participants=[], total_amount=Decimal("1"))

        addresses = ["0x" + f"{i:040x}" for i in range(1, 52)]
        with pytest.raises(ValueError, match="between"):
            make_split(participants=make_participants(addresses, Decimal("1")))

        split = make_split(
            participants=make_participants(addresses[:50], Decimal("1"))
        )
        assert len(split.participants) == 50

    def test_duplicate_participants_rejected(self):
        """Test same address in two cases counts as a duplicate."""
        shouted = "0x" + PAYER_A[2:].upper()
        participants = [
            Participant(wallet_address=PAYER_A, amount_due=Decimal("1")),
            Participant(wallet_address=shouted, amount_due=Decimal("1")),
        ]

        with pytest.raises(ValueError, match="unique"):
            make_split(participants=participants)

    def test_image_url_must_be_http(self):
        with pytest.raises(ValueError, match="http"):
            Split(
                split_id=1,
                contract_address=PAYER_C,
                tx_hash=random_tx_hash(),
                creator_address=CREATOR,
                description="Trip",
                total_amount=Decimal("10"),
                participants=make_participants([PAYER_A]),
                image_url="ftp://example.com/a.png",
            )

    def test_category_coerced_to_enum(self):
        split = Split(
            split_id=1,
            contract_address=PAYER_C,
            tx_hash=random_tx_hash(),
            creator_address=CREATOR,
            description="Rent",
            total_amount=Decimal("10"),
            participants=make_participants([PAYER_A]),
            category="rent",
        )

        assert split.category == SplitCategory.RENT

    # ================================================================
    # Derived Values
    # ================================================================

    def test_totals_and_counts(self):
        """Test paid/unpaid totals follow payments."""
        split = make_split(
            participants=[
                Participant(wallet_address=PAYER_A, amount_due=Decimal("30")),
                Participant(wallet_address=PAYER_B, amount_due=Decimal("70")),
            ]
        )
        split.mark_participant_paid(PAYER_A, random_tx_hash())

        assert split.total_paid == Decimal("30")
        assert split.total_unpaid == Decimal("70")
        assert split.paid_count == 1
        assert split.unpaid_count == 1
        assert split.completion_percentage == 30

    def test_amount_consistency_tolerance(self):
        """Test mismatch of 0.01 passes, more than that does not."""
        participants = make_participants([PAYER_A], Decimal("10"))

        assert make_split(
            participants=participants, total_amount=Decimal("10.01")
        ).has_consistent_amounts()
        assert not make_split(
            participants=make_participants([PAYER_A], Decimal("10")),
            total_amount=Decimal("10.02"),
        ).has_consistent_amounts()

    def test_is_expired(self):
        split = make_split(created_at=datetime.now() - timedelta(days=31))

        assert split.is_expired is True

    def test_find_participant_is_case_insensitive(self):
        split = make_split()

        assert split.find_participant("0x" + PAYER_A[2:].upper())
        assert split.find_participant(PAYER_C) is None

    # ================================================================
    # Lifecycle
    # ================================================================

    def test_last_payment_completes_split(self):
        """Test split completes exactly when the last participant pays."""
        split = make_split()

        split.mark_participant_paid(PAYER_A, random_tx_hash())
        assert split.status == SplitStatus.ACTIVE
        assert split.is_completed is False

        split.mark_participant_paid(PAYER_B, random_tx_hash())
        assert split.status == SplitStatus.COMPLETED
        assert split.is_completed is True
        assert split.completed_at is not None

    def test_completion_is_idempotent(self):
        """Test re-running completion keeps the first completion time."""
        split = make_split(participants=make_participants([PAYER_A]))
        split.mark_participant_paid(PAYER_A, random_tx_hash())
        completed_at = split.completed_at

        assert split.check_and_update_completion() is False
        assert split.completed_at == completed_at

    def test_double_payment_rejected(self):
        split = make_split()
        split.mark_participant_paid(PAYER_A, random_tx_hash())

        with pytest.raises(ValueError, match="already paid"):
            split.mark_participant_paid(PAYER_A, random_tx_hash())

    def test_payment_requires_valid_hash(self):
        split = make_split()

        with pytest.raises(ValueError, match="tx hash"):
            split.mark_participant_paid(PAYER_A, "not-a-hash")

        assert split.find_participant(PAYER_A).has_paid is False

    def test_payment_by_stranger_rejected(self):
        split = make_split()

        with pytest.raises(ValueError, match="not found"):
            split.mark_participant_paid(PAYER_C, random_tx_hash())

    def test_cancel_sets_flags_once(self):
        split = make_split()

        split.update_status(SplitStatus.CANCELLED)
        cancelled_at = split.cancelled_at
        split.update_status(SplitStatus.CANCELLED)

        assert split.is_cancelled is True
        assert split.is_completed is False
        assert split.cancelled_at == cancelled_at

    def test_closed_split_rejects_participant_changes(self):
        split = make_split()
        split.update_status(SplitStatus.CANCELLED)

        with pytest.raises(ValueError, match="cancelled"):
            split.add_participant(
                Participant(wallet_address=PAYER_C, amount_due=Decimal("1"))
            )
        with pytest.raises(ValueError, match="cancelled"):
            split.remove_participant(PAYER_A)

    def test_remove_participant_rules(self):
        """Test paid and last participants cannot be removed."""
        split = make_split()
        split.mark_participant_paid(PAYER_A, random_tx_hash())

        with pytest.raises(ValueError, match="already paid"):
            split.remove_participant(PAYER_A)

        single = make_split(participants=make_participants([PAYER_A]))
        with pytest.raises(ValueError, match="last participant"):
            single.remove_participant(PAYER_A)

    def test_add_participant(self):
        split = make_split()

        split.add_participant(
            Participant(wallet_address=PAYER_C, amount_due=Decimal("5"))
        )

        assert split.find_participant(PAYER_C) is not None
        with pytest.raises(ValueError, match="already exists"):
            split.add_participant(
                Participant(wallet_address=PAYER_C, amount_due=Decimal("5"))
            )

    def test_send_reminder_counts(self):
        split = make_split()

        participant = split.send_reminder(PAYER_A)
        split.send_reminder(PAYER_A)

        assert participant.reminder_count == 2
        assert participant.last_reminded_at is not None

    def test_reminder_to_paid_participant_rejected(self):
        split = make_split()
        split.mark_participant_paid(PAYER_A, random_tx_hash())

        with pytest.raises(ValueError, match="already paid"):
            split.send_reminder(PAYER_A)

    def test_to_dict(self):
        split = make_split()

        data = split.to_dict()

        assert data["split_id"] == 1
        assert data["status"] == "active"
        assert data["total_amount"] == "20"
        assert len(data["participants"]) == 2
