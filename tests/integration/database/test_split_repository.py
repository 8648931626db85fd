"""
Integration tests for SplitRepository.

Runs against in-memory SQLite through the async SQLAlchemy stack.
"""

from datetime import datetime, timedelta
from decimal import Decimal

import pytest

from splyt.domain.entities.split import Participant, SplitStatus
from splyt.domain.exceptions import (
    DuplicateEntityError,
    DuplicateTransactionError,
    EntityNotFoundError,
    ValidationError,
)
from splyt.infrastructure.persistence.repositories.split_repository import (
    SplitRepository,
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

pytestmark = pytest.mark.integration

BASE_TIME = datetime.now().replace(microsecond=0) - timedelta(days=60)


class TestSplitRepository:
    """Integration tests for SplitRepository."""

    # ================================================================
    # Create and Read
    # ================================================================

    async def test_create_and_get(self, db_session):
        """Test stored split reads back with participants intact."""
        repository = SplitRepository(db_session)
        split = make_split(split_id=7)
        split.participants[0].name = "Alice"

        await repository.create(split)
        loaded = await repository.get_by_split_id(7)

        assert loaded.id == split.id
        assert loaded.tx_hash == split.tx_hash
        assert loaded.total_amount == Decimal("20")
        assert loaded.status == SplitStatus.ACTIVE
        assert [p.wallet_address for p in loaded.participants] == [PAYER_A, PAYER_B]
        assert loaded.participants[0].name == "Alice"
        assert loaded.participants[0].amount_due == Decimal("10")

    async def test_get_missing(self, db_session):
        assert await SplitRepository(db_session).get_by_split_id(404) is None

    async def test_get_by_tx_hash_any_case(self, db_session):
        repository = SplitRepository(db_session)
        split = make_split()
        await repository.create(split)

        loaded = await repository.get_by_tx_hash("0x" + split.tx_hash[2:].upper())

        assert loaded.split_id == split.split_id

    async def test_existence_checks_and_max_id(self, db_session):
        repository = SplitRepository(db_session)
        assert await repository.get_max_split_id() is None

        split = make_split(split_id=12)
        await repository.create(split)
        await repository.create(make_split(split_id=3))

        assert await repository.get_max_split_id() == 12
        assert await repository.exists_split_id(12) is True
        assert await repository.exists_split_id(13) is False
        assert await repository.exists_tx_hash(split.tx_hash) is True
        assert await repository.exists_tx_hash(random_tx_hash()) is False

    async def test_duplicate_split_id(self, db_session):
        repository = SplitRepository(db_session)
        await repository.create(make_split(split_id=1))

        with pytest.raises(DuplicateEntityError):
            await repository.create(make_split(split_id=1))

    async def test_duplicate_tx_hash(self, db_session):
        repository = SplitRepository(db_session)
        tx_hash = random_tx_hash()
        await repository.create(make_split(split_id=1, tx_hash=tx_hash))

        with pytest.raises(DuplicateTransactionError):
            await repository.create(make_split(split_id=2, tx_hash=tx_hash))

    async def test_lenient_amount_check_stores_mismatch(self, db_session):
        """Test mismatched amounts are only logged by default."""
        repository = SplitRepository(db_session)
        split = make_split(total_amount=Decimal("25"))

        created = await repository.create(split)

        assert created.total_amount == Decimal("25")

    async def test_strict_amount_check_rejects_mismatch(self, db_session):
        repository = SplitRepository(db_session, strict_amount_check=True)

        with pytest.raises(ValidationError):
            await repository.create(make_split(total_amount=Decimal("25")))

        assert await repository.exists_split_id(1) is False

    # ================================================================
    # Update
    # ================================================================

    async def test_update_payment_and_completion(self, db_session):
        repository = SplitRepository(db_session)
        split = await repository.create(
            make_split(participants=make_participants([PAYER_A]))
        )
        tx_hash = random_tx_hash()

        split.mark_participant_paid(PAYER_A, tx_hash)
        await repository.update(split)
        loaded = await repository.get_by_split_id(split.split_id)

        assert loaded.status == SplitStatus.COMPLETED
        assert loaded.is_completed is True
        assert loaded.completed_at is not None
        assert loaded.participants[0].has_paid is True
        assert loaded.participants[0].payment_tx_hash == tx_hash

    async def test_update_keeps_participant_index_in_sync(self, db_session):
        """Test added and removed participants are found by address."""
        repository = SplitRepository(db_session)
        split = await repository.create(make_split())

        split.add_participant(
            Participant(wallet_address=PAYER_C, amount_due=Decimal("5"))
        )
        split.remove_participant(PAYER_B)
        await repository.update(split)

        assert [s.split_id for s in await repository.list_by_participant(PAYER_C)] == [
            split.split_id
        ]
        assert await repository.list_by_participant(PAYER_B) == []

    async def test_update_missing(self, db_session):
        with pytest.raises(EntityNotFoundError):
            await SplitRepository(db_session).update(make_split(split_id=99))

    # ================================================================
    # Listings
    # ================================================================

    async def _seed(self, repository):
        """Three splits by CREATOR, one by PAYER_A; minutes apart."""
        specs = [
            (1, CREATOR, SplitStatus.ACTIVE, 0),
            (2, CREATOR, SplitStatus.PENDING, 10),
            (3, PAYER_A, SplitStatus.ACTIVE, 20),
            (4, CREATOR, SplitStatus.CANCELLED, 30),
        ]
        for split_id, creator, status, minutes in specs:
            participants = make_participants(
                [PAYER_B] if creator == PAYER_A else [PAYER_A, PAYER_B]
            )
            await repository.create(
                make_split(
                    split_id=split_id,
                    creator=creator,
                    participants=participants,
                    status=status,
                    created_at=BASE_TIME + timedelta(minutes=minutes),
                )
            )

    async def test_list_by_creator_newest_first(self, db_session):
        repository = SplitRepository(db_session)
        await self._seed(repository)

        splits = await repository.list_by_creator(CREATOR)

        assert [s.split_id for s in splits] == [4, 2, 1]

    async def test_list_by_creator_status_and_pagination(self, db_session):
        repository = SplitRepository(db_session)
        await self._seed(repository)

        active = await repository.list_by_creator(
            "0x" + CREATOR[2:].upper(), status=SplitStatus.ACTIVE
        )
        page = await repository.list_by_creator(CREATOR, limit=1, skip=1)

        assert [s.split_id for s in active] == [1]
        assert [s.split_id for s in page] == [2]

    async def test_list_by_participant(self, db_session):
        repository = SplitRepository(db_session)
        await self._seed(repository)

        assert [s.split_id for s in await repository.list_by_participant(PAYER_A)] == [
            4,
            2,
            1,
        ]
        assert [s.split_id for s in await repository.list_by_participant(PAYER_B)] == [
            4,
            3,
            2,
            1,
        ]

    async def test_list_active_and_unconfirmed(self, db_session):
        repository = SplitRepository(db_session)
        await self._seed(repository)

        active = await repository.list_active()
        unconfirmed = await repository.list_unconfirmed()

        assert [s.split_id for s in active] == [3, 2, 1]
        assert len(unconfirmed) == 4

    async def test_list_expired(self, db_session):
        """Test open splits past expiry are listed; cancelled ones are not."""
        repository = SplitRepository(db_session)
        await self._seed(repository)

        expired = await repository.list_expired()

        assert sorted(s.split_id for s in expired) == [1, 2, 3]
