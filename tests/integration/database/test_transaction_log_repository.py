"""
Integration tests for TransactionLogRepository.
"""

from datetime import datetime, timedelta
from decimal import Decimal

import pytest

from splyt.domain.entities.transaction_log import (
    TransactionLog,
    TransactionLogStatus,
    TransactionLogType,
)
from splyt.domain.exceptions import DuplicateTransactionError, EntityNotFoundError
from splyt.infrastructure.persistence.repositories.split_repository import (
    SplitRepository,
)
from splyt.infrastructure.persistence.repositories.transaction_log_repository import (
    TransactionLogRepository,
)
from tests.helpers.factories import (
    PAYER_A,
    PAYER_B,
    make_split,
    random_tx_hash,
)

pytestmark = pytest.mark.integration


class TestTransactionLogRepository:
    """Integration tests for TransactionLogRepository."""

    # ================================================================
    # Helper Methods
    # ================================================================

    async def _split(self, db_session, split_id: int = 1):
        return await SplitRepository(db_session).create(make_split(split_id=split_id))

    def _log(self, split, wallet=PAYER_A, minutes=0, **kwargs) -> TransactionLog:
        created = datetime.now() - timedelta(minutes=60 - minutes)
        return TransactionLog(
            split_id=split.id,
            wallet_address=wallet,
            tx_hash=random_tx_hash(),
            amount=Decimal("10"),
            created_at=created,
            updated_at=created,
            **kwargs,
        )

    # ================================================================
    # Test Methods
    # ================================================================

    async def test_create_and_get(self, db_session):
        repository = TransactionLogRepository(db_session)
        split = await self._split(db_session)
        log = self._log(split, gas_used=21000, gas_price=10**9)

        await repository.create(log)
        loaded = await repository.get_by_tx_hash("0x" + log.tx_hash[2:].upper())

        assert loaded.id == log.id
        assert loaded.split_id == split.id
        assert loaded.amount == Decimal("10")
        assert loaded.gas_cost == Decimal("0.000021")
        assert loaded.status == TransactionLogStatus.PENDING

    async def test_duplicate_hash(self, db_session):
        repository = TransactionLogRepository(db_session)
        split = await self._split(db_session)
        log = self._log(split)
        await repository.create(log)

        with pytest.raises(DuplicateTransactionError):
            await repository.create(
                TransactionLog(
                    split_id=split.id,
                    wallet_address=PAYER_B,
                    tx_hash=log.tx_hash,
                    amount=Decimal("1"),
                )
            )

    async def test_update_confirmations(self, db_session):
        repository = TransactionLogRepository(db_session)
        split = await self._split(db_session)
        log = await repository.create(self._log(split))

        log.update_confirmations(12)
        await repository.update(log)
        loaded = await repository.get_by_tx_hash(log.tx_hash)

        assert loaded.confirmations == 12
        assert loaded.status == TransactionLogStatus.SUCCESS

    async def test_update_missing(self, db_session):
        repository = TransactionLogRepository(db_session)
        split = await self._split(db_session)

        with pytest.raises(EntityNotFoundError):
            await repository.update(self._log(split))

    async def test_list_by_split_newest_first(self, db_session):
        repository = TransactionLogRepository(db_session)
        split = await self._split(db_session)
        other = await self._split(db_session, split_id=2)
        first = await repository.create(self._log(split, minutes=0))
        second = await repository.create(self._log(split, PAYER_B, minutes=5))
        await repository.create(self._log(other, minutes=10))

        logs = await repository.list_by_split(split.id)
        page = await repository.list_by_split(split.id, limit=1, skip=1)

        assert [log.id for log in logs] == [second.id, first.id]
        assert [log.id for log in page] == [first.id]

    async def test_list_filters(self, db_session):
        repository = TransactionLogRepository(db_session)
        split = await self._split(db_session)
        await repository.create(self._log(split))
        refund = await repository.create(
            self._log(
                split,
                PAYER_B,
                minutes=5,
                type=TransactionLogType.REFUND,
                status=TransactionLogStatus.SUCCESS,
            )
        )

        refunds = await repository.list_by_split(
            split.id, type=TransactionLogType.REFUND
        )
        by_wallet = await repository.list_by_wallet(PAYER_B)
        pending = await repository.list_pending()

        assert [log.id for log in refunds] == [refund.id]
        assert [log.id for log in by_wallet] == [refund.id]
        assert [log.wallet_address for log in pending] == [PAYER_A]
