"""
Unit tests for SplitRepository database failure handling.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from splyt.domain.exceptions import PersistenceError
from splyt.infrastructure.persistence.repositories.split_repository import (
    SplitRepository,
)
from tests.helpers.factories import make_split, random_tx_hash


def _lost_connection() -> OperationalError:
    return OperationalError("SELECT", {}, Exception("connection lost"))


class TestSplitRepositoryErrors:
    """Unit tests for SplitRepository error translation."""

    async def test_lookup_failure_during_create(self):
        """Test duplicate checks that hit a dead connection raise PersistenceError."""
        # Mock dependencies
        session = MagicMock()
        session.execute = AsyncMock(side_effect=_lost_connection())
        session.rollback = AsyncMock()
        repository = SplitRepository(session)

        # Execute and verify
        with pytest.raises(PersistenceError):
            await repository.create(make_split())

        session.rollback.assert_awaited_once()
        session.add.assert_not_called()

    async def test_failed_rollback_still_reports_persistence_error(self):
        session = MagicMock()
        session.execute = AsyncMock(side_effect=_lost_connection())
        session.rollback = AsyncMock(side_effect=_lost_connection())
        repository = SplitRepository(session)

        with pytest.raises(PersistenceError):
            await repository.create(make_split())

    async def test_flush_failure(self):
        result = MagicMock()
        result.first.return_value = None
        session = MagicMock()
        session.execute = AsyncMock(return_value=result)
        session.flush = AsyncMock(side_effect=_lost_connection())
        session.rollback = AsyncMock()
        repository = SplitRepository(session)

        with pytest.raises(PersistenceError):
            await repository.create(make_split())

        session.add.assert_called_once()
        session.rollback.assert_awaited_once()

    async def test_tx_hash_lookup_failure(self):
        session = MagicMock()
        session.execute = AsyncMock(side_effect=_lost_connection())
        repository = SplitRepository(session)

        with pytest.raises(PersistenceError):
            await repository.exists_tx_hash(random_tx_hash())
