"""
Transaction log repository interface.
"""

from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from splyt.domain.entities.transaction_log import (
    TransactionLog,
    TransactionLogStatus,
    TransactionLogType,
)


class ITransactionLogRepository(ABC):
    """Interface for transaction log persistence operations."""

    @abstractmethod
    async def create(self, log: TransactionLog) -> TransactionLog:
        """
        Append a transaction log.

        Raises:
            DuplicateTransactionError: If tx hash already logged
        """

    @abstractmethod
    async def update(self, log: TransactionLog) -> TransactionLog:
        """Save status and confirmation changes."""

    @abstractmethod
    async def get_by_tx_hash(self, tx_hash: str) -> Optional[TransactionLog]:
        """Get log by transaction hash (case-insensitive)."""

    @abstractmethod
    async def list_by_split(
        self,
        split_id: UUID,
        type: Optional[TransactionLogType] = None,
        status: Optional[TransactionLogStatus] = None,
        limit: Optional[int] = None,
        skip: int = 0,
    ) -> List[TransactionLog]:
        """Logs for a split, newest first."""

    @abstractmethod
    async def list_by_wallet(
        self,
        wallet_address: str,
        type: Optional[TransactionLogType] = None,
        status: Optional[TransactionLogStatus] = None,
        limit: Optional[int] = None,
        skip: int = 0,
    ) -> List[TransactionLog]:
        """Logs for a wallet, newest first."""

    @abstractmethod
    async def list_pending(self, limit: int = 100) -> List[TransactionLog]:
        """Pending logs, oldest first."""
