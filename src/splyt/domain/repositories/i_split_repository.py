"""
Split repository interface.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from splyt.domain.entities.split import Split, SplitCategory, SplitStatus


class ISplitRepository(ABC):
    """Interface for split persistence operations."""

    @abstractmethod
    async def create(self, split: Split) -> Split:
        """
        Persist a new split with its participants.

        Args:
            split: Split entity to create

        Returns:
            Created split entity

        Raises:
            DuplicateEntityError: If split ID is taken
            DuplicateTransactionError: If tx hash is already stored
            ValidationError: If amounts mismatch and strict checking is on
            PersistenceError: If the database rejects the write
        """

    @abstractmethod
    async def update(self, split: Split) -> Split:
        """
        Save status, participant and timestamp changes of a split.

        Raises:
            EntityNotFoundError: If split does not exist
        """

    @abstractmethod
    async def get_by_split_id(self, split_id: int) -> Optional[Split]:
        """
        Get split by its public integer ID.

        Returns:
            Split entity if found, None otherwise
        """

    @abstractmethod
    async def get_by_tx_hash(self, tx_hash: str) -> Optional[Split]:
        """Get split by creation transaction hash (case-insensitive)."""

    @abstractmethod
    async def exists_split_id(self, split_id: int) -> bool:
        """True if a split with this public ID is stored."""

    @abstractmethod
    async def exists_tx_hash(self, tx_hash: str) -> bool:
        """True if a split with this creation tx hash is stored."""

    @abstractmethod
    async def get_max_split_id(self) -> Optional[int]:
        """Highest stored split ID, None when there are no splits."""

    @abstractmethod
    async def list_by_creator(
        self,
        creator_address: str,
        status: Optional[SplitStatus] = None,
        limit: Optional[int] = None,
        skip: int = 0,
    ) -> List[Split]:
        """
        List splits created by a wallet, newest first.

        Args:
            creator_address: Creator wallet address
            status: Optional status filter
            limit: Maximum results (None = unbounded)
            skip: Results to skip

        Returns:
            List of splits
        """

    @abstractmethod
    async def list_by_participant(
        self,
        wallet_address: str,
        status: Optional[SplitStatus] = None,
        limit: Optional[int] = None,
        skip: int = 0,
    ) -> List[Split]:
        """List splits a wallet participates in, newest first."""

    @abstractmethod
    async def list_active(self, limit: int = 50) -> List[Split]:
        """Pending or active splits, newest first."""

    @abstractmethod
    async def list_expired(self) -> List[Split]:
        """Open splits past their expiry date, oldest expiry first."""

    @abstractmethod
    async def list_unconfirmed(self, limit: int = 100) -> List[Split]:
        """Splits not yet confirmed on chain, by block number."""

    @abstractmethod
    async def list_by_category(
        self, category: SplitCategory, limit: int = 50
    ) -> List[Split]:
        """Splits in a category, newest first."""
