"""
Split registry service interface.

Registers a split with the on-chain SplitFactory (or stands in for it).
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal
from typing import List, Optional


@dataclass(frozen=True)
class OnChainParticipant:
    """Participant share passed to the contract."""

    wallet_address: str
    amount_due: Decimal


@dataclass(frozen=True)
class OnChainSplit:
    """Identifiers of a registered split."""

    contract_address: str
    tx_hash: str
    block_number: Optional[int] = None
    is_confirmed: bool = False
    on_chain_id: Optional[int] = None


class ISplitRegistry(ABC):
    """Abstract service for on-chain split registration."""

    #: True when a colliding tx hash can be fixed by registering again
    regenerates_on_conflict: bool = False

    @abstractmethod
    async def register_split(
        self,
        creator_address: str,
        description: str,
        participants: List[OnChainParticipant],
        total_amount: Decimal,
    ) -> OnChainSplit:
        """
        Register a split.

        Args:
            creator_address: Creator wallet
            description: Split description
            participants: Participant addresses and amounts
            total_amount: Total split amount

        Returns:
            On-chain identifiers of the split

        Raises:
            BlockchainError: If the registration fails
        """
