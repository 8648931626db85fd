"""
Split Data Transfer Objects - Application Layer.

Plain inputs and outputs of the split use cases; HTTP schemas map
to and from these.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import List, Optional

from splyt.domain.entities.split import (
    Currency,
    Participant,
    Split,
    SplitCategory,
    SplitStatus,
)


@dataclass
class ParticipantInput:
    """Participant as submitted by the split creator."""

    wallet_address: str
    amount_due: Decimal
    name: Optional[str] = None


@dataclass
class CreateSplitInput:
    """Split creation command."""

    description: str
    total_amount: Decimal
    participants: List[ParticipantInput] = field(default_factory=list)
    category: Optional[SplitCategory] = None
    note: Optional[str] = None
    image_url: Optional[str] = None
    currency: Currency = Currency.USDC


@dataclass
class CreateSplitResult:
    """
    Identifiers of a created split.

    `persisted` is False when the chain accepted the split but the
    database write failed.
    """

    split_id: int
    contract_address: str
    tx_hash: str
    persisted: bool = True


@dataclass
class SplitQueryOptions:
    """Filters and pagination for split listings."""

    status: Optional[SplitStatus] = None
    limit: Optional[int] = None
    skip: int = 0


@dataclass
class SplitView:
    """
    Split as seen by one requester.

    creator_name and creator_address are only filled in when the
    requester is not the creator.
    """

    split: Split
    requester_address: str
    is_creator: bool
    you_paid: bool
    creator_name: Optional[str] = None
    creator_address: Optional[str] = None

    def requester_participant(self) -> Optional[Participant]:
        """The requester's own participant entry, if any."""
        return self.split.find_participant(self.requester_address)
