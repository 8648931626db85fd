"""
Placeholder split registry.

Stands in for the SplitFactory when on-chain registration is disabled:
every split gets a random contract address and transaction hash.
"""

import secrets
from decimal import Decimal
from typing import List

from splyt.domain.services.i_split_registry import (
    ISplitRegistry,
    OnChainParticipant,
    OnChainSplit,
)
from splyt.infrastructure.monitoring.logger import get_logger

logger = get_logger(__name__)


class PlaceholderSplitRegistry(ISplitRegistry):
    """
    Synthesizes on-chain identifiers without touching a chain.

    Splits stay unconfirmed (status pending) and keep the split ID
    allocated by the database.
    """

    # a fresh random hash clears any collision
    regenerates_on_conflict = True

    async def register_split(
        self,
        creator_address: str,
        description: str,
        participants: List[OnChainParticipant],
        total_amount: Decimal,
    ) -> OnChainSplit:
        """Return random identifiers for an unconfirmed split."""
        result = OnChainSplit(
            contract_address="0x" + secrets.token_hex(20),
            tx_hash="0x" + secrets.token_hex(32),
        )
        logger.debug(
            f"Placeholder registration for {creator_address}: {result.tx_hash}"
        )
        return result
