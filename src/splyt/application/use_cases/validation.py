"""
Input checks shared by use cases.
"""

from typing import Optional

from splyt.domain.exceptions import ValidationError
from splyt.domain.value_objects.wallet_address import (
    is_valid_address,
    is_valid_tx_hash,
)


def require_wallet_address(
    address: Optional[str], field: str = "walletAddress"
) -> str:
    """
    Normalize a wallet address or reject it.

    Args:
        address: Raw wallet address
        field: Field name used in the error

    Returns:
        Lowercase address

    Raises:
        ValidationError: If missing or not `0x` + 40 hex chars
    """
    if not address:
        raise ValidationError(field=field, reason="Wallet address is required")

    normalized = address.strip().lower()
    if not is_valid_address(normalized):
        raise ValidationError(field=field, reason="Invalid wallet address format")
    return normalized


def require_tx_hash(tx_hash: Optional[str], field: str = "txHash") -> str:
    """Normalize a transaction hash or raise ValidationError."""
    if not tx_hash:
        raise ValidationError(field=field, reason="Transaction hash is required")

    normalized = tx_hash.strip().lower()
    if not is_valid_tx_hash(normalized):
        raise ValidationError(
            field=field, reason="Invalid transaction hash format"
        )
    return normalized
