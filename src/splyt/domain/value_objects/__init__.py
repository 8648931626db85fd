"""
Domain value objects.
"""

from splyt.domain.value_objects.display_name import generate_name_from_address
from splyt.domain.value_objects.wallet_address import (
    WalletAddress,
    is_valid_address,
    is_valid_signature,
    is_valid_tx_hash,
    normalize_address,
)

__all__ = [
    "WalletAddress",
    "generate_name_from_address",
    "is_valid_address",
    "is_valid_signature",
    "is_valid_tx_hash",
    "normalize_address",
]
