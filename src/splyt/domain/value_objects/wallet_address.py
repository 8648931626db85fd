"""
WalletAddress value object - Immutable EVM wallet address.
"""

import re
from dataclasses import dataclass

ADDRESS_PATTERN = re.compile(r"^0x[a-fA-F0-9]{40}$")
TX_HASH_PATTERN = re.compile(r"^0x[a-fA-F0-9]{64}$")
SIGNATURE_PATTERN = re.compile(r"^0x[a-fA-F0-9]{130}$")


def is_valid_address(address: str) -> bool:
    """Check `0x` + 40 hex chars (case-insensitive)."""
    return bool(address) and bool(ADDRESS_PATTERN.match(address.strip()))


def is_valid_tx_hash(tx_hash: str) -> bool:
    """Check `0x` + 64 hex chars (case-insensitive)."""
    return bool(tx_hash) and bool(TX_HASH_PATTERN.match(tx_hash.strip()))


def is_valid_signature(signature: str) -> bool:
    """Check `0x` + 130 hex chars (65-byte r/s/v signature)."""
    return bool(signature) and bool(SIGNATURE_PATTERN.match(signature))


def normalize_address(address: str) -> str:
    """
    Normalize wallet address to its canonical lowercase form.

    Args:
        address: Wallet address in any hex case

    Returns:
        Lowercase address

    Raises:
        ValueError: If address is not `0x` + 40 hex chars
    """
    if not is_valid_address(address):
        raise ValueError(f"Invalid wallet address format: {address}")
    return address.strip().lower()


@dataclass(frozen=True)
class WalletAddress:
    """
    Value object representing a validated EVM wallet address.

    Business rules:
    - Must be `0x` followed by 40 hex characters
    - Stored lowercase so comparisons are case-insensitive
    - Immutable once created
    """

    address: str

    def __post_init__(self):
        """Validate and normalize wallet address on creation."""
        if not self.address:
            raise ValueError("Wallet address cannot be empty")

        # frozen dataclass: bypass __setattr__ to store normalized form
        object.__setattr__(self, "address", normalize_address(self.address))

    def truncated(self) -> str:
        """Return truncated address for display (e.g., '0xabcd...1234')."""
        return f"{self.address[:6]}...{self.address[-4:]}"

    def __str__(self) -> str:
        """String representation returns full address."""
        return self.address
