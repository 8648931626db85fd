"""
Unit tests for WalletAddress value object and address helpers.
"""

import pytest

from splyt.domain.value_objects.display_name import generate_name_from_address
from splyt.domain.value_objects.wallet_address import (
    WalletAddress,
    is_valid_address,
    is_valid_signature,
    is_valid_tx_hash,
    normalize_address,
)

MIXED_CASE = "0x5aAeb6053F3E94C9b9A09f33669435E7Ef1BeAed"


class TestWalletAddress:
    """Unit tests for WalletAddress value object."""

    # ================================================================
    # Validation
    # ================================================================

    def test_valid_address(self):
        wallet = WalletAddress(MIXED_CASE)

        assert wallet.address == MIXED_CASE.lower()
        assert str(wallet) == MIXED_CASE.lower()

    @pytest.mark.parametrize(
        "address",
        [
            "5aAeb6053F3E94C9b9A09f33669435E7Ef1BeAed",
            "0x5aAeb6053F3E94C9b9A09f33669435E7Ef1BeAe",
            "0x5aAeb6053F3E94C9b9A09f33669435E7Ef1BeAedd",
            "0xZZZeb6053F3E94C9b9A09f33669435E7Ef1BeAed",
        ],
    )
    def test_invalid_address(self, address):
        with pytest.raises(ValueError, match="Invalid wallet address"):
            WalletAddress(address)

    def test_empty_address(self):
        with pytest.raises(ValueError, match="empty"):
            WalletAddress("")

    def test_immutable(self):
        wallet = WalletAddress(MIXED_CASE)

        with pytest.raises(AttributeError):
            wallet.address = "0x" + "0" * 40

    def test_equality_ignores_case(self):
        assert WalletAddress(MIXED_CASE) == WalletAddress(MIXED_CASE.lower())

    def test_truncated(self):
        assert WalletAddress(MIXED_CASE).truncated() == "0x5aae...eaed"

    # ================================================================
    # Helpers
    # ================================================================

    def test_normalize_is_idempotent(self):
        once = normalize_address(MIXED_CASE)

        assert normalize_address(once) == once
        assert once == once.lower()

    def test_hash_and_signature_formats(self):
        assert is_valid_address(MIXED_CASE)
        assert not is_valid_address("")
        assert is_valid_tx_hash("0x" + "ab" * 32)
        assert not is_valid_tx_hash("0x" + "ab" * 31)
        assert is_valid_signature("0x" + "1b" * 65)
        assert not is_valid_signature("1b" * 65)


class TestDisplayName:
    """Unit tests for generated display names."""

    def test_name_is_stable_across_case(self):
        assert generate_name_from_address(MIXED_CASE) == generate_name_from_address(
            MIXED_CASE.lower()
        )

    def test_name_format(self):
        name = generate_name_from_address(MIXED_CASE)

        adjective, animal, suffix = name.split(" ")
        assert adjective[0].isupper()
        assert animal[0].isupper()
        assert suffix == "EAED"
