"""
Unit tests for AuthenticateWallet use case.

Tests signature-gated login with user auto-creation.
"""

from unittest.mock import AsyncMock

import pytest

from splyt.application.use_cases.authenticate_wallet import (
    AUTH_CHALLENGE_MESSAGE,
    AuthenticateWallet,
)
from splyt.domain.entities.user import User
from splyt.domain.exceptions import (
    DuplicateEntityError,
    InvalidSignatureError,
    ValidationError,
)

WALLET = "0x5aAeb6053F3E94C9b9A09f33669435E7Ef1BeAed"
SIGNATURE = "0x" + "1b" * 65


class TestAuthenticateWallet:
    """Unit tests for AuthenticateWallet use case."""

    # ================================================================
    # Helper Methods
    # ================================================================

    def _make_use_case(self, verified: bool = True):
        user_repository = AsyncMock()
        wallet_authenticator = AsyncMock()
        wallet_authenticator.verify_signature.return_value = verified
        use_case = AuthenticateWallet(
            user_repository=user_repository,
            wallet_authenticator=wallet_authenticator,
        )
        return use_case, user_repository, wallet_authenticator

    def _existing_user(self) -> User:
        return User(wallet_address=WALLET, display_name="Swift Otter EAED")

    # ================================================================
    # Test Methods
    # ================================================================

    async def test_existing_user_login(self):
        """Test login of a known wallet returns its user."""
        # Mock dependencies
        use_case, user_repository, wallet_authenticator = self._make_use_case()
        user = self._existing_user()
        user_repository.get_by_wallet.return_value = user

        # Execute use case
        result = await use_case.execute(WALLET, SIGNATURE)

        # Verify
        assert result is user
        wallet_authenticator.verify_signature.assert_called_once_with(
            wallet_address=WALLET.lower(),
            message=AUTH_CHALLENGE_MESSAGE,
            signature=SIGNATURE,
        )
        user_repository.create.assert_not_called()
        user_repository.update_activity.assert_called_once_with(WALLET.lower())

    async def test_first_login_creates_user(self):
        """Test unknown wallet is registered with a generated name."""
        # Mock dependencies
        use_case, user_repository, _ = self._make_use_case()
        user_repository.get_by_wallet.return_value = None
        user_repository.create.side_effect = lambda user: user

        # Execute use case
        result = await use_case.execute(WALLET, SIGNATURE)

        # Verify
        assert result.wallet_address == WALLET.lower()
        assert result.display_name.endswith("EAED")
        user_repository.create.assert_called_once()

    async def test_invalid_signature_touches_nothing(self):
        """Test failed verification creates no user and records no activity."""
        # Mock dependencies
        use_case, user_repository, _ = self._make_use_case(verified=False)

        # Execute use case
        with pytest.raises(InvalidSignatureError):
            await use_case.execute(WALLET, SIGNATURE)

        # Verify
        user_repository.get_by_wallet.assert_not_called()
        user_repository.create.assert_not_called()
        user_repository.update_activity.assert_not_called()

    async def test_missing_signature(self):
        use_case, _, wallet_authenticator = self._make_use_case()

        with pytest.raises(ValidationError) as exc_info:
            await use_case.execute(WALLET, "")

        assert exc_info.value.field == "signature"
        wallet_authenticator.verify_signature.assert_not_called()

    async def test_malformed_signature(self):
        use_case, _, wallet_authenticator = self._make_use_case()

        with pytest.raises(ValidationError) as exc_info:
            await use_case.execute(WALLET, "0xabc")

        assert exc_info.value.field == "signature"
        wallet_authenticator.verify_signature.assert_not_called()

    async def test_malformed_wallet(self):
        use_case, _, _ = self._make_use_case()

        with pytest.raises(ValidationError) as exc_info:
            await use_case.execute("0x1234", SIGNATURE)

        assert exc_info.value.field == "walletAddress"

    async def test_concurrent_first_login_reuses_user(self):
        """Test duplicate on create falls back to the stored user."""
        # Mock dependencies
        use_case, user_repository, _ = self._make_use_case()
        user = self._existing_user()
        user_repository.get_by_wallet.side_effect = [None, None, user]
        user_repository.create.side_effect = DuplicateEntityError(
            "User", f"wallet {WALLET.lower()}"
        )

        # Execute use case
        result = await use_case.execute(WALLET, SIGNATURE)

        # Verify
        assert result is user
        user_repository.update_activity.assert_called_once()
