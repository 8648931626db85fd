"""
Authenticate Wallet use case.
"""

from splyt.application.use_cases.create_user import CreateUser
from splyt.application.use_cases.validation import require_wallet_address
from splyt.domain.entities.user import User
from splyt.domain.exceptions import (
    DuplicateEntityError,
    InvalidSignatureError,
    ValidationError,
)
from splyt.domain.repositories.i_user_repository import IUserRepository
from splyt.domain.services.i_wallet_authenticator import IWalletAuthenticator
from splyt.domain.value_objects.wallet_address import is_valid_signature

# Every wallet signs exactly this text; it never changes between logins
AUTH_CHALLENGE_MESSAGE = (
    "Welcome to Splyt!\n\n"
    "Sign this message to authenticate and access your account.\n\n"
    "This signature proves you own this wallet and allows secure access "
    "to your Splyt account.\n\n"
    "Platform: Splyt - Split Bills, Settle Instantly"
)


class AuthenticateWallet:
    """
    Authenticate user via wallet signature.

    Business rules:
    - Signature must recover to the given wallet address
    - User is auto-created on first successful authentication
    - No user record is touched when verification fails
    - Successful login bumps last activity
    """

    def __init__(
        self,
        user_repository: IUserRepository,
        wallet_authenticator: IWalletAuthenticator,
    ):
        """
        Initialize use case with dependencies.

        Args:
            user_repository: Repository for user persistence
            wallet_authenticator: Service for signature verification
        """
        self.user_repository = user_repository
        self.wallet_authenticator = wallet_authenticator

    async def execute(self, wallet_address: str, signature: str) -> User:
        """
        Execute wallet authentication.

        Args:
            wallet_address: Wallet address claiming ownership
            signature: 0x-prefixed personal_sign signature of
                AUTH_CHALLENGE_MESSAGE

        Returns:
            Authenticated User entity

        Raises:
            ValidationError: If inputs are missing or malformed
            InvalidSignatureError: If signature does not match the address
        """
        # 1. Validate inputs
        if not signature:
            raise ValidationError(field="signature", reason="Signature is required")
        normalized = require_wallet_address(wallet_address)
        if not is_valid_signature(signature):
            raise ValidationError(
                field="signature", reason="Invalid signature format"
            )

        # 2. Verify signature
        is_valid = await self.wallet_authenticator.verify_signature(
            wallet_address=normalized,
            message=AUTH_CHALLENGE_MESSAGE,
            signature=signature,
        )
        if not is_valid:
            raise InvalidSignatureError()

        # 3. Get or create user
        user = await self.user_repository.get_by_wallet(normalized)
        if not user:
            try:
                user = await CreateUser(self.user_repository).execute(normalized)
            except DuplicateEntityError:
                # concurrent first login created it
                user = await self.user_repository.get_by_wallet(normalized)
                if user is None:
                    raise

        # 4. Track activity
        await self.user_repository.update_activity(normalized)
        user.touch()

        return user
