"""
Create User use case.
"""

from uuid import uuid4

from splyt.application.use_cases.validation import require_wallet_address
from splyt.domain.entities.user import User
from splyt.domain.exceptions import DuplicateEntityError
from splyt.domain.repositories.i_user_repository import IUserRepository
from splyt.domain.value_objects.display_name import generate_name_from_address


class CreateUser:
    """
    Create new user with wallet address.

    Business rules:
    - Wallet address must be unique
    - Wallet address must be `0x` + 40 hex chars
    - Display name derived from the address until the user picks one
    """

    def __init__(self, user_repository: IUserRepository):
        """
        Initialize use case with dependencies.

        Args:
            user_repository: Repository for user persistence
        """
        self.user_repository = user_repository

    async def execute(self, wallet_address: str) -> User:
        """
        Execute user creation.

        Args:
            wallet_address: EVM wallet address

        Returns:
            Created User entity

        Raises:
            ValidationError: If wallet address is invalid
            DuplicateEntityError: If wallet already registered
        """
        # 1. Validate wallet address format
        normalized = require_wallet_address(wallet_address)

        # 2. Check if wallet already exists
        if await self.user_repository.get_by_wallet(normalized):
            raise DuplicateEntityError("User", f"wallet {normalized}")

        # 3. Create user entity
        user = User(
            id=uuid4(),
            wallet_address=normalized,
            display_name=generate_name_from_address(normalized),
        )

        # 4. Save to database
        return await self.user_repository.create(user)
