"""
User repository interface.
"""

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import List, Optional
from uuid import UUID

from splyt.domain.entities.user import User


class IUserRepository(ABC):
    """Interface for user persistence operations."""

    @abstractmethod
    async def create(self, user: User) -> User:
        """
        Create new user.

        Args:
            user: User entity to create

        Returns:
            Created user entity

        Raises:
            DuplicateEntityError: If wallet address already registered
        """

    @abstractmethod
    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        """
        Get user by ID.

        Args:
            user_id: User unique identifier

        Returns:
            User entity if found, None otherwise
        """

    @abstractmethod
    async def get_by_wallet(self, wallet_address: str) -> Optional[User]:
        """
        Get user by wallet address (case-insensitive).

        Args:
            wallet_address: Wallet address

        Returns:
            User entity if found, None otherwise
        """

    @abstractmethod
    async def increment_split_created(self, wallet_address: str) -> None:
        """Atomically add one to the user's created-splits counter."""

    @abstractmethod
    async def increment_split_joined(
        self, wallet_address: str, amount: Decimal
    ) -> None:
        """Atomically add one joined split and its amount to the user."""

    @abstractmethod
    async def update_activity(self, wallet_address: str) -> None:
        """Bump the user's last activity timestamp."""

    @abstractmethod
    async def get_top_creators(self, limit: int = 10) -> List[User]:
        """Users ordered by splits created, descending."""

    @abstractmethod
    async def get_top_by_volume(self, limit: int = 10) -> List[User]:
        """Users ordered by total amount split, descending."""

    @abstractmethod
    async def get_active_users(self, days: int = 7, limit: int = 100) -> List[User]:
        """Users active within the given number of days, most recent first."""
