"""
User repository implementation using SQLAlchemy.
"""

from datetime import datetime, timedelta
from decimal import Decimal
from typing import List, Optional
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from splyt.domain.entities.user import User
from splyt.domain.exceptions import DuplicateEntityError
from splyt.domain.repositories.i_user_repository import IUserRepository
from splyt.infrastructure.persistence.models import UserModel


class UserRepository(IUserRepository):
    """
    SQLAlchemy implementation of user repository.

    Counter updates are issued as single UPDATE statements so concurrent
    requests never lose increments.
    """

    def __init__(self, session: AsyncSession):
        """
        Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def create(self, user: User) -> User:
        """
        Create new user in database.

        Args:
            user: User entity to create

        Returns:
            Created user entity

        Raises:
            DuplicateEntityError: If wallet address already registered
        """
        if await self.get_by_wallet(user.wallet_address):
            raise DuplicateEntityError("User", f"wallet {user.wallet_address}")

        model = UserModel(
            id=user.id,
            wallet_address=user.wallet_address,
            display_name=user.display_name,
            email=user.email,
            username=user.username,
            avatar_url=user.avatar_url,
            total_splits_created=user.total_splits_created,
            total_splits_joined=user.total_splits_joined,
            total_amount_split=user.total_amount_split,
            created_at=user.created_at,
            updated_at=user.updated_at,
            last_active_at=user.last_active_at,
        )

        self.session.add(model)
        try:
            await self.session.flush()
        except IntegrityError:
            await self.session.rollback()
            raise DuplicateEntityError("User", f"wallet {user.wallet_address}")

        await self.session.refresh(model)
        return self._to_entity(model)

    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        """
        Get user by ID.

        Args:
            user_id: User unique identifier

        Returns:
            User entity if found, None otherwise
        """
        stmt = select(UserModel).where(UserModel.id == user_id)
        result = await self.session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def get_by_wallet(self, wallet_address: str) -> Optional[User]:
        """
        Get user by wallet address.

        Args:
            wallet_address: Wallet address (any hex case)

        Returns:
            User entity if found, None otherwise
        """
        stmt = select(UserModel).where(
            UserModel.wallet_address == wallet_address.strip().lower()
        )
        result = await self.session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def increment_split_created(self, wallet_address: str) -> None:
        """Add one to created-splits counter and bump activity."""
        now = datetime.now()
        stmt = (
            update(UserModel)
            .where(UserModel.wallet_address == wallet_address.strip().lower())
            .values(
                total_splits_created=UserModel.total_splits_created + 1,
                last_active_at=now,
                updated_at=now,
            )
        )
        # Savepoint: a failed counter update must not abort the outer transaction
        async with self.session.begin_nested():
            await self.session.execute(stmt)

    async def increment_split_joined(
        self, wallet_address: str, amount: Decimal
    ) -> None:
        """Add one joined split plus its amount and bump activity."""
        now = datetime.now()
        stmt = (
            update(UserModel)
            .where(UserModel.wallet_address == wallet_address.strip().lower())
            .values(
                total_splits_joined=UserModel.total_splits_joined + 1,
                total_amount_split=UserModel.total_amount_split
                + Decimal(str(amount)),
                last_active_at=now,
                updated_at=now,
            )
        )
        # Savepoint: a failed counter update must not abort the outer transaction
        async with self.session.begin_nested():
            await self.session.execute(stmt)

    async def update_activity(self, wallet_address: str) -> None:
        """Bump last activity timestamp."""
        now = datetime.now()
        stmt = (
            update(UserModel)
            .where(UserModel.wallet_address == wallet_address.strip().lower())
            .values(last_active_at=now, updated_at=now)
        )
        await self.session.execute(stmt)

    async def get_top_creators(self, limit: int = 10) -> List[User]:
        stmt = (
            select(UserModel)
            .order_by(UserModel.total_splits_created.desc())
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return [self._to_entity(m) for m in result.scalars().all()]

    async def get_top_by_volume(self, limit: int = 10) -> List[User]:
        stmt = (
            select(UserModel)
            .order_by(UserModel.total_amount_split.desc())
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return [self._to_entity(m) for m in result.scalars().all()]

    async def get_active_users(self, days: int = 7, limit: int = 100) -> List[User]:
        """
        Users active within the given window.

        Args:
            days: Activity window in days
            limit: Maximum results

        Returns:
            Users ordered by most recent activity
        """
        cutoff = datetime.now() - timedelta(days=days)
        stmt = (
            select(UserModel)
            .where(UserModel.last_active_at >= cutoff)
            .order_by(UserModel.last_active_at.desc())
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return [self._to_entity(m) for m in result.scalars().all()]

    def _to_entity(self, model: UserModel) -> User:
        """Convert ORM model to domain entity."""
        return User(
            id=model.id,
            wallet_address=model.wallet_address,
            display_name=model.display_name,
            email=model.email,
            username=model.username,
            avatar_url=model.avatar_url,
            total_splits_created=model.total_splits_created,
            total_splits_joined=model.total_splits_joined,
            total_amount_split=Decimal(str(model.total_amount_split)),
            created_at=model.created_at,
            updated_at=model.updated_at,
            last_active_at=model.last_active_at,
        )
