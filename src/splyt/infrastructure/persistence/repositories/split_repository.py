"""
Split repository implementation using SQLAlchemy.
"""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from splyt.domain.entities.split import (
    Participant,
    Split,
    SplitCategory,
    SplitStatus,
)
from splyt.domain.exceptions import (
    DuplicateEntityError,
    DuplicateTransactionError,
    EntityNotFoundError,
    PersistenceError,
    ValidationError,
)
from splyt.domain.repositories.i_split_repository import ISplitRepository
from splyt.infrastructure.monitoring.logger import get_logger
from splyt.infrastructure.persistence.models import (
    SplitModel,
    SplitParticipantModel,
)

logger = get_logger(__name__)

OPEN_STATUSES = (SplitStatus.PENDING.value, SplitStatus.ACTIVE.value)


class SplitRepository(ISplitRepository):
    """
    SQLAlchemy implementation of split repository.

    Handles Split entity persistence; participants are stored as one JSON
    document per split with an address index table beside it.
    """

    def __init__(self, session: AsyncSession, strict_amount_check: bool = False):
        """
        Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
            strict_amount_check: Reject (True) or log (False) splits whose
                participant amounts do not add up to the total
        """
        self.session = session
        self.strict_amount_check = strict_amount_check

    async def create(self, split: Split) -> Split:
        """
        Persist a new split.

        Args:
            split: Split entity to persist

        Returns:
            Created split entity

        Raises:
            DuplicateEntityError: If split ID is taken
            DuplicateTransactionError: If tx hash is already stored
            ValidationError: If amounts mismatch in strict mode
            PersistenceError: If the database fails at any step
        """
        self._check_amounts(split)

        try:
            return await self._insert(split)
        except IntegrityError as e:
            await self._rollback()
            logger.warning(
                f"Split {split.split_id} conflicts with a stored split: {e.orig}"
            )
            raise DuplicateEntityError("Split", f"splitId {split.split_id}")
        except SQLAlchemyError as e:
            await self._rollback()
            logger.error(f"Failed to persist split {split.split_id}: {e}")
            raise PersistenceError(f"Failed to persist split {split.split_id}")

    async def _insert(self, split: Split) -> Split:
        """Duplicate checks, then add and flush the new row."""
        if await self.exists_split_id(split.split_id):
            raise DuplicateEntityError("Split", f"splitId {split.split_id}")

        if await self.exists_tx_hash(split.tx_hash):
            raise DuplicateTransactionError(split.tx_hash)

        model = SplitModel(
            id=split.id,
            split_id=split.split_id,
            contract_address=split.contract_address,
            tx_hash=split.tx_hash,
            block_number=split.block_number,
            is_confirmed=split.is_confirmed,
            creator_address=split.creator_address,
            description=split.description,
            total_amount=split.total_amount,
            currency=split.currency.value,
            status=split.status.value,
            is_completed=split.is_completed,
            is_cancelled=split.is_cancelled,
            participants=[p.to_dict() for p in split.participants],
            category=split.category.value if split.category else None,
            note=split.note,
            image_url=split.image_url,
            created_at=split.created_at,
            updated_at=split.updated_at,
            completed_at=split.completed_at,
            cancelled_at=split.cancelled_at,
            expires_at=split.expires_at,
            participant_index=[
                SplitParticipantModel(wallet_address=p.wallet_address)
                for p in split.participants
            ],
        )

        self.session.add(model)
        await self.session.flush()

        return self._to_entity(model)

    async def update(self, split: Split) -> Split:
        """
        Save lifecycle changes of an existing split.

        Args:
            split: Split entity with updated fields

        Returns:
            Updated split entity

        Raises:
            EntityNotFoundError: If split not found
        """
        model = await self._fetch_model(split.split_id)
        if not model:
            raise EntityNotFoundError("Split", str(split.split_id))

        model.status = split.status.value
        model.is_completed = split.is_completed
        model.is_cancelled = split.is_cancelled
        model.is_confirmed = split.is_confirmed
        model.block_number = split.block_number
        model.participants = [p.to_dict() for p in split.participants]
        model.completed_at = split.completed_at
        model.cancelled_at = split.cancelled_at
        model.updated_at = split.updated_at
        self._sync_participant_index(model, split.participants)

        await self.session.flush()

        return self._to_entity(model)

    async def get_by_split_id(self, split_id: int) -> Optional[Split]:
        """
        Retrieve split by public ID.

        Args:
            split_id: Public integer split ID

        Returns:
            Split entity if found, None otherwise
        """
        model = await self._fetch_model(split_id)
        return self._to_entity(model) if model else None

    async def get_by_tx_hash(self, tx_hash: str) -> Optional[Split]:
        stmt = select(SplitModel).where(
            SplitModel.tx_hash == tx_hash.strip().lower()
        )
        result = await self.session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def exists_split_id(self, split_id: int) -> bool:
        stmt = select(SplitModel.id).where(SplitModel.split_id == split_id)
        result = await self.session.execute(stmt)
        return result.first() is not None

    async def exists_tx_hash(self, tx_hash: str) -> bool:
        """
        Check whether a split already carries this tx hash.

        Raises:
            PersistenceError: If the lookup fails
        """
        stmt = select(SplitModel.id).where(
            SplitModel.tx_hash == tx_hash.strip().lower()
        )
        try:
            result = await self.session.execute(stmt)
        except SQLAlchemyError as e:
            logger.error(f"Tx hash lookup failed for {tx_hash}: {e}")
            raise PersistenceError(f"Failed to look up tx hash {tx_hash}")
        return result.first() is not None

    async def get_max_split_id(self) -> Optional[int]:
        """Highest stored split ID, None for an empty table."""
        result = await self.session.execute(select(func.max(SplitModel.split_id)))
        return result.scalar_one_or_none()

    async def list_by_creator(
        self,
        creator_address: str,
        status: Optional[SplitStatus] = None,
        limit: Optional[int] = None,
        skip: int = 0,
    ) -> List[Split]:
        """
        List splits created by a wallet, newest first.

        Args:
            creator_address: Creator wallet address
            status: Optional status filter
            limit: Maximum results (None = unbounded)
            skip: Results to skip

        Returns:
            List of split entities
        """
        stmt = select(SplitModel).where(
            SplitModel.creator_address == creator_address.strip().lower()
        )
        return await self._list(stmt, status, limit, skip)

    async def list_by_participant(
        self,
        wallet_address: str,
        status: Optional[SplitStatus] = None,
        limit: Optional[int] = None,
        skip: int = 0,
    ) -> List[Split]:
        """
        List splits a wallet participates in, newest first.

        Args:
            wallet_address: Participant wallet address
            status: Optional status filter
            limit: Maximum results (None = unbounded)
            skip: Results to skip

        Returns:
            List of split entities
        """
        participant_splits = select(SplitParticipantModel.split_pk).where(
            SplitParticipantModel.wallet_address == wallet_address.strip().lower()
        )
        stmt = select(SplitModel).where(SplitModel.id.in_(participant_splits))
        return await self._list(stmt, status, limit, skip)

    async def list_active(self, limit: int = 50) -> List[Split]:
        stmt = (
            select(SplitModel)
            .where(
                SplitModel.status.in_(OPEN_STATUSES),
                SplitModel.is_completed.is_(False),
                SplitModel.is_cancelled.is_(False),
            )
            .order_by(SplitModel.created_at.desc())
            .limit(limit)
        )
        return await self._fetch_all(stmt)

    async def list_expired(self) -> List[Split]:
        stmt = (
            select(SplitModel)
            .where(
                SplitModel.expires_at < datetime.now(),
                SplitModel.status.in_(OPEN_STATUSES),
                SplitModel.is_cancelled.is_(False),
            )
            .order_by(SplitModel.expires_at.asc())
        )
        return await self._fetch_all(stmt)

    async def list_unconfirmed(self, limit: int = 100) -> List[Split]:
        stmt = (
            select(SplitModel)
            .where(SplitModel.is_confirmed.is_(False))
            .order_by(SplitModel.block_number.asc())
            .limit(limit)
        )
        return await self._fetch_all(stmt)

    async def list_by_category(
        self, category: SplitCategory, limit: int = 50
    ) -> List[Split]:
        stmt = (
            select(SplitModel)
            .where(SplitModel.category == SplitCategory(category).value)
            .order_by(SplitModel.created_at.desc())
            .limit(limit)
        )
        return await self._fetch_all(stmt)

    async def _list(
        self,
        stmt,
        status: Optional[SplitStatus],
        limit: Optional[int],
        skip: int,
    ) -> List[Split]:
        """Apply status filter, newest-first order and pagination."""
        if status:
            stmt = stmt.where(SplitModel.status == SplitStatus(status).value)

        stmt = stmt.order_by(
            SplitModel.created_at.desc(), SplitModel.split_id.desc()
        )

        if skip:
            stmt = stmt.offset(skip)
        if limit:
            stmt = stmt.limit(limit)

        return await self._fetch_all(stmt)

    async def _rollback(self) -> None:
        """Roll back; a dead connection only gets logged here."""
        try:
            await self.session.rollback()
        except SQLAlchemyError as e:
            logger.warning(f"Rollback after failed split write failed: {e}")

    async def _fetch_all(self, stmt) -> List[Split]:
        result = await self.session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars().all()]

    async def _fetch_model(self, split_id: int) -> Optional[SplitModel]:
        stmt = select(SplitModel).where(SplitModel.split_id == split_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    def _check_amounts(self, split: Split) -> None:
        """Enforce or log the participant-total consistency rule."""
        if split.has_consistent_amounts():
            return

        if self.strict_amount_check:
            raise ValidationError(
                "participants",
                f"amounts differ from total by {split.amount_mismatch}",
            )

        logger.warning(
            f"Split {split.split_id}: participant amounts differ from total "
            f"{split.total_amount} by {split.amount_mismatch}"
        )

    @staticmethod
    def _sync_participant_index(
        model: SplitModel, participants: List[Participant]
    ) -> None:
        """Add and drop index rows so they match the participant list."""
        wanted = {p.wallet_address for p in participants}
        existing = {row.wallet_address: row for row in model.participant_index}

        for address, row in existing.items():
            if address not in wanted:
                model.participant_index.remove(row)

        for participant in participants:
            if participant.wallet_address not in existing:
                model.participant_index.append(
                    SplitParticipantModel(wallet_address=participant.wallet_address)
                )

    def _to_entity(self, model: SplitModel) -> Split:
        """Convert ORM model to domain entity."""
        return Split(
            id=model.id,
            split_id=model.split_id,
            contract_address=model.contract_address,
            tx_hash=model.tx_hash,
            block_number=model.block_number,
            is_confirmed=model.is_confirmed,
            creator_address=model.creator_address,
            description=model.description,
            total_amount=Decimal(str(model.total_amount)),
            currency=model.currency,
            status=SplitStatus(model.status),
            is_completed=model.is_completed,
            is_cancelled=model.is_cancelled,
            participants=[Participant.from_dict(p) for p in model.participants],
            category=model.category,
            note=model.note,
            image_url=model.image_url,
            created_at=model.created_at,
            updated_at=model.updated_at,
            completed_at=model.completed_at,
            cancelled_at=model.cancelled_at,
            expires_at=model.expires_at,
        )
