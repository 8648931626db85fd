"""
TransactionLog repository implementation using SQLAlchemy.
"""

from decimal import Decimal
from typing import List, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from splyt.domain.entities.transaction_log import (
    TransactionLog,
    TransactionLogStatus,
    TransactionLogType,
)
from splyt.domain.exceptions import DuplicateTransactionError, EntityNotFoundError
from splyt.domain.repositories.i_transaction_log_repository import (
    ITransactionLogRepository,
)
from splyt.infrastructure.persistence.models import TransactionLogModel


class TransactionLogRepository(ITransactionLogRepository):
    """
    SQLAlchemy implementation of transaction log repository.

    Handles TransactionLog entity persistence.
    """

    def __init__(self, session: AsyncSession):
        """
        Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def create(self, log: TransactionLog) -> TransactionLog:
        """
        Append a transaction log.

        Args:
            log: TransactionLog entity to persist

        Returns:
            Created log entity

        Raises:
            DuplicateTransactionError: If tx hash already logged
        """
        if await self.get_by_tx_hash(log.tx_hash):
            raise DuplicateTransactionError(log.tx_hash)

        model = TransactionLogModel(
            id=log.id,
            split_id=log.split_id,
            wallet_address=log.wallet_address,
            tx_hash=log.tx_hash,
            block_number=log.block_number,
            block_timestamp=log.block_timestamp,
            type=log.type.value,
            amount=log.amount,
            gas_used=log.gas_used,
            gas_price=log.gas_price,
            gas_cost=log.gas_cost,
            status=log.status.value,
            error_message=log.error_message,
            confirmations=log.confirmations,
            created_at=log.created_at,
            updated_at=log.updated_at,
        )

        self.session.add(model)
        try:
            await self.session.flush()
        except IntegrityError:
            await self.session.rollback()
            raise DuplicateTransactionError(log.tx_hash)

        return self._to_entity(model)

    async def update(self, log: TransactionLog) -> TransactionLog:
        """
        Update status and confirmations of a stored log.

        Raises:
            EntityNotFoundError: If log not found
        """
        stmt = select(TransactionLogModel).where(TransactionLogModel.id == log.id)
        result = await self.session.execute(stmt)
        model = result.scalar_one_or_none()

        if not model:
            raise EntityNotFoundError("TransactionLog", str(log.id))

        model.status = log.status.value
        model.error_message = log.error_message
        model.confirmations = log.confirmations
        model.block_number = log.block_number
        model.block_timestamp = log.block_timestamp
        model.updated_at = log.updated_at

        await self.session.flush()

        return self._to_entity(model)

    async def get_by_tx_hash(self, tx_hash: str) -> Optional[TransactionLog]:
        """
        Retrieve log by transaction hash.

        Args:
            tx_hash: Transaction hash (any hex case)

        Returns:
            TransactionLog entity if found, None otherwise
        """
        stmt = select(TransactionLogModel).where(
            TransactionLogModel.tx_hash == tx_hash.strip().lower()
        )
        result = await self.session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def list_by_split(
        self,
        split_id: UUID,
        type: Optional[TransactionLogType] = None,
        status: Optional[TransactionLogStatus] = None,
        limit: Optional[int] = None,
        skip: int = 0,
    ) -> List[TransactionLog]:
        """List logs of a split, newest first."""
        stmt = select(TransactionLogModel).where(
            TransactionLogModel.split_id == split_id
        )
        return await self._list(stmt, type, status, limit, skip)

    async def list_by_wallet(
        self,
        wallet_address: str,
        type: Optional[TransactionLogType] = None,
        status: Optional[TransactionLogStatus] = None,
        limit: Optional[int] = None,
        skip: int = 0,
    ) -> List[TransactionLog]:
        """List logs of a wallet, newest first."""
        stmt = select(TransactionLogModel).where(
            TransactionLogModel.wallet_address == wallet_address.strip().lower()
        )
        return await self._list(stmt, type, status, limit, skip)

    async def list_pending(self, limit: int = 100) -> List[TransactionLog]:
        stmt = (
            select(TransactionLogModel)
            .where(TransactionLogModel.status == TransactionLogStatus.PENDING.value)
            .order_by(TransactionLogModel.created_at.asc())
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return [self._to_entity(m) for m in result.scalars().all()]

    async def _list(self, stmt, type, status, limit, skip) -> List[TransactionLog]:
        if type:
            stmt = stmt.where(
                TransactionLogModel.type == TransactionLogType(type).value
            )
        if status:
            stmt = stmt.where(
                TransactionLogModel.status == TransactionLogStatus(status).value
            )

        stmt = stmt.order_by(TransactionLogModel.created_at.desc())

        if skip:
            stmt = stmt.offset(skip)
        if limit:
            stmt = stmt.limit(limit)

        result = await self.session.execute(stmt)
        return [self._to_entity(m) for m in result.scalars().all()]

    def _to_entity(self, model: TransactionLogModel) -> TransactionLog:
        """Convert ORM model to domain entity."""
        return TransactionLog(
            id=model.id,
            split_id=model.split_id,
            wallet_address=model.wallet_address,
            tx_hash=model.tx_hash,
            block_number=model.block_number,
            block_timestamp=model.block_timestamp,
            type=TransactionLogType(model.type),
            amount=Decimal(str(model.amount)),
            gas_used=model.gas_used or 0,
            gas_price=model.gas_price,
            gas_cost=(
                Decimal(str(model.gas_cost)) if model.gas_cost is not None else None
            ),
            status=TransactionLogStatus(model.status),
            error_message=model.error_message,
            confirmations=model.confirmations or 0,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
