"""
Get Split Transactions use case.
"""

from typing import List, Optional

from splyt.domain.entities.transaction_log import TransactionLog
from splyt.domain.exceptions import EntityNotFoundError
from splyt.domain.repositories.i_split_repository import ISplitRepository
from splyt.domain.repositories.i_transaction_log_repository import (
    ITransactionLogRepository,
)


class GetSplitTransactions:
    """List transaction logs of a split, newest first."""

    def __init__(
        self,
        split_repository: ISplitRepository,
        transaction_log_repository: ITransactionLogRepository,
    ):
        self.split_repository = split_repository
        self.transaction_log_repository = transaction_log_repository

    async def execute(
        self, split_id: int, limit: Optional[int] = None, skip: int = 0
    ) -> List[TransactionLog]:
        """
        Raises:
            EntityNotFoundError: If split not found
        """
        split = await self.split_repository.get_by_split_id(split_id)
        if not split:
            raise EntityNotFoundError("Split", str(split_id))

        return await self.transaction_log_repository.list_by_split(
            split.id, limit=limit, skip=skip
        )
