"""
Get Split By ID use case.
"""

from typing import Optional

from splyt.domain.entities.split import Split
from splyt.domain.repositories.i_split_repository import ISplitRepository


class GetSplitById:
    """
    Look up a split by its numeric split ID.

    Returns None when absent; the route decides how to report it.
    """

    def __init__(self, split_repository: ISplitRepository):
        self.split_repository = split_repository

    async def execute(self, split_id: int) -> Optional[Split]:
        """
        Execute split lookup.

        Args:
            split_id: Numeric split ID

        Returns:
            Split if found, None otherwise
        """
        if split_id < 1:
            return None
        return await self.split_repository.get_by_split_id(split_id)
