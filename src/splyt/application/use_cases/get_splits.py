"""
Get Splits use case - every split a wallet created or takes part in.
"""

from typing import Dict, List, Optional

from splyt.application.dto.split_dto import SplitQueryOptions, SplitView
from splyt.application.use_cases.split_enrichment import SplitEnricher
from splyt.application.use_cases.validation import require_wallet_address
from splyt.domain.entities.split import Split
from splyt.domain.repositories.i_split_repository import ISplitRepository
from splyt.domain.repositories.i_user_repository import IUserRepository


class GetSplits:
    """
    Merge creator and participant listings for one wallet.

    Business rules:
    - Both listings are filtered by status only
    - Merged result is de-duplicated by split ID
    - Sorted by creation time, newest first
    - skip and limit apply to the merged result
    """

    def __init__(
        self,
        split_repository: ISplitRepository,
        user_repository: IUserRepository,
    ):
        self.split_repository = split_repository
        self.user_repository = user_repository

    async def execute(
        self, wallet_address: str, options: Optional[SplitQueryOptions] = None
    ) -> List[SplitView]:
        """
        Execute merged listing.

        Args:
            wallet_address: Requester wallet
            options: Status filter and pagination

        Returns:
            Enriched splits

        Raises:
            ValidationError: If address format is invalid
        """
        address = require_wallet_address(wallet_address)
        options = options or SplitQueryOptions()

        created = await self.split_repository.list_by_creator(
            address, status=options.status
        )
        joined = await self.split_repository.list_by_participant(
            address, status=options.status
        )

        merged: Dict[int, Split] = {}
        for split in created + joined:
            merged.setdefault(split.split_id, split)

        splits = sorted(
            merged.values(),
            key=lambda s: (s.created_at, s.split_id),
            reverse=True,
        )

        start = max(options.skip, 0)
        end = start + options.limit if options.limit is not None else None
        page = splits[start:end]

        enricher = SplitEnricher(self.user_repository)
        return await enricher.enrich_all(page, address)
