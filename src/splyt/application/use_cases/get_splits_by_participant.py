"""
Get Splits By Participant use case.
"""

from typing import List, Optional

from splyt.application.dto.split_dto import SplitQueryOptions, SplitView
from splyt.application.use_cases.split_enrichment import SplitEnricher
from splyt.application.use_cases.validation import require_wallet_address
from splyt.domain.repositories.i_split_repository import ISplitRepository
from splyt.domain.repositories.i_user_repository import IUserRepository


class GetSplitsByParticipant:
    """
    List splits a wallet takes part in, newest first.

    Each split is enriched with the creator's display name and whether
    the requester already paid.
    """

    def __init__(
        self,
        split_repository: ISplitRepository,
        user_repository: IUserRepository,
    ):
        self.split_repository = split_repository
        self.user_repository = user_repository

    async def execute(
        self,
        participant_address: str,
        options: Optional[SplitQueryOptions] = None,
    ) -> List[SplitView]:
        """
        Execute participant listing.

        Args:
            participant_address: Participant wallet
            options: Status filter and pagination

        Returns:
            Enriched splits

        Raises:
            ValidationError: If address format is invalid
        """
        address = require_wallet_address(participant_address)
        options = options or SplitQueryOptions()

        splits = await self.split_repository.list_by_participant(
            address,
            status=options.status,
            limit=options.limit,
            skip=options.skip,
        )

        enricher = SplitEnricher(self.user_repository)
        return await enricher.enrich_all(splits, address)
