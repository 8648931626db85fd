"""
Requester-relative view of splits.
"""

from typing import Dict, Iterable, List, Optional

from splyt.application.dto.split_dto import SplitView
from splyt.domain.entities.split import Split
from splyt.domain.repositories.i_user_repository import IUserRepository


class SplitEnricher:
    """
    Wrap splits into SplitView objects for one requester.

    Creator display names are looked up once per creator and cached
    for the lifetime of the enricher.
    """

    def __init__(self, user_repository: IUserRepository):
        self.user_repository = user_repository
        self._creator_names: Dict[str, Optional[str]] = {}

    async def enrich(self, split: Split, requester_address: str) -> SplitView:
        """
        Build the view of a split as seen by the requester.

        Args:
            split: Split entity
            requester_address: Normalized requester wallet

        Returns:
            SplitView with isCreator, youPaid and creator details
        """
        is_creator = split.is_creator(requester_address)

        if is_creator:
            return SplitView(
                split=split,
                requester_address=requester_address,
                is_creator=True,
                you_paid=True,
            )

        participant = split.find_participant(requester_address)
        return SplitView(
            split=split,
            requester_address=requester_address,
            is_creator=False,
            you_paid=bool(participant and participant.has_paid),
            creator_name=await self._creator_name(split.creator_address),
            creator_address=split.creator_address,
        )

    async def enrich_all(
        self, splits: Iterable[Split], requester_address: str
    ) -> List[SplitView]:
        return [await self.enrich(split, requester_address) for split in splits]

    async def _creator_name(self, creator_address: str) -> Optional[str]:
        if creator_address not in self._creator_names:
            user = await self.user_repository.get_by_wallet(creator_address)
            self._creator_names[creator_address] = (
                user.display_name if user else None
            )
        return self._creator_names[creator_address]
