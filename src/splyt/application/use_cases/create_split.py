"""
Create Split use case.
"""

from decimal import Decimal
from typing import List, Optional

from splyt.application.dto.split_dto import CreateSplitInput, CreateSplitResult
from splyt.application.use_cases.validation import require_wallet_address
from splyt.domain.entities.split import (
    AMOUNT_TOLERANCE,
    IMAGE_URL_PATTERN,
    MAX_DESCRIPTION_LENGTH,
    MAX_NOTE_LENGTH,
    MAX_PARTICIPANTS,
    MIN_PARTICIPANTS,
    MIN_TOTAL_AMOUNT,
    Participant,
    Split,
    SplitStatus,
)
from splyt.domain.exceptions import (
    DuplicateEntityError,
    DuplicateTransactionError,
    PersistenceError,
    SplitIdAllocationError,
    ValidationError,
)
from splyt.domain.repositories.i_split_repository import ISplitRepository
from splyt.domain.repositories.i_user_repository import IUserRepository
from splyt.domain.services.i_split_registry import (
    ISplitRegistry,
    OnChainParticipant,
    OnChainSplit,
)
from splyt.infrastructure.monitoring.logger import get_logger

logger = get_logger(__name__)

MAX_SPLIT_ID_PROBES = 100
MAX_TX_HASH_ATTEMPTS = 5


class CreateSplit:
    """
    Create a split, register it on chain and store it.

    Business rules:
    - 1 to 50 participants with unique, well-formed addresses
    - Participant amounts must add up to the total within 0.01
    - Split ID is max + 1, probing upward at most 100 times
    - On-chain split ID wins over the allocated one when present
    - Status is ACTIVE once confirmed on chain, PENDING otherwise
    - Creator stats are best effort and never fail the request
    - If the chain accepted the split but saving failed, the on-chain
      identifiers are still returned
    """

    def __init__(
        self,
        split_repository: ISplitRepository,
        user_repository: IUserRepository,
        split_registry: ISplitRegistry,
    ):
        """
        Initialize use case with dependencies.

        Args:
            split_repository: Repository for split persistence
            user_repository: Repository for creator stats
            split_registry: On-chain (or placeholder) split registration
        """
        self.split_repository = split_repository
        self.user_repository = user_repository
        self.split_registry = split_registry

    async def execute(
        self, creator_address: str, split_input: CreateSplitInput
    ) -> CreateSplitResult:
        """
        Execute split creation.

        Args:
            creator_address: Authenticated creator wallet
            split_input: Split details and participants

        Returns:
            Split ID, contract address and creation tx hash

        Raises:
            ValidationError: If input breaks a split rule
            SplitIdAllocationError: If no free split ID was found
            DuplicateTransactionError: If the tx hash is already stored
            BlockchainError: If on-chain registration fails
        """
        # 1. Validate request
        creator = require_wallet_address(creator_address, field="creatorAddress")
        participants = self._validate(split_input)

        # 2. Allocate split ID
        allocated_id = await self._allocate_split_id()

        # 3. Register on chain
        on_chain = await self._register(creator, split_input, participants)
        split_id = on_chain.on_chain_id or allocated_id

        # 4. Persist
        split = Split(
            split_id=split_id,
            contract_address=on_chain.contract_address,
            tx_hash=on_chain.tx_hash,
            block_number=on_chain.block_number,
            is_confirmed=on_chain.is_confirmed,
            creator_address=creator,
            description=split_input.description,
            total_amount=split_input.total_amount,
            currency=split_input.currency,
            status=(
                SplitStatus.ACTIVE if on_chain.is_confirmed else SplitStatus.PENDING
            ),
            participants=participants,
            category=split_input.category,
            note=split_input.note,
            image_url=split_input.image_url,
        )

        try:
            split = await self.split_repository.create(split)
        except (PersistenceError, DuplicateEntityError) as e:
            logger.error(
                f"Split registered on chain but not saved: splitId={split_id} "
                f"contract={on_chain.contract_address} tx={on_chain.tx_hash}: "
                f"{e.message}"
            )
            return CreateSplitResult(
                split_id=split_id,
                contract_address=on_chain.contract_address,
                tx_hash=on_chain.tx_hash,
                persisted=False,
            )

        # 5. Update creator stats
        try:
            await self.user_repository.increment_split_created(creator)
        except Exception as e:
            logger.warning(f"Failed to update creator stats for {creator}: {e}")

        logger.info(
            f"Split {split.split_id} created by {creator} "
            f"({len(participants)} participants, status={split.status.value})"
        )

        return CreateSplitResult(
            split_id=split.split_id,
            contract_address=split.contract_address,
            tx_hash=split.tx_hash,
        )

    def _validate(self, split_input: CreateSplitInput) -> List[Participant]:
        """Check split rules and build participant entities."""
        count = len(split_input.participants or [])
        if count < MIN_PARTICIPANTS:
            raise ValidationError(
                field="participants",
                reason="At least one participant is required",
            )
        if count > MAX_PARTICIPANTS:
            raise ValidationError(
                field="participants",
                reason=f"Maximum {MAX_PARTICIPANTS} participants allowed",
            )

        total = Decimal(str(split_input.total_amount))
        calculated = sum(
            (Decimal(str(p.amount_due)) for p in split_input.participants),
            Decimal("0"),
        )
        if abs(calculated - total) > AMOUNT_TOLERANCE:
            raise ValidationError(
                field="totalAmount",
                reason=(
                    f"Total amount ({total}) doesn't match sum of "
                    f"participant amounts ({calculated})"
                ),
            )

        participants: List[Participant] = []
        seen = set()
        for item in split_input.participants:
            address = require_wallet_address(
                item.wallet_address, field="participants.walletAddress"
            )
            if address in seen:
                raise ValidationError(
                    field="participants",
                    reason=f"Duplicate participant {address}",
                )
            seen.add(address)
            try:
                participants.append(
                    Participant(
                        wallet_address=address,
                        amount_due=item.amount_due,
                        name=item.name,
                    )
                )
            except ValueError as e:
                raise ValidationError(field="participants", reason=str(e))

        description = (split_input.description or "").strip()
        if not description:
            raise ValidationError(
                field="description", reason="Description is required"
            )
        if len(description) > MAX_DESCRIPTION_LENGTH:
            raise ValidationError(
                field="description",
                reason=f"Cannot exceed {MAX_DESCRIPTION_LENGTH} characters",
            )
        if total < MIN_TOTAL_AMOUNT:
            raise ValidationError(
                field="totalAmount", reason=f"Must be at least {MIN_TOTAL_AMOUNT}"
            )
        if split_input.note and len(split_input.note) > MAX_NOTE_LENGTH:
            raise ValidationError(
                field="note", reason=f"Cannot exceed {MAX_NOTE_LENGTH} characters"
            )
        if split_input.image_url and not IMAGE_URL_PATTERN.match(
            split_input.image_url
        ):
            raise ValidationError(
                field="imageUrl", reason="Must be an http(s) URL"
            )

        return participants

    async def _allocate_split_id(self) -> int:
        """
        Next free split ID: max + 1, then probe upward.

        Raises:
            SplitIdAllocationError: If 100 probes all hit taken IDs
        """
        max_id: Optional[int] = await self.split_repository.get_max_split_id()
        candidate = (max_id or 0) + 1

        attempts = 0
        while await self.split_repository.exists_split_id(candidate):
            if attempts >= MAX_SPLIT_ID_PROBES:
                raise SplitIdAllocationError(attempts)
            candidate += 1
            attempts += 1

        return candidate

    async def _register(
        self,
        creator: str,
        split_input: CreateSplitInput,
        participants: List[Participant],
    ) -> OnChainSplit:
        """
        Register the split and make sure its tx hash is unused.

        Raises:
            DuplicateTransactionError: If the hash is taken and the
                registry cannot produce a new one
        """
        on_chain_participants = [
            OnChainParticipant(wallet_address=p.wallet_address, amount_due=p.amount_due)
            for p in participants
        ]

        for attempt in range(1, MAX_TX_HASH_ATTEMPTS + 1):
            on_chain = await self.split_registry.register_split(
                creator_address=creator,
                description=split_input.description.strip(),
                participants=on_chain_participants,
                total_amount=Decimal(str(split_input.total_amount)),
            )

            try:
                taken = await self.split_repository.exists_tx_hash(on_chain.tx_hash)
            except PersistenceError as e:
                # The split is on chain now; saving reports the failure
                logger.error(
                    f"Tx hash check failed after registration: "
                    f"tx={on_chain.tx_hash}: {e.message}"
                )
                return on_chain

            if not taken:
                return on_chain

            if not self.split_registry.regenerates_on_conflict:
                raise DuplicateTransactionError(on_chain.tx_hash)

            logger.warning(
                f"Tx hash {on_chain.tx_hash} already stored "
                f"(attempt {attempt}/{MAX_TX_HASH_ATTEMPTS})"
            )

        raise DuplicateTransactionError(on_chain.tx_hash)
