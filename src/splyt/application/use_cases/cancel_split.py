"""
Cancel Split use case.
"""

from splyt.application.use_cases.validation import require_wallet_address
from splyt.domain.entities.notification import Notification, NotificationType
from splyt.domain.entities.split import Split, SplitStatus
from splyt.domain.exceptions import (
    EntityNotFoundError,
    InvalidSplitStateError,
    PermissionDeniedError,
)
from splyt.domain.repositories.i_notification_repository import (
    INotificationRepository,
)
from splyt.domain.repositories.i_split_repository import ISplitRepository
from splyt.infrastructure.monitoring.logger import get_logger

logger = get_logger(__name__)


class CancelSplit:
    """
    Cancel a split on behalf of its creator.

    Business rules:
    - Only the creator can cancel
    - Completed splits cannot be cancelled
    - Cancelling a cancelled split is a no-op
    - Participants get an in-app cancellation notice
    """

    def __init__(
        self,
        split_repository: ISplitRepository,
        notification_repository: INotificationRepository,
    ):
        self.split_repository = split_repository
        self.notification_repository = notification_repository

    async def execute(self, split_id: int, requester_address: str) -> Split:
        """
        Execute cancellation.

        Args:
            split_id: Numeric split ID
            requester_address: Authenticated wallet

        Returns:
            Cancelled split

        Raises:
            EntityNotFoundError: If split not found
            PermissionDeniedError: If requester is not the creator
            InvalidSplitStateError: If split is already completed
        """
        requester = require_wallet_address(requester_address)

        split = await self.split_repository.get_by_split_id(split_id)
        if not split:
            raise EntityNotFoundError("Split", str(split_id))

        if not split.is_creator(requester):
            raise PermissionDeniedError("Only the split creator can cancel it")

        if split.is_cancelled:
            return split

        if split.is_completed:
            raise InvalidSplitStateError(
                f"Split {split_id} is completed and cannot be cancelled"
            )

        split.update_status(SplitStatus.CANCELLED)
        split = await self.split_repository.update(split)

        for participant in split.participants:
            if participant.wallet_address == split.creator_address:
                continue
            await self.notification_repository.create(
                Notification(
                    recipient_address=participant.wallet_address,
                    split_id=split.id,
                    type=NotificationType.SPLIT_CANCELLED,
                    title="Split cancelled",
                    message=f"\"{split.description}\" was cancelled by its creator",
                    data={"splitId": split.split_id},
                )
            )

        logger.info(f"Split {split_id} cancelled by {requester}")
        return split
