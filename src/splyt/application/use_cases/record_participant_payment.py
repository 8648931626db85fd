"""
Record Participant Payment use case.
"""

from splyt.application.use_cases.validation import (
    require_tx_hash,
    require_wallet_address,
)
from splyt.domain.entities.notification import (
    Notification,
    NotificationPriority,
    NotificationType,
)
from splyt.domain.entities.split import Split
from splyt.domain.entities.transaction_log import (
    TransactionLog,
    TransactionLogStatus,
    TransactionLogType,
)
from splyt.domain.exceptions import (
    DuplicateTransactionError,
    EntityNotFoundError,
    InvalidSplitStateError,
)
from splyt.domain.repositories.i_notification_repository import (
    INotificationRepository,
)
from splyt.domain.repositories.i_split_repository import ISplitRepository
from splyt.domain.repositories.i_transaction_log_repository import (
    ITransactionLogRepository,
)
from splyt.domain.repositories.i_user_repository import IUserRepository
from splyt.infrastructure.monitoring.logger import get_logger

logger = get_logger(__name__)


class RecordParticipantPayment:
    """
    Record that a participant paid their share of a split.

    Business rules:
    - Split must exist and not be cancelled
    - Payer must be an unpaid participant
    - Payment tx hash cannot be reused
    - Split completes automatically once everyone paid
    - A pending payment log is appended for confirmation tracking
    - The creator is notified of the payment (and of completion)
    - Payer stats are best effort
    """

    def __init__(
        self,
        split_repository: ISplitRepository,
        transaction_log_repository: ITransactionLogRepository,
        notification_repository: INotificationRepository,
        user_repository: IUserRepository,
    ):
        self.split_repository = split_repository
        self.transaction_log_repository = transaction_log_repository
        self.notification_repository = notification_repository
        self.user_repository = user_repository

    async def execute(
        self, split_id: int, payer_address: str, payment_tx_hash: str
    ) -> Split:
        """
        Execute payment recording.

        Args:
            split_id: Numeric split ID
            payer_address: Paying participant wallet
            payment_tx_hash: Payment transaction hash

        Returns:
            Updated split

        Raises:
            ValidationError: If address or tx hash is malformed
            EntityNotFoundError: If split or participant not found
            InvalidSplitStateError: If split is cancelled or already paid
            DuplicateTransactionError: If the tx hash was already recorded
        """
        payer = require_wallet_address(payer_address)
        tx_hash = require_tx_hash(payment_tx_hash)

        split = await self.split_repository.get_by_split_id(split_id)
        if not split:
            raise EntityNotFoundError("Split", str(split_id))

        if split.is_cancelled:
            raise InvalidSplitStateError(
                f"Split {split_id} is cancelled and cannot accept payments"
            )

        participant = split.find_participant(payer)
        if participant is None:
            raise EntityNotFoundError("Participant", payer)

        if participant.has_paid:
            raise InvalidSplitStateError(
                f"Participant {payer} has already paid split {split_id}"
            )

        if await self.transaction_log_repository.get_by_tx_hash(tx_hash):
            raise DuplicateTransactionError(tx_hash)

        was_completed = split.is_completed
        split.mark_participant_paid(payer, tx_hash)
        split = await self.split_repository.update(split)

        await self.transaction_log_repository.create(
            TransactionLog(
                split_id=split.id,
                wallet_address=payer,
                tx_hash=tx_hash,
                type=TransactionLogType.PAYMENT,
                amount=participant.amount_due,
                status=TransactionLogStatus.PENDING,
            )
        )

        await self._notify_creator(split, payer, participant.amount_due)
        if split.is_completed and not was_completed:
            await self._notify_completed(split)

        try:
            await self.user_repository.increment_split_joined(
                payer, participant.amount_due
            )
        except Exception as e:
            logger.warning(f"Failed to update payer stats for {payer}: {e}")

        logger.info(
            f"Payment recorded for split {split_id}: {payer} paid "
            f"{participant.amount_due} ({split.completion_percentage}% complete)"
        )
        return split

    async def _notify_creator(self, split: Split, payer: str, amount) -> None:
        await self.notification_repository.create(
            Notification(
                recipient_address=split.creator_address,
                split_id=split.id,
                type=NotificationType.PAYMENT_RECEIVED,
                title="Payment received",
                message=(
                    f"{payer} paid {amount} {split.currency.value} "
                    f"for \"{split.description}\""
                ),
                data={"splitId": split.split_id, "payer": payer},
            )
        )

    async def _notify_completed(self, split: Split) -> None:
        await self.notification_repository.create(
            Notification(
                recipient_address=split.creator_address,
                split_id=split.id,
                type=NotificationType.SPLIT_COMPLETED,
                title="Split completed",
                message=f"Everyone has paid for \"{split.description}\"",
                data={"splitId": split.split_id},
                priority=NotificationPriority.HIGH,
            )
        )
