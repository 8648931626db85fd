"""
Send Payment Reminder use case.
"""

from splyt.application.use_cases.validation import require_wallet_address
from splyt.domain.entities.notification import (
    Notification,
    NotificationChannel,
    NotificationType,
)
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


class SendPaymentReminder:
    """
    Remind an unpaid participant about their share.

    Only the split creator may send reminders. The reminder is stored
    as an in-app notification; no external delivery happens here.
    """

    def __init__(
        self,
        split_repository: ISplitRepository,
        notification_repository: INotificationRepository,
    ):
        self.split_repository = split_repository
        self.notification_repository = notification_repository

    async def execute(
        self, split_id: int, requester_address: str, participant_address: str
    ) -> Notification:
        """
        Execute reminder.

        Args:
            split_id: Numeric split ID
            requester_address: Authenticated wallet (must be the creator)
            participant_address: Participant to remind

        Returns:
            Stored reminder notification

        Raises:
            EntityNotFoundError: If split or participant not found
            PermissionDeniedError: If requester is not the creator
            InvalidSplitStateError: If split is closed or participant paid
        """
        requester = require_wallet_address(requester_address)
        target = require_wallet_address(participant_address)

        split = await self.split_repository.get_by_split_id(split_id)
        if not split:
            raise EntityNotFoundError("Split", str(split_id))

        if not split.is_creator(requester):
            raise PermissionDeniedError(
                "Only the split creator can send payment reminders"
            )

        if split.is_completed or split.is_cancelled:
            raise InvalidSplitStateError(
                f"Split {split_id} is {split.status.value}; reminders are closed"
            )

        if split.find_participant(target) is None:
            raise EntityNotFoundError("Participant", target)

        try:
            participant = split.send_reminder(target)
        except ValueError as e:
            raise InvalidSplitStateError(str(e))

        await self.split_repository.update(split)

        notification = await self.notification_repository.create(
            Notification(
                recipient_address=target,
                split_id=split.id,
                type=NotificationType.PAYMENT_REMINDER,
                title="Payment reminder",
                message=(
                    f"You owe {participant.amount_due} {split.currency.value} "
                    f"for \"{split.description}\""
                ),
                channels=[NotificationChannel.IN_APP],
                data={
                    "splitId": split.split_id,
                    "reminderCount": participant.reminder_count,
                },
            )
        )

        logger.info(
            f"Reminder #{participant.reminder_count} sent to {target} "
            f"for split {split_id}"
        )
        return notification
