"""
Unit tests for notification use cases.

Tests ListNotifications, GetUnreadNotificationCount,
MarkNotificationRead and MarkAllNotificationsRead.
"""

from unittest.mock import AsyncMock
from uuid import uuid4

import pytest

from splyt.application.use_cases.get_unread_notification_count import (
    GetUnreadNotificationCount,
)
from splyt.application.use_cases.list_notifications import ListNotifications
from splyt.application.use_cases.mark_all_notifications_read import (
    MarkAllNotificationsRead,
)
from splyt.application.use_cases.mark_notification_read import (
    MarkNotificationRead,
)
from splyt.domain.entities.notification import Notification, NotificationType
from splyt.domain.exceptions import EntityNotFoundError
from tests.helpers.factories import PAYER_A, PAYER_B


def _notification(recipient: str = PAYER_A) -> Notification:
    return Notification(
        recipient_address=recipient,
        type=NotificationType.PAYMENT_REMINDER,
        title="Payment reminder",
        message="You owe 10 USDC",
    )


class TestListNotifications:
    """Unit tests for ListNotifications use case."""

    async def test_all_notifications(self):
        repository = AsyncMock()
        repository.list_by_recipient.return_value = [_notification()]

        result = await ListNotifications(repository).execute(PAYER_A)

        assert len(result) == 1
        repository.list_by_recipient.assert_called_once_with(
            PAYER_A, is_read=None, type=None, limit=None, skip=0
        )

    async def test_unread_only_with_type(self):
        repository = AsyncMock()
        repository.list_by_recipient.return_value = []

        await ListNotifications(repository).execute(
            "0x" + PAYER_A[2:].upper(),
            unread_only=True,
            type=NotificationType.SPLIT_CANCELLED,
            limit=20,
            skip=40,
        )

        repository.list_by_recipient.assert_called_once_with(
            PAYER_A,
            is_read=False,
            type=NotificationType.SPLIT_CANCELLED,
            limit=20,
            skip=40,
        )


class TestUnreadCount:
    """Unit tests for GetUnreadNotificationCount use case."""

    async def test_count(self):
        repository = AsyncMock()
        repository.count_unread.return_value = 3

        assert await GetUnreadNotificationCount(repository).execute(PAYER_A) == 3
        repository.count_unread.assert_called_once_with(PAYER_A)


class TestMarkNotificationRead:
    """Unit tests for MarkNotificationRead use case."""

    async def test_mark_read(self):
        notification = _notification()
        repository = AsyncMock()
        repository.get_by_id.return_value = notification
        repository.update.side_effect = lambda n: n

        result = await MarkNotificationRead(repository).execute(
            notification.id, PAYER_A
        )

        assert result.is_read is True
        assert result.read_at is not None
        repository.update.assert_called_once()

    async def test_already_read_is_noop(self):
        notification = _notification()
        notification.mark_as_read()
        repository = AsyncMock()
        repository.get_by_id.return_value = notification

        result = await MarkNotificationRead(repository).execute(
            notification.id, PAYER_A
        )

        assert result is notification
        repository.update.assert_not_called()

    async def test_other_recipient_sees_not_found(self):
        """Test another wallet's notification is reported as missing."""
        notification = _notification(recipient=PAYER_B)
        repository = AsyncMock()
        repository.get_by_id.return_value = notification

        with pytest.raises(EntityNotFoundError):
            await MarkNotificationRead(repository).execute(notification.id, PAYER_A)

        repository.update.assert_not_called()

    async def test_missing_notification(self):
        repository = AsyncMock()
        repository.get_by_id.return_value = None

        with pytest.raises(EntityNotFoundError):
            await MarkNotificationRead(repository).execute(uuid4(), PAYER_A)


class TestMarkAllNotificationsRead:
    """Unit tests for MarkAllNotificationsRead use case."""

    async def test_returns_updated_count(self):
        repository = AsyncMock()
        repository.mark_all_as_read.return_value = 5

        assert await MarkAllNotificationsRead(repository).execute(PAYER_A) == 5
        repository.mark_all_as_read.assert_called_once_with(PAYER_A)
