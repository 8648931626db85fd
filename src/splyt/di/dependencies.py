"""
FastAPI dependency injection.

Provides dependencies for FastAPI routes using the DI container.
All dependencies are async-compatible and use proper scoping.
"""

from typing import AsyncGenerator, Optional
from uuid import UUID

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from splyt.di.container import get_container
from splyt.domain.entities.user import User
from splyt.domain.exceptions import AuthenticationError
from splyt.infrastructure.auth.jwt_handler import decode_access_token

# Missing credentials surface as AuthenticationError (401), not 403
security = HTTPBearer(auto_error=False)

# ================================================================
# Database Dependencies
# ================================================================


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Get database session dependency.

    Yields async database session from container. The session commits
    when the request succeeds and rolls back otherwise.
    """
    container = get_container()
    async with container.database.session() as session:
        yield session


# ================================================================
# Authentication Dependencies
# ================================================================


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    session: AsyncSession = Depends(get_db_session),
) -> User:
    """
    Load the authenticated user from the bearer token.

    Args:
        credentials: Authorization header with Bearer token
        session: Database session

    Returns:
        User domain entity

    Raises:
        AuthenticationError: If token is missing, invalid or expired, or
            the user no longer exists
    """
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("Missing bearer token")

    payload = decode_access_token(credentials.credentials)

    try:
        user_id = UUID(payload["user_id"])
    except ValueError:
        raise AuthenticationError("Invalid token format")

    user_repo = get_container().get_user_repository(session)
    user = await user_repo.get_by_id(user_id)

    if not user or user.wallet_address != payload["wallet_address"].lower():
        raise AuthenticationError("User not found")

    return user


async def get_current_wallet(
    current_user: User = Depends(get_current_user),
) -> str:
    """Wallet address of the authenticated user."""
    return current_user.wallet_address


# ================================================================
# Use Case Dependencies
# ================================================================


def get_authenticate_wallet(session: AsyncSession = Depends(get_db_session)):
    """Get AuthenticateWallet use case dependency."""
    return get_container().get_authenticate_wallet(session)


def get_create_split(session: AsyncSession = Depends(get_db_session)):
    """Get CreateSplit use case dependency."""
    return get_container().get_create_split(session)


def get_get_split_by_id(session: AsyncSession = Depends(get_db_session)):
    """Get GetSplitById use case dependency."""
    return get_container().get_get_split_by_id(session)


def get_get_splits(session: AsyncSession = Depends(get_db_session)):
    """Get GetSplits use case dependency."""
    return get_container().get_get_splits(session)


def get_get_splits_by_creator(session: AsyncSession = Depends(get_db_session)):
    """Get GetSplitsByCreator use case dependency."""
    return get_container().get_get_splits_by_creator(session)


def get_get_splits_by_participant(
    session: AsyncSession = Depends(get_db_session),
):
    """Get GetSplitsByParticipant use case dependency."""
    return get_container().get_get_splits_by_participant(session)


def get_record_participant_payment(
    session: AsyncSession = Depends(get_db_session),
):
    """Get RecordParticipantPayment use case dependency."""
    return get_container().get_record_participant_payment(session)


def get_send_payment_reminder(session: AsyncSession = Depends(get_db_session)):
    """Get SendPaymentReminder use case dependency."""
    return get_container().get_send_payment_reminder(session)


def get_cancel_split(session: AsyncSession = Depends(get_db_session)):
    """Get CancelSplit use case dependency."""
    return get_container().get_cancel_split(session)


def get_get_split_transactions(session: AsyncSession = Depends(get_db_session)):
    """Get GetSplitTransactions use case dependency."""
    return get_container().get_get_split_transactions(session)


def get_list_notifications(session: AsyncSession = Depends(get_db_session)):
    """Get ListNotifications use case dependency."""
    return get_container().get_list_notifications(session)


def get_get_unread_notification_count(
    session: AsyncSession = Depends(get_db_session),
):
    """Get GetUnreadNotificationCount use case dependency."""
    return get_container().get_get_unread_notification_count(session)


def get_mark_notification_read(session: AsyncSession = Depends(get_db_session)):
    """Get MarkNotificationRead use case dependency."""
    return get_container().get_mark_notification_read(session)


def get_mark_all_notifications_read(
    session: AsyncSession = Depends(get_db_session),
):
    """Get MarkAllNotificationsRead use case dependency."""
    return get_container().get_mark_all_notifications_read(session)
