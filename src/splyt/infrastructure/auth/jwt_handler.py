"""
JWT token handler for authentication.
Provides token creation and validation.
"""

from datetime import datetime, timedelta, timezone
from typing import Dict
from uuid import UUID

from jose import JWTError, jwt

from splyt.config.settings import get_settings
from splyt.domain.exceptions.auth import ExpiredTokenError, InvalidTokenError
from splyt.infrastructure.monitoring.logger import get_logger

logger = get_logger(__name__)


def create_access_token(
    user_id: UUID, wallet_address: str, display_name: str
) -> str:
    """
    Create JWT access token for authenticated user.

    Lifetime comes from JWT_EXPIRATION_HOURS (100 years by default).

    Args:
        user_id: User UUID
        wallet_address: Lowercase EVM wallet address
        display_name: User display name

    Returns:
        Encoded JWT token string

    Example:
        >>> token = create_access_token(
        ...     user_id=UUID("..."),
        ...     wallet_address="0xabc...",
        ...     display_name="Swift Otter 3F9A"
        ... )
    """
    settings = get_settings()
    now = datetime.now(timezone.utc)
    expire = now + timedelta(hours=settings.JWT_EXPIRATION_HOURS)
    payload = {
        "sub": str(user_id),
        "userId": str(user_id),
        "walletAddress": wallet_address,
        "displayName": display_name,
        "iat": now,
        "exp": expire,
        "type": "access",
    }
    return jwt.encode(
        payload, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM
    )


def decode_access_token(token: str) -> Dict[str, str]:
    """
    Decode and validate JWT access token.

    Args:
        token: JWT token string

    Returns:
        Dictionary with user_id, wallet_address and display_name

    Raises:
        ExpiredTokenError: If token has expired
        InvalidTokenError: If token is invalid or malformed
    """
    settings = get_settings()
    try:
        payload = jwt.decode(
            token,
            settings.JWT_SECRET_KEY,
            algorithms=[settings.JWT_ALGORITHM],
        )
    except jwt.ExpiredSignatureError:
        raise ExpiredTokenError()
    except JWTError as e:
        logger.debug(f"JWT decode error: {type(e).__name__}: {e}")
        raise InvalidTokenError()

    user_id = payload.get("userId") or payload.get("sub")
    wallet = payload.get("walletAddress")

    if not user_id or not wallet:
        raise InvalidTokenError()

    return {
        "user_id": user_id,
        "wallet_address": wallet,
        "display_name": payload.get("displayName", ""),
    }
