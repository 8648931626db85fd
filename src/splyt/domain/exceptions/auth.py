"""
Authentication domain exceptions.
"""

from splyt.domain.exceptions.base import SplytException


class AuthenticationError(SplytException):
    """Raised when authentication fails."""

    def __init__(self, message: str = "Authentication failed"):
        super().__init__(message, code="AUTHENTICATION_ERROR")


class InvalidSignatureError(AuthenticationError):
    """Raised when wallet signature does not match the claimed address."""

    def __init__(self):
        super().__init__(
            "Invalid signature: Signature does not match the wallet address"
        )


class ExpiredTokenError(AuthenticationError):
    """Raised when JWT token has expired."""

    def __init__(self):
        super().__init__("Authentication token has expired")


class InvalidTokenError(AuthenticationError):
    """Raised when JWT token is malformed or invalid."""

    def __init__(self):
        super().__init__("Invalid authentication token")
