"""
Domain exceptions package.
"""

# Auth exceptions
from splyt.domain.exceptions.auth import (
    AuthenticationError,
    ExpiredTokenError,
    InvalidSignatureError,
    InvalidTokenError,
)

# Base exceptions
from splyt.domain.exceptions.base import (
    DuplicateEntityError,
    EntityNotFoundError,
    PermissionDeniedError,
    PersistenceError,
    SplytException,
    ValidationError,
)

# Blockchain exceptions
from splyt.domain.exceptions.blockchain import (
    BlockchainError,
    ContractNotConfiguredError,
    EventNotFoundError,
    TransactionRevertedError,
)

# Split exceptions
from splyt.domain.exceptions.split import (
    DuplicateTransactionError,
    InvalidSplitStateError,
    SplitIdAllocationError,
)

__all__ = [
    # Base
    "SplytException",
    "EntityNotFoundError",
    "DuplicateEntityError",
    "ValidationError",
    "PermissionDeniedError",
    "PersistenceError",
    # Auth
    "AuthenticationError",
    "InvalidSignatureError",
    "InvalidTokenError",
    "ExpiredTokenError",
    # Blockchain
    "BlockchainError",
    "ContractNotConfiguredError",
    "TransactionRevertedError",
    "EventNotFoundError",
    # Split
    "InvalidSplitStateError",
    "DuplicateTransactionError",
    "SplitIdAllocationError",
]
