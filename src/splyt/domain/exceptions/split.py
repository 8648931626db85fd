"""
Split lifecycle exceptions.
"""

from splyt.domain.exceptions.base import SplytException


class InvalidSplitStateError(SplytException):
    """Raised when an operation is not allowed in the split's current state."""

    def __init__(self, message: str):
        super().__init__(message, code="INVALID_SPLIT_STATE")


class DuplicateTransactionError(SplytException):
    """Raised when a transaction hash is already recorded."""

    def __init__(self, tx_hash: str):
        super().__init__(
            f"Transaction {tx_hash} is already recorded",
            code="DUPLICATE_TRANSACTION",
        )
        self.tx_hash = tx_hash


class SplitIdAllocationError(SplytException):
    """Raised when no free split ID is found within the probe bound."""

    def __init__(self, attempts: int):
        super().__init__(
            f"Could not allocate a unique split ID after {attempts} attempts",
            code="SPLIT_ID_EXHAUSTED",
        )
        self.attempts = attempts
