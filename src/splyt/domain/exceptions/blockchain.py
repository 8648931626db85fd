"""
Blockchain-related exceptions.

Defines exceptions for SplitFactory contract operations.
"""

from splyt.domain.exceptions.base import SplytException


class BlockchainError(SplytException):
    """Base exception for blockchain operations."""

    def __init__(self, message: str = "Blockchain operation failed"):
        super().__init__(message, code="BLOCKCHAIN_ERROR")


class ContractNotConfiguredError(BlockchainError):
    """Raised when SplitFactory address or gas payer key is missing or wrong."""

    def __init__(self, setting: str, reason: str = "is not configured"):
        super().__init__(f"Blockchain setting {setting} {reason}")
        self.setting = setting


class TransactionRevertedError(BlockchainError):
    """Raised when a submitted transaction is mined with status 0."""

    def __init__(self, tx_hash: str):
        super().__init__(f"Transaction reverted: {tx_hash}")
        self.tx_hash = tx_hash


class EventNotFoundError(BlockchainError):
    """Raised when the expected contract event is absent from a receipt."""

    def __init__(self, event_name: str, tx_hash: str):
        super().__init__(f"{event_name} event not found in transaction {tx_hash}")
        self.event_name = event_name
        self.tx_hash = tx_hash
