"""
TransactionLog entity - Domain model for on-chain activity tied to splits.
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional
from uuid import UUID, uuid4

from splyt.domain.value_objects.wallet_address import (
    is_valid_tx_hash,
    normalize_address,
)

CONFIRMATIONS_REQUIRED = 12
WEI_PER_ETH = Decimal("1e18")
MAX_ERROR_MESSAGE_LENGTH = 1000


class TransactionLogType(str, Enum):
    """Kinds of split transactions."""

    PAYMENT = "payment"
    REFUND = "refund"
    COMPLETION = "completion"
    CREATION = "creation"


class TransactionLogStatus(str, Enum):
    """Transaction processing states."""

    PENDING = "pending"
    SUCCESS = "success"
    FAILED = "failed"
    REVERTED = "reverted"


@dataclass
class TransactionLog:
    """
    TransactionLog entity recording one blockchain transaction.

    Business rules:
    - Transaction hash is unique and stored lowercase
    - Amount and gas figures cannot be negative
    - Gas cost derived from gas used and gas price when both known
    - Pending logs become SUCCESS once 12 confirmations are seen
    """

    id: UUID = field(default_factory=uuid4)
    split_id: UUID = field(default_factory=uuid4)
    wallet_address: str = field(default="")
    tx_hash: str = field(default="")
    block_number: Optional[int] = field(default=None)
    block_timestamp: Optional[datetime] = field(default=None)
    type: TransactionLogType = field(default=TransactionLogType.PAYMENT)
    amount: Decimal = field(default=Decimal("0"))
    gas_used: int = field(default=0)
    gas_price: Optional[int] = field(default=None)
    gas_cost: Optional[Decimal] = field(default=None)
    status: TransactionLogStatus = field(default=TransactionLogStatus.PENDING)
    error_message: Optional[str] = field(default=None)
    confirmations: int = field(default=0)
    created_at: datetime = field(default_factory=datetime.now)
    updated_at: datetime = field(default_factory=datetime.now)

    def __post_init__(self):
        """Validate transaction log after initialization."""
        self.wallet_address = normalize_address(self.wallet_address)

        if not is_valid_tx_hash(self.tx_hash):
            raise ValueError(f"Invalid transaction hash format: {self.tx_hash}")
        self.tx_hash = self.tx_hash.strip().lower()

        self.type = TransactionLogType(self.type)
        self.status = TransactionLogStatus(self.status)

        self.amount = Decimal(str(self.amount))
        if self.amount < 0:
            raise ValueError("Amount cannot be negative")

        if self.block_number is not None and self.block_number < 0:
            raise ValueError("Block number cannot be negative")

        if self.gas_used < 0:
            raise ValueError("Gas used cannot be negative")

        if self.gas_price is not None and self.gas_price < 0:
            raise ValueError("Gas price cannot be negative")

        if self.confirmations < 0:
            raise ValueError("Confirmations cannot be negative")

        if self.gas_cost is None and self.gas_used and self.gas_price:
            self.gas_cost = Decimal(self.gas_used) * Decimal(self.gas_price) / (
                WEI_PER_ETH
            )

        self.error_message = self._truncate(self.error_message)

    @staticmethod
    def _truncate(message: Optional[str]) -> Optional[str]:
        if message is None:
            return None
        return message.strip()[:MAX_ERROR_MESSAGE_LENGTH]

    @property
    def is_confirmed(self) -> bool:
        """True with at least 12 confirmations."""
        return self.confirmations >= CONFIRMATIONS_REQUIRED

    @property
    def is_final(self) -> bool:
        """True once the transaction left PENDING."""
        return self.status != TransactionLogStatus.PENDING

    def update_status(
        self,
        status: TransactionLogStatus,
        error_message: Optional[str] = None,
    ) -> None:
        """
        Set transaction status.

        Args:
            status: New status
            error_message: Failure reason, kept only when given
        """
        self.status = TransactionLogStatus(status)
        if error_message:
            self.error_message = self._truncate(error_message)
        self.updated_at = datetime.now()

    def update_confirmations(self, confirmations: int) -> None:
        """
        Record confirmation count; pending logs succeed at 12.

        Raises:
            ValueError: If confirmations is negative
        """
        if confirmations < 0:
            raise ValueError("Confirmations cannot be negative")

        self.confirmations = confirmations
        if (
            confirmations >= CONFIRMATIONS_REQUIRED
            and self.status == TransactionLogStatus.PENDING
        ):
            self.status = TransactionLogStatus.SUCCESS
        self.updated_at = datetime.now()

    def to_dict(self) -> dict:
        """Convert entity to dictionary representation."""
        return {
            "id": str(self.id),
            "split_id": str(self.split_id),
            "wallet_address": self.wallet_address,
            "tx_hash": self.tx_hash,
            "block_number": self.block_number,
            "block_timestamp": (
                self.block_timestamp.isoformat() if self.block_timestamp else None
            ),
            "type": self.type.value,
            "amount": str(self.amount),
            "gas_used": self.gas_used,
            "gas_price": self.gas_price,
            "gas_cost": str(self.gas_cost) if self.gas_cost is not None else None,
            "status": self.status.value,
            "error_message": self.error_message,
            "confirmations": self.confirmations,
            "is_confirmed": self.is_confirmed,
            "created_at": self.created_at.isoformat(),
        }
