"""
Split entity - Domain model for a shared bill and its participants.
"""

import re
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from decimal import Decimal
from enum import Enum
from typing import List, Optional
from uuid import UUID, uuid4

from splyt.domain.value_objects.wallet_address import (
    is_valid_tx_hash,
    normalize_address,
)

MIN_PARTICIPANTS = 1
MAX_PARTICIPANTS = 50
MIN_TOTAL_AMOUNT = Decimal("0.01")
AMOUNT_TOLERANCE = Decimal("0.01")
DEFAULT_EXPIRY_DAYS = 30
MAX_DESCRIPTION_LENGTH = 500
MAX_NOTE_LENGTH = 1000
MAX_PARTICIPANT_NAME_LENGTH = 100

IMAGE_URL_PATTERN = re.compile(r"^https?://.+")


class SplitStatus(str, Enum):
    """Split lifecycle states."""

    PENDING = "pending"
    ACTIVE = "active"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class Currency(str, Enum):
    """Supported settlement currencies."""

    USDC = "USDC"
    USDT = "USDT"
    DAI = "DAI"
    ETH = "ETH"


class SplitCategory(str, Enum):
    """Optional split categories."""

    FOOD = "food"
    TRAVEL = "travel"
    RENT = "rent"
    UTILITIES = "utilities"
    ENTERTAINMENT = "entertainment"
    OTHER = "other"


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


def _parse_dt(value: Optional[str]) -> Optional[datetime]:
    return datetime.fromisoformat(value) if value else None


@dataclass
class Participant:
    """
    Participant embedded in a split.

    Business rules:
    - Wallet address stored lowercase
    - Amount due cannot be negative
    - Payment tx hash, when set, is `0x` + 64 hex
    """

    wallet_address: str = field(default="")
    amount_due: Decimal = field(default=Decimal("0"))
    name: Optional[str] = field(default=None)
    has_paid: bool = field(default=False)
    paid_at: Optional[datetime] = field(default=None)
    payment_tx_hash: Optional[str] = field(default=None)
    reminder_count: int = field(default=0)
    last_reminded_at: Optional[datetime] = field(default=None)

    def __post_init__(self):
        """Validate participant data after initialization."""
        if not self.wallet_address:
            raise ValueError("Participant wallet address is required")
        self.wallet_address = normalize_address(self.wallet_address)

        self.amount_due = Decimal(str(self.amount_due))
        if self.amount_due < 0:
            raise ValueError("Amount due cannot be negative")

        if self.name is not None:
            self.name = self.name.strip()
            if len(self.name) > MAX_PARTICIPANT_NAME_LENGTH:
                raise ValueError(
                    f"Participant name cannot exceed "
                    f"{MAX_PARTICIPANT_NAME_LENGTH} characters"
                )

        if self.payment_tx_hash is not None:
            if not is_valid_tx_hash(self.payment_tx_hash):
                raise ValueError(
                    f"Invalid payment tx hash format: {self.payment_tx_hash}"
                )
            self.payment_tx_hash = self.payment_tx_hash.strip().lower()

    def to_dict(self) -> dict:
        """Serialize to a JSON-safe document."""
        return {
            "wallet_address": self.wallet_address,
            "name": self.name,
            "amount_due": str(self.amount_due),
            "has_paid": self.has_paid,
            "paid_at": _iso(self.paid_at),
            "payment_tx_hash": self.payment_tx_hash,
            "reminder_count": self.reminder_count,
            "last_reminded_at": _iso(self.last_reminded_at),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Participant":
        """Rebuild participant from a stored document."""
        return cls(
            wallet_address=data["wallet_address"],
            name=data.get("name"),
            amount_due=Decimal(str(data.get("amount_due", "0"))),
            has_paid=bool(data.get("has_paid", False)),
            paid_at=_parse_dt(data.get("paid_at")),
            payment_tx_hash=data.get("payment_tx_hash"),
            reminder_count=int(data.get("reminder_count", 0)),
            last_reminded_at=_parse_dt(data.get("last_reminded_at")),
        )


@dataclass
class Split:
    """
    Split entity - a bill divided among wallet participants.

    Business rules:
    - 1 to 50 participants, unique by wallet address
    - Total amount at least 0.01
    - Addresses and hashes stored lowercase
    - Status transitions: PENDING/ACTIVE -> COMPLETED or CANCELLED
    - Completed or cancelled splits cannot change participants
    - Expires 30 days after creation unless told otherwise
    """

    id: UUID = field(default_factory=uuid4)
    split_id: int = field(default=0)
    contract_address: str = field(default="")
    tx_hash: str = field(default="")
    block_number: Optional[int] = field(default=None)
    is_confirmed: bool = field(default=False)
    creator_address: str = field(default="")
    description: str = field(default="")
    total_amount: Decimal = field(default=Decimal("0"))
    currency: Currency = field(default=Currency.USDC)
    status: SplitStatus = field(default=SplitStatus.PENDING)
    is_completed: bool = field(default=False)
    is_cancelled: bool = field(default=False)
    participants: List[Participant] = field(default_factory=list)
    category: Optional[SplitCategory] = field(default=None)
    note: Optional[str] = field(default=None)
    image_url: Optional[str] = field(default=None)
    created_at: datetime = field(default_factory=datetime.now)
    updated_at: datetime = field(default_factory=datetime.now)
    completed_at: Optional[datetime] = field(default=None)
    cancelled_at: Optional[datetime] = field(default=None)
    expires_at: Optional[datetime] = field(default=None)

    def __post_init__(self):
        """Validate split data after initialization."""
        if self.split_id < 1:
            raise ValueError("Split ID must be a positive integer")

        self.creator_address = normalize_address(self.creator_address)
        self.contract_address = normalize_address(self.contract_address)

        if not is_valid_tx_hash(self.tx_hash):
            raise ValueError(f"Invalid tx hash format: {self.tx_hash}")
        self.tx_hash = self.tx_hash.strip().lower()

        self.description = (self.description or "").strip()
        if not self.description:
            raise ValueError("Description is required")
        if len(self.description) > MAX_DESCRIPTION_LENGTH:
            raise ValueError(
                f"Description cannot exceed {MAX_DESCRIPTION_LENGTH} characters"
            )

        self.total_amount = Decimal(str(self.total_amount))
        if self.total_amount < MIN_TOTAL_AMOUNT:
            raise ValueError(f"Total amount must be at least {MIN_TOTAL_AMOUNT}")

        self.currency = Currency(self.currency)
        self.status = SplitStatus(self.status)
        if self.category is not None:
            self.category = SplitCategory(self.category)

        if not MIN_PARTICIPANTS <= len(self.participants) <= MAX_PARTICIPANTS:
            raise ValueError(
                f"Split must have between {MIN_PARTICIPANTS} and "
                f"{MAX_PARTICIPANTS} participants"
            )

        addresses = [p.wallet_address for p in self.participants]
        if len(set(addresses)) != len(addresses):
            raise ValueError("Participant wallet addresses must be unique")

        if self.note is not None and len(self.note) > MAX_NOTE_LENGTH:
            raise ValueError(f"Note cannot exceed {MAX_NOTE_LENGTH} characters")

        if self.image_url is not None and not IMAGE_URL_PATTERN.match(
            self.image_url
        ):
            raise ValueError("Image URL must be an http(s) URL")

        if self.expires_at is None:
            self.expires_at = self.created_at + timedelta(days=DEFAULT_EXPIRY_DAYS)

    # ================================================================
    # Derived values
    # ================================================================

    @property
    def total_paid(self) -> Decimal:
        """Sum of amounts due of participants who paid."""
        return sum(
            (p.amount_due for p in self.participants if p.has_paid), Decimal("0")
        )

    @property
    def total_unpaid(self) -> Decimal:
        """Sum of amounts due of participants who have not paid."""
        return sum(
            (p.amount_due for p in self.participants if not p.has_paid),
            Decimal("0"),
        )

    @property
    def paid_count(self) -> int:
        return sum(1 for p in self.participants if p.has_paid)

    @property
    def unpaid_count(self) -> int:
        return sum(1 for p in self.participants if not p.has_paid)

    @property
    def is_expired(self) -> bool:
        """True once the expiry date has passed."""
        if not self.expires_at:
            return False
        return datetime.now() > self.expires_at

    @property
    def completion_percentage(self) -> int:
        """Paid share of the total amount as a rounded percentage."""
        if self.total_amount == 0:
            return 0
        return round(self.total_paid / self.total_amount * 100)

    @property
    def amount_mismatch(self) -> Decimal:
        """Absolute difference between participant amounts and total."""
        due = sum((p.amount_due for p in self.participants), Decimal("0"))
        return abs(due - self.total_amount)

    def has_consistent_amounts(self) -> bool:
        """True if participant amounts add up to the total within 0.01."""
        return self.amount_mismatch <= AMOUNT_TOLERANCE

    # ================================================================
    # Participants
    # ================================================================

    def find_participant(self, wallet_address: str) -> Optional[Participant]:
        """
        Find participant by wallet address (case-insensitive).

        Args:
            wallet_address: Participant wallet address

        Returns:
            Participant if present, None otherwise
        """
        target = wallet_address.strip().lower()
        for participant in self.participants:
            if participant.wallet_address == target:
                return participant
        return None

    def is_creator(self, wallet_address: str) -> bool:
        return self.creator_address == wallet_address.strip().lower()

    def _is_closed(self) -> bool:
        return self.is_completed or self.is_cancelled

    def add_participant(self, participant: Participant) -> None:
        """
        Add a new participant.

        Raises:
            ValueError: If split is closed, participant already exists or
                the split is full
        """
        if self._is_closed():
            raise ValueError(
                "Cannot add participants to completed or cancelled split"
            )

        if self.find_participant(participant.wallet_address):
            raise ValueError("Participant already exists in this split")

        if len(self.participants) >= MAX_PARTICIPANTS:
            raise ValueError(
                f"Split cannot have more than {MAX_PARTICIPANTS} participants"
            )

        self.participants.append(participant)
        self.updated_at = datetime.now()

    def remove_participant(self, wallet_address: str) -> None:
        """
        Remove an unpaid participant.

        Raises:
            ValueError: If split is closed, participant is missing, already
                paid, or is the last one
        """
        if self._is_closed():
            raise ValueError(
                "Cannot remove participants from completed or cancelled split"
            )

        participant = self.find_participant(wallet_address)
        if participant is None:
            raise ValueError("Participant not found in this split")

        if participant.has_paid:
            raise ValueError("Cannot remove participant who has already paid")

        if len(self.participants) == 1:
            raise ValueError("Cannot remove last participant from split")

        self.participants.remove(participant)
        self.updated_at = datetime.now()

    # ================================================================
    # Lifecycle
    # ================================================================

    def mark_participant_paid(self, wallet_address: str, tx_hash: str) -> None:
        """
        Mark a participant as paid and complete the split if everyone paid.

        Args:
            wallet_address: Paying participant
            tx_hash: Payment transaction hash

        Raises:
            ValueError: If participant is missing, already paid or the hash
                is malformed
        """
        participant = self.find_participant(wallet_address)
        if participant is None:
            raise ValueError(f"Participant with wallet {wallet_address} not found")

        if participant.has_paid:
            raise ValueError(f"Participant {wallet_address} has already paid")

        if not is_valid_tx_hash(tx_hash):
            raise ValueError(f"Invalid payment tx hash format: {tx_hash}")

        participant.has_paid = True
        participant.paid_at = datetime.now()
        participant.payment_tx_hash = tx_hash.strip().lower()
        self.updated_at = datetime.now()

        self.check_and_update_completion()

    def check_and_update_completion(self) -> bool:
        """
        Complete the split when every participant has paid.

        Returns:
            True if the split transitioned to COMPLETED by this call
        """
        all_paid = bool(self.participants) and all(
            p.has_paid for p in self.participants
        )
        if all_paid and not self.is_completed:
            self.update_status(SplitStatus.COMPLETED)
            return True
        return False

    def update_status(self, status: SplitStatus) -> None:
        """
        Set status and keep completion/cancellation flags in sync.

        Timestamps are stamped only on the first transition.
        """
        status = SplitStatus(status)
        now = datetime.now()

        self.status = status
        self.is_completed = status == SplitStatus.COMPLETED
        self.is_cancelled = status == SplitStatus.CANCELLED

        if status == SplitStatus.COMPLETED and not self.completed_at:
            self.completed_at = now

        if status == SplitStatus.CANCELLED and not self.cancelled_at:
            self.cancelled_at = now

        self.updated_at = now

    def send_reminder(self, wallet_address: str) -> Participant:
        """
        Record a payment reminder for an unpaid participant.

        Returns:
            The reminded participant

        Raises:
            ValueError: If participant is missing or already paid
        """
        participant = self.find_participant(wallet_address)
        if participant is None:
            raise ValueError(f"Participant with wallet {wallet_address} not found")

        if participant.has_paid:
            raise ValueError(
                "Cannot send reminder to participant who has already paid"
            )

        participant.reminder_count += 1
        participant.last_reminded_at = datetime.now()
        self.updated_at = participant.last_reminded_at
        return participant

    def to_dict(self) -> dict:
        """Convert entity to dictionary representation."""
        return {
            "id": str(self.id),
            "split_id": self.split_id,
            "contract_address": self.contract_address,
            "tx_hash": self.tx_hash,
            "block_number": self.block_number,
            "is_confirmed": self.is_confirmed,
            "creator_address": self.creator_address,
            "description": self.description,
            "total_amount": str(self.total_amount),
            "currency": self.currency.value,
            "status": self.status.value,
            "is_completed": self.is_completed,
            "is_cancelled": self.is_cancelled,
            "participants": [p.to_dict() for p in self.participants],
            "category": self.category.value if self.category else None,
            "note": self.note,
            "image_url": self.image_url,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
            "completed_at": _iso(self.completed_at),
            "cancelled_at": _iso(self.cancelled_at),
            "expires_at": _iso(self.expires_at),
        }
