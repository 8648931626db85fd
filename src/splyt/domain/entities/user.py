"""
User entity - Domain model for wallet identities.
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Optional
from uuid import UUID, uuid4

from splyt.domain.value_objects.wallet_address import normalize_address

ACTIVE_WINDOW_DAYS = 7


@dataclass
class User:
    """
    User entity - Web3 identity keyed by wallet address.

    Business rules:
    - Wallet address is unique and stored lowercase
    - Created on first successful wallet login, never deleted
    - Counters only ever grow
    """

    id: UUID = field(default_factory=uuid4)
    wallet_address: str = field(default="")
    display_name: str = field(default="")
    email: Optional[str] = field(default=None)
    username: Optional[str] = field(default=None)
    avatar_url: Optional[str] = field(default=None)
    total_splits_created: int = field(default=0)
    total_splits_joined: int = field(default=0)
    total_amount_split: Decimal = field(default=Decimal("0"))
    created_at: datetime = field(default_factory=datetime.now)
    updated_at: datetime = field(default_factory=datetime.now)
    last_active_at: datetime = field(default_factory=datetime.now)

    def __post_init__(self):
        """Validate user data after initialization."""
        if not self.wallet_address:
            raise ValueError("Wallet address is required")

        self.wallet_address = normalize_address(self.wallet_address)

        if not self.display_name or not self.display_name.strip():
            raise ValueError("Display name is required")

        if self.email is not None:
            self.email = self.email.strip().lower()

        if self.username is not None:
            self.username = self.username.strip()

    @property
    def is_active(self) -> bool:
        """True if the user was active within the last 7 days."""
        return datetime.now() - self.last_active_at < timedelta(
            days=ACTIVE_WINDOW_DAYS
        )

    def increment_split_created(self) -> None:
        """Record one more split created by this user."""
        self.total_splits_created += 1
        self.touch()

    def increment_split_joined(self, amount: Decimal) -> None:
        """
        Record participation in a split.

        Args:
            amount: Amount the user contributed
        """
        self.total_splits_joined += 1
        self.total_amount_split += Decimal(str(amount))
        self.touch()

    def touch(self) -> None:
        """Bump last activity timestamp."""
        now = datetime.now()
        self.last_active_at = now
        self.updated_at = now

    def to_dict(self) -> dict:
        """Convert entity to dictionary representation."""
        return {
            "id": str(self.id),
            "wallet_address": self.wallet_address,
            "display_name": self.display_name,
            "email": self.email,
            "username": self.username,
            "avatar_url": self.avatar_url,
            "total_splits_created": self.total_splits_created,
            "total_splits_joined": self.total_splits_joined,
            "total_amount_split": str(self.total_amount_split),
            "is_active": self.is_active,
            "created_at": self.created_at.isoformat(),
            "last_active_at": self.last_active_at.isoformat(),
        }
