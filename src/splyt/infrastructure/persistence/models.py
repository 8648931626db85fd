"""
SQLAlchemy models for Splyt persistence.
"""

from datetime import datetime
from decimal import Decimal
from typing import Any
from uuid import UUID

from sqlalchemy import (
    DECIMAL,
    JSON,
    BigInteger,
    Boolean,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    Uuid,
)
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship

# JSONB on PostgreSQL, plain JSON elsewhere
JSONDocument = JSON().with_variant(JSONB(), "postgresql")


class Base(DeclarativeBase):
    """Base class for all models."""


class UserModel(Base):
    """User database model - wallet-based identity."""

    __tablename__ = "users"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True)
    wallet_address: Mapped[str] = mapped_column(
        String(42), unique=True, index=True, nullable=False
    )
    display_name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str | None] = mapped_column(String(255), index=True)
    username: Mapped[str | None] = mapped_column(String(50), index=True)
    avatar_url: Mapped[str | None] = mapped_column(Text)
    total_splits_created: Mapped[int] = mapped_column(
        Integer, default=0, nullable=False, index=True
    )
    total_splits_joined: Mapped[int] = mapped_column(
        Integer, default=0, nullable=False
    )
    total_amount_split: Mapped[Decimal] = mapped_column(
        DECIMAL(20, 6), default=Decimal("0"), nullable=False, index=True
    )
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.now)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.now, onupdate=datetime.now
    )
    last_active_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.now, index=True
    )


class SplitModel(Base):
    """
    Split database model.

    Participants live in a JSON document column; `participant_index`
    mirrors their addresses so participant lookups can use an index.
    """

    __tablename__ = "splits"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True)
    split_id: Mapped[int] = mapped_column(
        Integer, unique=True, index=True, nullable=False
    )
    contract_address: Mapped[str] = mapped_column(
        String(42), index=True, nullable=False
    )
    tx_hash: Mapped[str] = mapped_column(
        String(66), unique=True, index=True, nullable=False
    )
    block_number: Mapped[int | None] = mapped_column(BigInteger)
    is_confirmed: Mapped[bool] = mapped_column(
        Boolean, default=False, nullable=False, index=True
    )
    creator_address: Mapped[str] = mapped_column(
        String(42), index=True, nullable=False
    )
    description: Mapped[str] = mapped_column(String(500), nullable=False)
    total_amount: Mapped[Decimal] = mapped_column(DECIMAL(20, 6), nullable=False)
    currency: Mapped[str] = mapped_column(String(10), default="USDC")
    status: Mapped[str] = mapped_column(String(20), index=True, nullable=False)
    is_completed: Mapped[bool] = mapped_column(Boolean, default=False)
    is_cancelled: Mapped[bool] = mapped_column(Boolean, default=False)
    participants: Mapped[list[dict[str, Any]]] = mapped_column(
        JSONDocument, nullable=False
    )
    category: Mapped[str | None] = mapped_column(String(20), index=True)
    note: Mapped[str | None] = mapped_column(Text)
    image_url: Mapped[str | None] = mapped_column(Text)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.now, index=True
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.now, onupdate=datetime.now
    )
    completed_at: Mapped[datetime | None] = mapped_column(DateTime)
    cancelled_at: Mapped[datetime | None] = mapped_column(DateTime)
    expires_at: Mapped[datetime | None] = mapped_column(DateTime, index=True)

    # Relationships
    participant_index: Mapped[list["SplitParticipantModel"]] = relationship(
        "SplitParticipantModel",
        back_populates="split",
        lazy="selectin",
        cascade="all, delete-orphan",
    )

    __table_args__ = (
        Index("ix_splits_creator_created", "creator_address", "created_at"),
        Index("ix_splits_status_created", "status", "created_at"),
    )


class SplitParticipantModel(Base):
    """Participant address index row for a split."""

    __tablename__ = "split_participants"

    split_pk: Mapped[UUID] = mapped_column(
        Uuid, ForeignKey("splits.id", ondelete="CASCADE"), primary_key=True
    )
    wallet_address: Mapped[str] = mapped_column(
        String(42), primary_key=True, index=True
    )

    # Relationships
    split: Mapped["SplitModel"] = relationship(
        "SplitModel", back_populates="participant_index"
    )


class TransactionLogModel(Base):
    """Transaction log database model."""

    __tablename__ = "transaction_logs"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True)
    split_id: Mapped[UUID] = mapped_column(
        Uuid, ForeignKey("splits.id"), index=True, nullable=False
    )
    wallet_address: Mapped[str] = mapped_column(
        String(42), index=True, nullable=False
    )
    tx_hash: Mapped[str] = mapped_column(
        String(66), unique=True, index=True, nullable=False
    )
    block_number: Mapped[int | None] = mapped_column(BigInteger, index=True)
    block_timestamp: Mapped[datetime | None] = mapped_column(DateTime)
    type: Mapped[str] = mapped_column(String(20), index=True, nullable=False)
    amount: Mapped[Decimal] = mapped_column(DECIMAL(20, 6), nullable=False)
    gas_used: Mapped[int] = mapped_column(BigInteger, default=0)
    gas_price: Mapped[int | None] = mapped_column(BigInteger)
    gas_cost: Mapped[Decimal | None] = mapped_column(DECIMAL(38, 18))
    status: Mapped[str] = mapped_column(String(20), index=True, nullable=False)
    error_message: Mapped[str | None] = mapped_column(Text)
    confirmations: Mapped[int] = mapped_column(Integer, default=0, index=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.now, index=True
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.now, onupdate=datetime.now
    )

    __table_args__ = (
        Index("ix_transaction_logs_split_created", "split_id", "created_at"),
        Index("ix_transaction_logs_wallet_created", "wallet_address", "created_at"),
    )


class NotificationModel(Base):
    """Notification database model."""

    __tablename__ = "notifications"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True)
    recipient_address: Mapped[str] = mapped_column(
        String(42), index=True, nullable=False
    )
    split_id: Mapped[UUID | None] = mapped_column(
        Uuid, ForeignKey("splits.id"), index=True
    )
    type: Mapped[str] = mapped_column(String(30), index=True, nullable=False)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    message: Mapped[str] = mapped_column(String(1000), nullable=False)
    channels: Mapped[list[str]] = mapped_column(JSONDocument, nullable=False)
    is_read: Mapped[bool] = mapped_column(Boolean, default=False, index=True)
    read_at: Mapped[datetime | None] = mapped_column(DateTime)
    is_sent: Mapped[bool] = mapped_column(Boolean, default=False, index=True)
    sent_at: Mapped[datetime | None] = mapped_column(DateTime)
    send_attempts: Mapped[int] = mapped_column(Integer, default=0)
    last_send_attempt_at: Mapped[datetime | None] = mapped_column(DateTime)
    data: Mapped[dict[str, Any]] = mapped_column(JSONDocument, default=dict)
    priority: Mapped[str] = mapped_column(String(10), default="normal")
    created_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.now, index=True
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.now, onupdate=datetime.now
    )

    __table_args__ = (
        Index(
            "ix_notifications_recipient_read_created",
            "recipient_address",
            "is_read",
            "created_at",
        ),
    )
