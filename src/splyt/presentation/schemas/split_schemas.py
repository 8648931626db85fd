"""
Split API schemas.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import Field, SerializerFunctionWrapHandler, model_serializer

from splyt.application.dto.split_dto import (
    CreateSplitInput,
    ParticipantInput,
    SplitView,
)
from splyt.domain.entities.split import (
    Currency,
    Participant,
    Split,
    SplitCategory,
    SplitStatus,
)
from splyt.domain.entities.transaction_log import TransactionLog
from splyt.presentation.schemas.common import Amount, CamelModel

# ================================================================
# Create Split Schemas
# ================================================================


class ParticipantRequest(CamelModel):
    """Participant share submitted by the creator."""

    wallet_address: str = Field(..., description="Participant wallet address")
    name: Optional[str] = Field(None, max_length=100)
    amount_due: Amount = Field(..., ge=0, description="Share of the total")


class CreateSplitRequest(CamelModel):
    """Request to create a split."""

    description: str = Field(..., description="What the bill is for")
    total_amount: Amount = Field(..., description="Bill total")
    participants: List[ParticipantRequest] = Field(default_factory=list)
    category: Optional[SplitCategory] = None
    note: Optional[str] = None
    image_url: Optional[str] = None
    currency: Currency = Currency.USDC

    def to_input(self) -> CreateSplitInput:
        return CreateSplitInput(
            description=self.description,
            total_amount=self.total_amount,
            participants=[
                ParticipantInput(
                    wallet_address=p.wallet_address,
                    amount_due=p.amount_due,
                    name=p.name,
                )
                for p in self.participants
            ],
            category=self.category,
            note=self.note,
            image_url=self.image_url,
            currency=self.currency,
        )


class CreateSplitResponse(CamelModel):
    """Identifiers of a created split."""

    split_id: int
    contract_address: str
    tx_hash: str


# ================================================================
# Split Schemas
# ================================================================


class ParticipantResponse(CamelModel):
    wallet_address: str
    name: Optional[str] = None
    amount_due: Amount
    has_paid: bool
    paid_at: Optional[datetime] = None
    payment_tx_hash: Optional[str] = None
    reminder_count: int = 0
    last_reminded_at: Optional[datetime] = None
    # Only set on the requester's own entry
    paid: Optional[bool] = None

    @model_serializer(mode="wrap")
    def _omit_paid_for_others(self, handler: SerializerFunctionWrapHandler):
        data = handler(self)
        if self.paid is None:
            data.pop("paid", None)
        return data

    @classmethod
    def from_entity(
        cls, participant: Participant, is_requester: bool = False
    ) -> "ParticipantResponse":
        response = cls.model_validate(participant)
        if is_requester:
            response.paid = participant.has_paid
        return response


class SplitResponse(CamelModel):
    """Split with derived payment progress."""

    id: str
    split_id: int
    contract_address: str
    tx_hash: str
    block_number: Optional[int] = None
    is_confirmed: bool
    creator_address: str
    description: str
    total_amount: Amount
    currency: Currency
    status: SplitStatus
    is_completed: bool
    is_cancelled: bool
    participants: List[ParticipantResponse]
    category: Optional[SplitCategory] = None
    note: Optional[str] = None
    image_url: Optional[str] = None
    total_paid: Amount
    total_unpaid: Amount
    paid_count: int
    completion_percentage: int
    is_expired: bool
    created_at: datetime
    updated_at: datetime
    completed_at: Optional[datetime] = None
    cancelled_at: Optional[datetime] = None
    expires_at: Optional[datetime] = None

    @classmethod
    def from_entity(
        cls, split: Split, requester_address: Optional[str] = None
    ) -> "SplitResponse":
        return cls(
            id=str(split.id),
            split_id=split.split_id,
            contract_address=split.contract_address,
            tx_hash=split.tx_hash,
            block_number=split.block_number,
            is_confirmed=split.is_confirmed,
            creator_address=split.creator_address,
            description=split.description,
            total_amount=split.total_amount,
            currency=split.currency,
            status=split.status,
            is_completed=split.is_completed,
            is_cancelled=split.is_cancelled,
            participants=[
                ParticipantResponse.from_entity(
                    p, is_requester=p.wallet_address == requester_address
                )
                for p in split.participants
            ],
            category=split.category,
            note=split.note,
            image_url=split.image_url,
            total_paid=split.total_paid,
            total_unpaid=split.total_unpaid,
            paid_count=split.paid_count,
            completion_percentage=split.completion_percentage,
            is_expired=split.is_expired,
            created_at=split.created_at,
            updated_at=split.updated_at,
            completed_at=split.completed_at,
            cancelled_at=split.cancelled_at,
            expires_at=split.expires_at,
        )


class SplitViewResponse(SplitResponse):
    """Split as seen by the requester."""

    is_creator: bool
    you_paid: bool
    creator_name: Optional[str] = None

    @classmethod
    def from_view(cls, view: SplitView) -> "SplitViewResponse":
        base = SplitResponse.from_entity(view.split, view.requester_address)
        return cls(
            **base.model_dump(),
            is_creator=view.is_creator,
            you_paid=view.you_paid,
            creator_name=view.creator_name,
        )


# ================================================================
# Lifecycle Schemas
# ================================================================


class RecordPaymentRequest(CamelModel):
    tx_hash: str = Field(..., description="Payment transaction hash")


class ReminderRequest(CamelModel):
    wallet_address: str = Field(..., description="Participant to remind")


class TransactionLogResponse(CamelModel):
    id: str
    tx_hash: str
    wallet_address: str
    type: str
    status: str
    amount: Amount
    block_number: Optional[int] = None
    confirmations: int
    is_confirmed: bool
    gas_used: int
    gas_cost: Optional[Amount] = None
    error_message: Optional[str] = None
    created_at: datetime

    @classmethod
    def from_entity(cls, log: TransactionLog) -> "TransactionLogResponse":
        return cls(
            id=str(log.id),
            tx_hash=log.tx_hash,
            wallet_address=log.wallet_address,
            type=log.type.value,
            status=log.status.value,
            amount=log.amount,
            block_number=log.block_number,
            confirmations=log.confirmations,
            is_confirmed=log.is_confirmed,
            gas_used=log.gas_used,
            gas_cost=log.gas_cost,
            error_message=log.error_message,
            created_at=log.created_at,
        )
