"""
Split API routes.

Provides endpoints for split management:
- POST /split/create - Create split (registers on chain when enabled)
- GET /split - Splits the caller created or takes part in
- GET /split/creator - Splits the caller created
- GET /split/participant - Splits the caller takes part in
- GET /split/{split_id} - Split by numeric ID
- POST /split/{split_id}/pay - Record the caller's payment
- POST /split/{split_id}/remind - Remind a participant (creator only)
- POST /split/{split_id}/cancel - Cancel split (creator only)
- GET /split/{split_id}/transactions - Transaction logs of a split

List routes are declared before /{split_id} so "creator" and
"participant" are never parsed as IDs.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from splyt.application.dto.split_dto import SplitQueryOptions
from splyt.application.use_cases.cancel_split import CancelSplit
from splyt.application.use_cases.create_split import CreateSplit
from splyt.application.use_cases.get_split_by_id import GetSplitById
from splyt.application.use_cases.get_split_transactions import (
    GetSplitTransactions,
)
from splyt.application.use_cases.get_splits import GetSplits
from splyt.application.use_cases.get_splits_by_creator import GetSplitsByCreator
from splyt.application.use_cases.get_splits_by_participant import (
    GetSplitsByParticipant,
)
from splyt.application.use_cases.record_participant_payment import (
    RecordParticipantPayment,
)
from splyt.application.use_cases.send_payment_reminder import (
    SendPaymentReminder,
)
from splyt.di.dependencies import (
    get_cancel_split,
    get_create_split,
    get_current_wallet,
    get_get_split_by_id,
    get_get_split_transactions,
    get_get_splits,
    get_get_splits_by_creator,
    get_get_splits_by_participant,
    get_record_participant_payment,
    get_send_payment_reminder,
)
from splyt.domain.entities.split import SplitStatus
from splyt.domain.exceptions import EntityNotFoundError, SplytException
from splyt.infrastructure.monitoring import metrics
from splyt.presentation.schemas.common import ApiResponse
from splyt.presentation.schemas.notification_schemas import NotificationResponse
from splyt.presentation.schemas.split_schemas import (
    CreateSplitRequest,
    CreateSplitResponse,
    RecordPaymentRequest,
    ReminderRequest,
    SplitResponse,
    SplitViewResponse,
    TransactionLogResponse,
)

router = APIRouter(prefix="/split", tags=["Splits"])

MAX_PAGE_SIZE = 100


def get_query_options(
    status: Optional[SplitStatus] = Query(None, description="Status filter"),
    limit: Optional[int] = Query(None, ge=1, le=MAX_PAGE_SIZE),
    skip: int = Query(0, ge=0),
) -> SplitQueryOptions:
    """Shared status/limit/skip query parameters."""
    return SplitQueryOptions(status=status, limit=limit, skip=skip)


# ================================================================
# Create Split Endpoint
# ================================================================


@router.post(
    "/create",
    response_model=ApiResponse[CreateSplitResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Create split",
    description="Create a split and register it on chain",
)
async def create_split(
    request: CreateSplitRequest,
    wallet_address: str = Depends(get_current_wallet),
    use_case: CreateSplit = Depends(get_create_split),
) -> ApiResponse[CreateSplitResponse]:
    """
    Create a new split for the authenticated creator.

    When the chain accepted the split but saving it failed, the on-chain
    identifiers are still returned so they are never lost.
    """
    try:
        result = await use_case.execute(wallet_address, request.to_input())
    except SplytException as e:
        metrics.splits_created_total.labels(outcome=e.code.lower()).inc()
        raise

    metrics.splits_created_total.labels(
        outcome="created" if result.persisted else "not_persisted"
    ).inc()

    return ApiResponse(
        status=status.HTTP_201_CREATED,
        message=(
            "Split created successfully"
            if result.persisted
            else "Split registered on chain but not saved; keep these identifiers"
        ),
        data=CreateSplitResponse(
            split_id=result.split_id,
            contract_address=result.contract_address,
            tx_hash=result.tx_hash,
        ),
    )


# ================================================================
# Split Listing Endpoints
# ================================================================


@router.get(
    "",
    response_model=ApiResponse[List[SplitViewResponse]],
    summary="List my splits",
    description="Splits the caller created or takes part in, newest first",
)
async def get_splits(
    options: SplitQueryOptions = Depends(get_query_options),
    wallet_address: str = Depends(get_current_wallet),
    use_case: GetSplits = Depends(get_get_splits),
) -> ApiResponse[List[SplitViewResponse]]:
    views = await use_case.execute(wallet_address, options)
    return ApiResponse(
        message=f"Found {len(views)} splits",
        data=[SplitViewResponse.from_view(v) for v in views],
    )


@router.get(
    "/creator",
    response_model=ApiResponse[List[SplitViewResponse]],
    summary="List splits I created",
)
async def get_splits_by_creator(
    options: SplitQueryOptions = Depends(get_query_options),
    wallet_address: str = Depends(get_current_wallet),
    use_case: GetSplitsByCreator = Depends(get_get_splits_by_creator),
) -> ApiResponse[List[SplitViewResponse]]:
    views = await use_case.execute(wallet_address, options)
    return ApiResponse(
        message=f"Found {len(views)} splits",
        data=[SplitViewResponse.from_view(v) for v in views],
    )


@router.get(
    "/participant",
    response_model=ApiResponse[List[SplitViewResponse]],
    summary="List splits I take part in",
)
async def get_splits_by_participant(
    options: SplitQueryOptions = Depends(get_query_options),
    wallet_address: str = Depends(get_current_wallet),
    use_case: GetSplitsByParticipant = Depends(get_get_splits_by_participant),
) -> ApiResponse[List[SplitViewResponse]]:
    views = await use_case.execute(wallet_address, options)
    return ApiResponse(
        message=f"Found {len(views)} splits",
        data=[SplitViewResponse.from_view(v) for v in views],
    )


# ================================================================
# Single Split Endpoints
# ================================================================


@router.get(
    "/{split_id}",
    response_model=ApiResponse[SplitResponse],
    summary="Get split",
)
async def get_split(
    split_id: int,
    wallet_address: str = Depends(get_current_wallet),
    use_case: GetSplitById = Depends(get_get_split_by_id),
) -> ApiResponse[SplitResponse]:
    """
    Raises:
        EntityNotFoundError: 404 if no split has this ID
    """
    split = await use_case.execute(split_id)
    if not split:
        raise EntityNotFoundError("Split", str(split_id))

    return ApiResponse(
        message="Split found",
        data=SplitResponse.from_entity(split, wallet_address),
    )


@router.post(
    "/{split_id}/pay",
    response_model=ApiResponse[SplitResponse],
    summary="Record my payment",
)
async def record_payment(
    split_id: int,
    request: RecordPaymentRequest,
    wallet_address: str = Depends(get_current_wallet),
    use_case: RecordParticipantPayment = Depends(get_record_participant_payment),
) -> ApiResponse[SplitResponse]:
    split = await use_case.execute(split_id, wallet_address, request.tx_hash)
    metrics.split_payments_total.inc()

    return ApiResponse(
        message=(
            "Payment recorded; split completed"
            if split.is_completed
            else "Payment recorded"
        ),
        data=SplitResponse.from_entity(split, wallet_address),
    )


@router.post(
    "/{split_id}/remind",
    response_model=ApiResponse[NotificationResponse],
    summary="Remind participant",
    description="Send an in-app payment reminder (creator only)",
)
async def send_reminder(
    split_id: int,
    request: ReminderRequest,
    wallet_address: str = Depends(get_current_wallet),
    use_case: SendPaymentReminder = Depends(get_send_payment_reminder),
) -> ApiResponse[NotificationResponse]:
    notification = await use_case.execute(
        split_id, wallet_address, request.wallet_address
    )
    return ApiResponse(
        message="Reminder sent",
        data=NotificationResponse.from_entity(notification),
    )


@router.post(
    "/{split_id}/cancel",
    response_model=ApiResponse[SplitResponse],
    summary="Cancel split",
    description="Cancel an open split (creator only)",
)
async def cancel_split(
    split_id: int,
    wallet_address: str = Depends(get_current_wallet),
    use_case: CancelSplit = Depends(get_cancel_split),
) -> ApiResponse[SplitResponse]:
    split = await use_case.execute(split_id, wallet_address)
    return ApiResponse(
        message="Split cancelled",
        data=SplitResponse.from_entity(split, wallet_address),
    )


@router.get(
    "/{split_id}/transactions",
    response_model=ApiResponse[List[TransactionLogResponse]],
    summary="List split transactions",
)
async def get_split_transactions(
    split_id: int,
    limit: Optional[int] = Query(None, ge=1, le=MAX_PAGE_SIZE),
    skip: int = Query(0, ge=0),
    wallet_address: str = Depends(get_current_wallet),
    use_case: GetSplitTransactions = Depends(get_get_split_transactions),
) -> ApiResponse[List[TransactionLogResponse]]:
    logs = await use_case.execute(split_id, limit=limit, skip=skip)
    return ApiResponse(
        message=f"Found {len(logs)} transactions",
        data=[TransactionLogResponse.from_entity(log) for log in logs],
    )
