"""
Authentication API routes.
"""

from fastapi import APIRouter, Depends, status

from splyt.application.use_cases.authenticate_wallet import (
    AUTH_CHALLENGE_MESSAGE,
    AuthenticateWallet,
)
from splyt.di.dependencies import get_authenticate_wallet
from splyt.domain.exceptions import InvalidSignatureError, ValidationError
from splyt.infrastructure.auth import jwt_handler
from splyt.infrastructure.monitoring import get_logger, metrics
from splyt.presentation.schemas.auth_schemas import (
    AuthHookRequest,
    AuthHookResponse,
    ChallengeResponse,
)
from splyt.presentation.schemas.common import ApiResponse

router = APIRouter(prefix="/auth", tags=["Authentication"])
logger = get_logger(__name__)


@router.get(
    "/challenge",
    response_model=ApiResponse[ChallengeResponse],
    summary="Get sign-in challenge",
    description="Message a wallet must sign to authenticate",
)
async def get_challenge() -> ApiResponse[ChallengeResponse]:
    return ApiResponse(
        message="Sign this message with your wallet",
        data=ChallengeResponse(message=AUTH_CHALLENGE_MESSAGE),
    )


@router.post(
    "/hook",
    response_model=ApiResponse[AuthHookResponse],
    status_code=status.HTTP_200_OK,
    summary="Authenticate wallet",
    description="Verify a wallet signature and issue a bearer token",
)
async def auth_hook(
    request: AuthHookRequest,
    use_case: AuthenticateWallet = Depends(get_authenticate_wallet),
) -> ApiResponse[AuthHookResponse]:
    """
    Sign in with a wallet.

    Flow:
    1. Validate address and signature format
    2. Verify the signature over the challenge message
    3. Find or create the user
    4. Issue JWT
    """
    try:
        user = await use_case.execute(
            wallet_address=request.wallet_address,
            signature=request.signature,
        )
    except ValidationError:
        metrics.auth_attempts_total.labels(result="invalid_input").inc()
        raise
    except InvalidSignatureError:
        metrics.auth_attempts_total.labels(result="invalid_signature").inc()
        raise

    token = jwt_handler.create_access_token(
        user_id=user.id,
        wallet_address=user.wallet_address,
        display_name=user.display_name,
    )
    metrics.auth_attempts_total.labels(result="success").inc()
    logger.info(f"Wallet authenticated: {user.wallet_address}")

    return ApiResponse(
        message="Authentication successful",
        data=AuthHookResponse(
            wallet_address=user.wallet_address,
            display_name=user.display_name,
            token=token,
        ),
    )
