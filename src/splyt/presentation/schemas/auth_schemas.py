"""
Authentication API schemas.
"""

from typing import Optional

from pydantic import Field

from splyt.presentation.schemas.common import CamelModel


class AuthHookRequest(CamelModel):
    """Wallet sign-in request."""

    # Optional here so missing values get the use case's own messages
    wallet_address: Optional[str] = Field(None, description="EVM wallet address")
    signature: Optional[str] = Field(
        None, description="EIP-191 signature of the challenge message (hex)"
    )


class AuthHookResponse(CamelModel):
    """Identity and bearer token of a signed-in wallet."""

    wallet_address: str
    display_name: str
    token: str = Field(..., description="JWT bearer token")


class ChallengeResponse(CamelModel):
    message: str = Field(..., description="Text every wallet signs to sign in")
