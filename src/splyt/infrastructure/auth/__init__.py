"""Authentication infrastructure."""

from splyt.infrastructure.auth.ethereum_wallet_adapter import (
    EthereumWalletAdapter,
)
from splyt.infrastructure.auth.jwt_handler import (
    create_access_token,
    decode_access_token,
)

__all__ = [
    "EthereumWalletAdapter",
    "create_access_token",
    "decode_access_token",
]
