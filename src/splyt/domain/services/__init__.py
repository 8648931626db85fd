"""Domain service interfaces."""

from splyt.domain.services.i_split_registry import (
    ISplitRegistry,
    OnChainParticipant,
    OnChainSplit,
)
from splyt.domain.services.i_wallet_authenticator import IWalletAuthenticator

__all__ = [
    "IWalletAuthenticator",
    "ISplitRegistry",
    "OnChainParticipant",
    "OnChainSplit",
]
