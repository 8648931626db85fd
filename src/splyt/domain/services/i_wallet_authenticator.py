"""
Wallet authenticator service interface.
"""

from abc import ABC, abstractmethod


class IWalletAuthenticator(ABC):
    """Verifies that a wallet signed a message."""

    @abstractmethod
    async def verify_signature(
        self,
        wallet_address: str,
        message: str,
        signature: str,
    ) -> bool:
        """
        Verify a personal-sign signature.

        Args:
            wallet_address: Claimed signer address
            message: Plain-text message that was signed
            signature: Hex-encoded 65-byte signature

        Returns:
            True if the signature recovers to wallet_address
        """
