"""
Ethereum wallet authentication adapter.

Implements EIP-191 personal-sign verification with eth_account.
"""

from eth_account import Account
from eth_account.messages import encode_defunct

from splyt.domain.services.i_wallet_authenticator import IWalletAuthenticator
from splyt.infrastructure.monitoring.logger import get_logger

logger = get_logger(__name__)


class EthereumWalletAdapter(IWalletAuthenticator):
    """
    EVM wallet authentication using secp256k1 signature recovery.

    Verifies wallet ownership by recovering the signer of a
    personal_sign message and comparing it with the claimed address.
    """

    async def verify_signature(
        self,
        wallet_address: str,
        message: str,
        signature: str,
    ) -> bool:
        """
        Verify Ethereum wallet signature.

        Args:
            wallet_address: Claimed wallet address (any hex case)
            message: Original message that was signed
            signature: Signature as 0x-prefixed hex (65 bytes)

        Returns:
            True if signature recovers to wallet_address, False otherwise
        """
        try:
            signable = encode_defunct(text=message)
            recovered = Account.recover_message(signable, signature=signature)
        except Exception as e:
            logger.debug(f"Signature recovery failed: {type(e).__name__}: {e}")
            return False

        return recovered.lower() == wallet_address.strip().lower()
