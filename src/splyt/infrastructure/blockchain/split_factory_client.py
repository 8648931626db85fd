"""
SplitFactory contract client.

Registers splits on an EVM chain through the SplitFactory contract.
The gas payer account signs and pays for every createSplit call.
"""

import time
from decimal import ROUND_DOWN, Decimal
from typing import List, Optional

from eth_account import Account
from eth_utils import to_checksum_address
from prometheus_client import Counter, Histogram
from web3 import AsyncWeb3
from web3.exceptions import TimeExhausted, Web3Exception
from web3.logs import DISCARD

from splyt.domain.exceptions.blockchain import (
    BlockchainError,
    ContractNotConfiguredError,
    EventNotFoundError,
    TransactionRevertedError,
)
from splyt.domain.services.i_split_registry import (
    ISplitRegistry,
    OnChainParticipant,
    OnChainSplit,
)
from splyt.infrastructure.blockchain.split_factory_abi import (
    SPLIT_FACTORY_ABI,
    TOKEN_DECIMALS,
)
from splyt.infrastructure.monitoring.logger import get_logger

logger = get_logger(__name__)

# Prometheus metrics
split_factory_requests = Counter(
    "splyt_split_factory_requests_total",
    "Total SplitFactory contract calls",
    ["operation", "status"],
)
split_factory_duration = Histogram(
    "splyt_split_factory_request_duration_seconds",
    "SplitFactory call duration (including receipt wait)",
    ["operation"],
    buckets=(0.5, 1.0, 2.5, 5.0, 10.0, 30.0, 60.0, 120.0),
)


def to_token_units(amount: Decimal, decimals: int = TOKEN_DECIMALS) -> int:
    """
    Convert a token amount to integer base units.

    Args:
        amount: Human-readable amount (e.g. Decimal("12.5"))
        decimals: Token decimals

    Returns:
        Amount in smallest units, rounded down
    """
    scaled = Decimal(str(amount)) * (Decimal(10) ** decimals)
    return int(scaled.to_integral_value(ROUND_DOWN))


def _hex(value) -> str:
    """Render bytes-like hashes as lowercase 0x-prefixed hex."""
    if isinstance(value, str):
        return value.lower() if value.startswith("0x") else f"0x{value.lower()}"
    return "0x" + bytes(value).hex()


class SplitFactoryClient(ISplitRegistry):
    """
    Web3 client for the SplitFactory contract.

    Flow per split:
    1. Build createSplit(creator, description, participants, amounts,
       expiryDays) from the gas payer account
    2. Sign locally and broadcast
    3. Wait for the receipt, reject reverted transactions
    4. Decode SplitCreated for the on-chain split ID and address
    5. Report confirmation once enough blocks sit on top
    """

    regenerates_on_conflict = False

    def __init__(
        self,
        rpc_url: Optional[str],
        contract_address: Optional[str],
        gas_payer_key: Optional[str],
        confirmations_required: int = 12,
        receipt_timeout: float = 120.0,
        expiry_days: int = 30,
        web3: Optional[AsyncWeb3] = None,
        gas_payer_address: Optional[str] = None,
    ):
        """
        Initialize SplitFactory client.

        Args:
            rpc_url: EVM JSON-RPC endpoint
            contract_address: SplitFactory contract address
            gas_payer_key: Private key of the account paying gas
            confirmations_required: Blocks needed to call a split confirmed
            receipt_timeout: Seconds to wait for the transaction receipt
            expiry_days: Expiry passed to createSplit
            web3: Optional preconfigured AsyncWeb3 instance
            gas_payer_address: Expected address of the gas payer key

        Raises:
            ContractNotConfiguredError: If a required setting is missing or
                gas_payer_address does not belong to gas_payer_key
        """
        if not contract_address:
            raise ContractNotConfiguredError("SPLIT_FACTORY_CONTRACT_ADDRESS")
        if not gas_payer_key:
            raise ContractNotConfiguredError("GAS_PAYER_KEY")
        if web3 is None and not rpc_url:
            raise ContractNotConfiguredError("BLOCKCHAIN_RPC_URL")

        self.web3 = web3 or AsyncWeb3(AsyncWeb3.AsyncHTTPProvider(rpc_url))
        self.account = Account.from_key(gas_payer_key)
        if (
            gas_payer_address
            and gas_payer_address.lower() != self.account.address.lower()
        ):
            raise ContractNotConfiguredError(
                "GAS_PAYER_ADDRESS", "does not match GAS_PAYER_KEY"
            )
        self.contract = self.web3.eth.contract(
            address=to_checksum_address(contract_address),
            abi=SPLIT_FACTORY_ABI,
        )
        self.confirmations_required = confirmations_required
        self.receipt_timeout = receipt_timeout
        self.expiry_days = expiry_days

    async def register_split(
        self,
        creator_address: str,
        description: str,
        participants: List[OnChainParticipant],
        total_amount: Decimal,
    ) -> OnChainSplit:
        """
        Create the split on chain and wait for its receipt.

        Args:
            creator_address: Creator wallet
            description: Split description
            participants: Participant addresses and amounts
            total_amount: Total split amount

        Returns:
            On-chain identifiers of the new split

        Raises:
            BlockchainError: If the call fails, reverts or emits no event
        """
        start = time.time()
        try:
            result = await self._create_split(
                creator_address, description, participants
            )
        except BlockchainError:
            split_factory_requests.labels(
                operation="create_split", status="error"
            ).inc()
            raise
        except (Web3Exception, TimeExhausted, ValueError, OSError) as e:
            split_factory_requests.labels(
                operation="create_split", status="error"
            ).inc()
            logger.error(
                f"createSplit failed for creator {creator_address}: "
                f"{type(e).__name__}: {e}",
                exc_info=True,
            )
            raise BlockchainError("Failed to register split on chain") from e
        finally:
            split_factory_duration.labels(operation="create_split").observe(
                time.time() - start
            )

        split_factory_requests.labels(
            operation="create_split", status="success"
        ).inc()
        logger.info(
            f"Split {result.on_chain_id} registered at {result.contract_address} "
            f"(tx {result.tx_hash}, total {total_amount}, "
            f"confirmed={result.is_confirmed})"
        )
        return result

    async def _create_split(
        self,
        creator_address: str,
        description: str,
        participants: List[OnChainParticipant],
    ) -> OnChainSplit:
        function = self.contract.functions.createSplit(
            to_checksum_address(creator_address),
            description,
            [to_checksum_address(p.wallet_address) for p in participants],
            [to_token_units(p.amount_due) for p in participants],
            self.expiry_days,
        )

        nonce = await self.web3.eth.get_transaction_count(
            self.account.address, "pending"
        )
        transaction = await function.build_transaction(
            {"from": self.account.address, "nonce": nonce}
        )
        signed = self.account.sign_transaction(transaction)
        tx_hash = await self.web3.eth.send_raw_transaction(signed.raw_transaction)
        tx_hash_hex = _hex(tx_hash)
        logger.info(f"createSplit sent: {tx_hash_hex}")

        receipt = await self.web3.eth.wait_for_transaction_receipt(
            tx_hash, timeout=self.receipt_timeout
        )
        if receipt["status"] != 1:
            raise TransactionRevertedError(tx_hash_hex)

        events = self.contract.events.SplitCreated().process_receipt(
            receipt, errors=DISCARD
        )
        if not events:
            raise EventNotFoundError("SplitCreated", tx_hash_hex)

        args = events[0]["args"]
        block_number = receipt["blockNumber"]
        latest_block = await self.web3.eth.block_number
        confirmations = latest_block - block_number + 1

        return OnChainSplit(
            contract_address=args["splitAddress"].lower(),
            tx_hash=tx_hash_hex,
            block_number=block_number,
            is_confirmed=confirmations >= self.confirmations_required,
            on_chain_id=int(args["splitId"]),
        )
