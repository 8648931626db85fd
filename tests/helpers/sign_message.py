"""
Wallet signing helpers for tests.

Produces the same EIP-191 signatures a browser wallet returns from
personal_sign.
"""

from typing import Dict

import httpx
from eth_account.messages import encode_defunct
from eth_account.signers.local import LocalAccount

from splyt.application.use_cases.authenticate_wallet import AUTH_CHALLENGE_MESSAGE


def sign_text(account: LocalAccount, text: str) -> str:
    """Sign text and return the 0x-prefixed 65-byte signature."""
    signed = account.sign_message(encode_defunct(text=text))
    return "0x" + bytes(signed.signature).hex()


def sign_challenge(account: LocalAccount) -> str:
    """Sign the login challenge message."""
    return sign_text(account, AUTH_CHALLENGE_MESSAGE)


async def login(client: httpx.AsyncClient, account: LocalAccount) -> str:
    """Sign in through /api/auth/hook and return the bearer token."""
    response = await client.post(
        "/api/auth/hook",
        json={
            "walletAddress": account.address,
            "signature": sign_challenge(account),
        },
    )
    assert response.status_code == 200, response.text
    return response.json()["data"]["token"]


def bearer(token: str) -> Dict[str, str]:
    return {"Authorization": f"Bearer {token}"}
