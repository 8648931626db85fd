"""
Deterministic display names for wallets that have not set one.
"""

import hashlib

ADJECTIVES = (
    "Swift",
    "Brave",
    "Calm",
    "Clever",
    "Bright",
    "Lucky",
    "Bold",
    "Gentle",
    "Quiet",
    "Sunny",
    "Witty",
    "Noble",
    "Happy",
    "Rapid",
    "Mellow",
    "Cosmic",
)

ANIMALS = (
    "Otter",
    "Falcon",
    "Panda",
    "Fox",
    "Koala",
    "Lynx",
    "Heron",
    "Badger",
    "Dolphin",
    "Tiger",
    "Raven",
    "Bison",
    "Gecko",
    "Owl",
    "Walrus",
    "Marten",
)


def generate_name_from_address(wallet_address: str) -> str:
    """
    Build a stable, human-friendly name from a wallet address.

    The same address (in any hex case) always yields the same name,
    e.g. "Swift Otter 3F9A".

    Args:
        wallet_address: EVM wallet address

    Returns:
        Display name
    """
    normalized = wallet_address.strip().lower()
    digest = hashlib.sha256(normalized.encode("utf-8")).digest()

    adjective = ADJECTIVES[digest[0] % len(ADJECTIVES)]
    animal = ANIMALS[digest[1] % len(ANIMALS)]
    suffix = normalized[-4:].upper()

    return f"{adjective} {animal} {suffix}"
