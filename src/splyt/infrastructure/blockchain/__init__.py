"""Blockchain infrastructure."""

from splyt.infrastructure.blockchain.placeholder_split_registry import (
    PlaceholderSplitRegistry,
)
from splyt.infrastructure.blockchain.split_factory_client import (
    SplitFactoryClient,
    to_token_units,
)

__all__ = [
    "SplitFactoryClient",
    "PlaceholderSplitRegistry",
    "to_token_units",
]
