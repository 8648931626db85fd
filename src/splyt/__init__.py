"""Splyt - wallet-authenticated bill splitting backend."""

__version__ = "1.0.0"
