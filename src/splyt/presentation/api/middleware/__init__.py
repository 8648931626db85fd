"""
API middleware for Splyt.
"""

from splyt.presentation.api.middleware.error_handler import (
    splyt_exception_handler,
    unhandled_exception_handler,
    validation_exception_handler,
)

__all__ = [
    "splyt_exception_handler",
    "unhandled_exception_handler",
    "validation_exception_handler",
]
