"""API routes."""
from splyt.presentation.api.routes import auth, health, notifications, split

__all__ = [
    "auth",
    "health",
    "notifications",
    "split",
]
