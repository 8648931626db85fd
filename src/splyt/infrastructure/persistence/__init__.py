"""Persistence infrastructure."""

from splyt.infrastructure.persistence.database import Database
from splyt.infrastructure.persistence.models import Base

__all__ = ["Database", "Base"]
