"""Persistence adapters (SQLAlchemy async)."""

from branchauth.infrastructure.persistence.base import BaseModel
from branchauth.infrastructure.persistence.database import Database

__all__ = ["BaseModel", "Database"]
