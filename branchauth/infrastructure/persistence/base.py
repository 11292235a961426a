"""Base model and mixins for all database entities.

- BaseModel: Base class for ALL models (provides id, created_at)
- TimestampMixin: adds updated_at
- BaseMutableModel: base for mutable rows (users)

Domain entities do NOT inherit from these; repositories map between them.

Architecture:
    BaseModel (id, created_at)
        ├── BaseMutableModel (+ updated_at)
        │   └── UserModel
        ├── UserRoleModel
        ├── RefreshTokenModel      (flags only move forward, rows never deleted)
        ├── TokenBlacklistModel
        └── UserLoginLogModel      (append-only except logout_at)

The generic ``Uuid`` and ``DateTime(timezone=True)`` types keep the schema
portable between PostgreSQL (production) and SQLite (tests).
"""

from datetime import UTC, datetime
from uuid import UUID as PythonUUID

from sqlalchemy import DateTime, Uuid, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from uuid_extensions import uuid7


def as_utc(value: datetime | None) -> datetime | None:
    """Attach UTC to naive datetimes read back from backends without tz support."""
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=UTC)


class BaseModel(DeclarativeBase):
    """Base class for all database models.

    Provides:
    - id: UUID primary key (time-ordered uuid7 by default)
    - created_at: creation timestamp (UTC)
    """

    __abstract__ = True

    id: Mapped[PythonUUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid7,
        nullable=False,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}(id={self.id})>"


class TimestampMixin:
    """Adds updated_at, refreshed by the database on every UPDATE."""

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )


class BaseMutableModel(TimestampMixin, BaseModel):
    """Base for models whose rows are updated in place."""

    __abstract__ = True
