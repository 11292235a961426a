"""Session blacklist database model."""

from datetime import datetime
from uuid import UUID

from sqlalchemy import DateTime, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from branchauth.infrastructure.persistence.base import BaseModel


class TokenBlacklistModel(BaseModel):
    """token_blacklist table.

    Entries past ``expires_at`` are ignored by lookups; purging them is a
    maintenance concern.
    """

    __tablename__ = "token_blacklist"

    session_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    user_id: Mapped[UUID | None] = mapped_column(Uuid, nullable=True)
    reason: Mapped[str] = mapped_column(String(100), nullable=False)
    blacklisted_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False
    )
    expires_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, index=True
    )
