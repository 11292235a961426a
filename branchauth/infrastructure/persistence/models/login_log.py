"""Login audit log database model."""

from datetime import datetime
from uuid import UUID

from sqlalchemy import Boolean, DateTime, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from branchauth.infrastructure.persistence.base import BaseModel


class UserLoginLogModel(BaseModel):
    """user_login_logs table.

    Append-only. ``user_id`` has no foreign key: attempts for unknown
    usernames are recorded too.
    """

    __tablename__ = "user_login_logs"

    username: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    user_id: Mapped[UUID | None] = mapped_column(Uuid, nullable=True, index=True)
    ip_address: Mapped[str] = mapped_column(String(45), nullable=False)
    user_agent: Mapped[str | None] = mapped_column(String(500), nullable=True)
    login_type: Mapped[str] = mapped_column(String(20), nullable=False)
    is_successful: Mapped[bool] = mapped_column(Boolean, nullable=False)
    failure_reason: Mapped[str | None] = mapped_column(String(100), nullable=True)
    session_id: Mapped[str | None] = mapped_column(
        String(64), nullable=True, index=True
    )
    login_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    logout_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
