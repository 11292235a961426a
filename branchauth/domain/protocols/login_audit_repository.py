"""LoginAuditRepository protocol for the login audit trail."""

from datetime import datetime
from typing import Protocol

from branchauth.domain.entities import LoginAuditRecord


class LoginAuditRepository(Protocol):
    """Append-only login audit log.

    Implementations:
        - LoginAuditRepository (SQLAlchemy): user_login_logs table
    """

    async def save(self, record: LoginAuditRecord) -> None:
        """Append one login attempt record."""
        ...

    async def close_session(self, session_id: str, logout_at: datetime) -> int:
        """Stamp ``logout_at`` on the open successful record of a session.

        Records that already carry a logout time are left untouched.

        Returns:
            Number of records closed (0 or 1).
        """
        ...
