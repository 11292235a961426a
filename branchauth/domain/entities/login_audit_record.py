"""Login audit record entity.

One record per login attempt, successful or not. Records are append-only;
the single permitted mutation is stamping ``logout_at`` when the session
the record opened is logged out.
"""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

LOGIN_TYPE_PASSWORD = "password"


@dataclass(slots=True, kw_only=True)
class LoginAuditRecord:
    """Login attempt audit entry.

    Attributes:
        username: Username as submitted (user may not exist).
        user_id: Resolved user, when known.
        ip_address: Client IP.
        user_agent: Client user agent.
        is_successful: Outcome.
        failure_reason: Internal reason code for failures (never shown to clients).
        session_id: Session opened by a successful login.
        login_at: Attempt time.
        logout_at: Set once when the session is logged out.
        login_type: Authentication method.
    """

    username: str
    ip_address: str
    user_agent: str | None
    is_successful: bool
    login_at: datetime
    user_id: UUID | None = None
    failure_reason: str | None = None
    session_id: str | None = None
    logout_at: datetime | None = None
    login_type: str = LOGIN_TYPE_PASSWORD

    @classmethod
    def failed(
        cls,
        *,
        username: str,
        ip_address: str,
        user_agent: str | None,
        reason: str,
        at: datetime,
        user_id: UUID | None = None,
    ) -> "LoginAuditRecord":
        """Build a failed-attempt record."""
        return cls(
            username=username,
            user_id=user_id,
            ip_address=ip_address,
            user_agent=user_agent,
            is_successful=False,
            failure_reason=reason,
            login_at=at,
        )

    @classmethod
    def succeeded(
        cls,
        *,
        username: str,
        user_id: UUID,
        ip_address: str,
        user_agent: str | None,
        session_id: str,
        at: datetime,
    ) -> "LoginAuditRecord":
        """Build a successful-login record bound to the new session."""
        return cls(
            username=username,
            user_id=user_id,
            ip_address=ip_address,
            user_agent=user_agent,
            is_successful=True,
            session_id=session_id,
            login_at=at,
        )
