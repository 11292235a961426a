"""Session queries (CQRS read operations).

Queries are immutable dataclasses with question-like names. They never
change state.
"""

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True, kw_only=True)
class ListActiveSessions:
    """List a user's active sessions (not used, not revoked, not expired).

    Attributes:
        user_id: Session owner.
        current_session_id: Caller's session, flagged in the result.
    """

    user_id: UUID
    current_session_id: str | None = None


@dataclass(frozen=True, kw_only=True)
class CountActiveSessions:
    """Count a user's active sessions."""

    user_id: UUID


@dataclass(frozen=True, kw_only=True)
class GetCurrentSession:
    """Fetch the caller's own session."""

    user_id: UUID
    session_id: str
