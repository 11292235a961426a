"""Session management commands (CQRS write operations)."""

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True, kw_only=True)
class RevokeSession:
    """Revoke one of the caller's own sessions.

    Attributes:
        user_id: Caller (the session must belong to them).
        session_id: Session to revoke.
    """

    user_id: UUID
    session_id: str


@dataclass(frozen=True, kw_only=True)
class RevokeAllUserSessions:
    """Revoke every session of a user.

    Attributes:
        user_id: Session owner.
        except_session_id: Session to keep ("log out everywhere else").

    Example:
        >>> command = RevokeAllUserSessions(
        ...     user_id=current_user.user_id,
        ...     except_session_id=current_user.session_id,
        ... )
    """

    user_id: UUID
    except_session_id: str | None = None
