"""Session blacklist entry."""

from dataclasses import dataclass
from datetime import datetime, timedelta
from uuid import UUID

from branchauth.core.constants import BLACKLIST_RETENTION_DAYS


@dataclass(slots=True, kw_only=True)
class BlacklistEntry:
    """Time-bounded denial of a session id.

    Consulted on every authenticated request, independently of whether the
    presented access token still has a valid signature. Entries past
    ``expires_at`` are ignored (not necessarily purged).

    Attributes:
        session_id: Revoked session.
        user_id: Owner of the session, if known.
        reason: Why the session was revoked.
        blacklisted_at: Revocation time.
        expires_at: End of the retention window.
    """

    session_id: str
    user_id: UUID | None
    reason: str
    blacklisted_at: datetime
    expires_at: datetime

    @classmethod
    def for_session(
        cls,
        session_id: str,
        user_id: UUID | None,
        reason: str,
        now: datetime,
    ) -> "BlacklistEntry":
        """Create an entry with the fixed retention window.

        The window is independent of token lifetimes and long enough to
        outlive any access token still in circulation.
        """
        return cls(
            session_id=session_id,
            user_id=user_id,
            reason=reason,
            blacklisted_at=now,
            expires_at=now + timedelta(days=BLACKLIST_RETENTION_DAYS),
        )

    def is_in_effect(self, now: datetime) -> bool:
        """True while ``expires_at`` is still in the future."""
        return self.expires_at > now
