"""SessionStore protocol (port) for refresh tokens and the session blacklist.

Owns RefreshToken records and BlacklistEntry records. Implementations
commit every write before returning, never delete refresh token rows and
never clear ``is_used``/``is_revoked`` once set.

Implementations:
    - SessionStoreRepository (SQLAlchemy):
      branchauth/infrastructure/persistence/repositories/
"""

from collections.abc import Sequence
from datetime import datetime
from typing import Protocol
from uuid import UUID

from branchauth.domain.entities import BlacklistEntry, RefreshToken


class SessionStore(Protocol):
    """Persistence port for the refresh token lifecycle."""

    async def save_refresh_token(self, token: RefreshToken) -> None:
        """Persist a new ACTIVE refresh token."""
        ...

    async def find_refresh_token(
        self, token_hash: str, jwt_id: str
    ) -> RefreshToken | None:
        """Find a token by its hash and the paired access token id.

        Returns records in any state; the caller decides what a used or
        revoked match means.
        """
        ...

    async def mark_used(self, token: RefreshToken, used_at: datetime) -> bool:
        """Atomically move a token from ACTIVE to USED.

        Compare-and-set: succeeds only if the record is still neither used
        nor revoked. Of two concurrent callers exactly one gets True.

        Returns:
            True if this call performed the transition.
        """
        ...

    async def mark_revoked(
        self, tokens: Sequence[RefreshToken], revoked_at: datetime, reason: str
    ) -> int:
        """Mark tokens REVOKED. Already-revoked tokens are left untouched.

        Returns:
            Number of tokens newly revoked.
        """
        ...

    async def find_active_by_user(
        self, user_id: UUID, now: datetime
    ) -> list[RefreshToken]:
        """Tokens that are not used, not revoked and not expired, newest first."""
        ...

    async def find_unrevoked_by_user(self, user_id: UUID) -> list[RefreshToken]:
        """All tokens of the user that are not yet revoked (used ones included)."""
        ...

    async def find_by_session_id(self, session_id: str) -> list[RefreshToken]:
        """All tokens ever issued under a session id, oldest first."""
        ...

    async def add_blacklist_entry(self, entry: BlacklistEntry) -> None:
        """Persist a blacklist entry."""
        ...

    async def is_blacklisted(self, session_id: str, now: datetime) -> bool:
        """True if some entry for the session is still in effect at ``now``."""
        ...
