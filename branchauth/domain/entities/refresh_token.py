"""RefreshToken domain entity and its lifecycle state machine.

Pure business logic, no framework dependencies.

State machine (per token):

    ACTIVE ──rotate──▶ USED
       │
       ├──revoke / reuse detected──▶ REVOKED
       │
       └──clock passes expires_at──▶ EXPIRED   (derived, never stored)

USED, REVOKED and EXPIRED are terminal. ``is_used`` and ``is_revoked`` are
monotone flags: once set they are never cleared, and token rows are never
deleted (they are needed for reuse detection and audit).
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from uuid import UUID


class RefreshTokenState(str, Enum):
    """Lifecycle state of a refresh token at a given instant."""

    ACTIVE = "active"
    USED = "used"
    REVOKED = "revoked"
    EXPIRED = "expired"


@dataclass(slots=True, kw_only=True)
class RefreshToken:
    """Persisted refresh token record.

    The opaque token value itself is never stored; ``token_hash`` is its
    SHA-256 digest and is only useful for lookup.

    Attributes:
        id: Record identifier.
        user_id: Owning user.
        token_hash: SHA-256 hex digest of the opaque refresh token.
        jwt_id: ``jti`` of the access token issued alongside this token.
        session_id: Session opened by the login or rotation that issued this token.
        expires_at: Absolute expiry.
        is_used: Set exactly once, when the token is rotated away.
        is_revoked: Set exactly once, on logout/revocation/reuse detection.
        ip_address: Client IP at issuance.
        user_agent: Client user agent at issuance.
        device_id: Optional client-supplied device identifier.
        created_at: Issuance time.
    """

    id: UUID
    user_id: UUID
    token_hash: str
    jwt_id: str
    session_id: str
    expires_at: datetime
    created_at: datetime
    is_used: bool = False
    used_at: datetime | None = None
    is_revoked: bool = False
    revoked_at: datetime | None = None
    revoked_reason: str | None = None
    ip_address: str | None = None
    user_agent: str | None = None
    device_id: str | None = None

    def is_expired(self, now: datetime) -> bool:
        """Check expiry against a single caller-supplied instant.

        Args:
            now: Current time (read once per operation by the caller).

        Returns:
            bool: True once ``now`` reaches ``expires_at``.
        """
        return self.expires_at <= now

    def state(self, now: datetime) -> RefreshTokenState:
        """Derive the lifecycle state at ``now``.

        Revocation wins over use, and both win over expiry, so a replayed
        token is always recognized as a replay even after it expired.

        Example:
            >>> token.state(now)
            <RefreshTokenState.ACTIVE: 'active'>
        """
        if self.is_revoked:
            return RefreshTokenState.REVOKED
        if self.is_used:
            return RefreshTokenState.USED
        if self.is_expired(now):
            return RefreshTokenState.EXPIRED
        return RefreshTokenState.ACTIVE

    def is_active(self, now: datetime) -> bool:
        """True if not used, not revoked and not expired."""
        return self.state(now) is RefreshTokenState.ACTIVE

    def was_consumed(self) -> bool:
        """True if the token already left ACTIVE through use or revocation."""
        return self.is_used or self.is_revoked
