"""Access token claims value object.

Immutable set of claims carried in (and recovered from) a signed access
token. The codec maps these fields to the wire claim names:

    user_id     -> sub
    first_name  -> given_name
    last_name   -> family_name
    jwt_id      -> jti
    issued_at   -> iat / nbf
    expires_at  -> exp
"""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class AccessTokenClaims:
    """Claims of one access token.

    ``issued_at`` and ``expires_at`` are only populated on decode; they are
    derived from the clock and lifetime at encode time.

    Example:
        >>> claims = AccessTokenClaims(
        ...     user_id=user.id,
        ...     username="alice",
        ...     email="alice@example.com",
        ...     first_name="Alice",
        ...     last_name="Liddell",
        ...     jwt_id=str(uuid7()),
        ...     session_id=str(uuid7()),
        ...     branch_id=user.branch_id,
        ...     roles=("teller",),
        ... )
    """

    user_id: UUID
    username: str
    email: str
    first_name: str
    last_name: str
    jwt_id: str
    session_id: str
    branch_id: UUID
    roles: tuple[str, ...] = field(default_factory=tuple)
    issued_at: datetime | None = None
    expires_at: datetime | None = None
