"""Access token codec protocol.

Architecture:
    - Domain defines protocol (port)
    - Infrastructure implements adapter (JWTService, HS256)
"""

from datetime import datetime, timedelta
from typing import TYPE_CHECKING, Protocol

from branchauth.core.result import Result
from branchauth.domain.value_objects import AccessTokenClaims

if TYPE_CHECKING:
    from branchauth.domain.errors import InvalidTokenError


class TokenCodecProtocol(Protocol):
    """Sign and verify access tokens."""

    def encode(self, claims: AccessTokenClaims, now: datetime, ttl: timedelta) -> str:
        """Sign an access token issued at ``now`` and expiring at ``now + ttl``."""
        ...

    def decode_ignoring_expiry(
        self, token: str
    ) -> "Result[AccessTokenClaims, InvalidTokenError]":
        """Verify signature, issuer, audience and algorithm but not expiry.

        Used by refresh: the access token presented alongside a refresh
        token is normally already expired.
        """
        ...

    def decode(
        self, token: str, now: datetime
    ) -> "Result[AccessTokenClaims, InvalidTokenError]":
        """Fully validate an access token, including ``nbf <= now < exp``."""
        ...
