"""JWT access token codec (adapter).

Implements TokenCodecProtocol using PyJWT with HMAC-SHA256.

Claims:
    sub, username, email, given_name, family_name, jti, session_id,
    branch_id, roles, iss, aud, iat, nbf, exp

Validation:
    - Header ``alg`` must be exactly HS256 (no ``none``, no RS/HS confusion)
    - Signature, issuer and audience are always verified
    - Time claims are checked against a caller-supplied instant, never the
      wall clock, so decode_ignoring_expiry() and decode() share one path
"""

from datetime import UTC, datetime, timedelta
from typing import Any
from uuid import UUID

import jwt
from jwt.exceptions import InvalidTokenError as JWTInvalidTokenError

from branchauth.core.constants import JWT_ALGORITHM, MIN_SECRET_KEY_LENGTH
from branchauth.core.result import Failure, Result, Success
from branchauth.domain.errors import InvalidTokenError
from branchauth.domain.value_objects import AccessTokenClaims

_REQUIRED_CLAIMS = [
    "sub",
    "username",
    "jti",
    "session_id",
    "branch_id",
    "iss",
    "aud",
    "iat",
    "nbf",
    "exp",
]


class JWTService:
    """JWT access token codec.

    Usage:
        from branchauth.core.container import get_token_codec

        codec = get_token_codec()
        token = codec.encode(claims, now=clock.now(), ttl=timedelta(minutes=60))

        match codec.decode(token, now=clock.now()):
            case Success(value=claims):
                ...
            case Failure(error=error):
                ...
    """

    def __init__(self, secret_key: str, issuer: str, audience: str) -> None:
        """Initialize JWT service.

        Args:
            secret_key: HMAC-SHA256 signing key, at least 32 bytes.
            issuer: Value written to and required in ``iss``.
            audience: Value written to and required in ``aud``.

        Raises:
            ValueError: If secret_key is too short.
        """
        if len(secret_key.encode("utf-8")) < MIN_SECRET_KEY_LENGTH:
            msg = "JWT secret key must be at least 32 bytes (256 bits)"
            raise ValueError(msg)

        self._secret_key = secret_key
        self._issuer = issuer
        self._audience = audience
        self._algorithm = JWT_ALGORITHM

    def encode(self, claims: AccessTokenClaims, now: datetime, ttl: timedelta) -> str:
        """Sign an access token.

        Args:
            claims: Identity and session claims.
            now: Issuance instant (``iat`` and ``nbf``).
            ttl: Lifetime (``exp = now + ttl``).

        Returns:
            Compact JWS string (header.payload.signature).
        """
        issued_at = int(now.timestamp())
        payload = {
            "sub": str(claims.user_id),
            "username": claims.username,
            "email": claims.email,
            "given_name": claims.first_name,
            "family_name": claims.last_name,
            "jti": claims.jwt_id,
            "session_id": claims.session_id,
            "branch_id": str(claims.branch_id),
            "roles": list(claims.roles),
            "iss": self._issuer,
            "aud": self._audience,
            "iat": issued_at,
            "nbf": issued_at,
            "exp": int((now + ttl).timestamp()),
        }
        token: str = jwt.encode(payload, self._secret_key, algorithm=self._algorithm)
        return token

    def decode_ignoring_expiry(
        self, token: str
    ) -> Result[AccessTokenClaims, InvalidTokenError]:
        """Verify everything except the time window.

        Args:
            token: Compact JWS string.

        Returns:
            Claims, or InvalidTokenError on any verification failure.
        """
        match self._verify(token):
            case Success(value=payload):
                return self._to_claims(payload)
            case Failure(error=error):
                return Failure(error=error)

    def decode(
        self, token: str, now: datetime
    ) -> Result[AccessTokenClaims, InvalidTokenError]:
        """Fully validate a token, requiring ``nbf <= now < exp``."""
        match self._verify(token):
            case Success(value=payload):
                pass
            case Failure(error=error):
                return Failure(error=error)

        timestamp = now.timestamp()
        if timestamp < payload["nbf"]:
            return Failure(error=InvalidTokenError(message="Token not yet valid"))
        if timestamp >= payload["exp"]:
            return Failure(error=InvalidTokenError(message="Token expired"))

        return self._to_claims(payload)

    def _verify(self, token: str) -> Result[dict[str, Any], InvalidTokenError]:
        try:
            header = jwt.get_unverified_header(token)
            if header.get("alg") != self._algorithm:
                return Failure(
                    error=InvalidTokenError(message="Unexpected signing algorithm")
                )

            payload: dict[str, Any] = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self._algorithm],
                audience=self._audience,
                issuer=self._issuer,
                options={
                    "verify_exp": False,
                    "verify_nbf": False,
                    "verify_iat": False,
                    "require": _REQUIRED_CLAIMS,
                },
            )
        except JWTInvalidTokenError:
            return Failure(error=InvalidTokenError())

        if not isinstance(payload["exp"], int) or not isinstance(payload["nbf"], int):
            return Failure(error=InvalidTokenError(message="Malformed time claims"))

        return Success(value=payload)

    @staticmethod
    def _to_claims(
        payload: dict[str, Any],
    ) -> Result[AccessTokenClaims, InvalidTokenError]:
        roles = payload.get("roles") or []
        if not isinstance(roles, list) or not all(isinstance(r, str) for r in roles):
            return Failure(error=InvalidTokenError(message="Malformed roles claim"))

        try:
            claims = AccessTokenClaims(
                user_id=UUID(payload["sub"]),
                username=payload["username"],
                email=payload.get("email", ""),
                first_name=payload.get("given_name", ""),
                last_name=payload.get("family_name", ""),
                jwt_id=payload["jti"],
                session_id=payload["session_id"],
                branch_id=UUID(payload["branch_id"]),
                roles=tuple(roles),
                issued_at=datetime.fromtimestamp(payload["iat"], tz=UTC),
                expires_at=datetime.fromtimestamp(payload["exp"], tz=UTC),
            )
        except (ValueError, TypeError, AttributeError):
            return Failure(error=InvalidTokenError(message="Malformed claims"))

        return Success(value=claims)
