"""Refresh token service.

Generates opaque refresh tokens and the digest used to store them.

Token Strategy:
    - Opaque tokens (NOT JWT)
    - 64 random bytes (512 bits), urlsafe base64
    - Only the SHA-256 hex digest is persisted; the plain value goes to the
      client once and cannot be recovered from the database
    - Rotated on every use

A fast digest is enough here: the input is 512 bits of randomness, not a
human-chosen secret, and lookup must be an indexed equality match.
"""

import hashlib
import secrets

from branchauth.core.constants import REFRESH_TOKEN_BYTES


class RefreshTokenService:
    """Refresh token generation and hashing.

    Usage:
        service = RefreshTokenService()
        token, token_hash = service.generate_token()
        # return token to the client, store token_hash

        service.hash_token(presented_token) == token_hash
    """

    def __init__(self, token_bytes: int = REFRESH_TOKEN_BYTES) -> None:
        self._token_bytes = token_bytes

    def generate_token(self) -> tuple[str, str]:
        """Generate a refresh token and its digest.

        Returns:
            Tuple of (token, token_hash).
        """
        token = secrets.token_urlsafe(self._token_bytes)
        return token, self.hash_token(token)

    @staticmethod
    def hash_token(token: str) -> str:
        """SHA-256 hex digest of a refresh token."""
        return hashlib.sha256(token.encode("utf-8")).hexdigest()
