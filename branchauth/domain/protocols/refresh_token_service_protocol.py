"""Refresh token generation protocol."""

from typing import Protocol


class RefreshTokenServiceProtocol(Protocol):
    """Opaque refresh token generation and digesting.

    Implementations:
        - RefreshTokenService: 512-bit urlsafe tokens, SHA-256 digests
    """

    def generate_token(self) -> tuple[str, str]:
        """Return (plain token, digest to store)."""
        ...

    def hash_token(self, token: str) -> str:
        """Digest a presented token for lookup."""
        ...
