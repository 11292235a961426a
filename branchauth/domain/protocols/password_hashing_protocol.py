"""Password hashing protocol for domain layer.

Architecture:
    - Domain defines protocol (port)
    - Infrastructure implements adapter (BcryptPasswordService)
    - No framework dependencies in domain
"""

from typing import Protocol


class PasswordHashingProtocol(Protocol):
    """Password hashing and verification interface.

    Usage:
        def __init__(self, password_service: PasswordHashingProtocol):
            self._password_service = password_service

        stored = self._password_service.hash_password("correct horse")
        ok = self._password_service.verify_password("correct horse", stored)
    """

    def hash_password(self, password: str) -> str:
        """Hash a plaintext password.

        Args:
            password: Plaintext password to hash.

        Returns:
            Self-describing hash string (algorithm, cost, salt and key).

        Raises:
            ValueError: If the password cannot be hashed (e.g. too long).
        """
        ...

    def verify_password(self, password: str, password_hash: str) -> bool:
        """Verify a plaintext password against a stored hash.

        Args:
            password: Plaintext password to verify.
            password_hash: Stored hash.

        Returns:
            True if the password matches. False on mismatch or a malformed
            hash; never raises.
        """
        ...
