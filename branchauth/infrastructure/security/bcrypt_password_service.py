"""Bcrypt password hashing service (adapter).

Implements PasswordHashingProtocol.

Hash format:
    $2b$<cost>$<22-char salt><31-char key>

    The algorithm identifier, cost factor, 128-bit salt and derived key are
    all encoded in the stored string, so verification needs nothing else and
    the cost can be raised later without invalidating existing hashes.
"""

import bcrypt

from branchauth.core.constants import BCRYPT_MAX_PASSWORD_BYTES, BCRYPT_ROUNDS_DEFAULT


class BcryptPasswordService:
    """Bcrypt password hashing service.

    Usage:
        from branchauth.core.container import get_password_service

        password_service = get_password_service()
        password_hash = password_service.hash_password("correct horse")
        password_service.verify_password("correct horse", password_hash)  # True
    """

    def __init__(self, cost_factor: int = BCRYPT_ROUNDS_DEFAULT) -> None:
        """Initialize bcrypt password service.

        Args:
            cost_factor: Bcrypt cost factor (log2 of the work factor).

        Raises:
            ValueError: If cost_factor is below 10 or above 31.
        """
        if cost_factor < 10:
            msg = "Cost factor must be at least 10 for security"
            raise ValueError(msg)
        if cost_factor > 31:
            msg = "Cost factor must be at most 31"
            raise ValueError(msg)

        self._cost_factor = cost_factor

    def hash_password(self, password: str) -> str:
        """Hash a plaintext password with a fresh random salt.

        Args:
            password: Plaintext password to hash.

        Returns:
            60-character bcrypt hash string.

        Raises:
            ValueError: If the UTF-8 encoded password exceeds 72 bytes
                (bcrypt would silently ignore the excess).
        """
        encoded = password.encode("utf-8")
        if len(encoded) > BCRYPT_MAX_PASSWORD_BYTES:
            msg = f"Password must be at most {BCRYPT_MAX_PASSWORD_BYTES} bytes"
            raise ValueError(msg)

        salt = bcrypt.gensalt(rounds=self._cost_factor)
        return bcrypt.hashpw(encoded, salt).decode("utf-8")

    def verify_password(self, password: str, password_hash: str) -> bool:
        """Verify a plaintext password against a bcrypt hash.

        Constant-time comparison. Returns False (never raises) for a
        malformed hash or a password bcrypt refuses.
        """
        try:
            return bcrypt.checkpw(
                password.encode("utf-8"), password_hash.encode("utf-8")
            )
        except (ValueError, AttributeError):
            return False
