"""Fixed design constants.

These are policy values of the authentication design, NOT environment
configuration. Environment-specific values live in
``branchauth/core/config.py``.

Example:
    >>> from branchauth.core.constants import BEARER_PREFIX
    >>> header = f"{BEARER_PREFIX}{access_token}"
"""

# =============================================================================
# Lockout and Revocation Policy
# =============================================================================

LOCKOUT_THRESHOLD: int = 5
"""Cumulative failed logins that lock an account (no time window)."""

BLACKLIST_RETENTION_DAYS: int = 7
"""Days a revoked session stays blacklisted (outlives any access token)."""


# =============================================================================
# Token Format
# =============================================================================

REFRESH_TOKEN_BYTES: int = 64
"""Random bytes per refresh token (64 bytes = 512 bits of entropy)."""

JWT_ALGORITHM: str = "HS256"
"""The only accepted access token signing algorithm."""

TOKEN_TYPE: str = "Bearer"
"""Token type reported to clients in token responses."""

BEARER_PREFIX: str = "Bearer "
"""HTTP Authorization header prefix for Bearer tokens."""

MIN_SECRET_KEY_LENGTH: int = 32
"""Minimum signing secret length (256 bits)."""


# =============================================================================
# Password Hashing
# =============================================================================

BCRYPT_ROUNDS_DEFAULT: int = 12
"""Default bcrypt work factor (cost parameter)."""

BCRYPT_MAX_PASSWORD_BYTES: int = 72
"""bcrypt ignores (newer releases reject) input beyond 72 bytes."""


# =============================================================================
# Revocation Reasons
# =============================================================================

REASON_USER_LOGOUT: str = "user_logout"
REASON_SESSION_REVOKED: str = "session_revoked_by_user"
REASON_ALL_SESSIONS_REVOKED: str = "all_sessions_revoked_by_user"
REASON_OTHER_SESSIONS_REVOKED: str = "other_sessions_revoked_by_user"
REASON_TOKEN_REUSE: str = "refresh_token_reuse_detected"
