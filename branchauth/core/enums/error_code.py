"""Machine-readable error codes.

Codes follow ENTITY_REASON naming. They travel inside ``DomainError``
values and are written to logs; the HTTP layer never echoes them back for
authentication failures (see presentation error handlers).
"""

from enum import Enum


class ErrorCode(Enum):
    """Domain-level error codes."""

    # Credential errors
    INVALID_CREDENTIALS = "invalid_credentials"
    ACCOUNT_INACTIVE = "account_inactive"
    ACCOUNT_LOCKED = "account_locked"

    # Token errors
    TOKEN_INVALID = "token_invalid"
    REFRESH_TOKEN_INVALID = "refresh_token_invalid"
    REFRESH_TOKEN_EXPIRED = "refresh_token_expired"

    # Session errors
    SESSION_NOT_FOUND = "session_not_found"
