"""Domain protocols (ports).

Infrastructure adapters satisfy these structurally; they never inherit.
"""

from branchauth.domain.protocols.clock_protocol import ClockProtocol
from branchauth.domain.protocols.logger_protocol import LoggerProtocol
from branchauth.domain.protocols.login_audit_repository import LoginAuditRepository
from branchauth.domain.protocols.password_hashing_protocol import (
    PasswordHashingProtocol,
)
from branchauth.domain.protocols.refresh_token_service_protocol import (
    RefreshTokenServiceProtocol,
)
from branchauth.domain.protocols.session_store import SessionStore
from branchauth.domain.protocols.token_codec_protocol import TokenCodecProtocol
from branchauth.domain.protocols.user_repository import UserRepository

__all__ = [
    "ClockProtocol",
    "LoggerProtocol",
    "LoginAuditRepository",
    "PasswordHashingProtocol",
    "RefreshTokenServiceProtocol",
    "SessionStore",
    "TokenCodecProtocol",
    "UserRepository",
]
