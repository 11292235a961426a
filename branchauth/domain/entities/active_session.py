"""Active session read model."""

from dataclasses import dataclass
from datetime import datetime

from branchauth.domain.entities.refresh_token import RefreshToken


@dataclass(frozen=True, slots=True, kw_only=True)
class ActiveSession:
    """A session whose current refresh token is still usable.

    Attributes:
        session_id: Session identifier.
        ip_address: Client IP of the latest issuance.
        user_agent: Client user agent of the latest issuance.
        device_id: Client-supplied device identifier.
        created_at: When the current refresh token was issued.
        expires_at: When the current refresh token expires.
        is_current: True for the session making the request.
    """

    session_id: str
    ip_address: str | None
    user_agent: str | None
    device_id: str | None
    created_at: datetime
    expires_at: datetime
    is_current: bool = False

    @classmethod
    def from_token(
        cls, token: RefreshToken, current_session_id: str | None = None
    ) -> "ActiveSession":
        """Project a refresh token record into a session view."""
        return cls(
            session_id=token.session_id,
            ip_address=token.ip_address,
            user_agent=token.user_agent,
            device_id=token.device_id,
            created_at=token.created_at,
            expires_at=token.expires_at,
            is_current=current_session_id is not None
            and token.session_id == current_session_id,
        )
