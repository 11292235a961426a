"""Session management response schemas.

Endpoints:
    GET    /api/v1/auth/sessions               - List active sessions
    GET    /api/v1/auth/sessions/current       - The caller's session
    GET    /api/v1/auth/sessions/count         - Count active sessions
    DELETE /api/v1/auth/sessions/{session_id}  - Revoke one session
    DELETE /api/v1/auth/sessions               - Revoke all sessions
    DELETE /api/v1/auth/sessions/others        - Revoke all but the current
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from branchauth.domain.entities import ActiveSession


class SessionResponse(BaseModel):
    """A single active session."""

    session_id: str = Field(..., description="Session identifier")
    ip_address: str | None = Field(None, description="Client IP")
    user_agent: str | None = Field(None, description="Client user agent")
    device_id: str | None = Field(None, description="Client device identifier")
    created_at: datetime = Field(..., description="When the current token was issued")
    expires_at: datetime = Field(..., description="When the current token expires")
    is_current: bool = Field(
        default=False,
        description="Whether this is the session making the request",
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "session_id": "01920f4e-7a3c-7c1e-9d1a-3f2b6c8e4a10",
                "ip_address": "10.0.0.7",
                "user_agent": "Mozilla/5.0",
                "device_id": None,
                "created_at": "2026-01-15T10:30:00Z",
                "expires_at": "2026-01-22T10:30:00Z",
                "is_current": True,
            }
        }
    )

    @classmethod
    def from_entity(cls, session: ActiveSession) -> "SessionResponse":
        return cls(
            session_id=session.session_id,
            ip_address=session.ip_address,
            user_agent=session.user_agent,
            device_id=session.device_id,
            created_at=session.created_at,
            expires_at=session.expires_at,
            is_current=session.is_current,
        )


class SessionListResponse(BaseModel):
    """Active sessions, newest first."""

    sessions: list[SessionResponse] = Field(default_factory=list)
    total_count: int = Field(..., description="Number of active sessions")


class SessionCountResponse(BaseModel):
    count: int = Field(..., description="Number of active sessions")
