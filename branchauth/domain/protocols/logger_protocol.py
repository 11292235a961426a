"""LoggerProtocol definition for structured logging.

Backend-agnostic structured logging port. Implementations MUST emit
key-value context and MUST NOT receive secrets: callers never pass
passwords, access tokens or refresh tokens. Session ids, user ids and
usernames are fine.

Log Levels:
    - DEBUG: Diagnostic detail (development only)
    - INFO: Normal events (login_succeeded, session_revoked)
    - WARNING: Rejected credentials, replayed tokens, no-op logouts
    - ERROR: Operation failed but the request continues (audit write failed)
    - CRITICAL: System-wide failure

Usage:
    from branchauth.core.container import get_logger

    logger = get_logger()
    logger.info("login_succeeded", user_id=str(user.id), session_id=session_id)

    request_logger = logger.bind(session_id=session_id)
    request_logger.warning("refresh_token_reuse_detected")
"""

from __future__ import annotations

from typing import Any, Protocol


class LoggerProtocol(Protocol):
    """Protocol for structured logging adapters."""

    def debug(self, message: str, /, **context: Any) -> None:
        """Log a debug-level event."""
        ...

    def info(self, message: str, /, **context: Any) -> None:
        """Log an info-level event."""
        ...

    def warning(self, message: str, /, **context: Any) -> None:
        """Log a warning-level event."""
        ...

    def error(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        """Log an error-level event with optional exception details.

        Args:
            message: snake_case event name.
            error: Optional exception; adapters add error_type and
                error_message fields.
            **context: Structured key-value context fields.
        """
        ...

    def critical(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        """Log a critical-level event with optional exception details."""
        ...

    def bind(self, **context: Any) -> "LoggerProtocol":
        """Return a new logger with permanently bound context.

        The original logger is unchanged.

        Example:
            session_logger = logger.bind(session_id=session_id, user_id=str(user_id))
            session_logger.info("session_revoked", revoked_count=2)
        """
        ...

    def with_context(self, **context: Any) -> "LoggerProtocol":
        """Alias for bind()."""
        ...
