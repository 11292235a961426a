"""Base domain error class for railway-oriented programming.

DomainError is the base for every error value in the system. It does NOT
inherit from Exception: errors are returned inside ``Failure`` and matched,
never raised.

Usage:
    from branchauth.core.errors import DomainError

    @dataclass(frozen=True, slots=True, kw_only=True)
    class MyError(DomainError):
        code: ErrorCode = ErrorCode.TOKEN_INVALID
        message: str = "Invalid token"
"""

from dataclasses import dataclass

from branchauth.core.enums import ErrorCode


@dataclass(frozen=True, slots=True, kw_only=True)
class DomainError:
    """Base domain error (not an Exception).

    Attributes:
        code: Machine-readable error code (enum).
        message: Human-readable error message.
        details: Optional context for debugging (logged, never returned).
    """

    code: ErrorCode
    message: str
    details: dict[str, str] | None = None

    def __str__(self) -> str:
        """String representation of error."""
        return f"{self.code.value}: {self.message}"
