"""RFC 7807 Problem Details for HTTP APIs.

RFC 7807: https://tools.ietf.org/html/rfc7807

Exports:
    ErrorDetail: Individual field-specific error
    ProblemDetails: RFC 7807 compliant error response schema
"""

from pydantic import BaseModel, Field


class ErrorDetail(BaseModel):
    """Individual field-specific error (request validation failures)."""

    field: str = Field(..., description="Field name")
    code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error message")


class ProblemDetails(BaseModel):
    """RFC 7807 Problem Details for HTTP APIs.

    Examples:
        >>> problem = ProblemDetails(
        ...     type="http://localhost:8000/errors/unauthorized",
        ...     title="Authentication Required",
        ...     status=401,
        ...     detail="Authentication failed",
        ...     instance="/api/v1/auth/login",
        ... )
    """

    type: str = Field(
        ...,
        description="URI reference identifying the problem type",
        examples=["http://localhost:8000/errors/unauthorized"],
    )
    title: str = Field(
        ...,
        description="Short, human-readable summary",
        examples=["Authentication Required"],
    )
    status: int = Field(..., description="HTTP status code", examples=[401])
    detail: str = Field(
        ...,
        description="Explanation specific to this occurrence",
        examples=["Authentication failed"],
    )
    instance: str = Field(
        ...,
        description="URI reference identifying this occurrence",
        examples=["/api/v1/auth/login"],
    )
    errors: list[ErrorDetail] | None = Field(
        default=None,
        description="Field-specific errors (validation failures only)",
    )
