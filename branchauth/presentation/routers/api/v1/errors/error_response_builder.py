"""Build RFC 7807 responses from domain errors.

Every authentication error collapses into one generic 401: the specific
error code is logged, never returned, so responses cannot be used to tell
an unknown username from a wrong password or a locked account.
"""

from fastapi import Request, status
from fastapi.responses import JSONResponse

from branchauth.core.config import get_settings
from branchauth.core.enums import ErrorCode
from branchauth.core.errors import DomainError
from branchauth.domain.protocols import LoggerProtocol
from branchauth.presentation.routers.api.v1.errors.problem_details import (
    ProblemDetails,
)

AUTHENTICATION_FAILED_DETAIL = "Authentication failed"

_NOT_FOUND_CODES = frozenset({ErrorCode.SESSION_NOT_FOUND})


class ErrorResponseBuilder:
    """Convert DomainError values into Problem Details responses."""

    @staticmethod
    def from_domain_error(
        error: DomainError,
        request: Request,
        logger: LoggerProtocol,
    ) -> JSONResponse:
        """Map a domain error to an HTTP response.

        Args:
            error: Failure payload from a handler.
            request: Current request (for the instance path).
            logger: Receives the specific error code.

        Returns:
            404 for a missing session, otherwise a generic 401 with a
            ``WWW-Authenticate: Bearer`` header.
        """
        logger.warning(
            "auth_request_rejected",
            error_code=error.code.value,
            path=request.url.path,
        )

        base_url = get_settings().api_base_url
        if error.code in _NOT_FOUND_CODES:
            problem = ProblemDetails(
                type=f"{base_url}/errors/not-found",
                title="Resource Not Found",
                status=status.HTTP_404_NOT_FOUND,
                detail=error.message,
                instance=str(request.url.path),
            )
            return JSONResponse(
                status_code=status.HTTP_404_NOT_FOUND,
                content=problem.model_dump(exclude_none=True),
            )

        problem = ProblemDetails(
            type=f"{base_url}/errors/unauthorized",
            title="Authentication Required",
            status=status.HTTP_401_UNAUTHORIZED,
            detail=AUTHENTICATION_FAILED_DETAIL,
            instance=str(request.url.path),
        )
        return JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED,
            content=problem.model_dump(exclude_none=True),
            headers={"WWW-Authenticate": "Bearer"},
        )
