"""Exception handlers rendering framework errors as RFC 7807.

Handlers:
    http_exception_handler: HTTPException (e.g. from auth dependencies)
    validation_exception_handler: RequestValidationError

Exports:
    register_exception_handlers: Register both handlers with a FastAPI app
"""

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from branchauth.core.config import get_settings
from branchauth.presentation.routers.api.v1.errors.problem_details import (
    ErrorDetail,
    ProblemDetails,
)

_HTTP_STATUS_INFO: dict[int, tuple[str, str]] = {
    400: ("Bad Request", "bad-request"),
    401: ("Authentication Required", "unauthorized"),
    403: ("Access Denied", "forbidden"),
    404: ("Resource Not Found", "not-found"),
    405: ("Method Not Allowed", "method-not-allowed"),
    422: ("Validation Failed", "validation-failed"),
    500: ("Internal Server Error", "internal-server-error"),
}


def _status_info(status_code: int) -> tuple[str, str]:
    return _HTTP_STATUS_INFO.get(status_code, ("Error", "error"))


async def http_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Convert HTTPException to a Problem Details response."""
    assert isinstance(exc, HTTPException)

    title, slug = _status_info(exc.status_code)
    problem = ProblemDetails(
        type=f"{get_settings().api_base_url}/errors/{slug}",
        title=title,
        status=exc.status_code,
        detail=exc.detail if isinstance(exc.detail, str) else str(exc.detail),
        instance=str(request.url.path),
    )
    return JSONResponse(
        status_code=exc.status_code,
        content=problem.model_dump(exclude_none=True),
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(
    request: Request, exc: Exception
) -> JSONResponse:
    """Convert RequestValidationError to a 422 Problem Details response."""
    assert isinstance(exc, RequestValidationError)

    errors = [
        ErrorDetail(
            field=".".join(str(part) for part in error["loc"] if part != "body"),
            code=error["type"],
            message=error["msg"],
        )
        for error in exc.errors()
    ]
    title, slug = _status_info(status.HTTP_422_UNPROCESSABLE_ENTITY)
    problem = ProblemDetails(
        type=f"{get_settings().api_base_url}/errors/{slug}",
        title=title,
        status=status.HTTP_422_UNPROCESSABLE_ENTITY,
        detail="Request validation failed",
        instance=str(request.url.path),
        errors=errors,
    )
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=problem.model_dump(exclude_none=True),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register the Problem Details handlers."""
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
