"""RFC 7807 error rendering."""

from branchauth.presentation.routers.api.v1.errors.error_response_builder import (
    ErrorResponseBuilder,
)
from branchauth.presentation.routers.api.v1.errors.exception_handlers import (
    register_exception_handlers,
)
from branchauth.presentation.routers.api.v1.errors.problem_details import (
    ErrorDetail,
    ProblemDetails,
)

__all__ = [
    "ErrorDetail",
    "ErrorResponseBuilder",
    "ProblemDetails",
    "register_exception_handlers",
]
