"""Core shared kernel.

Foundational utilities used across all architectural layers:
- Result types for railway-oriented programming
- Base error class for domain-level error handling
- Settings and fixed policy constants

The core module has NO dependencies on other application layers.
"""

from branchauth.core.enums import ErrorCode
from branchauth.core.errors import DomainError
from branchauth.core.result import Failure, Result, Success

__all__ = [
    "DomainError",
    "ErrorCode",
    "Failure",
    "Result",
    "Success",
]
