"""Core enums package.

Usage:
    from branchauth.core.enums import ErrorCode, Environment
"""

from branchauth.core.enums.environment import Environment
from branchauth.core.enums.error_code import ErrorCode

__all__ = ["ErrorCode", "Environment"]
