"""Core errors package.

Usage:
    from branchauth.core.errors import DomainError
"""

from branchauth.core.errors.domain_error import DomainError

__all__ = ["DomainError"]
