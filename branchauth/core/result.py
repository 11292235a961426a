"""Result types for railway-oriented programming.

Authentication outcomes are returned, not raised. A handler answers with
either ``Success(value=...)`` or ``Failure(error=...)`` and the caller
pattern-matches on the variant.

Usage:
    result = await token_issuer.rotate(access_token, refresh_token, ip, ua)
    match result:
        case Success(value=tokens):
            return tokens
        case Failure(error=error):
            logger.warning("refresh_failed", code=error.code.value)
"""

from dataclasses import dataclass
from typing import Generic, TypeAlias, TypeVar, Union

T = TypeVar("T")  # Success type
E = TypeVar("E")  # Error type


@dataclass(frozen=True, slots=True, kw_only=True)
class Success(Generic[T]):
    """Successful operation result.

    Attributes:
        value: The successful result value.
    """

    value: T


@dataclass(frozen=True, slots=True, kw_only=True)
class Failure(Generic[E]):
    """Failed operation result.

    Attributes:
        error: The error that occurred.
    """

    error: E


Result: TypeAlias = Union[Success[T], Failure[E]]
