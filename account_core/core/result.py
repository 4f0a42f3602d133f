"""Result types for railway-oriented programming.

Every account use-case returns a Result instead of raising. Failures carry a
DomainError value that the transport layer maps to its own status codes.

Usage:
    result = await account_service.verify_user(code)
    match result:
        case Success(value=user_view):
            print(user_view.state)
        case Failure(error=error):
            print(error.code)
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")  # Success type
E = TypeVar("E")  # Error type


@dataclass(frozen=True, slots=True, kw_only=True)
class Success(Generic[T]):
    """Successful use-case outcome.

    Attributes:
        value: Use-case payload (user view, token descriptor, or None).
    """

    value: T


@dataclass(frozen=True, slots=True, kw_only=True)
class Failure(Generic[E]):
    """Failed use-case outcome.

    Attributes:
        error: DomainError describing which invariant was violated.
    """

    error: E


Result = Success[T] | Failure[E]
