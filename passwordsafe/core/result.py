"""Result types for railway-oriented programming.

Every remote call in the client returns a Result instead of raising. Technical
and business failures travel as data so the workflows can decide whether to
abort (single-resource operations) or log and continue (batch operations).

Usage:
    result = await session.authenticate()
    match result:
        case Success(value=user):
            print(user.user_name)
        case Failure(error=error):
            print(error.kind, error.message)
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")  # Success type
E = TypeVar("E")  # Error type


@dataclass(frozen=True, slots=True, kw_only=True)
class Success(Generic[T]):
    """Represents a successful operation result.

    Attributes:
        value: The successful result value.
    """

    value: T


@dataclass(frozen=True, slots=True, kw_only=True)
class Failure(Generic[E]):
    """Represents a failed operation result.

    Attributes:
        error: The error that occurred.
    """

    error: E


# Type alias for Result union
type Result[T, E] = Success[T] | Failure[E]
