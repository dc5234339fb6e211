"""Base error class for Railway-Oriented Programming.

DomainError is the base class for ALL errors returned by the client. Errors
flow through the system as data (inside Failure), they are never raised.

Architecture:
- Does NOT inherit from Exception (not raised, returned in Result)
- Uses dataclass inheritance (NOT Protocol/ABC)
- Each concrete subclass pins its ErrorKind as a class variable
"""

from dataclasses import dataclass
from typing import Any, ClassVar

from passwordsafe.core.enums import ErrorCode, ErrorKind


@dataclass(frozen=True, slots=True, kw_only=True)
class DomainError:
    """Base error (does NOT inherit from Exception).

    Attributes:
        code: Machine-readable error code (enum).
        message: Human-readable error message.
        details: Optional context for debugging (path, stage, ...).
    """

    kind: ClassVar[ErrorKind]

    code: ErrorCode
    message: str
    details: dict[str, Any] | None = None

    @property
    def is_retryable(self) -> bool:
        """Only technical errors are eligible for retry."""
        return self.kind is ErrorKind.TECHNICAL

    def __str__(self) -> str:
        """String representation of error."""
        return f"{self.code.value}: {self.message}"
