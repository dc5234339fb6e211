"""Common error classes used across all layers.

Usage:
    from passwordsafe.core.errors import ValidationError
    from passwordsafe.core.enums import ErrorCode
    from passwordsafe.core.result import Failure

    return Failure(error=ValidationError(
        code=ErrorCode.INVALID_PATH,
        message="invalid system name length=0",
        field="path",
    ))
"""

from dataclasses import dataclass
from typing import ClassVar

from passwordsafe.core.enums import ErrorKind
from passwordsafe.core.errors.domain_error import DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class ValidationError(DomainError):
    """Caller input failed a local check; no request was sent.

    Attributes:
        code: ErrorCode enum.
        message: Human-readable message.
        field: Field name that failed validation.
        details: Additional context.
    """

    kind: ClassVar[ErrorKind] = ErrorKind.VALIDATION

    field: str | None = None
