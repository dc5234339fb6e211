"""Remote-call error types.

Every call to the Password Safe API ends in one of three outcomes: success,
a technical error, or a business error. The split drives the retry policy:
technical errors are retried under exponential backoff, business errors end
the retry loop on the first attempt.

Architecture:
- Inherit from DomainError (core layer)
- Returned inside Failure, never raised
- ErrorKind pinned per class so callers branch on kind, not message text

Usage:
    match result:
        case Failure(error=TechnicalError() as error):
            ...  # infrastructure problem, retries already exhausted
        case Failure(error=BusinessError(status_code=404)):
            ...  # the remote service rejected the request
"""

from dataclasses import dataclass
from typing import ClassVar

from passwordsafe.core.enums import ErrorKind
from passwordsafe.core.errors import DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class PasswordSafeError(DomainError):
    """Base error for failed Password Safe API calls.

    Attributes:
        code: ErrorCode enum.
        message: Human-readable message.
        operation: Client operation name (e.g. "ManagedAccountGet").
        status_code: HTTP status code, when a response was received.
        details: Additional context.
    """

    operation: str | None = None
    status_code: int | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class TechnicalError(PasswordSafeError):
    """Infrastructure failure: connection refused, timeout, 5xx, 408.

    Recovery: Retry with exponential backoff.

    Attributes:
        cause: String form of the underlying transport exception, if any.
    """

    kind: ClassVar[ErrorKind] = ErrorKind.TECHNICAL

    cause: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class BusinessError(PasswordSafeError):
    """Well-formed rejection or unusable result from the remote service.

    Raised when:
    - The API answers 4xx (other than 408)
    - A list endpoint returns an empty list
    - A secret is not found
    - The response body cannot be decoded

    Recovery: None by retrying; the caller must change the request.

    Attributes:
        response_body: Raw response body, when one was received.
    """

    kind: ClassVar[ErrorKind] = ErrorKind.BUSINESS

    response_body: str | None = None
