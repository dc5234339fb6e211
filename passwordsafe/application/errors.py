"""Error helpers shared by the workflow services.

Exports:
    annotate: Copy of an error with extra details merged in
    validation_failure: Failure(ValidationError) built from a pydantic error
"""

import dataclasses

import pydantic

from passwordsafe.core.enums import ErrorCode
from passwordsafe.core.errors import DomainError, ValidationError
from passwordsafe.core.result import Failure


def annotate[E: DomainError](error: E, **details: str) -> E:
    """Copy of `error` with `details` merged into its details."""
    return dataclasses.replace(error, details={**(error.details or {}), **details})


def format_validation_error(exc: pydantic.ValidationError) -> str:
    parts = []
    for error in exc.errors():
        field = ".".join(str(part) for part in error["loc"]) or "payload"
        parts.append(f"Error in field {field} : {error['msg']}.")
    return " ".join(parts)


def validation_failure(exc: pydantic.ValidationError, *, field: str) -> Failure[ValidationError]:
    """Failure(VALIDATION_FAILED) listing every invalid field of `exc`."""
    return Failure(
        error=ValidationError(
            code=ErrorCode.VALIDATION_FAILED,
            message=format_validation_error(exc),
            field=field,
        )
    )
