"""Validation of secret and managed account references.

References are validated locally, before any request is sent. Managed
account references must be exactly "<system><sep><account>"; secret
references may nest folders up to a maximum depth before the title.

Lengths are bounded by the limits the Password Safe API enforces server side.
"""

from dataclasses import dataclass

import structlog

from passwordsafe.core.constants import (
    MAX_ACCOUNT_NAME_LENGTH,
    MAX_SECRET_PATH_DEPTH,
    MAX_SECRET_PATH_LENGTH,
    MAX_SECRET_TITLE_LENGTH,
    MAX_SYSTEM_NAME_LENGTH,
)
from passwordsafe.core.enums import ErrorCode
from passwordsafe.core.errors import ValidationError
from passwordsafe.core.result import Failure, Result, Success
from passwordsafe.domain.protocols import LoggerProtocol


@dataclass(frozen=True, slots=True)
class _PathRules:
    max_path: int
    max_name: int
    path_label: str
    name_label: str
    max_depth: int


_MANAGED_ACCOUNT_RULES = _PathRules(
    max_path=MAX_SYSTEM_NAME_LENGTH,
    max_name=MAX_ACCOUNT_NAME_LENGTH,
    path_label="system name",
    name_label="account name",
    max_depth=1,
)

_SECRET_RULES = _PathRules(
    max_path=MAX_SECRET_PATH_LENGTH,
    max_name=MAX_SECRET_TITLE_LENGTH,
    path_label="path",
    name_label="title",
    max_depth=MAX_SECRET_PATH_DEPTH,
)


def _invalid(message: str, path: str) -> Failure[ValidationError]:
    return Failure(
        error=ValidationError(
            code=ErrorCode.INVALID_PATH,
            message=message,
            field="path",
            details={"path": path},
        )
    )


def validate_separator(separator: str) -> Result[str, ValidationError]:
    """Separators are exactly one character."""
    if len(separator) != 1:
        return Failure(
            error=ValidationError(
                code=ErrorCode.INVALID_PATH,
                message=f"invalid separator {separator!r}, expected a single character",
                field="separator",
            )
        )
    return Success(value=separator)


def validate_single_path(
    path: str, separator: str, *, is_managed_account: bool
) -> Result[str, ValidationError]:
    """Validate one reference and return its normalized form.

    Whitespace around the folder path and the name is trimmed; the result is
    rebuilt as "<path><sep><name>".

    Args:
        path: Reference string.
        separator: Single-character separator.
        is_managed_account: Apply managed account rules instead of secret rules.

    Returns:
        Success(normalized path) or Failure(ValidationError).
    """
    checked = validate_separator(separator)
    if isinstance(checked, Failure):
        return _invalid(checked.error.message, path)

    rules = _MANAGED_ACCOUNT_RULES if is_managed_account else _SECRET_RULES
    segments = path.split(separator)

    depth = len(segments) - 1
    if depth > rules.max_depth:
        return _invalid(
            f"invalid {rules.path_label} path depth={depth}, valid path depth is "
            f"{rules.max_depth}, this secret will be skipped",
            path,
        )

    name = segments[-1].strip()
    folder = separator.join(segments[:-1]).strip()

    if not folder or len(folder) > rules.max_path:
        return _invalid(
            f"invalid {rules.path_label} length={len(folder)}, valid length between "
            f"1 and {rules.max_path}, this secret will be skipped",
            path,
        )

    if not name or len(name) > rules.max_name:
        return _invalid(
            f"{rules.path_label}={folder} but found invalid {rules.name_label} "
            f"length={len(name)}, valid length between 1 and {rules.max_name}, "
            f"this secret will be skipped",
            path,
        )

    return Success(value=f"{folder}{separator}{name}")


def validate_paths(
    paths: list[str],
    separator: str,
    *,
    is_managed_account: bool,
    logger: LoggerProtocol | None = None,
) -> list[str]:
    """Validate a list of references.

    Blank entries are logged and skipped. Validation stops at the first
    invalid entry; the references validated up to that point are returned.

    Args:
        paths: Reference strings.
        separator: Single-character separator.
        is_managed_account: Apply managed account rules instead of secret rules.
        logger: Optional logger (defaults to a module structlog logger).

    Returns:
        Normalized references that passed validation.
    """
    log = logger or structlog.get_logger(__name__)
    validated: list[str] = []

    for path in paths:
        if not path.strip():
            log.error("Empty path encountered, validate your path input")
            continue

        result = validate_single_path(
            path, separator, is_managed_account=is_managed_account
        )
        match result:
            case Success(value=normalized):
                validated.append(normalized)
            case Failure(error=error):
                log.error("Invalid path", error=error.message)
                return validated

    return validated


def validate_resource_id(resource_id: str, resource_type: str) -> Result[int, ValidationError]:
    """Validate a positive integer resource id before it is put into a URL."""
    try:
        value = int(resource_id)
    except (TypeError, ValueError):
        value = 0

    if value < 1:
        return Failure(
            error=ValidationError(
                code=ErrorCode.INVALID_RESOURCE_ID,
                message=f"invalid integer format for {resource_type}ID: {resource_id!r}",
                field=f"{resource_type.lower()}_id",
            )
        )
    return Success(value=value)
