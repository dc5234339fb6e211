"""Validators package exports."""

from passwordsafe.domain.validators.path_validator import (
    validate_paths,
    validate_resource_id,
    validate_separator,
    validate_single_path,
)

__all__ = [
    "validate_paths",
    "validate_resource_id",
    "validate_separator",
    "validate_single_path",
]
