"""Core errors package.

Usage:
    from passwordsafe.core.errors import DomainError, ValidationError
"""

from passwordsafe.core.errors.common_errors import ValidationError
from passwordsafe.core.errors.domain_error import DomainError

__all__ = [
    "DomainError",
    "ValidationError",
]
