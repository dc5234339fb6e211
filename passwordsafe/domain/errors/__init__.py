"""Domain errors package.

Usage:
    from passwordsafe.domain.errors import BusinessError, TechnicalError
"""

from passwordsafe.domain.errors.password_safe_error import (
    BusinessError,
    PasswordSafeError,
    TechnicalError,
)

__all__ = [
    "PasswordSafeError",
    "TechnicalError",
    "BusinessError",
]
