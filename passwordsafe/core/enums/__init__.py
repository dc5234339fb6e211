"""Core enums package.

Usage:
    from passwordsafe.core.enums import ErrorCode, ErrorKind
"""

from passwordsafe.core.enums.error_code import ErrorCode
from passwordsafe.core.enums.error_kind import ErrorKind

__all__ = ["ErrorCode", "ErrorKind"]
