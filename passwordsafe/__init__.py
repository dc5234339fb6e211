"""Async client for the BeyondTrust Password Safe API.

Usage:
    from passwordsafe import ManagedAccountService, PasswordSafeSession, PasswordSafeSettings

    settings = PasswordSafeSettings()  # PASSWORD_SAFE_* environment variables
    async with PasswordSafeSession.from_settings(settings) as session:
        await session.authenticate()
        batch = await ManagedAccountService(session).get_secrets(["sys01/account01"])
"""

from passwordsafe.application import (
    ManagedAccountService,
    ManagedSystemService,
    PasswordSafeSession,
    SecretService,
)
from passwordsafe.core.config import PasswordSafeSettings
from passwordsafe.core.enums import ErrorCode, ErrorKind
from passwordsafe.core.errors import DomainError, ValidationError
from passwordsafe.core.result import Failure, Result, Success
from passwordsafe.domain.entities import BatchResult
from passwordsafe.domain.enums import ApiVersion, ManagedSystemTarget
from passwordsafe.domain.errors import BusinessError, PasswordSafeError, TechnicalError
from passwordsafe.infrastructure.http import PasswordSafeTransport, RetryPolicy
from passwordsafe.infrastructure.logging import ConsoleAdapter

__all__ = [
    "ApiVersion",
    "BatchResult",
    "BusinessError",
    "ConsoleAdapter",
    "DomainError",
    "ErrorCode",
    "ErrorKind",
    "Failure",
    "ManagedAccountService",
    "ManagedSystemService",
    "ManagedSystemTarget",
    "PasswordSafeError",
    "PasswordSafeSession",
    "PasswordSafeSettings",
    "PasswordSafeTransport",
    "Result",
    "RetryPolicy",
    "SecretService",
    "Success",
    "TechnicalError",
    "ValidationError",
]
