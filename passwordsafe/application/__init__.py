"""Application services: session, credential release, secrets, managed systems.

Usage:
    from passwordsafe.application import ManagedAccountService, PasswordSafeSession
"""

from passwordsafe.application.authentication import PasswordSafeSession
from passwordsafe.application.managed_accounts import ManagedAccountService
from passwordsafe.application.managed_systems import ManagedSystemService
from passwordsafe.application.secrets import SecretService

__all__ = [
    "ManagedAccountService",
    "ManagedSystemService",
    "PasswordSafeSession",
    "SecretService",
]
