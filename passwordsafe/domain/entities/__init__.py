"""Domain entities package.

Usage:
    from passwordsafe.domain.entities import ManagedAccountRef, BatchResult
"""

from passwordsafe.domain.entities.batch_result import BatchResult
from passwordsafe.domain.entities.credentials import ApiKeyCredentials, OAuthCredentials
from passwordsafe.domain.entities.managed_account import (
    AccessRequest,
    ManagedAccountIdentity,
    ManagedAccountRef,
)
from passwordsafe.domain.entities.secret_ref import SecretRef

__all__ = [
    "AccessRequest",
    "ApiKeyCredentials",
    "BatchResult",
    "ManagedAccountIdentity",
    "ManagedAccountRef",
    "OAuthCredentials",
    "SecretRef",
]
