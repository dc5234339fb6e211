"""Pydantic models for Password Safe API payloads."""

from passwordsafe.schemas.auth_schemas import SignAppInResponse, TokenResponse
from passwordsafe.schemas.managed_account_schemas import (
    AccessRequestPayload,
    ManagedAccountResponse,
)
from passwordsafe.schemas.managed_system_schemas import (
    MANAGED_SYSTEM_PAYLOADS,
    ManagedSystemResponse,
)
from passwordsafe.schemas.secret_schemas import SecretResponse

__all__ = [
    "AccessRequestPayload",
    "MANAGED_SYSTEM_PAYLOADS",
    "ManagedAccountResponse",
    "ManagedSystemResponse",
    "SecretResponse",
    "SignAppInResponse",
    "TokenResponse",
]
