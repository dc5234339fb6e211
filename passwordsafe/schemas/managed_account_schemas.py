"""Managed account and access request payloads."""

from pydantic import BaseModel, ConfigDict, Field

from passwordsafe.core.constants import (
    CONFLICT_OPTION_REUSE,
    DEFAULT_REQUEST_DURATION_MINUTES,
    DEFAULT_REQUEST_REASON,
)


class ManagedAccountResponse(BaseModel):
    """Response of `GET ManagedAccounts?systemName=&accountName=`."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    system_id: int = Field(..., alias="SystemId")
    account_id: int = Field(..., alias="AccountId")


class AccessRequestPayload(BaseModel):
    """Body of `POST Requests`."""

    model_config = ConfigDict(populate_by_name=True)

    system_id: int = Field(..., alias="SystemID")
    account_id: int = Field(..., alias="AccountID")
    duration_minutes: int = Field(
        default=DEFAULT_REQUEST_DURATION_MINUTES, ge=1, alias="DurationMinutes"
    )
    reason: str = Field(default=DEFAULT_REQUEST_REASON, alias="Reason")
    conflict_option: str = Field(default=CONFLICT_OPTION_REUSE, alias="ConflictOption")
