"""Secrets Safe payloads."""

from pydantic import BaseModel, ConfigDict, Field

from passwordsafe.domain.enums import SecretType


class SecretResponse(BaseModel):
    """One element of `GET secrets-safe/secrets?path=&title=`."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: str = Field(..., alias="Id")
    title: str = Field(default="", alias="Title")
    password: str = Field(default="", alias="Password", repr=False)
    secret_type: str = Field(default="Text", alias="SecretType")

    @property
    def secret_kind(self) -> SecretType:
        return SecretType.parse(self.secret_type)
