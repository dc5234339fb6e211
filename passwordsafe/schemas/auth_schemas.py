"""Authentication payloads.

Field names follow the wire format; aliases map them to snake_case.
"""

from pydantic import BaseModel, ConfigDict, Field


class TokenResponse(BaseModel):
    """Response of `POST Auth/connect/token` (client_credentials grant).

    Attributes:
        access_token: Bearer token used to sign the app in.
        expires_in: Token lifetime in seconds.
        token_type: Usually "Bearer".
        scope: Granted scope.
    """

    model_config = ConfigDict(extra="ignore")

    access_token: str = Field(..., min_length=1, description="Bearer access token")
    expires_in: int = Field(default=0, description="Token lifetime in seconds")
    token_type: str = Field(default="Bearer", description="Token type")
    scope: str = Field(default="", description="Granted scope")

    def __repr__(self) -> str:
        return f"TokenResponse(token_type={self.token_type!r}, expires_in={self.expires_in})"


class SignAppInResponse(BaseModel):
    """Response of `POST Auth/SignAppIn`: the signed-in application user."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    user_id: int = Field(default=0, alias="UserId")
    email_address: str = Field(default="", alias="EmailAddress")
    user_name: str = Field(default="", alias="UserName")
    name: str = Field(default="", alias="Name")
