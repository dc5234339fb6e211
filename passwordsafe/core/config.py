"""
Configuration management using Pydantic Settings.

Settings are loaded from `PASSWORD_SAFE_*` environment variables or passed as
keyword arguments, and validated on construction. An invalid configuration
raises `pydantic.ValidationError` before any client is built.

Architecture:
- Flat Settings structure (no nesting)
- No module-level settings instance; each client builds its own
- Exactly one authentication mode: OAuth client pair or API key

Usage:
    from passwordsafe.core.config import PasswordSafeSettings

    settings = PasswordSafeSettings(
        api_url="https://example.com:443/BeyondTrust/api/public/v3",
        api_key="...",
    )
    session = PasswordSafeSession.from_settings(settings)
"""

import structlog
from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from passwordsafe.core.constants import (
    API_PATH_SEGMENT,
    CLIENT_TIMEOUT_SECONDS_DEFAULT,
    DEFAULT_SEPARATOR,
    MAX_FILE_SECRET_SIZE_BYTES_DEFAULT,
    MAX_FILE_SECRET_SIZE_BYTES_LIMIT,
    RETRY_INITIAL_INTERVAL_SECONDS,
    RETRY_MAX_ELAPSED_TIME_SECONDS,
    RETRY_MAX_INTERVAL_SECONDS,
    RETRY_MULTIPLIER,
    RETRY_RANDOMIZATION_FACTOR,
)
from passwordsafe.domain.entities.credentials import (
    ApiKeyCredentials,
    OAuthCredentials,
    SessionCredentials,
)
from passwordsafe.domain.enums import ApiVersion


class PasswordSafeSettings(BaseSettings):
    """
    Client settings (flat structure).

    Configuration precedence:
        1. Keyword arguments
        2. Environment variables prefixed with PASSWORD_SAFE_
        3. Default values (only for non-sensitive config)
    """

    # Connection
    api_url: str = Field(
        description="Base API URL, e.g. https://host:443/BeyondTrust/api/public/v3",
    )
    api_version: ApiVersion | None = Field(
        default=None,
        description="Public API version sent as the `version` query parameter",
    )
    client_timeout_seconds: int = Field(
        default=CLIENT_TIMEOUT_SECONDS_DEFAULT,
        ge=1,
        le=300,
        description="Per-request timeout in seconds",
    )
    verify_ca: bool = Field(
        default=True,
        description="Verify the server TLS certificate",
    )
    client_certificate_path: str | None = Field(
        default=None,
        description="PEM client certificate for mutual TLS",
    )
    client_certificate_key_path: str | None = Field(
        default=None,
        description="PEM private key matching client_certificate_path",
    )

    # Authentication (exactly one mode)
    client_id: str | None = Field(
        default=None,
        min_length=36,
        max_length=36,
        description="OAuth client id",
    )
    client_secret: str | None = Field(
        default=None,
        min_length=36,
        max_length=64,
        repr=False,
        description="OAuth client secret",
    )
    api_key: str | None = Field(
        default=None,
        min_length=128,
        max_length=263,
        repr=False,
        description="Static API key, used instead of the OAuth client pair",
    )

    # Retry (exponential backoff)
    retry_initial_interval_seconds: float = Field(
        default=RETRY_INITIAL_INTERVAL_SECONDS,
        gt=0,
        description="Wait before the first retry",
    )
    retry_multiplier: float = Field(
        default=RETRY_MULTIPLIER,
        ge=1,
        description="Growth factor applied to the wait after each attempt",
    )
    retry_randomization_factor: float = Field(
        default=RETRY_RANDOMIZATION_FACTOR,
        ge=0,
        le=1,
        description="Jitter applied to each wait (+/- fraction)",
    )
    retry_max_interval_seconds: float = Field(
        default=RETRY_MAX_INTERVAL_SECONDS,
        gt=0,
        description="Cap on a single wait",
    )
    retry_max_elapsed_time_seconds: float = Field(
        default=RETRY_MAX_ELAPSED_TIME_SECONDS,
        gt=0,
        description="Total time budget for one call including retries",
    )

    # Workflows
    separator: str = Field(
        default=DEFAULT_SEPARATOR,
        min_length=1,
        max_length=1,
        description="Separator used in secret and managed account paths",
    )
    max_file_secret_size_bytes: int = Field(
        default=MAX_FILE_SECRET_SIZE_BYTES_DEFAULT,
        ge=1,
        le=MAX_FILE_SECRET_SIZE_BYTES_LIMIT,
        description="File secrets larger than this are discarded",
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )

    model_config = SettingsConfigDict(
        env_prefix="PASSWORD_SAFE_",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("api_url")
    @classmethod
    def validate_api_url(cls, v: str) -> str:
        """
        Require an https Password Safe API URL and drop the trailing slash.

        Args:
            v: URL string.

        Returns:
            str: URL without trailing slash.

        Raises:
            ValueError: If the scheme is not https or the API segment is missing.
        """
        if not v.lower().startswith("https://"):
            raise ValueError("api_url must use the https scheme")
        if API_PATH_SEGMENT not in v:
            raise ValueError(f"api_url must contain '{API_PATH_SEGMENT}'")
        return v.rstrip("/")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"unknown log level {v!r}")
        return level

    @model_validator(mode="after")
    def validate_auth_mode(self) -> "PasswordSafeSettings":
        """
        Check that exactly one authentication mode is configured.

        Raises:
            ValueError: On a partial client pair, both modes, or neither.
        """
        has_client_pair = self.client_id is not None and self.client_secret is not None
        if (self.client_id is None) != (self.client_secret is None):
            raise ValueError("client_id and client_secret must be set together")
        if has_client_pair and self.api_key is not None:
            raise ValueError("set either api_key or client_id/client_secret, not both")
        if not has_client_pair and self.api_key is None:
            raise ValueError("either api_key or client_id/client_secret is required")
        return self

    @model_validator(mode="after")
    def validate_client_certificate(self) -> "PasswordSafeSettings":
        if (self.client_certificate_path is None) != (
            self.client_certificate_key_path is None
        ):
            raise ValueError(
                "client_certificate_path and client_certificate_key_path must be set together"
            )
        if not self.verify_ca:
            structlog.get_logger(__name__).warning(
                "TLS certificate verification is disabled, "
                "the connection to the server is not secure",
                api_url=self.api_url,
            )
        return self

    @property
    def credentials(self) -> SessionCredentials:
        """
        Credentials for the configured authentication mode.

        Returns:
            SessionCredentials: ApiKeyCredentials when an API key is set,
                OAuthCredentials otherwise.
        """
        if self.api_key is not None:
            return ApiKeyCredentials(api_key=self.api_key)
        return OAuthCredentials(
            client_id=self.client_id or "",
            client_secret=self.client_secret or "",
        )

    @property
    def client_certificate(self) -> tuple[str, str] | None:
        """Certificate/key pair for httpx, or None."""
        if self.client_certificate_path and self.client_certificate_key_path:
            return (self.client_certificate_path, self.client_certificate_key_path)
        return None
