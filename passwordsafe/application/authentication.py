"""Password Safe session and authentication.

A session is created once per client lifetime. `authenticate()` signs the
application in; the pooled HTTP client keeps the session cookie, so every
later call made through the session is authenticated without an
Authorization header. `sign_out()` ends the server-side session and closes
the connection pool; the session is unusable afterwards.

Authentication modes:
    - OAuth: POST Auth/connect/token (client_credentials grant, form
      encoded), then POST Auth/SignAppIn with the bearer token.
    - API key: POST Auth/SignAppIn with `PS-Auth key=<api key>`.

Usage:
    async with PasswordSafeSession.with_api_key(api_url=url, api_key=key) as session:
        match await session.authenticate():
            case Success(value=user):
                ...
            case Failure(error=error):
                ...
"""

from collections.abc import Mapping
from types import TracebackType
from typing import Any, Self

import httpx
import structlog

from passwordsafe.core.config import PasswordSafeSettings
from passwordsafe.core.constants import (
    CLIENT_CREDENTIALS_GRANT,
    CONTENT_TYPE_FORM,
    CONTENT_TYPE_JSON,
    REQUEST_ID_MASK,
    SIGN_APP_IN_PATH,
    SIGN_OUT_PATH,
    TOKEN_PATH,
)
from passwordsafe.core.enums import ErrorCode
from passwordsafe.core.errors import DomainError, ValidationError
from passwordsafe.core.result import Failure, Result, Success
from passwordsafe.domain.entities.credentials import (
    ApiKeyCredentials,
    OAuthCredentials,
    SessionCredentials,
)
from passwordsafe.domain.enums import ApiVersion
from passwordsafe.domain.errors import BusinessError, PasswordSafeError
from passwordsafe.domain.protocols import LoggerProtocol
from passwordsafe.infrastructure.http import PasswordSafeTransport, RetryPolicy
from passwordsafe.schemas import SignAppInResponse, TokenResponse


class PasswordSafeSession:
    """Authenticated connection to one Password Safe API.

    Attributes:
        api_url: Base API URL without trailing slash.
        credentials: OAuth client pair or API key.
        api_version: Optional API version for version-dependent endpoints.
        retry_policy: Backoff applied to every call.
        transport: Pooled HTTP transport.
    """

    def __init__(
        self,
        *,
        api_url: str,
        credentials: SessionCredentials,
        transport: PasswordSafeTransport | None = None,
        retry_policy: RetryPolicy | None = None,
        api_version: ApiVersion | None = None,
        logger: LoggerProtocol | None = None,
    ) -> None:
        self.api_url = api_url.rstrip("/")
        self.credentials = credentials
        self.api_version = api_version
        self._logger = logger or structlog.get_logger(__name__)
        self.transport = transport or PasswordSafeTransport(logger=self._logger)
        self.retry_policy = retry_policy or RetryPolicy(logger=self._logger)
        self._user: SignAppInResponse | None = None
        self._closed = False

    @classmethod
    def with_oauth(
        cls,
        *,
        api_url: str,
        client_id: str,
        client_secret: str,
        **kwargs: Any,
    ) -> Self:
        """Session authenticating with an OAuth client pair."""
        return cls(
            api_url=api_url,
            credentials=OAuthCredentials(client_id=client_id, client_secret=client_secret),
            **kwargs,
        )

    @classmethod
    def with_api_key(cls, *, api_url: str, api_key: str, **kwargs: Any) -> Self:
        """Session authenticating with a static API key."""
        return cls(
            api_url=api_url,
            credentials=ApiKeyCredentials(api_key=api_key),
            **kwargs,
        )

    @classmethod
    def from_settings(
        cls,
        settings: PasswordSafeSettings,
        *,
        logger: LoggerProtocol | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> Self:
        """Build a session (transport and retry policy included) from settings.

        Args:
            settings: Validated client settings.
            logger: Optional logger shared by every component.
            http_client: Optional pre-built httpx client.

        Returns:
            Unauthenticated session.
        """
        log = logger or structlog.get_logger(__name__)
        if http_client is not None:
            transport = PasswordSafeTransport(http_client=http_client, logger=log)
        else:
            transport = PasswordSafeTransport.from_settings(settings, logger=log)
        return cls(
            api_url=settings.api_url,
            credentials=settings.credentials,
            transport=transport,
            retry_policy=RetryPolicy.from_settings(settings, logger=log),
            api_version=settings.api_version,
            logger=log,
        )

    # -------------------------------------------------------------------------
    # State
    # -------------------------------------------------------------------------

    @property
    def is_authenticated(self) -> bool:
        return self._user is not None and not self._closed

    @property
    def is_closed(self) -> bool:
        return self._closed

    @property
    def user(self) -> SignAppInResponse | None:
        """Signed-in application user, once authenticated."""
        return self._user

    def url(self, *segments: str | int) -> str:
        """Absolute URL for an endpoint path relative to the base API URL."""
        return "/".join([self.api_url, *(str(segment).strip("/") for segment in segments)])

    def ensure_authenticated(self) -> Failure[ValidationError] | None:
        """Failure when the session cannot serve workflow calls, else None."""
        if self._closed:
            return self._closed_failure()
        if self._user is None:
            return Failure(
                error=ValidationError(
                    code=ErrorCode.SESSION_NOT_AUTHENTICATED,
                    message="session is not authenticated, call authenticate() first",
                    field="session",
                )
            )
        return None

    @staticmethod
    def _closed_failure() -> Failure[ValidationError]:
        return Failure(
            error=ValidationError(
                code=ErrorCode.SESSION_CLOSED,
                message="session is signed out",
                field="session",
            )
        )

    # -------------------------------------------------------------------------
    # Calls
    # -------------------------------------------------------------------------

    async def execute(
        self,
        *,
        method: str,
        url: str,
        operation: str,
        json_body: Any = None,
        form: Mapping[str, str] | None = None,
        content: str | bytes | None = None,
        access_token: str | None = None,
        api_key: str | None = None,
        content_type: str = CONTENT_TYPE_JSON,
        api_version: ApiVersion | None = None,
        params: Mapping[str, str] | None = None,
        masked: str | None = None,
    ) -> Result[httpx.Response, DomainError]:
        """Transport call under the session's retry policy.

        `masked` is replaced with REQUEST_ID_MASK in the logged URL.

        Returns:
            Success(httpx.Response) or Failure(DomainError). A closed session
            fails with SESSION_CLOSED before any request is sent.
        """
        if self._closed:
            return self._closed_failure()

        logged_url = url.replace(masked, REQUEST_ID_MASK) if masked else url
        self._logger.debug(method, operation=operation, url=logged_url)

        async def _call() -> Result[httpx.Response, PasswordSafeError]:
            return await self.transport.call(
                url=url,
                method=method,
                operation=operation,
                json_body=json_body,
                form=form,
                content=content,
                access_token=access_token,
                api_key=api_key,
                content_type=content_type,
                api_version=api_version,
                params=params,
            )

        return await self.retry_policy.execute(_call, operation=operation)

    async def get_general_list(
        self,
        *segments: str | int,
        operation: str,
        empty_message: str,
        api_version: ApiVersion | None = None,
    ) -> Result[list[dict[str, Any]], DomainError]:
        """GET a list endpoint; empty lists fail with EMPTY_LIST."""
        if self._closed:
            return self._closed_failure()
        return await self.transport.get_general_list(
            url=self.url(*segments),
            operation=operation,
            retry_policy=self.retry_policy,
            empty_message=empty_message,
            api_version=api_version,
        )

    # -------------------------------------------------------------------------
    # Authentication
    # -------------------------------------------------------------------------

    async def get_token_details(self) -> Result[TokenResponse, DomainError]:
        """Exchange the OAuth client pair for a bearer token.

        Returns:
            Success(TokenResponse): Token with its lifetime.
            Failure(DomainError): API-key session, call failure or bad body.
        """
        if not isinstance(self.credentials, OAuthCredentials):
            return Failure(
                error=ValidationError(
                    code=ErrorCode.VALIDATION_FAILED,
                    message="token exchange requires OAuth client credentials",
                    field="credentials",
                )
            )

        result = await self.execute(
            method="POST",
            url=self.url(TOKEN_PATH),
            operation="GetToken",
            form={
                "client_id": self.credentials.client_id,
                "client_secret": self.credentials.client_secret,
                "grant_type": CLIENT_CREDENTIALS_GRANT,
            },
            content_type=CONTENT_TYPE_FORM,
        )
        if isinstance(result, Failure):
            return result

        try:
            token = TokenResponse.model_validate_json(result.value.content)
        except ValueError:
            self._logger.error("Invalid token response", operation="GetToken")
            return Failure(
                error=BusinessError(
                    code=ErrorCode.INVALID_RESPONSE,
                    message="invalid token response",
                    operation="GetToken",
                    status_code=result.value.status_code,
                )
            )

        self._logger.debug("Successfully retrieved token", expires_in=token.expires_in)
        return Success(value=token)

    async def sign_app_in(
        self,
        *,
        access_token: str | None = None,
    ) -> Result[SignAppInResponse, DomainError]:
        """POST Auth/SignAppIn with a bearer token or the session API key."""
        api_key = (
            self.credentials.api_key
            if isinstance(self.credentials, ApiKeyCredentials)
            else None
        )
        result = await self.execute(
            method="POST",
            url=self.url(SIGN_APP_IN_PATH),
            operation="SignAppin",
            access_token=access_token,
            api_key=api_key,
        )
        if isinstance(result, Failure):
            return result

        try:
            user = SignAppInResponse.model_validate_json(result.value.content)
        except ValueError as e:
            self._logger.error("Invalid sign in response", operation="SignAppin")
            return Failure(
                error=BusinessError(
                    code=ErrorCode.INVALID_RESPONSE,
                    message=f"invalid sign in response: {e}",
                    operation="SignAppin",
                    status_code=result.value.status_code,
                    response_body=result.value.text,
                )
            )

        self._user = user
        self._logger.debug("Successfully Signed App In", user_name=user.user_name)
        return Success(value=user)

    async def authenticate(self) -> Result[SignAppInResponse, DomainError]:
        """Sign the application in with the session credentials.

        Returns:
            Success(SignAppInResponse): Signed-in application user.
            Failure(DomainError): Token exchange or sign-in failure.
        """
        if self._closed:
            return self._closed_failure()

        if isinstance(self.credentials, ApiKeyCredentials):
            return await self.sign_app_in()

        token_result = await self.get_token_details()
        if isinstance(token_result, Failure):
            return token_result
        return await self.sign_app_in(access_token=token_result.value.access_token)

    async def sign_out(self) -> Result[None, DomainError]:
        """End the server-side session and close the connection pool.

        The pool is closed whatever the outcome of the sign-out call, and the
        session is unusable afterwards.

        Returns:
            Success(None) or the sign-out failure.
        """
        if self._closed:
            return Success(value=None)

        try:
            result = await self.execute(
                method="POST",
                url=self.url(SIGN_OUT_PATH),
                operation="SignOut",
            )
        finally:
            await self.close()

        if isinstance(result, Failure):
            self._logger.error("Sign out failed", error=str(result.error))
            return result

        self._logger.debug("Successfully Signed out.")
        return Success(value=None)

    async def close(self) -> None:
        """Close the connection pool without signing out."""
        self._closed = True
        self._user = None
        await self.transport.close()

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if self._user is not None:
            await self.sign_out()
        else:
            await self.close()
