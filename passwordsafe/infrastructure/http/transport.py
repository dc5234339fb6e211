"""HTTP transport for the Password Safe API.

This module owns the single pooled `httpx.AsyncClient` a session talks
through and turns every outcome of a request into one of three results:

- Success(response): any status below 400
- Failure(TechnicalError): timeout, connection error, 5xx or 408 (retryable)
- Failure(BusinessError): any other 4xx (never retried)

The pooled client keeps the session cookie set by `Auth/SignAppIn`, so calls
after sign-in carry no Authorization header.

Architecture:
    - Infrastructure layer (adapter for the external API)
    - Uses httpx for async HTTP
    - Returns Result types (no exceptions for technical or business errors)
"""

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

import httpx
import structlog

from passwordsafe.core.constants import (
    API_KEY_PREFIX,
    BEARER_PREFIX,
    CLIENT_TIMEOUT_SECONDS_DEFAULT,
    CONTENT_TYPE_JSON,
)
from passwordsafe.core.enums import ErrorCode
from passwordsafe.core.result import Failure, Result, Success
from passwordsafe.domain.enums import ApiVersion
from passwordsafe.domain.errors import BusinessError, PasswordSafeError, TechnicalError
from passwordsafe.domain.protocols import LoggerProtocol

if TYPE_CHECKING:
    from passwordsafe.core.config import PasswordSafeSettings
    from passwordsafe.infrastructure.http.retry import RetryPolicy


class PasswordSafeTransport:
    """Pooled HTTP client with technical/business error classification.

    Attributes:
        _client: Shared httpx client (connection pool and cookie jar).
        _logger: Structured logger.

    Example:
        >>> transport = PasswordSafeTransport(timeout=30)
        >>> result = await transport.call(
        ...     url="https://host/BeyondTrust/api/public/v3/Auth/SignAppIn",
        ...     method="POST",
        ...     operation="SignAppIn",
        ...     api_key=api_key,
        ... )
    """

    def __init__(
        self,
        *,
        timeout: float = CLIENT_TIMEOUT_SECONDS_DEFAULT,
        verify: bool = True,
        cert: tuple[str, str] | None = None,
        http_client: httpx.AsyncClient | None = None,
        logger: LoggerProtocol | None = None,
    ) -> None:
        """Initialize the transport.

        Args:
            timeout: Per-request timeout in seconds.
            verify: Verify the server TLS certificate.
            cert: Optional (certificate, key) file pair for mutual TLS.
            http_client: Pre-built client (tests, custom transports). When
                given, timeout/verify/cert are ignored.
            logger: Optional logger (defaults to a module structlog logger).
        """
        if http_client is None:
            http_client = httpx.AsyncClient(timeout=timeout, verify=verify, cert=cert)
        self._client = http_client
        self._logger = logger or structlog.get_logger(__name__)

    @classmethod
    def from_settings(
        cls,
        settings: "PasswordSafeSettings",
        *,
        logger: LoggerProtocol | None = None,
    ) -> "PasswordSafeTransport":
        return cls(
            timeout=settings.client_timeout_seconds,
            verify=settings.verify_ca,
            cert=settings.client_certificate,
            logger=logger,
        )

    @property
    def is_closed(self) -> bool:
        return self._client.is_closed

    async def call(
        self,
        *,
        url: str,
        method: str,
        operation: str,
        json_body: Any = None,
        form: Mapping[str, str] | None = None,
        content: str | bytes | None = None,
        access_token: str | None = None,
        api_key: str | None = None,
        content_type: str = CONTENT_TYPE_JSON,
        api_version: ApiVersion | None = None,
        params: Mapping[str, str] | None = None,
    ) -> Result[httpx.Response, PasswordSafeError]:
        """Send one request and classify its outcome.

        Args:
            url: Absolute URL.
            method: HTTP method.
            operation: Operation name for logging and errors.
            json_body: JSON body.
            form: Form-encoded body.
            content: Raw body.
            access_token: Bearer token for the Authorization header.
            api_key: API key for the Authorization header (wins over the token).
            content_type: Content-Type header value.
            api_version: Sent as the `version` query parameter when set.
            params: Extra query parameters.

        Returns:
            Success(httpx.Response): Status below 400.
            Failure(TechnicalError): Transport failure, 5xx or 408.
            Failure(BusinessError): Any other 4xx.
        """
        headers = {"Content-Type": content_type}
        if api_key:
            headers["Authorization"] = f"{API_KEY_PREFIX}{api_key}"
        elif access_token:
            headers["Authorization"] = f"{BEARER_PREFIX}{access_token}"

        query = dict(params or {})
        if api_version is not None:
            query["version"] = api_version.value

        try:
            response = await self._client.request(
                method=method,
                url=url,
                headers=headers,
                params=query or None,
                json=json_body,
                data=form,
                content=content,
            )
        except httpx.TimeoutException as e:
            return self._technical_failure(
                message=f"{operation} request timed out",
                operation=operation,
                cause=e,
            )
        except httpx.RequestError as e:
            return self._technical_failure(
                message=f"{operation} connection failed: {e}",
                operation=operation,
                cause=e,
            )

        return self._classify(response, operation)

    def _technical_failure(
        self,
        *,
        message: str,
        operation: str,
        cause: Exception,
    ) -> Failure[TechnicalError]:
        self._logger.error(
            "Technical error",
            operation=operation,
            error_type=type(cause).__name__,
            error=str(cause),
        )
        return Failure(
            error=TechnicalError(
                code=ErrorCode.TRANSPORT_FAILED,
                message=message,
                operation=operation,
                cause=str(cause),
            )
        )

    def _classify(
        self,
        response: httpx.Response,
        operation: str,
    ) -> Result[httpx.Response, PasswordSafeError]:
        status = response.status_code

        if status < 400:
            return Success(value=response)

        if status >= 500 or status == httpx.codes.REQUEST_TIMEOUT:
            self._logger.error(
                "Server error",
                operation=operation,
                status_code=status,
            )
            return Failure(
                error=TechnicalError(
                    code=ErrorCode.SERVER_ERROR,
                    message=f"error - status code: {status}",
                    operation=operation,
                    status_code=status,
                )
            )

        body = response.text
        self._logger.debug(
            "Request rejected",
            operation=operation,
            status_code=status,
        )
        return Failure(
            error=BusinessError(
                code=ErrorCode.REQUEST_REJECTED,
                message=f"error - status code: {status} - {body}",
                operation=operation,
                status_code=status,
                response_body=body,
            )
        )

    async def get_general_list(
        self,
        *,
        url: str,
        operation: str,
        retry_policy: "RetryPolicy",
        empty_message: str,
        api_version: ApiVersion | None = None,
    ) -> Result[list[dict[str, Any]], PasswordSafeError]:
        """GET a list endpoint under the retry policy and decode it.

        Args:
            url: Absolute URL of the list endpoint.
            operation: Operation name for logging and errors.
            retry_policy: Policy wrapping the call.
            empty_message: Message of the error returned for an empty list.
            api_version: Optional API version.

        Returns:
            Success(list[dict]): Non-empty decoded list.
            Failure(PasswordSafeError): Call failure, malformed JSON or empty list.
        """
        self._logger.debug("GET", operation=operation, url=url)

        async def _get() -> Result[httpx.Response, PasswordSafeError]:
            return await self.call(
                url=url,
                method="GET",
                operation=operation,
                api_version=api_version,
            )

        result = await retry_policy.execute(_get, operation=operation)
        if isinstance(result, Failure):
            return result

        response = result.value
        try:
            data = response.json()
        except ValueError as e:
            return Failure(
                error=BusinessError(
                    code=ErrorCode.INVALID_RESPONSE,
                    message=f"invalid JSON response: {e}",
                    operation=operation,
                    status_code=response.status_code,
                    response_body=response.text,
                )
            )

        if not isinstance(data, list):
            return Failure(
                error=BusinessError(
                    code=ErrorCode.INVALID_RESPONSE,
                    message=f"expected a list, got {type(data).__name__}",
                    operation=operation,
                    status_code=response.status_code,
                    response_body=response.text,
                )
            )

        if not data:
            return Failure(
                error=BusinessError(
                    code=ErrorCode.EMPTY_LIST,
                    message=empty_message,
                    operation=operation,
                    status_code=response.status_code,
                )
            )

        return Success(value=data)

    async def close(self) -> None:
        """Close the connection pool. Safe to call more than once."""
        if not self._client.is_closed:
            await self._client.aclose()
