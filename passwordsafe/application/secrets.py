"""Secrets Safe secret retrieval.

Secrets are referenced as "<folder path><sep><title>"; the folder path may
itself be nested. Each reference is looked up by path and title, then:

- FILE secrets: the attachment is downloaded from
  `secrets-safe/secrets/{id}/file/download`, subject to a size limit
- TEXT / CREDENTIAL secrets: the value is the Password field

A batch attempts every reference and isolates failures per item, exactly like
the managed account workflow.
"""

import structlog

from passwordsafe.application.authentication import PasswordSafeSession
from passwordsafe.application.errors import annotate
from passwordsafe.core.constants import (
    DEFAULT_SEPARATOR,
    MAX_FILE_SECRET_SIZE_BYTES_DEFAULT,
    SECRETS_PATH,
)
from passwordsafe.core.enums import ErrorCode
from passwordsafe.core.errors import DomainError, ValidationError
from passwordsafe.core.result import Failure, Result, Success
from passwordsafe.domain.entities import BatchResult, SecretRef
from passwordsafe.domain.enums import SecretType
from passwordsafe.domain.errors import BusinessError
from passwordsafe.domain.protocols import LoggerProtocol
from passwordsafe.domain.validators import validate_single_path
from passwordsafe.schemas import SecretResponse

_VERSION_HINT = "Ensure Password Safe version is 23.1 or greater."


class SecretService:
    """Retrieves Secrets Safe secrets.

    Attributes:
        session: Authenticated Password Safe session.
        max_file_secret_size_bytes: File secrets above this size are discarded.
    """

    def __init__(
        self,
        session: PasswordSafeSession,
        *,
        max_file_secret_size_bytes: int = MAX_FILE_SECRET_SIZE_BYTES_DEFAULT,
        logger: LoggerProtocol | None = None,
    ) -> None:
        self.session = session
        self.max_file_secret_size_bytes = max_file_secret_size_bytes
        self._logger = logger or structlog.get_logger(__name__)

    async def get_secrets(
        self,
        paths: list[str],
        separator: str = DEFAULT_SEPARATOR,
    ) -> BatchResult:
        """Retrieve every referenced secret.

        Args:
            paths: "<folder path><sep><title>" references.
            separator: Single-character separator.

        Returns:
            BatchResult keyed by the original reference strings.
        """
        batch = BatchResult()

        if not paths:
            batch.last_error = BusinessError(
                code=ErrorCode.EMPTY_LIST,
                message="empty secret list",
            )
            return batch

        if (failure := self.session.ensure_authenticated()) is not None:
            batch.last_error = failure.error
            return batch

        for path in paths:
            match await self._retrieve_path(path, separator):
                case Success(value=value):
                    batch.record_success(path, value)
                case Failure(error=error):
                    self._logger.error("Secret retrieval failed", path=path, error=str(error))
                    batch.record_failure(path, annotate(error, path=path))

        return batch

    async def get_secret(
        self,
        path: str,
        separator: str = DEFAULT_SEPARATOR,
    ) -> Result[str, DomainError]:
        """Retrieve a single secret value."""
        if (failure := self.session.ensure_authenticated()) is not None:
            return failure

        result = await self._retrieve_path(path, separator)
        if isinstance(result, Failure):
            return Failure(error=annotate(result.error, path=path))
        return result

    async def _retrieve_path(self, path: str, separator: str) -> Result[str, DomainError]:
        validated = validate_single_path(path, separator, is_managed_account=False)
        if isinstance(validated, Failure):
            return validated

        parsed = SecretRef.parse(validated.value, separator)
        if isinstance(parsed, Failure):
            return parsed
        ref = parsed.value

        found = await self.get_secret_by_path(ref.folder_path, ref.title)
        if isinstance(found, Failure):
            return found
        secret = found.value

        if secret.secret_kind is SecretType.FILE:
            return await self.get_file_secret(secret.id)
        return Success(value=secret.password)

    async def get_secret_by_path(
        self,
        path: str,
        title: str,
    ) -> Result[SecretResponse, DomainError]:
        """Look a secret up by folder path and title.

        Returns:
            Success(SecretResponse): First matching secret.
            Failure(BusinessError): INVALID_RESPONSE when the body is not a
                secret list (older servers), SECRET_NOT_FOUND when empty.
        """
        result = await self.session.execute(
            method="GET",
            url=self.session.url(SECRETS_PATH),
            operation="SecretGetSecretByPath",
            params={"path": path, "title": title},
        )
        if isinstance(result, Failure):
            return result

        response = result.value
        try:
            data = response.json()
            secrets = [SecretResponse.model_validate(item) for item in data]
        except (TypeError, ValueError) as e:
            return Failure(
                error=BusinessError(
                    code=ErrorCode.INVALID_RESPONSE,
                    message=f"{e}, {_VERSION_HINT}",
                    operation="SecretGetSecretByPath",
                    status_code=response.status_code,
                )
            )

        if not secrets:
            return Failure(
                error=BusinessError(
                    code=ErrorCode.SECRET_NOT_FOUND,
                    message="SecretGetSecretByPath, Secret was not found",
                    operation="SecretGetSecretByPath",
                    status_code=404,
                )
            )

        return Success(value=secrets[0])

    async def get_file_secret(self, secret_id: str) -> Result[str, DomainError]:
        """Download a FILE secret.

        A payload larger than `max_file_secret_size_bytes` is discarded, never
        truncated.
        """
        result = await self.session.execute(
            method="GET",
            url=self.session.url(SECRETS_PATH, secret_id, "file", "download"),
            operation="SecretGetFileSecret",
        )
        if isinstance(result, Failure):
            return result

        content = result.value.content
        if len(content) > self.max_file_secret_size_bytes:
            self._logger.error(
                "File secret exceeds maximum size",
                size=len(content),
                max_size=self.max_file_secret_size_bytes,
            )
            return Failure(
                error=ValidationError(
                    code=ErrorCode.FILE_SECRET_TOO_LARGE,
                    message=(
                        f"file secret size {len(content)} exceeds the maximum of "
                        f"{self.max_file_secret_size_bytes} bytes"
                    ),
                    field="max_file_secret_size_bytes",
                )
            )

        return Success(value=result.value.text)
