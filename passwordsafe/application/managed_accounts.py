"""Managed account credential release.

Releasing a managed account credential is a four step handshake, run for
each "<system><sep><account>" reference:

    1. LOOKUP          GET  ManagedAccounts?systemName=&accountName=
    2. REQUEST_CREATE  POST Requests
    3. CREDENTIAL_FETCH GET Credentials/{requestId}
    4. CHECK_IN        PUT  Requests/{requestId}/checkin

Every call goes through the session's retry policy. A failure at any step
ends the handshake for that reference only; a batch keeps going with the
next reference. Once a request is open it is always checked in, even when
the credential fetch failed; the credential is kept only when check-in
succeeds.

Request ids are never logged in clear text.
"""

import json

import pydantic
import structlog

from passwordsafe.application.authentication import PasswordSafeSession
from passwordsafe.application.errors import annotate, validation_failure
from passwordsafe.core.constants import (
    CREDENTIALS_PATH,
    DEFAULT_REQUEST_DURATION_MINUTES,
    DEFAULT_REQUEST_REASON,
    DEFAULT_SEPARATOR,
    MANAGED_ACCOUNTS_PATH,
    REQUEST_ID_MASK,
    REQUESTS_PATH,
)
from passwordsafe.core.enums import ErrorCode
from passwordsafe.core.errors import DomainError
from passwordsafe.core.result import Failure, Result, Success
from passwordsafe.domain.entities import (
    AccessRequest,
    BatchResult,
    ManagedAccountIdentity,
    ManagedAccountRef,
)
from passwordsafe.domain.enums import ReleaseStage
from passwordsafe.domain.errors import BusinessError
from passwordsafe.domain.protocols import LoggerProtocol
from passwordsafe.domain.validators import validate_single_path
from passwordsafe.schemas import AccessRequestPayload, ManagedAccountResponse


class ManagedAccountService:
    """Retrieves managed account credentials through access requests.

    Attributes:
        session: Authenticated Password Safe session.
    """

    def __init__(
        self,
        session: PasswordSafeSession,
        *,
        logger: LoggerProtocol | None = None,
    ) -> None:
        self.session = session
        self._logger = logger or structlog.get_logger(__name__)

    # -------------------------------------------------------------------------
    # Batch
    # -------------------------------------------------------------------------

    async def get_secrets(
        self,
        paths: list[str],
        separator: str = DEFAULT_SEPARATOR,
    ) -> BatchResult:
        """Release the credential of every referenced managed account.

        Every reference is attempted. A failed reference is absent from
        `values`; its error is kept in `errors` (annotated with the path and
        the stage that failed) and becomes `last_error`.

        Args:
            paths: "<system><sep><account>" references.
            separator: Single-character separator.

        Returns:
            BatchResult keyed by the original reference strings.
        """
        batch = BatchResult()

        if not paths:
            batch.last_error = BusinessError(
                code=ErrorCode.EMPTY_LIST,
                message="empty managed account list",
            )
            return batch

        if (failure := self.session.ensure_authenticated()) is not None:
            batch.last_error = failure.error
            return batch

        for path in paths:
            match await self._release_path(path, separator):
                case Success(value=value):
                    batch.record_success(path, value)
                case Failure(error=error):
                    self._logger.error(
                        "Managed account retrieval failed",
                        path=path,
                        stage=(error.details or {}).get("stage"),
                        error=str(error),
                    )
                    batch.record_failure(path, annotate(error, path=path))

        return batch

    async def get_secret(
        self,
        path: str,
        separator: str = DEFAULT_SEPARATOR,
    ) -> Result[str, DomainError]:
        """Release the credential of a single managed account."""
        if (failure := self.session.ensure_authenticated()) is not None:
            return failure

        result = await self._release_path(path, separator)
        if isinstance(result, Failure):
            return Failure(error=annotate(result.error, path=path))
        return result

    async def _release_path(self, path: str, separator: str) -> Result[str, DomainError]:
        validated = validate_single_path(path, separator, is_managed_account=True)
        if isinstance(validated, Failure):
            return Failure(
                error=annotate(validated.error, stage=ReleaseStage.PARSE.value)
            )

        parsed = ManagedAccountRef.parse(validated.value, separator)
        if isinstance(parsed, Failure):
            return Failure(error=annotate(parsed.error, stage=ReleaseStage.PARSE.value))

        return await self.release_credential(parsed.value)

    async def release_credential(self, ref: ManagedAccountRef) -> Result[str, DomainError]:
        """Run the full handshake for one managed account.

        Errors carry the failing stage in `details["stage"]`.

        Args:
            ref: Parsed managed account reference.

        Returns:
            Success(credential) or Failure(DomainError).
        """
        identity = await self.get_managed_account(ref.system_name, ref.account_name)
        if isinstance(identity, Failure):
            return Failure(error=annotate(identity.error, stage=ReleaseStage.LOOKUP.value))

        request = await self.create_request(identity.value)
        if isinstance(request, Failure):
            return Failure(
                error=annotate(request.error, stage=ReleaseStage.REQUEST_CREATE.value)
            )

        # The request is checked in whether or not the fetch succeeded.
        credential = await self.get_credential(request.value)
        checked_in = await self.check_in(request.value)
        if isinstance(checked_in, Failure):
            self._logger.warning(
                "Check-in failed, credential discarded and access request left open",
                system_id=request.value.system_id,
                account_id=request.value.account_id,
            )

        if isinstance(credential, Failure):
            return Failure(
                error=annotate(credential.error, stage=ReleaseStage.CREDENTIAL_FETCH.value)
            )
        if isinstance(checked_in, Failure):
            return Failure(error=annotate(checked_in.error, stage=ReleaseStage.CHECK_IN.value))

        return credential

    # -------------------------------------------------------------------------
    # Stages
    # -------------------------------------------------------------------------

    async def get_managed_account(
        self,
        system_name: str,
        account_name: str,
    ) -> Result[ManagedAccountIdentity, DomainError]:
        """Resolve system and account names to their ids."""
        result = await self.session.execute(
            method="GET",
            url=self.session.url(MANAGED_ACCOUNTS_PATH),
            operation="ManagedAccountGet",
            params={"systemName": system_name, "accountName": account_name},
        )
        if isinstance(result, Failure):
            return result

        try:
            account = ManagedAccountResponse.model_validate_json(result.value.content)
        except ValueError as e:
            return Failure(
                error=BusinessError(
                    code=ErrorCode.INVALID_RESPONSE,
                    message=f"invalid managed account response: {e}",
                    operation="ManagedAccountGet",
                    status_code=result.value.status_code,
                    response_body=result.value.text,
                )
            )

        return Success(
            value=ManagedAccountIdentity(
                system_id=account.system_id,
                account_id=account.account_id,
            )
        )

    async def create_request(
        self,
        identity: ManagedAccountIdentity,
        *,
        duration_minutes: int = DEFAULT_REQUEST_DURATION_MINUTES,
        reason: str = DEFAULT_REQUEST_REASON,
    ) -> Result[AccessRequest, DomainError]:
        """Open an access request; the plain-text response is the request id."""
        try:
            payload = AccessRequestPayload(
                system_id=identity.system_id,
                account_id=identity.account_id,
                duration_minutes=duration_minutes,
                reason=reason,
            )
        except pydantic.ValidationError as e:
            return validation_failure(e, field="access_request")

        result = await self.session.execute(
            method="POST",
            url=self.session.url(REQUESTS_PATH),
            operation="ManagedAccountCreateRequest",
            json_body=payload.model_dump(by_alias=True),
        )
        if isinstance(result, Failure):
            return result

        request_id = result.value.text.strip()
        if not request_id:
            return Failure(
                error=BusinessError(
                    code=ErrorCode.INVALID_RESPONSE,
                    message="empty access request id",
                    operation="ManagedAccountCreateRequest",
                    status_code=result.value.status_code,
                )
            )

        return Success(
            value=AccessRequest(
                request_id=request_id,
                system_id=payload.system_id,
                account_id=payload.account_id,
                duration_minutes=payload.duration_minutes,
                reason=payload.reason,
                conflict_option=payload.conflict_option,
            )
        )

    async def get_credential(self, request: AccessRequest) -> Result[str, DomainError]:
        """Read the credential released by `request`.

        The API returns the credential as a JSON string literal; the
        returned value is the decoded string.
        """
        result = await self.session.execute(
            method="GET",
            url=self.session.url(CREDENTIALS_PATH, request.request_id),
            operation="CredentialByRequestId",
            masked=request.request_id,
        )
        if isinstance(result, Failure):
            return result

        try:
            value = json.loads(result.value.text)
        except ValueError:
            value = None

        if not isinstance(value, str):
            # The body is a credential; never echo it.
            return Failure(
                error=BusinessError(
                    code=ErrorCode.INVALID_RESPONSE,
                    message="credential response is not a quoted string",
                    operation="CredentialByRequestId",
                    status_code=result.value.status_code,
                )
            )

        return Success(value=value)

    async def check_in(self, request: AccessRequest) -> Result[None, DomainError]:
        """Check the access request back in."""
        self._logger.debug("Checking in access request", request_id=REQUEST_ID_MASK)
        result = await self.session.execute(
            method="PUT",
            url=self.session.url(REQUESTS_PATH, request.request_id, "checkin"),
            operation="ManagedAccountRequestCheckIn",
            json_body={},
            masked=request.request_id,
        )
        if isinstance(result, Failure):
            return result
        return Success(value=None)
