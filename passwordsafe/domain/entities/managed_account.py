"""Managed account entities for the credential-release handshake.

Pure business logic, no framework dependencies.

A managed account is addressed by the caller as `"<system><sep><account>"`.
The reference is resolved to numeric identifiers (lookup), an access request
is opened against those identifiers, the credential is read through the
request, and the request is checked back in.
"""

from dataclasses import dataclass

from passwordsafe.core.constants import (
    CONFLICT_OPTION_REUSE,
    DEFAULT_REQUEST_DURATION_MINUTES,
    DEFAULT_REQUEST_REASON,
)
from passwordsafe.core.enums import ErrorCode
from passwordsafe.core.errors import ValidationError
from passwordsafe.core.result import Failure, Result, Success
from passwordsafe.domain.validators import validate_separator


@dataclass(frozen=True, slots=True, kw_only=True)
class ManagedAccountRef:
    """Caller-supplied reference to a managed account.

    Attributes:
        system_name: Managed system name.
        account_name: Managed account name.
        path: Original reference string; used as the result key.
    """

    system_name: str
    account_name: str
    path: str

    @classmethod
    def parse(cls, path: str, separator: str) -> Result["ManagedAccountRef", ValidationError]:
        """Split `path` into system and account names.

        The separator must appear exactly once. Surrounding whitespace is
        stripped from both segments and neither may be empty.

        Args:
            path: Reference string, e.g. "system01/account01".
            separator: Single-character separator.

        Returns:
            Success(ManagedAccountRef) or Failure(ValidationError).

        Example:
            >>> ManagedAccountRef.parse("sysA/acct1", "/")
            Success(value=ManagedAccountRef(system_name='sysA', account_name='acct1', path='sysA/acct1'))
        """
        checked = validate_separator(separator)
        if isinstance(checked, Failure):
            return checked

        segments = path.split(separator)
        if len(segments) != 2:
            return Failure(
                error=ValidationError(
                    code=ErrorCode.INVALID_PATH,
                    message=(
                        f"invalid managed account path, expected exactly one "
                        f"'{separator}' separator"
                    ),
                    field="path",
                    details={"path": path},
                )
            )

        system_name, account_name = (segment.strip() for segment in segments)
        if not system_name or not account_name:
            return Failure(
                error=ValidationError(
                    code=ErrorCode.INVALID_PATH,
                    message="system name and account name must not be empty",
                    field="path",
                    details={"path": path},
                )
            )

        return Success(
            value=cls(system_name=system_name, account_name=account_name, path=path)
        )


@dataclass(frozen=True, slots=True, kw_only=True)
class ManagedAccountIdentity:
    """Numeric identifiers resolved from a ManagedAccountRef.

    Attributes:
        system_id: Managed system id.
        account_id: Managed account id.
    """

    system_id: int
    account_id: int


@dataclass(frozen=True, slots=True, kw_only=True)
class AccessRequest:
    """Server-side lease granting temporary read access to a credential.

    With the "reuse" conflict option the server may hand back a request that
    was already open for the account, so request ids are not necessarily
    fresh per call.

    Attributes:
        request_id: Opaque request identifier returned by the API.
        system_id: Managed system id.
        account_id: Managed account id.
        duration_minutes: Requested lease duration.
        reason: Free-text reason recorded on the request.
        conflict_option: Behaviour when a request is already open.
    """

    request_id: str
    system_id: int
    account_id: int
    duration_minutes: int = DEFAULT_REQUEST_DURATION_MINUTES
    reason: str = DEFAULT_REQUEST_REASON
    conflict_option: str = CONFLICT_OPTION_REUSE

    def __repr__(self) -> str:
        return (
            f"AccessRequest(request_id='****', system_id={self.system_id}, "
            f"account_id={self.account_id})"
        )
