"""Managed system creation, listing and deletion.

A managed system is created under an asset, a workgroup or a database. The
request body depends on that parent and on the API version of the session;
the model is picked from MANAGED_SYSTEM_PAYLOADS and the caller's mapping is
validated against it before anything is sent.
"""

from collections.abc import Mapping
from typing import Any

import pydantic
import structlog

from passwordsafe.application.authentication import PasswordSafeSession
from passwordsafe.application.errors import validation_failure
from passwordsafe.core.constants import MANAGED_SYSTEMS_PATH
from passwordsafe.core.enums import ErrorCode
from passwordsafe.core.errors import DomainError, ValidationError
from passwordsafe.core.result import Failure, Result, Success
from passwordsafe.domain.enums import ApiVersion, ManagedSystemTarget
from passwordsafe.domain.errors import BusinessError
from passwordsafe.domain.protocols import LoggerProtocol
from passwordsafe.domain.validators import validate_resource_id
from passwordsafe.schemas import MANAGED_SYSTEM_PAYLOADS, ManagedSystemResponse


class ManagedSystemService:
    """Creates, lists and deletes managed systems.

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

    @property
    def api_version(self) -> ApiVersion:
        """Version used to pick payload models; 3.0 when the session has none."""
        return self.session.api_version or ApiVersion.V3_0

    def build_payload(
        self,
        target: ManagedSystemTarget,
        details: Mapping[str, Any],
    ) -> Result[dict[str, Any], ValidationError]:
        """Validate `details` against the model for (target, API version).

        Args:
            target: Parent resource type.
            details: Payload fields, by API name or snake_case name.

        Returns:
            Success(dict) with API field names, or Failure(ValidationError).
        """
        model = MANAGED_SYSTEM_PAYLOADS.get((target, self.api_version))
        if model is None:
            return Failure(
                error=ValidationError(
                    code=ErrorCode.UNSUPPORTED_API_VERSION,
                    message=(
                        f"managed systems under {target.value} are not supported "
                        f"by API version {self.api_version.value}"
                    ),
                    field="api_version",
                )
            )

        try:
            payload = model.model_validate(dict(details))
        except pydantic.ValidationError as e:
            return validation_failure(e, field="details")

        return Success(value=payload.to_wire())

    async def create_by_asset_id(
        self, asset_id: str | int, details: Mapping[str, Any]
    ) -> Result[ManagedSystemResponse, DomainError]:
        return await self._create(ManagedSystemTarget.ASSET, asset_id, details)

    async def create_by_workgroup_id(
        self, workgroup_id: str | int, details: Mapping[str, Any]
    ) -> Result[ManagedSystemResponse, DomainError]:
        return await self._create(ManagedSystemTarget.WORKGROUP, workgroup_id, details)

    async def create_by_database_id(
        self, database_id: str | int, details: Mapping[str, Any]
    ) -> Result[ManagedSystemResponse, DomainError]:
        return await self._create(ManagedSystemTarget.DATABASE, database_id, details)

    async def _create(
        self,
        target: ManagedSystemTarget,
        parent_id: str | int,
        details: Mapping[str, Any],
    ) -> Result[ManagedSystemResponse, DomainError]:
        resource = target.value.removesuffix("s")
        parent = validate_resource_id(str(parent_id), resource)
        if isinstance(parent, Failure):
            return parent

        payload = self.build_payload(target, details)
        if isinstance(payload, Failure):
            return payload

        if (failure := self.session.ensure_authenticated()) is not None:
            return failure

        operation = f"CreateManagedSystemBy{resource}Id"
        result = await self.session.execute(
            method="POST",
            url=self.session.url(target.value, parent.value, MANAGED_SYSTEMS_PATH),
            operation=operation,
            json_body=payload.value,
            api_version=self.session.api_version,
        )
        if isinstance(result, Failure):
            return result

        try:
            created = ManagedSystemResponse.model_validate_json(result.value.content)
        except ValueError as e:
            self._logger.error("Invalid managed system response", operation=operation)
            return Failure(
                error=BusinessError(
                    code=ErrorCode.INVALID_RESPONSE,
                    message=f"invalid managed system response: {e}",
                    operation=operation,
                    status_code=result.value.status_code,
                    response_body=result.value.text,
                )
            )

        self._logger.info(
            "Managed system created",
            managed_system_id=created.managed_system_id,
            target=target.value,
        )
        return Success(value=created)

    async def list_managed_systems(self) -> Result[list[ManagedSystemResponse], DomainError]:
        """List managed systems; an empty list is a business error."""
        if (failure := self.session.ensure_authenticated()) is not None:
            return failure

        result = await self.session.get_general_list(
            MANAGED_SYSTEMS_PATH,
            operation="GetManagedSystemsList",
            empty_message="empty managed systems list",
            api_version=self.session.api_version,
        )
        if isinstance(result, Failure):
            return result

        try:
            systems = [ManagedSystemResponse.model_validate(item) for item in result.value]
        except ValueError as e:
            return Failure(
                error=BusinessError(
                    code=ErrorCode.INVALID_RESPONSE,
                    message=f"invalid managed systems list: {e}",
                    operation="GetManagedSystemsList",
                )
            )
        return Success(value=systems)

    async def delete_managed_system(
        self, managed_system_id: str | int
    ) -> Result[None, DomainError]:
        """Delete a managed system by id."""
        validated = validate_resource_id(str(managed_system_id), "ManagedSystem")
        if isinstance(validated, Failure):
            return validated

        if (failure := self.session.ensure_authenticated()) is not None:
            return failure

        result = await self.session.execute(
            method="DELETE",
            url=self.session.url(MANAGED_SYSTEMS_PATH, validated.value),
            operation="DeleteManagedSystem",
        )
        if isinstance(result, Failure):
            return result

        self._logger.info("Managed system deleted", managed_system_id=validated.value)
        return Success(value=None)
