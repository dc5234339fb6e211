"""Managed system payloads, one model per target and API version.

The body accepted by `POST <Target>/{id}/ManagedSystems` depends on the parent
resource and on the API version. Every supported combination maps to exactly
one model in MANAGED_SYSTEM_PAYLOADS; a combination missing from the table is
not supported.

Version differences:
    - 3.0: base fields
    - 3.1: adds RemoteClientType
    - 3.2: adds ApplicationHostID and IsApplicationHost
    - 3.3: workgroup payload only, same fields as 3.2
Database-parented managed systems have a single payload for every version.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from passwordsafe.domain.enums import ApiVersion, ManagedSystemTarget

ChangeFrequencyType = Literal["first", "last", "xdays"]


class _ManagedSystemPayload(BaseModel):
    """Fields shared by every managed system payload."""

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    contact_email: str | None = Field(default=None, max_length=1000, alias="ContactEmail")
    description: str | None = Field(default=None, max_length=255, alias="Description")
    timeout: int = Field(default=30, ge=1, alias="Timeout")
    password_rule_id: int = Field(default=0, ge=0, alias="PasswordRuleID")
    release_duration: int = Field(..., ge=1, le=525600, alias="ReleaseDuration")
    max_release_duration: int = Field(..., ge=1, le=525600, alias="MaxReleaseDuration")
    isa_release_duration: int = Field(..., ge=1, le=525600, alias="ISAReleaseDuration")
    auto_management_flag: bool = Field(default=False, alias="AutoManagementFlag")
    functional_account_id: int = Field(default=0, ge=0, alias="FunctionalAccountID")
    check_password_flag: bool = Field(default=False, alias="CheckPasswordFlag")
    change_password_after_any_release_flag: bool = Field(
        default=False, alias="ChangePasswordAfterAnyReleaseFlag"
    )
    reset_password_on_mismatch_flag: bool = Field(
        default=False, alias="ResetPasswordOnMismatchFlag"
    )
    change_frequency_type: ChangeFrequencyType = Field(
        default="first", alias="ChangeFrequencyType"
    )
    change_frequency_days: int = Field(default=1, ge=1, le=999, alias="ChangeFrequencyDays")
    change_time: str = Field(
        default="00:00", pattern=r"^([01]\d|2[0-3]):[0-5]\d$", alias="ChangeTime"
    )

    def to_wire(self) -> dict:
        """Serialize with API field names."""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


# =============================================================================
# Asset-parented payloads
# =============================================================================


class ManagedSystemByAssetV30(_ManagedSystemPayload):
    platform_id: int = Field(..., ge=1, alias="PlatformID")
    port: int | None = Field(default=None, ge=1, le=65535, alias="Port")
    ssh_key_enforcement_mode: int = Field(default=0, ge=0, le=2, alias="SshKeyEnforcementMode")
    dss_key_rule_id: int = Field(default=0, ge=0, alias="DSSKeyRuleID")
    login_account_id: int = Field(default=0, ge=0, alias="LoginAccountID")
    elevation_command: str | None = Field(default=None, alias="ElevationCommand")


class ManagedSystemByAssetV31(ManagedSystemByAssetV30):
    remote_client_type: Literal["None", "EPM"] = Field(default="None", alias="RemoteClientType")


class ManagedSystemByAssetV32(ManagedSystemByAssetV31):
    application_host_id: int | None = Field(default=None, ge=1, alias="ApplicationHostID")
    is_application_host: bool = Field(default=False, alias="IsApplicationHost")


# =============================================================================
# Workgroup-parented payloads
# =============================================================================


class ManagedSystemByWorkgroupV30(ManagedSystemByAssetV30):
    entity_type_id: int = Field(..., ge=1, alias="EntityTypeID")
    host_name: str = Field(..., min_length=1, max_length=128, alias="HostName")
    ip_address: str | None = Field(default=None, alias="IPAddress")
    dns_name: str | None = Field(default=None, max_length=225, alias="DnsName")
    instance_name: str | None = Field(default=None, max_length=100, alias="InstanceName")
    is_default_instance: bool = Field(default=False, alias="IsDefaultInstance")
    template: str | None = Field(default=None, alias="Template")
    forest_name: str | None = Field(default=None, max_length=64, alias="ForestName")
    use_ssl: bool = Field(default=False, alias="UseSSL")
    net_bios_name: str | None = Field(default=None, max_length=15, alias="NetBiosName")
    account_name_format: int = Field(default=0, ge=0, le=2, alias="AccountNameFormat")
    oracle_internet_directory_id: str | None = Field(
        default=None, alias="OracleInternetDirectoryID"
    )
    oracle_internet_directory_service_name: str | None = Field(
        default=None, max_length=200, alias="OracleInternetDirectoryServiceName"
    )
    access_url: str | None = Field(default=None, alias="AccessURL")


class ManagedSystemByWorkgroupV31(ManagedSystemByWorkgroupV30):
    remote_client_type: Literal["None", "EPM"] = Field(default="None", alias="RemoteClientType")


class ManagedSystemByWorkgroupV32(ManagedSystemByWorkgroupV31):
    application_host_id: int | None = Field(default=None, ge=1, alias="ApplicationHostID")
    is_application_host: bool = Field(default=False, alias="IsApplicationHost")


# =============================================================================
# Database-parented payload
# =============================================================================


class ManagedSystemByDatabase(_ManagedSystemPayload):
    pass


MANAGED_SYSTEM_PAYLOADS: dict[
    tuple[ManagedSystemTarget, ApiVersion], type[_ManagedSystemPayload]
] = {
    (ManagedSystemTarget.ASSET, ApiVersion.V3_0): ManagedSystemByAssetV30,
    (ManagedSystemTarget.ASSET, ApiVersion.V3_1): ManagedSystemByAssetV31,
    (ManagedSystemTarget.ASSET, ApiVersion.V3_2): ManagedSystemByAssetV32,
    (ManagedSystemTarget.WORKGROUP, ApiVersion.V3_0): ManagedSystemByWorkgroupV30,
    (ManagedSystemTarget.WORKGROUP, ApiVersion.V3_1): ManagedSystemByWorkgroupV31,
    (ManagedSystemTarget.WORKGROUP, ApiVersion.V3_2): ManagedSystemByWorkgroupV32,
    (ManagedSystemTarget.WORKGROUP, ApiVersion.V3_3): ManagedSystemByWorkgroupV32,
    **{
        (ManagedSystemTarget.DATABASE, version): ManagedSystemByDatabase
        for version in ApiVersion
    },
}
"""(target, API version) -> payload model."""


class ManagedSystemResponse(BaseModel):
    """Managed system as returned by create and list endpoints."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    managed_system_id: int = Field(..., alias="ManagedSystemID")
    entity_type_id: int | None = Field(default=None, alias="EntityTypeID")
    asset_id: int | None = Field(default=None, alias="AssetID")
    database_id: int | None = Field(default=None, alias="DatabaseID")
    workgroup_id: int | None = Field(default=None, alias="WorkgroupID")
    host_name: str | None = Field(default=None, alias="HostName")
    system_name: str | None = Field(default=None, alias="SystemName")
    platform_id: int | None = Field(default=None, alias="PlatformID")
    port: int | None = Field(default=None, alias="Port")
