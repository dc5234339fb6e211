"""Domain enums package.

Usage:
    from passwordsafe.domain.enums import ApiVersion, ReleaseStage
"""

from passwordsafe.domain.enums.api_version import ApiVersion
from passwordsafe.domain.enums.managed_system_target import ManagedSystemTarget
from passwordsafe.domain.enums.release_stage import ReleaseStage
from passwordsafe.domain.enums.secret_type import SecretType

__all__ = [
    "ApiVersion",
    "ManagedSystemTarget",
    "ReleaseStage",
    "SecretType",
]
