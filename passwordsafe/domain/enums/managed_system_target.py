"""Parent resource a managed system is created under."""

from enum import Enum


class ManagedSystemTarget(str, Enum):
    """Parent resource of a new managed system."""

    ASSET = "Assets"
    WORKGROUP = "Workgroups"
    DATABASE = "Databases"
