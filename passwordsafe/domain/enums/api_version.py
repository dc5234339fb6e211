"""Password Safe public API versions.

Some endpoints accept different request bodies depending on the API version
the client targets. The version is sent as the `version` query parameter.
"""

from enum import Enum


class ApiVersion(str, Enum):
    """Supported public API versions."""

    V3_0 = "3.0"
    V3_1 = "3.1"
    V3_2 = "3.2"
    V3_3 = "3.3"
