"""Secrets Safe secret reference.

Secrets are addressed by a folder path plus a title, written as a single
string whose last segment is the title: "folder/sub/title".
"""

from dataclasses import dataclass

from passwordsafe.core.enums import ErrorCode
from passwordsafe.core.errors import ValidationError
from passwordsafe.core.result import Failure, Result, Success
from passwordsafe.domain.validators import validate_separator


@dataclass(frozen=True, slots=True, kw_only=True)
class SecretRef:
    """Caller-supplied reference to a Secrets Safe secret.

    Attributes:
        folder_path: Folder path (may itself contain separators).
        title: Secret title.
        path: Original reference string; used as the result key.
    """

    folder_path: str
    title: str
    path: str

    @classmethod
    def parse(cls, path: str, separator: str) -> Result["SecretRef", ValidationError]:
        """Split `path` into folder path and title on the last separator."""
        checked = validate_separator(separator)
        if isinstance(checked, Failure):
            return checked

        folder_path, sep, title = path.rpartition(separator)
        folder_path = folder_path.strip()
        title = title.strip()

        if not sep or not folder_path or not title:
            return Failure(
                error=ValidationError(
                    code=ErrorCode.INVALID_PATH,
                    message=(
                        f"invalid secret path, expected '<path>{separator}<title>'"
                    ),
                    field="path",
                    details={"path": path},
                )
            )

        return Success(value=cls(folder_path=folder_path, title=title, path=path))
