"""Secrets Safe secret types."""

from enum import Enum


class SecretType(str, Enum):
    """Type of a Secrets Safe secret.

    FILE secrets carry their value as a downloadable attachment; the other
    types carry it in the Password field.
    """

    TEXT = "text"
    CREDENTIAL = "credential"
    FILE = "file"

    @classmethod
    def parse(cls, value: str | None) -> "SecretType":
        """Case-insensitive lookup; unknown values are treated as TEXT."""
        try:
            return cls((value or "").lower())
        except ValueError:
            return cls.TEXT
