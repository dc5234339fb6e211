"""Outcome of a batch retrieval.

A batch never aborts early: every reference is attempted and failures are
isolated per item. A failed reference is simply absent from `values`; the
caller compares the requested references with `values` (or inspects
`errors`) to find out which items failed.
"""

from dataclasses import dataclass, field

from passwordsafe.core.errors import DomainError


@dataclass(slots=True, kw_only=True)
class BatchResult:
    """Values retrieved by a batch call plus the errors it hit.

    Attributes:
        values: Original reference string -> retrieved value.
        errors: Original reference string -> error for each failed item.
        last_error: Last error encountered, kept for callers that only need
            a single error signal.
    """

    values: dict[str, str] = field(default_factory=dict)
    errors: dict[str, DomainError] = field(default_factory=dict)
    last_error: DomainError | None = None

    def record_success(self, path: str, value: str) -> None:
        self.values[path] = value

    def record_failure(self, path: str, error: DomainError) -> None:
        self.errors[path] = error
        self.last_error = error

    @property
    def is_complete(self) -> bool:
        """True when no item failed."""
        return self.last_error is None

    def __repr__(self) -> str:
        # Values are secrets.
        return (
            f"BatchResult(retrieved={sorted(self.values)}, "
            f"failed={sorted(self.errors)}, last_error={self.last_error!s})"
        )
