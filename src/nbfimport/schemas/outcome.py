"""Outcome of a single pipeline run."""

from dataclasses import dataclass
from enum import Enum


class OutcomeKind(str, Enum):
    """Import outcome variants."""

    CANCELLED = "cancelled"
    SUCCEEDED = "succeeded"
    REJECTED_INVALID = "rejected_invalid"
    FAILED = "failed"


@dataclass(frozen=True)
class ImportOutcome:
    """Tagged result reported to the user. Exactly one per run."""

    kind: OutcomeKind
    message: str | None = None
    error: Exception | None = None
    entries_submitted: int = 0

    @classmethod
    def cancelled(cls) -> "ImportOutcome":
        return cls(kind=OutcomeKind.CANCELLED)

    @classmethod
    def succeeded(cls, message: str, entries_submitted: int = 0) -> "ImportOutcome":
        return cls(
            kind=OutcomeKind.SUCCEEDED,
            message=message,
            entries_submitted=entries_submitted,
        )

    @classmethod
    def rejected(cls, message: str) -> "ImportOutcome":
        return cls(kind=OutcomeKind.REJECTED_INVALID, message=message)

    @classmethod
    def failed(cls, error: Exception) -> "ImportOutcome":
        return cls(kind=OutcomeKind.FAILED, message=str(error), error=error)

    @property
    def is_error(self) -> bool:
        """Check whether the run ended in rejection or failure."""
        return self.kind in (OutcomeKind.REJECTED_INVALID, OutcomeKind.FAILED)
