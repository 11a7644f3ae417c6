"""Pydantic schemas and result types shared across the pipeline."""

from nbfimport.schemas.entry import Entry, ImportPayload
from nbfimport.schemas.outcome import ImportOutcome, OutcomeKind
from nbfimport.schemas.verdict import ValidationVerdict

__all__ = [
    "Entry",
    "ImportPayload",
    "ImportOutcome",
    "OutcomeKind",
    "ValidationVerdict",
]
