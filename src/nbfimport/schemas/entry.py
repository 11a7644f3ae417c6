"""Schemas for normalized records and the backend request body."""

import math

from pydantic import BaseModel, ConfigDict, field_validator


class Entry(BaseModel):
    """One normalized CSV record."""

    model_config = ConfigDict(frozen=True)

    date: str = ""
    metric: str = ""
    value: float = 0.0
    unit: str | None = None

    @field_validator("value")
    @classmethod
    def finite_value(cls, v: float) -> float:
        """Non-finite values collapse to zero."""
        return v if math.isfinite(v) else 0.0


class ImportPayload(BaseModel):
    """Body of ``POST /api/import``."""

    entries: list[Entry]
