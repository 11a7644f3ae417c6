"""Verdict returned by the remote structural validator."""

from pydantic import BaseModel, ConfigDict


class ValidationVerdict(BaseModel):
    """Advisory result of ``validate_csv``."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    is_valid: bool
    message: str = ""
