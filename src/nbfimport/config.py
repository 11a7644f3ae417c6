"""Application configuration using Pydantic Settings."""

from functools import lru_cache
from typing import Literal

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Import pipeline settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_prefix="NBF_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "NBF Import"
    app_version: str = "0.1.0"
    debug: bool = False
    environment: Literal["development", "staging", "production"] = "development"
    log_level: str = "INFO"

    # Native shell
    user_agent_marker: str = "NBFAPP"
    max_read_bytes: int = Field(default=2_000_000, gt=0)

    # Backend
    backend_url: str = "http://localhost:3000"
    import_path: str = "/api/import"
    csrf_header: str = "x-csrf-token"
    csrf_token: SecretStr | None = None
    request_timeout: float = 30.0  # seconds

    # Pipeline phases
    validate_enabled: bool = True
    submit_enabled: bool = True

    @field_validator("backend_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Paths are joined onto the base URL with a leading slash."""
        return v.rstrip("/")

    @field_validator("import_path")
    @classmethod
    def ensure_leading_slash(cls, v: str) -> str:
        return v if v.startswith("/") else f"/{v}"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.environment == "production"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
