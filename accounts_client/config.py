"""Client configuration using pydantic-settings."""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ClientSettings(BaseSettings):
    """Client settings loaded from ``ACCOUNTS_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="ACCOUNTS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Accounts API
    api_url: str = "http://localhost:8080/v1"
    request_timeout: float = Field(default=60.0, gt=0)

    # Observability
    log_level: str = "INFO"

    @field_validator("api_url", mode="before")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Endpoint paths are appended verbatim, so drop a trailing slash."""
        if isinstance(v, str):
            return v.rstrip("/")
        return v


@lru_cache
def get_settings() -> ClientSettings:
    """Get cached settings instance."""
    return ClientSettings()
