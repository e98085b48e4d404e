"""Application configuration settings."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE = ".env"
ENV_FILE_ENCODING = "utf-8"


class Settings(BaseSettings):
    """Application configuration values loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE, env_file_encoding=ENV_FILE_ENCODING, extra="ignore"
    )

    database_url: str = Field(
        default="sqlite:///./notifications.db",
        description="Database connection URL used by SQLAlchemy to connect to the DB",
        min_length=1,
    )
    app_timezone: str = Field(
        default="UTC",
        description="IANA timezone name or UTC offset used for timestamps",
    )
    log_level: str = Field(default="INFO", description="Root logging level")
    notification_list_limit: int = Field(
        default=50,
        description="Maximum number of notifications returned by list endpoints",
        gt=0,
    )
    suggested_actions_limit: int = Field(
        default=7,
        description="Maximum number of suggested actions surfaced to a user",
        gt=0,
    )
    cleanup_batch_size: int = Field(
        default=50,
        description="Number of notifications deleted per batch during cleanup",
        gt=0,
    )
    cors_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:5173"],
        description="Origins allowed to call the API from a browser",
    )


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()


def reset_settings_cache() -> None:
    """Clear the settings cache to force reloading from the environment."""

    get_settings.cache_clear()


__all__ = ["Settings", "get_settings", "reset_settings_cache"]
