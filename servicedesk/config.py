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
        default="sqlite:///./servicedesk.db",
        description="Database connection URL used by SQLAlchemy to connect to the DB",
        min_length=1,
    )
    secret_key: str = Field(
        default="change-me",
        description="Secret key for signing JWT tokens",
        min_length=1,
    )
    access_token_expire_minutes: int = Field(
        default=60,
        description="Number of minutes before access tokens expire",
        gt=0,
    )
    app_timezone: str | None = Field(
        default=None,
        description="IANA timezone name or UTC offset used for timestamps",
    )
    notification_list_limit: int = Field(
        default=50,
        description="Maximum number of notifications returned per user, newest first",
        gt=0,
    )
    notification_exclude_actor: bool = Field(
        default=True,
        description="Skip the user who triggered an event when fanning out notifications",
    )
    client_poll_interval_seconds: float = Field(
        default=30.0,
        description="Seconds between background refreshes of the client notification cache",
        gt=0,
    )
    log_level: str = Field(default="INFO", description="Root logging level")


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()


def reset_settings_cache() -> None:
    """Clear the settings cache to force reloading from the environment."""

    get_settings.cache_clear()


__all__ = ["Settings", "get_settings", "reset_settings_cache"]
