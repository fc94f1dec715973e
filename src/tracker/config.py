"""Configuration for the tracker CLI."""

from __future__ import annotations

from functools import lru_cache

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_BASE_URL = "https://api.track.toggl.com/api/v9"


class TrackerSettings(BaseSettings):
    """Runtime configuration sourced from environment variables and optional .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # Older revisions of the tool read TOGGL_API_TOKEN
    api_token: str | None = Field(
        default=None,
        validation_alias=AliasChoices("TOGGL_TRACK_TOKEN", "TOGGL_API_TOKEN"),
    )
    base_url: str = Field(default=DEFAULT_BASE_URL, validation_alias="TRACKER_BASE_URL")
    workspace_id: int | None = Field(default=None, validation_alias="TRACKER_WORKSPACE_ID")
    created_with: str = Field(default="tracker CLI", validation_alias="TRACKER_CREATED_WITH")
    timeout: float | None = Field(default=None, validation_alias="TRACKER_TIMEOUT")
    log_level: str = Field(default="WARNING", validation_alias="TRACKER_LOG_LEVEL")

    @field_validator("api_token")
    @classmethod
    def _blank_token_is_unset(cls, value: str | None) -> str | None:
        if value is None or not value.strip():
            return None
        return value.strip()

    @field_validator("base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @field_validator("workspace_id")
    @classmethod
    def _validate_workspace_id(cls, value: int | None) -> int | None:
        if value is not None and value < 0:
            raise ValueError("TRACKER_WORKSPACE_ID must be >= 0")
        return value

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        normalized = value.strip().upper()
        if normalized not in {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}:
            raise ValueError(
                "TRACKER_LOG_LEVEL must be one of CRITICAL, ERROR, WARNING, INFO, DEBUG"
            )
        return normalized


@lru_cache(maxsize=1)
def get_settings() -> TrackerSettings:
    """Return cached settings instance."""
    return TrackerSettings()


__all__ = ["DEFAULT_BASE_URL", "TrackerSettings", "get_settings"]
