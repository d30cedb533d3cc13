"""Configuration management for Tracky."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
import os
import sys

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

APP_DIR_NAME = "tracky_cli"


def default_data_dir() -> Path:
    """Return the per-user configuration directory the state file lives in."""

    if sys.platform.startswith("win"):
        base = os.environ.get("APPDATA") or Path.home() / "AppData" / "Roaming"
    else:
        base = os.environ.get("XDG_CONFIG_HOME") or Path.home() / ".config"
    return Path(base) / APP_DIR_NAME


class TrackySettings(BaseSettings):
    """Runtime configuration sourced from environment variables and optional .env file."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    data_dir: Path = Field(default_factory=default_data_dir, validation_alias="TRACKY_DATA_DIR")
    data_file: str = Field(default="data.json", validation_alias="TRACKY_DATA_FILE")
    log_level: str = Field(default="WARNING", validation_alias="TRACKY_LOG_LEVEL")
    status_log_count: int = Field(default=3, validation_alias="TRACKY_STATUS_LOGS")

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        normalized = value.strip().upper()
        if normalized not in {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}:
            raise ValueError(
                "TRACKY_LOG_LEVEL must be one of CRITICAL, ERROR, WARNING, INFO, DEBUG"
            )
        return normalized

    @field_validator("data_file")
    @classmethod
    def _validate_data_file(cls, value: str) -> str:
        name = value.strip()
        if not name or Path(name).name != name:
            raise ValueError("TRACKY_DATA_FILE must be a plain file name")
        return name

    @field_validator("status_log_count")
    @classmethod
    def _validate_status_log_count(cls, value: int) -> int:
        if value < 1:
            raise ValueError("TRACKY_STATUS_LOGS must be >= 1")
        return value

    @property
    def data_path(self) -> Path:
        return self.data_dir / self.data_file


@lru_cache(maxsize=1)
def get_settings() -> TrackySettings:
    """Return cached settings instance."""

    settings = TrackySettings()
    settings.data_dir = settings.data_dir.expanduser().resolve()
    return settings


__all__ = ["APP_DIR_NAME", "TrackySettings", "default_data_dir", "get_settings"]
