"""Centralized configuration using Pydantic Settings.

All settings can be overridden via environment variables. Clinical
thresholds are deliberately not configurable; they live as constants in
the engine modules.
"""

from __future__ import annotations

import os
from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Skip reading .env file during testing to use code defaults
ENV_FILE = None if os.environ.get("TESTING") else ".env"
ENV_FILE_ENCODING = "utf-8"


class TriageSettings(BaseSettings):
    """Triage service configuration."""

    model_config = SettingsConfigDict(
        env_prefix="TRIAGE_",
        env_file=ENV_FILE,
        env_file_encoding=ENV_FILE_ENCODING,
        extra="ignore",
    )

    log_trace: bool = Field(
        default=False,
        description="Log every fired rule at debug level",
    )
    hesitating_max_representations: int = Field(
        default=7,
        ge=0,
        description="Reports with at most this many representations are hesitating",
    )
    hesitating_max_scores: int = Field(
        default=5,
        ge=0,
        description="Reports with at most this many evaluation scores are hesitating",
    )


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(
        env_prefix="LOG_",
        env_file=ENV_FILE,
        env_file_encoding=ENV_FILE_ENCODING,
        extra="ignore",
    )

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Minimum log level",
    )
    format: Literal["json", "console"] = Field(
        default="json",
        description="Log output format",
    )
    include_timestamp: bool = Field(default=True)
    include_caller: bool = Field(default=True)


class Settings(BaseSettings):
    """Root settings combining all configuration groups."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE,
        env_file_encoding=ENV_FILE_ENCODING,
        env_nested_delimiter="__",
        extra="ignore",
    )

    triage: TriageSettings = Field(default_factory=TriageSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings singleton."""
    return Settings()


def get_triage_settings() -> TriageSettings:
    """Get triage settings."""
    return get_settings().triage
