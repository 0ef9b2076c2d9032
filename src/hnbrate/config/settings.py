# src/hnbrate/config/settings.py
"""
Settings - Pydantic-based Configuration Management

Provides centralized configuration management using Pydantic Settings.
Values come from environment variables or an optional .env file.

Files that USE this module:
- hnbrate.app (loads settings for logging, updater and API server)
- hnbrate.adapters.providers.hnb (source URL, timeout and encoding)
- hnbrate.application.cache_updater (refresh interval via from_settings)

Files that this module USES:
- hnbrate.shared.validators (validation functions for settings)
"""

from __future__ import annotations

from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from hnbrate.shared.validators import (
    log_level_value,
    validate_log_level,
    validate_source_url,
)

HNB_REMOTE = "http://www.hnb.hr/tecajn/htecajn.htm"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # --- Remote source ---
    source_url: str = Field(default=HNB_REMOTE, alias="HNB_SOURCE_URL")
    # Charset used when the response does not declare one
    source_encoding: str = Field(default="windows-1250", alias="HNB_SOURCE_ENCODING")

    # --- HTTP Settings ---
    http_timeout_seconds: int = Field(default=10, alias="HTTP_TIMEOUT_SECONDS", ge=1, le=60)

    # --- Scheduling ---
    refresh_interval_minutes: int = Field(default=60, alias="REFRESH_INTERVAL_MINUTES", ge=1, le=1440)

    # --- API server ---
    api_host: str = Field(default="0.0.0.0", alias="API_HOST")
    api_port: int = Field(default=5555, alias="API_PORT", ge=1, le=65535)

    # --- Logging (for server deployment) ---
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_file: Optional[str] = Field(default=None, alias="LOG_FILE")
    log_stdout: bool = Field(default=True, alias="HNBRATE_LOG_STDOUT")
    log_max_bytes: int = Field(default=10 * 1024 * 1024, alias="LOG_MAX_BYTES")  # 10MB
    log_backup_count: int = Field(default=5, alias="LOG_BACKUP_COUNT")

    @property
    def refresh_interval_seconds(self) -> float:
        """Refresh interval of the rate cache in seconds."""
        return float(self.refresh_interval_minutes * 60)

    @property
    def log_level_value(self) -> int:
        """Numeric logging level for logging.basicConfig."""
        return log_level_value(self.log_level)

    @field_validator("source_url")
    @classmethod
    def validate_source_url(cls, v: str) -> str:
        """Validate remote source URL."""
        if not validate_source_url(v):
            raise ValueError("HNB_SOURCE_URL must be an absolute http(s) URL")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate and normalize log level name."""
        if not validate_log_level(v):
            raise ValueError("LOG_LEVEL must be one of DEBUG, INFO, WARNING, ERROR, CRITICAL")
        return v.upper()


# Global settings instance
settings = Settings()
