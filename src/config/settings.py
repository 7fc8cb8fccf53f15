# src/config/settings.py - v1
"""Typed configuration loaded from the environment / .env via pydantic-settings.

The exporter process builds one Settings instance and hands it to
``create_reading_cache``. Durations accept seconds ("60") or ISO 8601
("PT1M").
"""

from __future__ import annotations

from datetime import timedelta
from pathlib import Path
from typing import Literal

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ConfigurationError(Exception):
    """Raised when configuration is internally inconsistent."""


class Settings(BaseSettings):
    """Application settings loaded from .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # === smartctl ===
    smartctl_path: str = "smartctl"
    smartctl_interval: timedelta = timedelta(seconds=60)

    # === Fixture mode ===
    smartctl_fake_data: bool = False
    smartctl_fixture_dir: Path = Path("debug")

    # === Collection ===
    collect_max_concurrency: int = 4

    # === Logging ===
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["json", "text"] = "json"
    log_file: Path | None = None
    log_rotation: str = "10MB"
    log_retention: int = 5

    # --- Validators ---

    @field_validator("smartctl_interval", mode="before")
    @classmethod
    def parse_interval_seconds(cls, v: object) -> object:
        """Accept plain seconds ("60", "1.5") from the environment."""
        if isinstance(v, str):
            try:
                return timedelta(seconds=float(v.strip()))
            except ValueError:
                return v
        return v

    @field_validator("smartctl_interval")
    @classmethod
    def validate_interval(cls, v: timedelta) -> timedelta:
        if v < timedelta(0):
            raise ValueError("smartctl_interval must be >= 0")
        return v

    @field_validator("collect_max_concurrency")
    @classmethod
    def validate_concurrency(cls, v: int) -> int:
        if v < 1:
            raise ValueError("collect_max_concurrency must be >= 1")
        return v

    @model_validator(mode="after")
    def validate_config_consistency(self) -> Settings:
        """Cross-field rules."""
        errors: list[str] = []

        if not self.smartctl_fake_data and not self.smartctl_path.strip():
            errors.append("SMARTCTL_PATH is empty and SMARTCTL_FAKE_DATA is off")

        if self.log_retention < 0:
            errors.append("LOG_RETENTION must be >= 0")

        if errors:
            raise ConfigurationError("; ".join(errors))

        return self


def load_settings(**overrides: object) -> Settings:
    """Load settings from .env with optional overrides.

    Raises:
        ConfigurationError: If configuration is internally inconsistent.
    """
    return Settings(**overrides)  # type: ignore[arg-type]
