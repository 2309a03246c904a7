"""
Configuration Management for Ledgerline

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
Every setting has a working default, so a fresh install needs no
environment at all.
"""

import logging
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


DATA_DIR_NAME = ".ledgerline"
DATA_FILE_NAME = "expenses.json"


class AppSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from LEDGERLINE_* environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="LEDGERLINE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Storage
    data_dir: Optional[Path] = Field(
        default=None,
        description="Directory holding the expense document (defaults to ~/.ledgerline)"
    )
    json_indent: int = Field(
        default=2,
        ge=0,
        le=8,
        description="Indentation used when writing the expense document"
    )

    # Diagnostics
    log_level: str = Field(
        default="WARNING",
        description="Minimum level for diagnostic logs on stderr"
    )

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Accept any standard logging level name, case-insensitively."""
        level = v.strip().upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level: {v}")
        return level

    @property
    def data_file_path(self) -> Path:
        """Resolve the expense document path. Pure: no filesystem access."""
        directory = self.data_dir or Path.home() / DATA_DIR_NAME
        return directory / DATA_FILE_NAME

    @property
    def log_level_number(self) -> int:
        """Get the numeric logging level."""
        return logging.getLevelNamesMapping()[self.log_level]


class Settings(BaseSettings):
    """
    Root settings container.

    Aggregates all sub-settings for easy access.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    @property
    def app(self) -> AppSettings:
        return AppSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Uses LRU cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()
