"""Configuration package."""

from ledgerline.config.settings import (
    AppSettings,
    Settings,
    get_settings,
)

__all__ = [
    "AppSettings",
    "Settings",
    "get_settings",
]
