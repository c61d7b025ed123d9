"""Configuration package."""

from tripboard.config.settings import (
    AppSettings,
    GoogleSheetsSettings,
    Settings,
    WeatherSettings,
    get_settings,
    validate_all_settings,
)

__all__ = [
    "AppSettings",
    "GoogleSheetsSettings",
    "Settings",
    "WeatherSettings",
    "get_settings",
    "validate_all_settings",
]
