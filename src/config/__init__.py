"""Configuration package."""

from src.config.settings import (
    AppSettings,
    ProjectionSettings,
    Settings,
    TaxSettings,
    get_settings,
    validate_all_settings,
)

__all__ = [
    "AppSettings",
    "ProjectionSettings",
    "Settings",
    "TaxSettings",
    "get_settings",
    "validate_all_settings",
]
