"""Configuration package."""

from smartwallet.config.settings import (
    AppSettings,
    ScoringSettings,
    Settings,
    get_settings,
    validate_all_settings,
)

__all__ = [
    "AppSettings",
    "ScoringSettings",
    "Settings",
    "get_settings",
    "validate_all_settings",
]
