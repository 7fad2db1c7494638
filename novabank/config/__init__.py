"""Configuration package."""

from novabank.config.settings import (
    AppSettings,
    BankingSettings,
    GeminiSettings,
    Settings,
    get_settings,
    validate_all_settings,
)

__all__ = [
    "AppSettings",
    "BankingSettings",
    "GeminiSettings",
    "Settings",
    "get_settings",
    "validate_all_settings",
]
