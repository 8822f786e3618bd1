"""Configuration: settings tree and structured logging."""

from src.config.logging import configure_logging, get_logger
from src.config.settings import (
    PricingSettings,
    Settings,
    StorageSettings,
    get_settings,
    reset_settings,
)

__all__ = [
    "Settings",
    "PricingSettings",
    "StorageSettings",
    "get_settings",
    "reset_settings",
    "configure_logging",
    "get_logger",
]
