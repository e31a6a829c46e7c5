"""Runtime services: telemetry and environment settings."""

from .config import Settings, get_settings, load_settings, reset_settings

__all__ = [
    "Settings",
    "get_settings",
    "load_settings",
    "reset_settings",
]
