"""Config package - Application settings and configuration."""

from aribe.config.settings import Settings, get_settings

__all__ = [
    "Settings",
    "get_settings",
]
