"""Configuration management using pydantic-settings.

Provides environment-based configuration with type safety and validation.
"""

from .settings import GlogSettings, clear_settings_cache, get_settings

__all__ = ["GlogSettings", "clear_settings_cache", "get_settings"]
