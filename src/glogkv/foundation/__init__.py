"""Foundation - Core building blocks for glogkv.

Contains: error handling, config.
"""

from __future__ import annotations

__all__ = [
    # Errors
    "ErrorCode", "LogError", "GlogException", "DeliveryError", "SinkWriteError", "QueueFullError",
    "DeliveryClosedError", "ConfigurationError",
    # Config
    "GlogSettings", "get_settings", "clear_settings_cache",
]


def __getattr__(name: str):
    """Lazy imports to avoid circular dependencies."""
    if name in ("ErrorCode", "LogError", "GlogException", "DeliveryError", "SinkWriteError",
                "QueueFullError", "DeliveryClosedError", "ConfigurationError"):
        from . import errors
        return getattr(errors, name)

    if name in ("GlogSettings", "get_settings", "clear_settings_cache"):
        from . import config
        return getattr(config, name)

    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
