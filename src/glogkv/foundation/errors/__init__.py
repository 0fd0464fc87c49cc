"""Error handling for glogkv.

- ErrorCode: Standard error codes for logging failures
- LogError: Structured error model
- GlogException and subclasses: raised for delivery and configuration failures
"""

from .errors import (
    ConfigurationError,
    DeliveryClosedError,
    DeliveryError,
    ErrorCode,
    GlogException,
    LogError,
    QueueFullError,
    SinkWriteError,
)

__all__ = [
    "ErrorCode", "LogError",
    "GlogException", "DeliveryError", "SinkWriteError", "QueueFullError", "DeliveryClosedError",
    "ConfigurationError",
]
