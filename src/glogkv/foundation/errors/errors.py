"""Standardized error handling for log delivery and configuration.

Provides error codes and a structured error model carried by every exception
the package raises. Uses Pydantic for validation and serialization.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Annotated, Self

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator


class ErrorCode(StrEnum):
    """Error codes for logging failures.

    Used by callers to decide whether to retry, degrade, or abort.
    """
    SINK_WRITE_FAILED = "SINK_WRITE_FAILED"
    QUEUE_FULL = "QUEUE_FULL"
    DELIVERY_CLOSED = "DELIVERY_CLOSED"
    INVALID_FILTER = "INVALID_FILTER"


_RESOURCE_CODES: frozenset[ErrorCode] = frozenset({
    ErrorCode.SINK_WRITE_FAILED,
    ErrorCode.QUEUE_FULL,
    ErrorCode.DELIVERY_CLOSED,
})


class LogError(BaseModel):
    """Structured error for logging failures.

    Attributes:
        message: Human-readable error message
        code: Machine-readable error code
        details: Optional detail (original exception text, offending directive)
    """

    model_config = ConfigDict(
        frozen=True,
        str_strip_whitespace=True,
        validate_default=True,
        json_schema_extra={
            "title": "Log Error",
            "examples": [{"message": "sink write failed: [Errno 32] Broken pipe", "code": "SINK_WRITE_FAILED"}],
        },
    )

    message: Annotated[str, Field(min_length=1, description="Human-readable error message")]
    code: ErrorCode
    details: str | None = Field(default=None, description="Optional detail text")

    @field_validator("message", mode="before")
    @classmethod
    def _ensure_message(cls, v: str | Exception) -> str:
        """Accept Exception objects and extract message."""
        return (str(v) or type(v).__name__) if isinstance(v, Exception) else v

    @computed_field
    @property
    def is_resource_error(self) -> bool:
        """Whether the failure came from the sink or the delivery queue."""
        return self.code in _RESOURCE_CODES

    def render(self) -> str:
        return f"[{self.code}] {self.message}" + (f" ({self.details})" if self.details else "")

    __str__ = render


class GlogException(Exception):
    """Base exception wrapping a LogError."""

    code: ErrorCode = ErrorCode.SINK_WRITE_FAILED

    def __init__(self, error: LogError) -> None:
        self.error = error
        super().__init__(error.message)

    @classmethod
    def create(cls, message: str, *, details: str | None = None) -> Self:
        return cls(LogError(message=message, code=cls.code, details=details))

    @classmethod
    def from_exc(cls, exc: BaseException, context: str = "") -> Self:
        """Wrap a lower-level exception, keeping its text as details."""
        text = str(exc) or type(exc).__name__
        return cls(LogError(
            message=f"{context}: {text}" if context else text,
            code=cls.code,
            details=type(exc).__name__,
        ))


class DeliveryError(GlogException):
    """A record could not be delivered to the sink."""


class SinkWriteError(DeliveryError):
    code = ErrorCode.SINK_WRITE_FAILED


class QueueFullError(DeliveryError):
    code = ErrorCode.QUEUE_FULL


class DeliveryClosedError(DeliveryError):
    code = ErrorCode.DELIVERY_CLOSED


class ConfigurationError(GlogException, ValueError):
    """Invalid filter or settings, raised at construction time."""

    code = ErrorCode.INVALID_FILTER
