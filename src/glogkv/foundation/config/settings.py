"""Environment-based configuration using pydantic-settings.

Provides type-safe, validated configuration from environment variables
with sensible defaults. Supports .env files.

Example:
    >>> from glogkv.foundation.config import get_settings
    >>> settings = get_settings()
    >>> settings.log
    'info'
    >>> settings.chan_size
    128

    # Or with environment variables:
    # GLOGKV_LOG=warn,app.db=debug
    # GLOGKV_ASYNC_DELIVERY=true
    # GLOGKV_CHAN_SIZE=1024
"""

from __future__ import annotations

from functools import lru_cache
from typing import TYPE_CHECKING, Literal

from pydantic import Field, PositiveFloat, PositiveInt, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

if TYPE_CHECKING:
    from glogkv.runtime.logging.filter import DirectiveFilter


class GlogSettings(BaseSettings):
    """Root settings for glogkv loggers.

    Loads configuration from environment variables with GLOGKV_ prefix.

    Example environment variables:
        GLOGKV_LOG=debug
        GLOGKV_ASYNC_DELIVERY=true
        GLOGKV_CHAN_SIZE=256
        GLOGKV_PUT_TIMEOUT=2.5
        GLOGKV_OUTPUT=stderr
    """

    model_config = SettingsConfigDict(
        env_prefix="GLOGKV_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        validate_default=True,
    )

    log: str = Field(default="info", description="Filter directives, e.g. 'warn,app.db=debug'")
    async_delivery: bool = Field(default=False, description="Render and write on a background worker")
    chan_size: PositiveInt = Field(default=128, description="Async queue capacity")
    put_timeout: PositiveFloat | None = Field(default=None, description="Max seconds to wait on a full queue")
    output: Literal["stdout", "stderr"] = "stdout"

    @field_validator("log")
    @classmethod
    def _check_directives(cls, v: str) -> str:
        """Reject malformed directive specs at load time."""
        from glogkv.runtime.logging.filter import DirectiveFilter
        DirectiveFilter.parse(v)  # ConfigurationError is a ValueError, surfaced as ValidationError
        return v

    @field_validator("output", mode="before")
    @classmethod
    def _normalize_output(cls, v: str) -> str:
        return v.strip().lower() if isinstance(v, str) else v

    def build_filter(self) -> DirectiveFilter:
        """Severity filter described by ``log``."""
        from glogkv.runtime.logging.filter import DirectiveFilter
        return DirectiveFilter.parse(self.log)


# Singleton pattern for settings
@lru_cache(maxsize=1)
def get_settings() -> GlogSettings:
    """Get the global settings instance (cached)."""
    return GlogSettings()


def clear_settings_cache() -> None:
    """Clear the settings cache (useful for testing).

    After calling this, the next get_settings() call will
    reload configuration from environment.
    """
    get_settings.cache_clear()
