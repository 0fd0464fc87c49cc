"""glogkv - Glog-style rendering for structured log records.

Each log call carries a message and ordered key-value attributes. A
categorizer decides, per key, whether the attribute is dropped, inlined into
the message line, or printed on its own line at a level of its own. Lines
are written through a lock (sync) or a bounded queue with one worker (async).

Quick Start:
    >>> from glogkv import set_default_global_logger
    >>> from glogkv.prelude import info, error
    >>>
    >>> guard = set_default_global_logger(async_delivery=True, chan_size=1024)
    >>> info("Test log %d", 1, tau=6.28)
    # I1021 13:32:13.346775 123145517920256 app/main.py:7] Test log 1 tau=6.28
    >>> guard.release()  # drains the queue

Error chains:
    >>> from glogkv import error_kv
    >>> try:
    ...     load()
    ... except Exception as e:
    ...     error("load failed", **error_kv(e))
    # E1021 ... app/main.py:12] load failed Root cause=FileNotFoundError: ...
    # E1021 ... app/main.py:12] Error: RuntimeError: config unavailable
    # D1021 ... app/main.py:12] Caused by: FileNotFoundError: ...     (only with debug enabled)
    # T1021 ... app/main.py:12] Originated in:   File ...           (only with trace enabled)

Configuration (environment):
    GLOGKV_LOG=warn,app.db=debug  GLOGKV_ASYNC_DELIVERY=true  GLOGKV_CHAN_SIZE=256
"""

from __future__ import annotations

__version__ = "0.1.0"

# Errors
from .foundation.errors import (
    ConfigurationError,
    DeliveryClosedError,
    DeliveryError,
    ErrorCode,
    GlogException,
    LogError,
    QueueFullError,
    SinkWriteError,
)

# Config
from .foundation.config import GlogSettings, clear_settings_cache, get_settings

# Logging
from .runtime.logging import (
    IGNORE,
    INLINE,
    AsyncDelivery,
    Attribute,
    DirectiveFilter,
    ErrorCategorizer,
    GlogRenderer,
    InlineCategorizer,
    KVCategorizer,
    KVCategory,
    Level,
    LevelFilter,
    Logger,
    LoggerGuard,
    MemorySink,
    Record,
    RenderedLine,
    SeverityFilter,
    StreamSink,
    SyncDelivery,
    build_logger,
    create_default_logger,
    error_kv,
    get_global_logger,
    render,
    set_default_global_logger,
    set_global_logger,
)

__all__ = [
    # Version
    "__version__",
    # Errors
    "ErrorCode", "LogError", "GlogException", "DeliveryError", "SinkWriteError", "QueueFullError",
    "DeliveryClosedError", "ConfigurationError",
    # Config
    "GlogSettings", "get_settings", "clear_settings_cache",
    # Categorization
    "KVCategorizer", "KVCategory", "IGNORE", "INLINE", "InlineCategorizer", "ErrorCategorizer",
    # Records & rendering
    "Level", "Attribute", "Record", "RenderedLine", "error_kv", "GlogRenderer", "render",
    # Filters
    "SeverityFilter", "LevelFilter", "DirectiveFilter",
    # Sinks & delivery
    "StreamSink", "MemorySink", "SyncDelivery", "AsyncDelivery",
    # Assembly
    "Logger", "LoggerGuard", "build_logger", "create_default_logger",
    "set_global_logger", "set_default_global_logger", "get_global_logger",
]
