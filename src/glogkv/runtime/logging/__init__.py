"""Glog-style structured logging: categorize attributes, render lines, deliver them."""

from .categorizer import IGNORE, INLINE, CategoryKind, ErrorCategorizer, InlineCategorizer, KVCategorizer, KVCategory
from .delivery import DEFAULT_CHAN_SIZE, AsyncDelivery, Delivery, SyncDelivery
from .filter import OFF, AllFilter, DirectiveFilter, LevelFilter, NoneFilter, SeverityFilter
from .glog import GlogRenderer, display_value, format_message, render
from .levels import Level
from .logger import (
    Logger,
    LoggerGuard,
    build_logger,
    create_default_logger,
    get_global_logger,
    set_default_global_logger,
    set_global_logger,
)
from .record import Attribute, Record, RenderedLine, describe_exception, error_kv, to_attributes
from .sink import MemorySink, Sink, StreamSink

__all__ = [
    # Categorization
    "KVCategorizer", "KVCategory", "CategoryKind", "IGNORE", "INLINE", "InlineCategorizer", "ErrorCategorizer",
    # Records
    "Level", "Attribute", "Record", "RenderedLine", "to_attributes", "error_kv", "describe_exception",
    # Filters
    "SeverityFilter", "LevelFilter", "DirectiveFilter", "AllFilter", "NoneFilter", "OFF",
    # Rendering
    "GlogRenderer", "render", "display_value", "format_message",
    # Sinks & delivery
    "Sink", "StreamSink", "MemorySink", "Delivery", "SyncDelivery", "AsyncDelivery", "DEFAULT_CHAN_SIZE",
    # Assembly
    "Logger", "LoggerGuard", "build_logger", "create_default_logger",
    "set_global_logger", "set_default_global_logger", "get_global_logger",
]
