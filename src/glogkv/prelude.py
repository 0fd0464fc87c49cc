"""Logging functions bound to the global logger.

    >>> from glogkv.prelude import *
    >>> info("listening on %s", addr, port=8080)

Without an installed logger (see set_global_logger) these calls do nothing.
"""

from __future__ import annotations

import sys

from glogkv.runtime.logging.levels import Level
from glogkv.runtime.logging.logger import get_global_logger
from glogkv.runtime.logging.record import error_kv

__all__ = ["trace", "debug", "info", "warning", "warn", "error", "critical", "exception"]


def trace(message: str, *args: object, **kw: object) -> None:
    get_global_logger()._log(Level.TRACE, message, args, kw)


def debug(message: str, *args: object, **kw: object) -> None:
    get_global_logger()._log(Level.DEBUG, message, args, kw)


def info(message: str, *args: object, **kw: object) -> None:
    get_global_logger()._log(Level.INFO, message, args, kw)


def warning(message: str, *args: object, **kw: object) -> None:
    get_global_logger()._log(Level.WARNING, message, args, kw)


warn = warning


def error(message: str, *args: object, **kw: object) -> None:
    get_global_logger()._log(Level.ERROR, message, args, kw)


def critical(message: str, *args: object, **kw: object) -> None:
    get_global_logger()._log(Level.CRITICAL, message, args, kw)


def exception(message: str, *args: object, exc: BaseException | None = None, **kw: object) -> None:
    """Log at ERROR with the error chain of ``exc`` or of the exception being handled."""
    if (exc := exc or sys.exc_info()[1]) is not None:
        kw = {**kw, **error_kv(exc)}
    get_global_logger()._log(Level.ERROR, message, args, kw)
