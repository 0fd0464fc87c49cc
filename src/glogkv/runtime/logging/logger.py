"""Logger handle: severity filter + glog renderer + delivery wrapper.

Quick Start:
    >>> from glogkv import set_default_global_logger
    >>> from glogkv.prelude import info
    >>>
    >>> with set_default_global_logger(async_delivery=False):
    ...     info("Test log %d, tau: %.2f", 1, 6.28)
    # I1021 13:32:13.346775 123145517920256 app/main.py:63] Test log 1, tau: 6.28

Explicit handles:
    >>> log = build_logger(sink=MemorySink(), filter=LevelFilter(Level.DEBUG))
    >>> db = log.bind(component="db")
    >>> try:
    ...     connect()
    ... except OSError:
    ...     db.exception("connect failed", host="db1")
    # E... connect failed component=db host=db1 Root cause=...
    # E... Error: ConnectionRefusedError: ...
    # D... Caused by: ...
"""

from __future__ import annotations

import sys
import threading
from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING

from glogkv.foundation.config import GlogSettings, get_settings

from .categorizer import ErrorCategorizer, KVCategorizer
from .delivery import AsyncDelivery, Delivery, SyncDelivery
from .filter import LevelFilter, NoneFilter, SeverityFilter
from .glog import GlogRenderer
from .levels import Level
from .record import Attribute, Record, error_kv, to_attributes
from .sink import MemorySink, Sink, StreamSink

if TYPE_CHECKING:
    from types import TracebackType

# Frames between Record.capture and the user's call site: capture <- _log <- public method
_CALLER_DEPTH = 3


class Logger:
    """Filters records by level and hands the survivors to a delivery wrapper.

    Immutable - bind() returns a new logger sharing filter and delivery.
    """

    __slots__ = ("filter", "delivery", "context")

    def __init__(
        self,
        filter: SeverityFilter,  # noqa: A002
        delivery: Delivery,
        context: Mapping[str, object] | Iterable[tuple[str, object]] = (),
    ) -> None:
        self.filter = filter
        self.delivery = delivery
        self.context: tuple[Attribute, ...] = to_attributes(context)

    def enabled(self, level: Level | str, module: str = "") -> bool:
        return self.filter.passes(Level.parse(level), module)

    def submit(self, record: Record) -> None:
        """Deliver ``record`` if its level passes the filter. Delivery errors propagate."""
        if self.filter.passes(record.level, record.module):
            self.delivery.submit(record)

    def bind(self, **kw: object) -> Logger:
        """Create new logger with additional bound context."""
        return Logger(self.filter, self.delivery, self._merge(kw))

    def log(self, level: Level | str, message: str, *args: object, **kw: object) -> None:
        self._log(Level.parse(level), message, args, kw)

    def trace(self, message: str, *args: object, **kw: object) -> None: self._log(Level.TRACE, message, args, kw)
    def debug(self, message: str, *args: object, **kw: object) -> None: self._log(Level.DEBUG, message, args, kw)
    def info(self, message: str, *args: object, **kw: object) -> None: self._log(Level.INFO, message, args, kw)
    def warning(self, message: str, *args: object, **kw: object) -> None: self._log(Level.WARNING, message, args, kw)
    def error(self, message: str, *args: object, **kw: object) -> None: self._log(Level.ERROR, message, args, kw)
    def critical(self, message: str, *args: object, **kw: object) -> None: self._log(Level.CRITICAL, message, args, kw)

    def exception(self, message: str, *args: object, exc: BaseException | None = None, **kw: object) -> None:
        """Log at ERROR with the error chain of ``exc`` (or the exception being handled)."""
        if (exc := exc or sys.exc_info()[1]) is not None:
            kw = {**kw, **error_kv(exc)}
        self._log(Level.ERROR, message, args, kw)

    def flush(self) -> None:
        self.delivery.flush()

    def close(self) -> None:
        self.delivery.close()

    def __enter__(self) -> Logger:
        return self

    def __exit__(self, exc_type: type[BaseException] | None, exc_val: BaseException | None,
                 exc_tb: TracebackType | None) -> None:
        self.close()

    def _log(self, level: Level, message: str, args: tuple[object, ...], kw: Mapping[str, object],
             depth: int = _CALLER_DEPTH) -> None:
        record = Record.capture(level, message, args, self._merge(kw), depth=depth)
        self.submit(record)

    def _merge(self, kw: Mapping[str, object]) -> list[tuple[str, object]]:
        # bound context first; a call-site key keeps the bound key's position
        return [*((a.key, a.value) for a in self.context), *kw.items()]


# ─────────────────────────────────────────────────────────────────────────────
# Construction
# ─────────────────────────────────────────────────────────────────────────────


def build_logger(
    categorizer: KVCategorizer | None = None,
    filter: SeverityFilter | None = None,  # noqa: A002
    sink: Sink | None = None,
    *,
    async_delivery: bool = False,
    chan_size: int | None = None,
    put_timeout: float | None = None,
) -> Logger:
    """Compose a logger. Defaults: ErrorCategorizer, INFO threshold, stdout."""
    filter = filter or LevelFilter(Level.INFO)  # noqa: A001
    renderer = GlogRenderer(categorizer or ErrorCategorizer(), filter)
    sink = sink or StreamSink(sys.stdout)
    delivery: Delivery = (AsyncDelivery(renderer, sink, chan_size, put_timeout) if async_delivery
                          else SyncDelivery(renderer, sink))
    return Logger(filter, delivery)


def create_default_logger(
    async_delivery: bool | None = None,
    chan_size: int | None = None,
    *,
    settings: GlogSettings | None = None,
) -> Logger:
    """Build a logger from GLOGKV_* settings. Explicit arguments override settings."""
    settings = settings or get_settings()
    return build_logger(
        ErrorCategorizer(),
        settings.build_filter(),
        StreamSink(sys.stderr if settings.output == "stderr" else sys.stdout),
        async_delivery=settings.async_delivery if async_delivery is None else async_delivery,
        chan_size=chan_size or settings.chan_size,
        put_timeout=settings.put_timeout,
    )


# ─────────────────────────────────────────────────────────────────────────────
# Global logger
# ─────────────────────────────────────────────────────────────────────────────


_global_lock = threading.Lock()
_global_guard: LoggerGuard | None = None
_DISCARD = Logger(NoneFilter(), SyncDelivery(GlogRenderer(), MemorySink()))


class LoggerGuard:
    """Keeps a logger installed as the global logger until released.

    Release closes this logger, draining any queued records, and hands the
    global slot back to the nearest earlier guard whose logger is still open.
    With none left, the prelude functions go back to discarding. Only the
    first release has an effect, and guards may be released in any order.

    Example:
        >>> with set_global_logger(build_logger()) as log:
        ...     log.info("ready")
    """

    __slots__ = ("logger", "_previous", "_released")

    def __init__(self, logger: Logger, previous: LoggerGuard | None) -> None:
        self.logger, self._previous, self._released = logger, previous, False

    @property
    def released(self) -> bool:
        return self._released

    @property
    def live(self) -> bool:
        return not self._released and not self.logger.delivery.closed

    def release(self) -> None:
        global _global_guard
        with _global_lock:
            if self._released:
                return
            self._released = True
            if _global_guard is self:
                _global_guard = self._restorable()
        self.logger.close()

    def _restorable(self) -> LoggerGuard | None:
        guard = self._previous
        while guard is not None and not guard.live:
            guard = guard._previous
        return guard

    def __enter__(self) -> Logger:
        return self.logger

    def __exit__(self, exc_type: type[BaseException] | None, exc_val: BaseException | None,
                 exc_tb: TracebackType | None) -> None:
        self.release()


def set_global_logger(logger: Logger) -> LoggerGuard:
    """Install ``logger`` for the prelude functions. Keep the guard alive while logging."""
    global _global_guard
    with _global_lock:
        _global_guard = guard = LoggerGuard(logger, _global_guard)
    return guard


def set_default_global_logger(async_delivery: bool = False, chan_size: int | None = None) -> LoggerGuard:
    """Create the default logger (see create_default_logger) and install it globally."""
    return set_global_logger(create_default_logger(async_delivery, chan_size))


def get_global_logger() -> Logger:
    """The installed logger, or a logger that discards everything when none is installed."""
    guard = _global_guard
    return guard.logger if guard is not None else _DISCARD
