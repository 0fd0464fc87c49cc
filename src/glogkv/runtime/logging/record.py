"""Log record model: attributes, records, and rendered output lines.

Records are immutable and capture everything the renderer needs on the
producer thread (timestamp, thread id, call site), so rendering can happen
later on another thread without losing the producer's identity.
"""

from __future__ import annotations

import sys
import threading
import time
import traceback
from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from .levels import Level


@dataclass(frozen=True, slots=True)
class Attribute:
    """A named value attached to a record."""

    key: str
    value: object


@dataclass(frozen=True, slots=True)
class Record:
    """One log call. Consumed once by the renderer."""

    timestamp: float
    level: Level
    message: str
    args: tuple[object, ...] = ()
    attributes: tuple[Attribute, ...] = ()
    file: str = "<unknown>"
    line: int = 0
    thread_id: int = 0
    module: str = ""

    @classmethod
    def capture(
        cls,
        level: Level,
        message: str,
        args: tuple[object, ...] = (),
        attributes: Mapping[str, object] | Iterable[tuple[str, object]] = (),
        *,
        depth: int = 1,
    ) -> Record:
        """Build a record stamped with the current time, thread, and caller location.

        Args:
            depth: Frames to skip above the caller of ``capture`` (1 = direct caller)
        """
        try:
            frame = sys._getframe(depth)
            file, line, module = frame.f_code.co_filename, frame.f_lineno, frame.f_globals.get("__name__", "")
        except ValueError:  # call stack not that deep
            file, line, module = "<unknown>", 0, ""
        return cls(
            timestamp=time.time(),
            level=Level(level),
            message=message,
            args=tuple(args),
            attributes=to_attributes(attributes),
            file=file,
            line=line,
            thread_id=threading.get_ident(),
            module=module,
        )


def to_attributes(kv: Mapping[str, object] | Iterable[tuple[str, object]]) -> tuple[Attribute, ...]:
    """Normalize a mapping or pair sequence into attributes. A repeated key keeps its first position and last value."""
    pairs = kv.items() if isinstance(kv, Mapping) else kv
    merged: dict[str, object] = {}
    for item in pairs:
        key, value = (item.key, item.value) if isinstance(item, Attribute) else item
        merged[str(key)] = value
    return tuple(Attribute(k, v) for k, v in merged.items())


@dataclass(frozen=True, slots=True)
class RenderedLine:
    """A finished output line. ``text`` has no trailing newline."""

    level: Level
    timestamp: float
    file: str
    line: int
    thread_id: int
    text: str

    def __str__(self) -> str:
        return self.text


# ─────────────────────────────────────────────────────────────────────────────
# Error chains
# ─────────────────────────────────────────────────────────────────────────────


def error_kv(exc: BaseException) -> dict[str, object]:
    """Expand an exception into the attribute keys understood by ErrorCategorizer.

    Produces ``error`` (the exception itself), ``root_cause`` and ``cause``
    (the chained exceptions, outermost first, one per line) when the
    exception was raised from or during another one, and ``backtrace`` when
    a traceback is attached.

    Example:
        >>> try:
        ...     try:
        ...         {}["k"]
        ...     except KeyError as e:
        ...         raise RuntimeError("lookup failed") from e
        ... except RuntimeError as e:
        ...     kv = error_kv(e)
        >>> kv["error"], kv["cause"]
        ('RuntimeError: lookup failed', "KeyError: 'k'")
    """
    kv: dict[str, object] = {"error": describe_exception(exc)}
    if causes := _cause_chain(exc):
        kv["root_cause"] = describe_exception(causes[-1])
        kv["cause"] = "\n".join(describe_exception(c) for c in causes)
    if exc.__traceback__ is not None:
        kv["backtrace"] = "".join(traceback.format_tb(exc.__traceback__)).rstrip("\n")
    return kv


def describe_exception(exc: BaseException) -> str:
    text = str(exc)
    return f"{type(exc).__name__}: {text}" if text else type(exc).__name__


def _cause_chain(exc: BaseException) -> list[BaseException]:
    chain: list[BaseException] = []
    seen = {id(exc)}
    current: BaseException | None = exc
    while current is not None:
        current = current.__cause__ or (None if current.__suppress_context__ else current.__context__)
        if current is None or id(current) in seen:
            break
        seen.add(id(current))
        chain.append(current)
    return chain
