"""Severity levels with glog single-letter codes."""

from __future__ import annotations

from enum import IntEnum
from typing import Self


class Level(IntEnum):
    """Log severity. Values line up with stdlib `logging`, plus TRACE below DEBUG."""

    TRACE = 5
    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40
    CRITICAL = 50

    @property
    def letter(self) -> str:
        """Glog severity code used as the first character of every line."""
        return _LETTERS[self]

    @classmethod
    def parse(cls, name: str | Level) -> Self:
        """Parse a level name (case-insensitive, accepts warn/crit/fatal aliases)."""
        if isinstance(name, Level):
            return cls(name)
        key = name.strip().lower()
        if key in _ALIASES:
            return cls(_ALIASES[key])
        raise ValueError(f"Unknown log level: {name!r}")


_LETTERS: dict[Level, str] = {
    Level.CRITICAL: "C",
    Level.ERROR: "E",
    Level.WARNING: "W",
    Level.INFO: "I",
    Level.DEBUG: "D",
    Level.TRACE: "T",
}

_ALIASES: dict[str, Level] = {
    **{lvl.name.lower(): lvl for lvl in Level},
    "warn": Level.WARNING,
    "crit": Level.CRITICAL,
    "fatal": Level.CRITICAL,
}
