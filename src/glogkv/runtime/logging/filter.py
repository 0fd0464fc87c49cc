"""Severity filters: decide whether a level is emitted.

A filter is consulted once per record and once per leveled attribute.

Directive specs follow the env-logger convention:
    "info"                    -> INFO and above everywhere
    "warn,app.db=debug"       -> WARNING by default, DEBUG for app.db and below it
    "app=trace,app.http=info" -> longest matching module prefix wins
    "info,app.db"             -> every level for app.db (a bare module name)
    "debug,app.http=off"      -> nothing at all from app.http
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, Self, runtime_checkable

from glogkv.foundation.errors import ConfigurationError

from .levels import Level

# Threshold above every level: nothing passes
OFF = Level.CRITICAL + 1

Threshold = Level | int


@runtime_checkable
class SeverityFilter(Protocol):
    """Protocol for severity filters."""

    def passes(self, level: Level, module: str = "") -> bool: ...


@dataclass(frozen=True, slots=True)
class LevelFilter:
    """Passes everything at or above ``threshold``."""

    threshold: Level = Level.INFO

    def passes(self, level: Level, module: str = "") -> bool:
        return level >= self.threshold


@dataclass(frozen=True, slots=True)
class AllFilter:
    """Passes every level."""

    def passes(self, level: Level, module: str = "") -> bool:
        return True


@dataclass(frozen=True, slots=True)
class NoneFilter:
    """Passes nothing. Used by the placeholder logger."""

    def passes(self, level: Level, module: str = "") -> bool:
        return False


@dataclass(frozen=True, slots=True)
class DirectiveFilter:
    """Per-module thresholds with a default.

    ``modules`` is kept sorted longest-first so the first prefix match is the
    most specific one.
    """

    default: Threshold = Level.INFO
    modules: tuple[tuple[str, Threshold], ...] = ()

    def __post_init__(self) -> None:
        ordered = tuple(sorted(self.modules, key=lambda m: len(m[0]), reverse=True))
        object.__setattr__(self, "modules", ordered)

    def threshold(self, module: str) -> Threshold:
        for prefix, level in self.modules:
            if module == prefix or module.startswith(prefix + "."):
                return level
        return self.default

    def passes(self, level: Level, module: str = "") -> bool:
        return level >= self.threshold(module)

    @classmethod
    def parse(cls, spec: str, default: Threshold = Level.INFO) -> Self:
        """Parse a directive spec. Raises ConfigurationError on malformed input.

        A lone token that is not a level name is a module with every level
        enabled, and ``off`` silences its scope.
        """
        modules: dict[str, Threshold] = {}
        for raw in spec.split(","):
            if not (directive := raw.strip()):
                continue
            parts = directive.split("=")
            if len(parts) > 2:
                raise ConfigurationError.create(f"Malformed filter directive: {directive!r}", details=spec)
            if len(parts) == 1:
                if (threshold := _lookup(directive)) is None:
                    modules[directive] = Level.TRACE
                else:
                    default = threshold
                continue
            module, level = parts[0].strip(), parts[1]
            if not module:
                raise ConfigurationError.create(f"Missing module name in directive: {directive!r}", details=spec)
            modules[module] = _parse_threshold(level, spec)
        return cls(default=default, modules=tuple(modules.items()))


def _lookup(text: str) -> Threshold | None:
    if text.strip().lower() == "off":
        return OFF
    try:
        return Level.parse(text)
    except ValueError:
        return None


def _parse_threshold(text: str, spec: str) -> Threshold:
    if (threshold := _lookup(text)) is None:
        raise ConfigurationError.create(f"Unknown log level: {text!r}", details=spec)
    return threshold
