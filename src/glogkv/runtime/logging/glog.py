"""Glog-style rendering of records into output lines.

Line layout:
    <L><MM><DD> <HH:MM:SS.ffffff> <thread-id> <file>:<line>] <message>[ name=value]*

Attributes categorized INLINE are appended to the primary line. Attributes
categorized LEVEL_LOG become secondary lines ``name: value`` that share the
record's prefix apart from the level letter, and are kept only if their own
level passes the filter. Secondary lines follow the primary line in the
order their attributes were given.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from datetime import datetime

import orjson
from pydantic import BaseModel

from .categorizer import CategoryKind, ErrorCategorizer, KVCategorizer, KVCategory
from .filter import AllFilter, SeverityFilter
from .levels import Level
from .record import Record, RenderedLine, describe_exception


class GlogRenderer:
    """Renders one record at a time. Holds no per-record state.

    Args:
        categorizer: Decides the category and display name of each attribute
        filter: Applied to each LEVEL_LOG attribute's level
        root: Directory call-site paths are shown relative to (defaults to cwd)
    """

    __slots__ = ("categorizer", "filter", "root")

    def __init__(
        self,
        categorizer: KVCategorizer | None = None,
        filter: SeverityFilter | None = None,  # noqa: A002
        *,
        root: str | None = None,
    ) -> None:
        self.categorizer = categorizer or ErrorCategorizer()
        self.filter = filter or AllFilter()
        self.root = os.path.abspath(root or os.getcwd())

    def render(self, record: Record) -> list[RenderedLine]:
        """Render ``record`` into its primary line followed by surviving secondary lines."""
        cat = self.categorizer
        body = [format_message(record.message, record.args)]
        deferred: list[tuple[Level, str, object]] = []

        for attr in record.attributes:
            match cat.categorize(attr.key):
                case KVCategory(kind=CategoryKind.INLINE):
                    body.append(f" {cat.name(attr.key)}={display_value(attr.value)}")
                case KVCategory(kind=CategoryKind.LEVEL_LOG, level=Level() as level):
                    deferred.append((level, cat.name(attr.key), attr.value))
                case _:  # IGNORE
                    continue

        lines = [self._line(record, record.level, "".join(body))]
        lines += [self._line(record, level, f"{name}: {display_value(value)}")
                  for level, name, value in deferred if self.filter.passes(level, record.module)]
        return lines

    def prefix(self, record: Record, level: Level) -> str:
        ts = datetime.fromtimestamp(record.timestamp)
        return (f"{level.letter}{ts:%m%d} {ts:%H:%M:%S.%f} {record.thread_id} "
                f"{self.display_path(record.file)}:{record.line}] ")

    def display_path(self, path: str) -> str:
        """Path relative to ``root`` when below it, else the base name."""
        if path.startswith("<"):
            return path
        full = os.path.abspath(path)
        if full.startswith(os.path.join(self.root, "")):
            return os.path.relpath(full, self.root)
        return os.path.basename(full)

    def _line(self, record: Record, level: Level, text: str) -> RenderedLine:
        return RenderedLine(level, record.timestamp, record.file, record.line, record.thread_id,
                            self.prefix(record, level) + text)


def render(
    record: Record,
    categorizer: KVCategorizer | None = None,
    filter: SeverityFilter | None = None,  # noqa: A002
) -> list[RenderedLine]:
    """Render a record with a throwaway renderer. Without a filter every secondary line is kept."""
    return GlogRenderer(categorizer, filter).render(record)


# ─────────────────────────────────────────────────────────────────────────────
# Value formatting
# ─────────────────────────────────────────────────────────────────────────────


def format_message(template: str, args: tuple[object, ...]) -> str:
    """Apply %-style args. On mismatch, append each arg's display text instead of failing."""
    if not args:
        return str(template)
    # a lone non-empty mapping feeds "%(name)s" placeholders, as in stdlib logging
    values = args[0] if len(args) == 1 and isinstance(args[0], Mapping) and args[0] else args
    try:
        return str(template) % values
    except Exception:  # noqa: BLE001 - bad args degrade the message, never the record
        return " ".join([str(template), *(display_value(a) for a in args)])


def display_value(value: object) -> str:
    """Natural display text for an attribute value, or a placeholder if it cannot be converted."""
    try:
        match value:
            case str():
                return value
            case BaseModel():
                return value.model_dump_json()
            case BaseException():
                return describe_exception(value)
            case Mapping() | list() | tuple():
                return orjson.dumps(value, default=str, option=orjson.OPT_NON_STR_KEYS).decode()
            case _:
                return str(value)
    except Exception:  # noqa: BLE001
        return f"<unrenderable {type(value).__name__}>"
