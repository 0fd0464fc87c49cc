"""Attribute categorization: decides how each key-value pair of a record is printed.

Every attribute lands in one of three categories:
- IGNORE: not printed at all
- INLINE: appended to the primary line as ``name=value``
- LEVEL_LOG(level): printed on its own line tagged with ``level``

Categorizers are picked when a logger is built. Specialized categorizers
recognize a fixed set of keys and delegate everything else to a fallback.

Example:
    >>> cat = ErrorCategorizer()
    >>> cat.categorize("error")
    KVCategory(kind=<CategoryKind.LEVEL_LOG: 'level_log'>, level=<Level.ERROR: 40>)
    >>> cat.name("cause")
    'Caused by'
    >>> cat.categorize("user_id") == INLINE
    True
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import StrEnum

from .levels import Level


class CategoryKind(StrEnum):
    IGNORE = "ignore"
    INLINE = "inline"
    LEVEL_LOG = "level_log"


@dataclass(frozen=True, slots=True)
class KVCategory:
    """Disposition of one attribute. ``level`` is set only for LEVEL_LOG."""

    kind: CategoryKind
    level: Level | None = None

    def __post_init__(self) -> None:
        if (self.kind is CategoryKind.LEVEL_LOG) != (self.level is not None):
            raise ValueError(f"{self.kind} category {'needs' if self.level is None else 'takes no'} level")

    @classmethod
    def level_log(cls, level: Level) -> KVCategory:
        return cls(CategoryKind.LEVEL_LOG, level)

    @property
    def is_level_log(self) -> bool:
        return self.kind is CategoryKind.LEVEL_LOG


IGNORE = KVCategory(CategoryKind.IGNORE)
INLINE = KVCategory(CategoryKind.INLINE)


class KVCategorizer(ABC):
    """Maps attribute keys to a category and a display name. Stateless."""

    __slots__ = ()

    @abstractmethod
    def categorize(self, key: str) -> KVCategory:
        """Category for ``key``. Must be total over all keys."""
        ...

    @abstractmethod
    def name(self, key: str) -> str:
        """Display name for ``key``. Unknown keys map to themselves."""
        ...

    def ignore(self, key: str) -> bool:
        return self.categorize(key) == IGNORE


class InlineCategorizer(KVCategorizer):
    """Inlines every attribute under its own key."""

    __slots__ = ()

    def categorize(self, key: str) -> KVCategory:
        return INLINE

    def name(self, key: str) -> str:
        return key


class ErrorCategorizer(KVCategorizer):
    """Prints errors, their causes and backtraces on separate leveled lines.

    Pairs with ``error_kv()``, which expands an exception into the keys below.
    Keys it does not know are handled by ``fallback``.
    """

    __slots__ = ("fallback",)

    _CATEGORIES: dict[str, KVCategory] = {
        "error": KVCategory.level_log(Level.ERROR),
        "cause": KVCategory.level_log(Level.DEBUG),
        "backtrace": KVCategory.level_log(Level.TRACE),
    }
    _NAMES: dict[str, str] = {
        "error": "Error",
        "cause": "Caused by",
        "backtrace": "Originated in",
        "root_cause": "Root cause",
    }

    def __init__(self, fallback: KVCategorizer | None = None) -> None:
        self.fallback = fallback or InlineCategorizer()

    def categorize(self, key: str) -> KVCategory:
        if (category := self._CATEGORIES.get(key)) is not None:
            return category
        return self.fallback.categorize(key)

    def name(self, key: str) -> str:
        return self._NAMES.get(key) or self.fallback.name(key)
