"""Output sinks for finished line groups.

A sink receives all lines of one record in a single ``write`` call. The
delivery wrapper guarantees only one ``write`` runs at a time.
"""

from __future__ import annotations

import sys
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Protocol, TextIO, runtime_checkable

from glogkv.foundation.errors import SinkWriteError


@runtime_checkable
class Sink(Protocol):
    """Protocol for line-group sinks."""

    def write(self, lines: Sequence[str]) -> None:
        """Write one record's lines, in order."""
        ...

    def flush(self) -> None: ...

    def close(self) -> None: ...


@dataclass(slots=True)
class StreamSink:
    """Writes line groups to a text stream (stdout by default) with one write per group.

    Stream failures are raised as SinkWriteError.
    """

    stream: TextIO = field(default_factory=lambda: sys.stdout)
    close_stream: bool = False

    def write(self, lines: Sequence[str]) -> None:
        if not lines:
            return
        try:
            self.stream.write("\n".join(lines) + "\n")
            self.stream.flush()
        except (OSError, ValueError) as e:
            raise SinkWriteError.from_exc(e, "sink write failed") from e

    def flush(self) -> None:
        try:
            self.stream.flush()
        except (OSError, ValueError) as e:
            raise SinkWriteError.from_exc(e, "sink flush failed") from e

    def close(self) -> None:
        if self.close_stream:
            self.stream.close()
        else:
            self.flush()


@dataclass(slots=True)
class MemorySink:
    """Collects line groups in memory. Useful for tests and embedding."""

    groups: list[tuple[str, ...]] = field(default_factory=list)
    closed: bool = False

    def write(self, lines: Sequence[str]) -> None:
        self.groups.append(tuple(lines))

    def flush(self) -> None:
        pass

    def close(self) -> None:
        self.closed = True

    @property
    def lines(self) -> list[str]:
        return [line for group in self.groups for line in group]
