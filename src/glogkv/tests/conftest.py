"""Shared fixtures for glogkv tests."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime

import pytest

from glogkv.foundation.config import clear_settings_cache
from glogkv.runtime.logging import Level, MemorySink, Record, to_attributes
import glogkv.runtime.logging.logger as logger_module

TS = 1_700_000_000.123456
THREAD_ID = 42


def _prefix(letter: str, ts: float = TS) -> str:
    return f"{letter}{datetime.fromtimestamp(ts):%m%d %H:%M:%S.%f} {THREAD_ID} app/main.py:63] "


@pytest.fixture
def make_record() -> Callable[..., Record]:
    """Factory for records with a fixed timestamp, thread and call site."""
    def factory(message: str = "msg", *args: object, level: Level = Level.INFO,
                attrs: object = (), module: str = "app.main") -> Record:
        return Record(TS, level, message, args, to_attributes(attrs),  # type: ignore[arg-type]
                      file="app/main.py", line=63, thread_id=THREAD_ID, module=module)
    return factory


@pytest.fixture
def prefix() -> Callable[..., str]:
    """Expected line prefix for records built by ``make_record``, given a level letter."""
    return _prefix


@pytest.fixture
def sink() -> MemorySink:
    return MemorySink()


@pytest.fixture(autouse=True)
def clean_globals(monkeypatch: pytest.MonkeyPatch) -> object:
    """Isolate the global logger and cached settings per test."""
    monkeypatch.setattr(logger_module, "_global_guard", None)
    for var in ("GLOGKV_LOG", "GLOGKV_ASYNC_DELIVERY", "GLOGKV_CHAN_SIZE", "GLOGKV_PUT_TIMEOUT", "GLOGKV_OUTPUT"):
        monkeypatch.delenv(var, raising=False)
    clear_settings_cache()
    yield
    clear_settings_cache()
