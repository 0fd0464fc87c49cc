"""Tests for records, attribute normalization and error-chain expansion."""

from __future__ import annotations

import sys
import threading

from glogkv.runtime.logging import Attribute, Level, Record, error_kv, to_attributes


def _raise_chained() -> RuntimeError:
    try:
        try:
            {}["k"]
        except KeyError as e:
            raise ValueError("bad key") from e
    except ValueError as e:
        try:
            raise RuntimeError("lookup failed") from e
        except RuntimeError as outer:
            return outer
    raise AssertionError("unreachable")


def test_capture_call_site() -> None:
    """capture() stamps the caller's file, line, module and thread."""
    line = sys._getframe().f_lineno + 1
    record = Record.capture(Level.INFO, "hello", ("x",), {"a": 1})
    assert record.file.endswith("test_record.py")
    assert record.line == line
    assert record.module == __name__
    assert record.thread_id == threading.get_ident()
    assert record.args == ("x",)
    assert record.attributes == (Attribute("a", 1),)


def test_capture_depth() -> None:
    """depth skips wrapper frames."""
    def wrapper() -> Record:
        return Record.capture(Level.INFO, "m", depth=2)

    line = sys._getframe().f_lineno + 1
    record = wrapper()
    assert record.line == line


def test_capture_on_other_thread() -> None:
    """The producer thread's id is recorded."""
    records: list[Record] = []
    t = threading.Thread(target=lambda: records.append(Record.capture(Level.INFO, "m")))
    t.start()
    t.join()
    assert records[0].thread_id == t.ident
    assert records[0].thread_id != threading.get_ident()


def test_record_is_frozen() -> None:
    import dataclasses

    import pytest
    record = Record.capture(Level.INFO, "m")
    with pytest.raises(dataclasses.FrozenInstanceError):
        record.message = "changed"  # type: ignore[misc]


def test_to_attributes_keeps_first_position() -> None:
    """Repeated keys keep the first position and the last value."""
    attrs = to_attributes([("a", 1), ("b", 2), ("a", 3)])
    assert attrs == (Attribute("a", 3), Attribute("b", 2))
    assert to_attributes({"x": None}) == (Attribute("x", None),)
    assert to_attributes([Attribute("k", "v")]) == (Attribute("k", "v"),)


def test_error_kv_chain() -> None:
    """Chained exceptions become error, root_cause, cause and backtrace."""
    kv = error_kv(_raise_chained())
    assert list(kv) == ["error", "root_cause", "cause", "backtrace"]
    assert kv["error"] == "RuntimeError: lookup failed"
    assert kv["root_cause"] == "KeyError: 'k'"
    assert kv["cause"] == "ValueError: bad key\nKeyError: 'k'"
    assert "_raise_chained" in kv["backtrace"]  # type: ignore[operator]


def test_error_kv_implicit_context() -> None:
    """Exceptions raised while handling another one include it as cause."""
    try:
        try:
            raise OSError("disk")
        except OSError:
            raise RuntimeError("save failed")  # noqa: B904
    except RuntimeError as e:
        kv = error_kv(e)
    assert kv["cause"] == "OSError: disk"


def test_error_kv_suppressed_context() -> None:
    """'raise ... from None' hides the context."""
    try:
        try:
            raise OSError("disk")
        except OSError:
            raise RuntimeError("save failed") from None
    except RuntimeError as e:
        kv = error_kv(e)
    assert "cause" not in kv
    assert "root_cause" not in kv


def test_error_kv_unraised() -> None:
    """An exception that was never raised has no backtrace."""
    kv = error_kv(ValueError("plain"))
    assert kv == {"error": "ValueError: plain"}
