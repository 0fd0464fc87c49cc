"""Tests for glog-style rendering."""

from __future__ import annotations

from pydantic import BaseModel

from glogkv.runtime.logging import (
    IGNORE,
    AllFilter,
    ErrorCategorizer,
    GlogRenderer,
    InlineCategorizer,
    KVCategorizer,
    KVCategory,
    Level,
    LevelFilter,
    display_value,
    format_message,
    render,
)


class DropAll(KVCategorizer):
    __slots__ = ()

    def categorize(self, key: str) -> KVCategory:
        return IGNORE

    def name(self, key: str) -> str:
        return key


class Unprintable:
    def __str__(self) -> str:
        raise RuntimeError("no text for you")


class Point(BaseModel):
    x: int
    y: int


def texts(lines: list) -> list[str]:
    return [line.text for line in lines]


# ═════════════════════════════════════════════════════════════════════════════
# Primary line
# ═════════════════════════════════════════════════════════════════════════════


def test_primary_line_layout(make_record, prefix) -> None:
    """Prefix, substituted message and inline attributes."""
    record = make_record("Test log %d", 1, attrs={"tau": 6.28})
    assert texts(render(record, ErrorCategorizer())) == [prefix("I") + "Test log 1 tau=6.28"]


def test_level_letters(make_record, prefix) -> None:
    """Each level has its own glog letter."""
    for level, letter in [(Level.CRITICAL, "C"), (Level.ERROR, "E"), (Level.WARNING, "W"),
                          (Level.INFO, "I"), (Level.DEBUG, "D"), (Level.TRACE, "T")]:
        (line,) = render(make_record("m", level=level))
        assert line.text == prefix(letter) + "m"
        assert line.level is level


def test_no_attributes(make_record, prefix) -> None:
    """A record without attributes renders only the primary line."""
    assert texts(render(make_record("plain"))) == [prefix("I") + "plain"]


def test_all_ignored(make_record, prefix) -> None:
    """A categorizer ignoring everything leaves a bare primary line."""
    record = make_record("bare", attrs={"error": "boom", "user": "bob"})
    assert texts(render(record, DropAll())) == [prefix("I") + "bare"]


def test_rendered_line_metadata(make_record) -> None:
    """Rendered lines carry the record's timestamp and location."""
    (line,) = render(make_record())
    assert (line.file, line.line, line.thread_id, line.timestamp) == ("app/main.py", 63, 42, 1_700_000_000.123456)
    assert str(line) == line.text


# ═════════════════════════════════════════════════════════════════════════════
# Secondary lines
# ═════════════════════════════════════════════════════════════════════════════


def test_ordering_law(make_record, prefix) -> None:
    """Inline attributes keep order on the primary line; leveled ones follow in input order."""
    record = make_record("op", attrs=[("a1", 1), ("error", "boom"), ("a3", 3), ("cause", "disk full")])
    lines = render(record, ErrorCategorizer(), AllFilter())
    assert texts(lines) == [
        prefix("I") + "op a1=1 a3=3",
        prefix("E") + "Error: boom",
        prefix("D") + "Caused by: disk full",
    ]
    assert [line.level for line in lines] == [Level.INFO, Level.ERROR, Level.DEBUG]


def test_secondary_order_is_not_sorted_by_level(make_record, prefix) -> None:
    """Secondary lines follow attribute order, not severity."""
    record = make_record("op", attrs=[("backtrace", "frames"), ("cause", "c"), ("error", "e")])
    assert texts(render(record, ErrorCategorizer(), AllFilter())) == [
        prefix("I") + "op",
        prefix("T") + "Originated in: frames",
        prefix("D") + "Caused by: c",
        prefix("E") + "Error: e",
    ]


def test_attribute_level_filtering(make_record, prefix) -> None:
    """Leveled attributes below the filter are dropped; the primary line stays."""
    record = make_record("failed", attrs=[("error", "boom"), ("cause", "c"), ("backtrace", "frames")])
    lines = render(record, ErrorCategorizer(), LevelFilter(Level.INFO))
    assert texts(lines) == [prefix("I") + "failed", prefix("E") + "Error: boom"]


def test_secondary_filter_uses_record_module(make_record) -> None:
    """The attribute filter sees the record's module."""

    class ModuleFilter:
        def passes(self, level: Level, module: str = "") -> bool:
            return module == "app.verbose"

    quiet = make_record("m", attrs={"error": "e"}, module="app.main")
    loud = make_record("m", attrs={"error": "e"}, module="app.verbose")
    renderer = GlogRenderer(ErrorCategorizer(), ModuleFilter())
    assert len(renderer.render(quiet)) == 1
    assert len(renderer.render(loud)) == 2


def test_root_cause_is_inlined(make_record, prefix) -> None:
    """root_cause stays on the primary line under its display name."""
    record = make_record("m", attrs={"root_cause": "io"})
    assert texts(render(record, ErrorCategorizer())) == [prefix("I") + "m Root cause=io"]


def test_multiline_value_verbatim(make_record, prefix) -> None:
    """Multi-line values are written as-is after the label."""
    trace = '  File "a.py", line 1, in f\n    g()\n  File "b.py", line 2, in g'
    record = make_record("m", attrs={"backtrace": trace})
    lines = texts(render(record, ErrorCategorizer(), AllFilter()))
    assert lines[1] == prefix("T") + "Originated in: " + trace


def test_idempotent(make_record) -> None:
    """Rendering the same record twice gives identical output."""
    record = make_record("x %s", "y", attrs=[("a", [1, 2]), ("error", ValueError("bad")), ("b", None)])
    renderer = GlogRenderer(ErrorCategorizer(), LevelFilter(Level.DEBUG))
    assert texts(renderer.render(record)) == texts(renderer.render(record))


def test_inline_categorizer_keeps_error_keys_inline(make_record, prefix) -> None:
    """With the plain inline policy error keys are ordinary attributes."""
    record = make_record("m", attrs={"error": "boom"})
    assert texts(render(record, InlineCategorizer())) == [prefix("I") + "m error=boom"]


# ═════════════════════════════════════════════════════════════════════════════
# Fail-soft formatting
# ═════════════════════════════════════════════════════════════════════════════


def test_unrenderable_value_placeholder(make_record, prefix) -> None:
    """A value that cannot be displayed degrades only itself."""
    record = make_record("m", attrs=[("a", 1), ("bad", Unprintable()), ("c", 3)])
    assert texts(render(record)) == [prefix("I") + "m a=1 bad=<unrenderable Unprintable> c=3"]


def test_bad_format_args() -> None:
    """Mismatched args are appended instead of failing."""
    assert format_message("value %d", ("x",)) == "value %d x"
    assert format_message("%s and %s", (1,)) == "%s and %s 1"
    assert format_message("no placeholders", (1, 2)) == "no placeholders 1 2"


def test_format_args() -> None:
    """Positional and mapping %-style substitution."""
    assert format_message("Test log %d, tau: %.2f", (1, 6.283)) == "Test log 1, tau: 6.28"
    assert format_message("%(user)s logged in", ({"user": "bob"},)) == "bob logged in"
    assert format_message("100%", ()) == "100%"


def test_display_value() -> None:
    """Natural display text per value kind."""
    assert display_value("text") == "text"
    assert display_value(6.28) == "6.28"
    assert display_value(None) == "None"
    assert display_value({"a": 1, 2: "b"}) == '{"a":1,"2":"b"}'
    assert display_value([1, "two"]) == '[1,"two"]'
    assert display_value((1, 2)) == "[1,2]"
    assert display_value(Point(x=1, y=2)) == '{"x":1,"y":2}'
    assert display_value(ValueError("bad")) == "ValueError: bad"
    assert display_value(KeyError()) == "KeyError"
    assert display_value(Unprintable()) == "<unrenderable Unprintable>"


def test_display_path() -> None:
    """Paths below the root are relative, others show the base name."""
    renderer = GlogRenderer(root="/srv/app")
    assert renderer.display_path("/srv/app/pkg/mod.py") == "pkg/mod.py"
    assert renderer.display_path("/usr/lib/python3/json/__init__.py") == "__init__.py"
    assert renderer.display_path("/srv/application/x.py") == "x.py"
    assert renderer.display_path("<stdin>") == "<stdin>"
