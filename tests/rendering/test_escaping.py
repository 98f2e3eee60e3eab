# topmark:header:start
#
#   project      : Typstry
#   file         : test_escaping.py
#   file_relpath : tests/rendering/test_escaping.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for the sink-level helpers in `typstry.rendering.escaping`."""

from __future__ import annotations

import io

from tests.conftest import parametrize
from typstry.core.context import FormatContext
from typstry.core.modes import Mode
from typstry.rendering.escaping import (
    code_sigil,
    enclose,
    escape_unescaped_quotes,
    join_with,
    math_pad,
    quote_escaped,
)


def _ctx(**settings: object) -> FormatContext:
    return FormatContext.default().derive(settings)


def test_enclose_mirrors_left_delimiter() -> None:
    sink = io.StringIO()
    enclose(sink, "$ ", lambda: sink.write("x"))
    assert sink.getvalue() == "$ x $"


def test_enclose_with_explicit_right() -> None:
    sink = io.StringIO()
    enclose(sink, "(", lambda: sink.write("x"), ")")
    assert sink.getvalue() == "(x)"


@parametrize(
    "items, expected",
    [
        ([], ""),
        (["a"], "a"),
        (["a", "b", "c"], "a, b, c"),
    ],
)
def test_join_with(items: list[str], expected: str) -> None:
    sink = io.StringIO()
    join_with(sink, items, ", ", sink.write)
    assert sink.getvalue() == expected


@parametrize(
    "mode, expected",
    [(Mode.CODE, ""), (Mode.MARKUP, "#"), (Mode.MATH, "#")],
)
def test_code_sigil(mode: Mode, expected: str) -> None:
    sink = io.StringIO()
    code_sigil(sink, _ctx(mode=mode))
    assert sink.getvalue() == expected


def test_math_pad() -> None:
    assert math_pad(_ctx()) == "$"
    assert math_pad(_ctx(inline=False)) == "$ "
    assert math_pad(_ctx(mode=Mode.MATH)) == ""
    assert math_pad(_ctx(mode=Mode.MATH, inline=False)) == ""


def test_quote_escaped_markup() -> None:
    sink = io.StringIO()
    quote_escaped(sink, 'a"b', _ctx())
    assert sink.getvalue() == '"a\\"b"'


@parametrize("mode", [Mode.CODE, Mode.MATH])
def test_quote_escaped_code_and_math(mode: Mode) -> None:
    sink = io.StringIO()
    quote_escaped(sink, 'a"b', _ctx(mode=mode))
    assert sink.getvalue() == '"\\"a\\\\\\"b\\""'


@parametrize(
    "text, expected",
    [
        ("plain", "plain"),
        ('a"b', 'a\\"b'),
        ('a\\"b', 'a\\"b'),
        ('a\\\\"b', 'a\\\\\\"b'),
        ('""', '\\"\\"'),
    ],
)
def test_escape_unescaped_quotes(text: str, expected: str) -> None:
    assert escape_unescaped_quotes(text) == expected
