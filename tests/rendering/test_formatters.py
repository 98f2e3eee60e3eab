# topmark:header:start
#
#   project      : Typstry
#   file         : test_formatters.py
#   file_relpath : tests/rendering/test_formatters.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for the built-in formatting rules.

The expected strings are the exact Typst source produced with the default
context (markup mode, inline math, four-space indentation).
"""

from __future__ import annotations

import re
from decimal import Decimal
from fractions import Fraction
from typing import Any

import pytest

from tests.conftest import parametrize
from typstry import format_value
from typstry.core.errors import ContextTypeError, UnsupportedKindError
from typstry.core.modes import Mode
from typstry.core.types import Char, Matrix, Raw, TypstString, TypstText


@parametrize(
    "value, mode, expected",
    [
        (True, Mode.MARKUP, "#true"),
        (False, Mode.CODE, "false"),
        (True, Mode.MATH, '"true"'),
        (None, Mode.MARKUP, ""),
        (None, Mode.CODE, '""'),
        (None, Mode.MATH, '""'),
        (42, Mode.MARKUP, "42"),
        (-7, Mode.CODE, "-7"),
        (1.5, Mode.MARKUP, "1.5"),
        (1e100, Mode.CODE, "1e+100"),
        (Decimal("1.50"), Mode.MARKUP, "1.50"),
        (Char("a"), Mode.MARKUP, "a"),
        (Char("a"), Mode.MATH, "a"),
        (Char("a"), Mode.CODE, '"a"'),
        (Char('"'), Mode.CODE, '"\\""'),
    ],
)
def test_scalars(value: Any, mode: Mode, expected: str) -> None:
    assert format_value(value, mode=mode) == expected


def test_result_is_typst_string() -> None:
    assert isinstance(format_value(1), TypstString)


@parametrize(
    "mode, inline, expected",
    [
        (Mode.MARKUP, True, "$1 / 2$"),
        (Mode.MARKUP, False, "$ 1 / 2 $"),
        (Mode.CODE, True, "(1 / 2)"),
        (Mode.MATH, True, "(1 / 2)"),
    ],
)
def test_fraction(mode: Mode, inline: bool, expected: str) -> None:
    assert format_value(Fraction(1, 2), mode=mode, inline=inline) == expected


def test_negative_fraction() -> None:
    assert format_value(Fraction(-3, 4)) == "$-3 / 4$"


@parametrize(
    "value, expected",
    [
        (complex(1, 2), "$1 + 2i$"),
        (complex(1.5, -2), "$1.5 - 2i$"),
        (complex(0, 0), "$0 + 0i$"),
    ],
)
def test_complex(value: complex, expected: str) -> None:
    assert format_value(value) == expected


def test_complex_in_math_mode_has_no_delimiters() -> None:
    assert format_value(complex(1, 2), mode=Mode.MATH) == "1 + 2i"


@parametrize(
    "mode, expected",
    [
        (Mode.MARKUP, '"a\\"b"'),
        (Mode.CODE, '"\\"a\\\\\\"b\\""'),
        (Mode.MATH, '"\\"a\\\\\\"b\\""'),
    ],
)
def test_string(mode: Mode, expected: str) -> None:
    assert format_value('a"b', mode=mode) == expected


@parametrize(
    "pattern, mode, expected",
    [
        (re.compile("a+"), Mode.MARKUP, '#regex("a+")'),
        (re.compile("a+"), Mode.CODE, 'regex("a+")'),
        (re.compile('a"b'), Mode.MARKUP, '#regex("a\\"b")'),
        (re.compile(r"\d+"), Mode.CODE, 'regex("\\d+")'),
        (re.compile("x", re.IGNORECASE | re.MULTILINE), Mode.CODE, 'regex("(?im)x")'),
    ],
)
def test_regex(pattern: re.Pattern[str], mode: Mode, expected: str) -> None:
    assert format_value(pattern, mode=mode) == expected


def test_bytes_regex_is_unsupported() -> None:
    with pytest.raises(UnsupportedKindError):
        format_value(re.compile(b"a"))


@parametrize(
    "value, mode, expected",
    [
        (range(1, 10, 3), Mode.CODE, "range(1, 8, step: 3)"),
        (range(1, 4), Mode.MARKUP, "#range(1, 4, step: 1)"),
        (range(5, 0, -2), Mode.MARKUP, "#range(5, 0, step: -2)"),
        (range(3, 3), Mode.CODE, "range(3, 3, step: 1)"),
        (range(1, 4), Mode.MATH, "#range(1, 4, step: 1)"),
    ],
)
def test_range(value: range, mode: Mode, expected: str) -> None:
    assert format_value(value, mode=mode) == expected


def test_typst_text_is_verbatim_in_every_mode() -> None:
    for mode in Mode:
        assert format_value(TypstText("*x*"), mode=mode) == "*x*"


def test_typst_string_is_verbatim() -> None:
    inner = format_value(Fraction(1, 2))
    assert format_value(inner, mode=Mode.CODE) == "$1 / 2$"


class TestRaw:
    def test_inline_default(self) -> None:
        assert format_value(Raw("x = 1", lang="py")) == "```py x = 1```"

    def test_block(self) -> None:
        assert format_value(Raw("x = 1", lang="py"), block=True) == "```py\nx = 1\n```"

    def test_backticks(self) -> None:
        assert format_value(Raw("a"), backticks=4) == "```` a````"

    def test_math_mode_enters_code(self) -> None:
        assert format_value(Raw("a"), mode=Mode.MATH) == "#``` a```"

    @parametrize("settings", [{"backticks": 2}, {"backticks": "3"}, {"block": "yes"}])
    def test_invalid_settings(self, settings: dict[str, Any]) -> None:
        with pytest.raises(ContextTypeError):
            format_value(Raw("a"), **settings)


def test_matrix_value_kind() -> None:
    assert format_value(Matrix([[1, 2], [3, 4]])) == "$mat(\n    1, 2;\n    3, 4\n)$"
