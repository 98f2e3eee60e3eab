# topmark:header:start
#
#   project      : Typstry
#   file         : formatters.py
#   file_relpath : src/typstry/rendering/formatters.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Built-in formatting rules for scalar and wrapper value kinds.

Settings are used to format the value and can be any type. Parameters are passed
to a Typst function and must be strings of Typst source.

| Type                 | Settings                   | Parameters |
|:---------------------|:---------------------------|:-----------|
| `bool`               | `mode`                     |            |
| `numbers.Integral`   |                            |            |
| `float`, `Decimal`   |                            |            |
| `Fraction`           | `mode`, `inline`           |            |
| `complex`            | `mode`, `inline`           |            |
| `Char`               | `mode`                     |            |
| `str`                | `mode`                     |            |
| `re.Pattern`         | `mode`                     |            |
| `None`               | `mode`                     |            |
| `range`              | `mode`                     |            |
| `TypstText`          |                            |            |
| `TypstString`        |                            |            |
| `Raw`                | `mode`, `backticks`, `block` |          |

Sequences and matrices live in `typstry.rendering.containers`.
"""

from __future__ import annotations

import math
import numbers
import re
from decimal import Decimal
from fractions import Fraction
from typing import TYPE_CHECKING, Any

from typstry.constants import CODE_SIGIL
from typstry.core.errors import ContextTypeError, UnsupportedKindError
from typstry.core.modes import Mode
from typstry.core.types import Char, Raw, TypstString, TypstText
from typstry.rendering.api import show_typst
from typstry.rendering.escaping import (
    code_sigil,
    enclose,
    escape_unescaped_quotes,
    math_pad,
    quote_escaped,
)
from typstry.rendering.registry import typst_context, typst_formatter

if TYPE_CHECKING:
    from collections.abc import Mapping

    from typstry.core.context import FormatContext
    from typstry.rendering.escaping import Sink

# Python regex flags with an inline equivalent in Typst's regex syntax
_REGEX_FLAGS: tuple[tuple[re.RegexFlag, str], ...] = (
    (re.IGNORECASE, "i"),
    (re.MULTILINE, "m"),
    (re.DOTALL, "s"),
    (re.VERBOSE, "x"),
)


@typst_formatter(bool)
def show_bool(sink: Sink, value: bool, context: FormatContext) -> None:
    """Write ``true``/``false``: quoted in math, after ``#`` in markup, bare in code."""
    text: str = "true" if value else "false"
    mode: Mode = context.mode
    if mode is Mode.MATH:
        enclose(sink, '"', lambda: sink.write(text))
    elif mode is Mode.MARKUP:
        sink.write(CODE_SIGIL + text)
    else:
        sink.write(text)


@typst_formatter(numbers.Integral)
def show_integer(sink: Sink, value: numbers.Integral, context: FormatContext) -> None:
    """Write the decimal digits of an integer in any mode."""
    sink.write(str(int(value)))


@typst_formatter(float)
def show_float(sink: Sink, value: float, context: FormatContext) -> None:
    """Write the shortest round-tripping decimal representation of a float."""
    sink.write(repr(float(value)))


@typst_formatter(Decimal)
def show_decimal(sink: Sink, value: Decimal, context: FormatContext) -> None:
    sink.write(str(value))


@typst_formatter(Fraction)
def show_fraction(sink: Sink, value: Fraction, context: FormatContext) -> None:
    """Write ``numerator / denominator``.

    In code and math mode the division is parenthesized; in markup mode it is
    wrapped in math delimiters chosen by
    [`math_pad`][typstry.rendering.escaping.math_pad].
    """

    def body(ctx: FormatContext) -> None:
        show_typst(sink, value.numerator, ctx)
        sink.write(" / ")
        show_typst(sink, value.denominator, ctx)

    if context.mode is Mode.MARKUP:
        math_context: FormatContext = context.derive(mode=Mode.MATH)
        enclose(sink, math_pad(context), lambda: body(math_context))
    else:
        enclose(sink, "(", lambda: body(context), ")")


def _complex_part(x: float) -> str:
    """Format a real or imaginary part, dropping a redundant ``.0``."""
    text: str = repr(x)
    if x.is_integer() and "e" not in text:
        return text[:-2]
    return text


@typst_formatter(complex)
def show_complex(sink: Sink, value: complex, context: FormatContext) -> None:
    """Write ``re + imi`` in math delimiters, e.g. ``$1 + 2i$``."""
    sign: str = "-" if math.copysign(1.0, value.imag) < 0 else "+"
    text: str = f"{_complex_part(value.real)} {sign} {_complex_part(abs(value.imag))}i"
    enclose(sink, math_pad(context), lambda: sink.write(text))


@typst_formatter(Char)
def show_char(sink: Sink, value: Char, context: FormatContext) -> None:
    """Write a character, as a one-character string literal in code mode."""
    if context.mode is Mode.CODE:
        enclose(sink, '"', lambda: sink.write(value.replace("\\", "\\\\").replace('"', '\\"')))
    else:
        sink.write(str.__str__(value))


@typst_formatter(str)
def show_string(sink: Sink, value: str, context: FormatContext) -> None:
    """Write a string enclosed in double quotes, escaped for the current mode.

    See [`quote_escaped`][typstry.rendering.escaping.quote_escaped].
    """
    quote_escaped(sink, value, context)


@typst_formatter(re.Pattern)
def show_pattern(sink: Sink, value: re.Pattern[Any], context: FormatContext) -> None:
    """Write a ``regex("...")`` call, preceded by ``#`` outside code mode.

    The pattern's own escapes are kept; only unescaped double quotes are escaped.
    Flags with an inline equivalent are written as a ``(?...)`` prefix.

    Raises:
        UnsupportedKindError: For ``bytes`` patterns, which have no Typst counterpart.
    """
    if not isinstance(value.pattern, str):
        raise UnsupportedKindError(type(value.pattern))

    flags: str = "".join(letter for flag, letter in _REGEX_FLAGS if value.flags & flag)
    pattern: str = (f"(?{flags})" if flags else "") + value.pattern

    code_sigil(sink, context)
    enclose(
        sink,
        'regex("',
        lambda: sink.write(escape_unescaped_quotes(pattern)),
        '")',
    )


@typst_formatter(type(None))
def show_none(sink: Sink, value: None, context: FormatContext) -> None:
    """Write nothing in markup mode and an empty string literal otherwise."""
    if context.mode is not Mode.MARKUP:
        sink.write('""')


@typst_formatter(range)
def show_range(sink: Sink, value: range, context: FormatContext) -> None:
    """Write a Typst ``range(start, stop, step: step)`` call.

    Typst ranges are half-open, so the exclusive bound is one step past the last
    element (``last + 1`` counting up, ``last - 1`` counting down). An empty range
    is written with ``stop == start``.
    """
    code_context: FormatContext = context.derive(mode=Mode.CODE)
    start: int = value.start
    step: int = value.step
    if len(value):
        last: int = value[-1]
        stop: int = last + 1 if step > 0 else last - 1
    else:
        stop = start

    def body() -> None:
        show_typst(sink, start, code_context)
        sink.write(", ")
        show_typst(sink, stop, code_context)
        sink.write(", step: ")
        show_typst(sink, step, code_context)

    code_sigil(sink, context)
    enclose(sink, "range(", body, ")")


@typst_formatter(TypstText)
def show_text(sink: Sink, value: TypstText, context: FormatContext) -> None:
    """Write the wrapped text verbatim."""
    sink.write(value.text)


@typst_formatter(TypstString)
def show_typst_string(sink: Sink, value: TypstString, context: FormatContext) -> None:
    """Write already-serialized Typst source verbatim."""
    sink.write(str.__str__(value))


@typst_context(Raw)
def raw_defaults(value: Raw) -> Mapping[str, Any]:
    return {"backticks": 3, "block": False}


@typst_formatter(Raw)
def show_raw(sink: Sink, value: Raw, context: FormatContext) -> None:
    """Write a Typst raw element, inline by default or as a block when ``block`` is set.

    Raises:
        ContextTypeError: If ``backticks`` is not an int >= 3 or ``block`` is not a bool.
    """
    backticks = context.get("backticks")
    if isinstance(backticks, bool) or not isinstance(backticks, int) or backticks < 3:
        raise ContextTypeError("backticks", backticks, "an int >= 3")
    block = context.get("block")
    if not isinstance(block, bool):
        raise ContextTypeError("block", block, "a bool")

    if context.mode is Mode.MATH:
        sink.write(CODE_SIGIL)

    ticks: str = "`" * backticks
    separator: str = "\n" if block else " "
    closing: str = "\n" + ticks if block else ticks
    enclose(sink, ticks + value.lang + separator, lambda: sink.write(value.text), closing)
