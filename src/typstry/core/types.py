# topmark:header:start
#
#   project      : Typstry
#   file         : types.py
#   file_relpath : src/typstry/core/types.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Value wrappers with dedicated Typst formatting rules.

Python has no distinct types for some of the value kinds Typstry formats, so this
module provides small wrappers:

- [`TypstText`][typstry.core.types.TypstText]: raw text inserted verbatim.
- [`TypstString`][typstry.core.types.TypstString]: already-serialized Typst source.
- [`Char`][typstry.core.types.Char]: a single character.
- [`Matrix`][typstry.core.types.Matrix]: a rectangular two-dimensional matrix.
- [`Raw`][typstry.core.types.Raw]: a Typst raw element (inline or block).

The formatting rules themselves live in `typstry.rendering`.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class TypstText:
    """A wrapper whose text is inserted verbatim, ignoring the formatting context.

    Use `TypstText` to insert pre-rendered or intentionally unescaped text into a
    [`TypstString`][typstry.core.types.TypstString] and by extension a Typst source file.

    Args:
        text (object): Any object; it is converted with ``str``.
    """

    text: str

    def __init__(self, text: object) -> None:
        object.__setattr__(self, "text", str(text))


class TypstString(str):
    """A string of Typst source produced by formatting a value.

    ``TypstString(value, **settings)`` formats ``value`` exactly like
    [`format_value`][typstry.rendering.api.format_value]. Passing a
    [`TypstText`][typstry.core.types.TypstText] wraps its text without formatting,
    and passing a `TypstString` returns an equal `TypstString`.

    Concatenating two `TypstString`s yields a `TypstString`; concatenating with a
    plain ``str`` yields a plain ``str``.

    Example:
        ```python
        from fractions import Fraction

        assert TypstString(Fraction(1, 2)) == "$1 / 2$"
        assert TypstString(TypstText("*bold*")) == "*bold*"
        ```
    """

    __slots__ = ()

    def __new__(cls, value: object = "", /, **settings: Any) -> TypstString:
        if isinstance(value, TypstText):
            return super().__new__(cls, value.text)
        if isinstance(value, TypstString) and not settings:
            return super().__new__(cls, str.__str__(value))

        from typstry.rendering.api import render_text

        return super().__new__(cls, render_text(value, settings))

    def __getnewargs__(self) -> tuple[TypstText]:  # type: ignore[override]
        # copy/pickle must not re-format the stored text
        return (TypstText(str.__str__(self)),)

    def __add__(self, other: str) -> str:
        result: str = str.__add__(self, other)
        if isinstance(other, TypstString):
            return TypstString(TypstText(result))
        return result

    def __repr__(self) -> str:
        return f"TypstString(TypstText({str.__repr__(self)}))"

    def __str__(self) -> str:
        return str.__str__(self)


class Char(str):
    """A single character, formatted as a character rather than as a string.

    Raises:
        ValueError: If the value is not exactly one character long.
    """

    __slots__ = ()

    def __new__(cls, value: str) -> Char:
        if len(value) != 1:
            raise ValueError(f"Char requires exactly one character, got {value!r}")
        return super().__new__(cls, value)

    def __repr__(self) -> str:
        return f"Char({str.__repr__(self)})"


class Matrix(Sequence[tuple[Any, ...]]):
    """A rectangular two-dimensional matrix, formatted as a Typst ``mat``.

    Args:
        rows (Iterable[Iterable[Any]]): The rows of the matrix.

    Raises:
        ValueError: If the rows do not all have the same length.

    Example:
        ```python
        m = Matrix([[1, 2], [3, 4]])
        assert m.shape == (2, 2)
        ```
    """

    __slots__ = ("_rows",)

    _rows: tuple[tuple[Any, ...], ...]

    def __init__(self, rows: Iterable[Iterable[Any]]) -> None:
        self._rows = tuple(tuple(row) for row in rows)
        widths: set[int] = {len(row) for row in self._rows}
        if len(widths) > 1:
            raise ValueError(f"Matrix rows must have equal length, got lengths {sorted(widths)}")

    @property
    def shape(self) -> tuple[int, int]:
        """The number of rows and columns."""
        return len(self._rows), len(self._rows[0]) if self._rows else 0

    def __getitem__(self, index: int) -> tuple[Any, ...]:  # type: ignore[override]
        return self._rows[index]

    def __len__(self) -> int:
        return len(self._rows)

    def __iter__(self) -> Iterator[tuple[Any, ...]]:
        return iter(self._rows)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self._rows == other._rows

    def __hash__(self) -> int:
        return hash(self._rows)

    def __repr__(self) -> str:
        return f"Matrix({[list(row) for row in self._rows]!r})"


@dataclass(frozen=True, slots=True)
class Raw:
    """Text rendered as a Typst raw element (monospaced, unparsed).

    Attributes:
        text (str): The raw text.
        lang (str): Optional language tag used for syntax highlighting (e.g. ``"latex"``).
    """

    text: str
    lang: str = ""
