# topmark:header:start
#
#   project      : Typstry
#   file         : escaping.py
#   file_relpath : src/typstry/rendering/escaping.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Escaping and delimiter primitives shared by all formatting rules.

Every helper writes to a *sink*, any object with a ``write(str)`` method such as
``io.StringIO``. Helpers never buffer; callers that need all-or-nothing output
(see [`write_value`][typstry.rendering.api.write_value]) format into a private
buffer first.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, TypeVar

from typstry.constants import CODE_SIGIL, MATH_SIGIL
from typstry.core.modes import Mode

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from typstry.core.context import FormatContext

_T = TypeVar("_T")


class Sink(Protocol):
    """A write-only text stream."""

    def write(self, s: str, /) -> object:
        """Write ``s`` to the stream."""
        ...


def enclose(
    sink: Sink,
    left: str,
    body: Callable[[], object],
    right: str | None = None,
) -> None:
    """Write ``left``, call ``body`` to write the interior, then write ``right``.

    Args:
        sink (Sink): Output stream.
        left (str): Opening delimiter.
        body (Callable[[], object]): Writes the interior to ``sink``.
        right (str | None): Closing delimiter; defaults to ``left`` reversed, so
            ``"$ "`` closes with ``" $"``.
    """
    sink.write(left)
    body()
    sink.write(left[::-1] if right is None else right)


def join_with(
    sink: Sink,
    items: Iterable[_T],
    delimiter: str,
    each: Callable[[_T], object],
) -> None:
    """Call ``each`` on every item, writing ``delimiter`` between consecutive items.

    Args:
        sink (Sink): Output stream.
        items (Iterable[_T]): Items to write.
        delimiter (str): Separator written between items (not after the last one).
        each (Callable[[_T], object]): Writes a single item to ``sink``.
    """
    first = True
    for item in items:
        if not first:
            sink.write(delimiter)
        each(item)
        first = False


def code_sigil(sink: Sink, context: FormatContext) -> None:
    """Write the number sign ``#`` unless the context is already in code mode."""
    if context.mode is not Mode.CODE:
        sink.write(CODE_SIGIL)


def math_pad(context: FormatContext) -> str:
    """Return the delimiter that opens a math expression in ``context``.

    Returns:
        str: ``""`` when already in math mode, ``"$"`` for inline math, and ``"$ "``
        for block math. Pass the result to [`enclose`][typstry.rendering.escaping.enclose]
        so the closing delimiter mirrors it.
    """
    if context.mode is Mode.MATH:
        return ""
    return MATH_SIGIL if context.inline else MATH_SIGIL + " "


def quote_escaped(sink: Sink, text: str, context: FormatContext) -> None:
    r"""Write ``text`` as a double-quoted string with inner quotes escaped.

    In markup mode the result is ``"..."`` with each ``"`` written as ``\"``.
    In code and math mode the quoted text is itself nested inside a string
    literal, so the quotes are escaped once more: ``"\"...\""`` with each inner
    ``"`` written as ``\\\"``.

    Args:
        sink (Sink): Output stream.
        text (str): The text to quote.
        context (FormatContext): Supplies the mode.
    """
    if context.mode is Mode.MARKUP:
        enclose(sink, '"', lambda: sink.write(text.replace('"', '\\"')))
    else:
        enclose(sink, '"\\"', lambda: sink.write(text.replace('"', '\\\\\\"')), '\\""')


def escape_unescaped_quotes(text: str) -> str:
    r"""Escape each ``"`` in ``text`` that is not already escaped by a backslash.

    A quote preceded by an odd run of backslashes is already escaped and is kept.

    Example:
        ```python
        assert escape_unescaped_quotes('a"b') == 'a\\"b'
        assert escape_unescaped_quotes('a\\"b') == 'a\\"b'
        ```
    """
    out: list[str] = []
    run = 0
    for c in text:
        if c == '"' and run % 2 == 0:
            out.append("\\")
        run = run + 1 if c == "\\" else 0
        out.append(c)
    return "".join(out)
