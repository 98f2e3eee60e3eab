# topmark:header:start
#
#   project      : Typstry
#   file         : scanner.py
#   file_relpath : src/typstry/templates/scanner.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

r"""Single-pass scanner splitting a template into literal spans and splices.

A splice starts at the marker ``\(`` and ends at the matching ``)``. Its contents
are a Python expression, optionally followed by keyword settings, and are
compiled as ``TypstString(<contents>)``.

Escaping grammar (``r`` counts the backslashes *before* the marker's own backslash):

| Source     | `r` | Output              |
|:-----------|:----|:--------------------|
| `\(x)`     | 0   | splice              |
| `\\(x)`    | 1   | `\(x)` (literal)    |
| `\\\(x)`   | 2   | `\` + splice        |
| `\\\\(x)`  | 3   | `\\(x)` (literal)   |

That is, ``r // 2`` literal backslashes are written, followed by a splice when
``r`` is even and by the literal marker text ``\(`` when ``r`` is odd. Backslash
runs not followed by ``(`` are copied unchanged.

The closing parenthesis is found by balanced scanning that skips over Python
string literals, so a splice may itself contain parentheses (``\(f(x))``) and
quoted parentheses (``\(")")``).
"""

from __future__ import annotations

import ast
from dataclasses import dataclass
from typing import TYPE_CHECKING

from typstry.config.logging import get_logger
from typstry.constants import SPLICE_MARKER
from typstry.core.errors import TemplateSyntaxError

if TYPE_CHECKING:
    from types import CodeType

    from typstry.config.logging import TypstryLogger

logger: TypstryLogger = get_logger(__name__)

# Name bound to the TypstString constructor when a splice is evaluated.
SPLICE_CONSTRUCTOR: str = "__typstry_splice__"

_FILENAME: str = "<typst template>"


@dataclass(frozen=True, slots=True)
class Splice:
    """A compiled splice.

    Attributes:
        contents (str): Source text between the marker and the matching ``)``.
        position (int): Index of the marker's backslash in the template.
        code (CodeType): ``TypstString(<contents>)`` compiled in ``eval`` mode.
    """

    contents: str
    position: int
    code: CodeType


Segment = str | Splice


def find_closing_paren(source: str, start: int, marker: int) -> int:
    """Return the index of the ``)`` closing the splice whose contents begin at ``start``.

    Args:
        source (str): The complete template.
        start (int): Index just after the marker's ``(``.
        marker (int): Index of the marker (for error reporting).

    Returns:
        int: Index of the matching ``)``.

    Raises:
        TemplateSyntaxError: If the end of input is reached first.
    """
    depth = 1
    i = start
    n = len(source)
    while i < n:
        c = source[i]
        if c in "'\"":
            i = _skip_string(source, i, marker)
            continue
        if c == "(":
            depth += 1
        elif c == ")":
            depth -= 1
            if depth == 0:
                return i
        i += 1
    raise TemplateSyntaxError("unterminated splice marker", source, marker)


def _skip_string(source: str, i: int, marker: int) -> int:
    """Return the index just past the Python string literal opening at ``i``."""
    quote = source[i] * 3 if source.startswith(source[i] * 3, i) else source[i]
    j = i + len(quote)
    n = len(source)
    while j < n:
        if source[j] == "\\":
            j += 2
            continue
        if source.startswith(quote, j):
            return j + len(quote)
        j += 1
    raise TemplateSyntaxError("unterminated string literal in splice", source, marker)


def compile_splice(source: str, contents: str, position: int) -> Splice:
    """Compile the contents of one splice.

    Args:
        source (str): The complete template (for error reporting).
        contents (str): Text between the marker and its matching ``)``.
        position (int): Index of the marker.

    Returns:
        Splice: The compiled splice.

    Raises:
        TemplateSyntaxError: If ``contents`` is empty, does not parse as a Python
            argument list, or has other than exactly one positional argument.
    """
    if not contents.strip():
        raise TemplateSyntaxError("empty splice", source, position)
    try:
        tree = ast.parse(f"{SPLICE_CONSTRUCTOR}({contents})", filename=_FILENAME, mode="eval")
    except SyntaxError as exc:
        raise TemplateSyntaxError(
            f"invalid splice expression {contents!r}: {exc.msg}", source, position
        ) from exc

    call = tree.body
    if (
        not isinstance(call, ast.Call)
        or len(call.args) != 1
        or isinstance(call.args[0], ast.Starred)
    ):
        raise TemplateSyntaxError(
            f"splice must hold exactly one value and optional settings, got {contents!r}",
            source,
            position,
        )
    code = compile(tree, _FILENAME, "eval")
    return Splice(contents=contents, position=position, code=code)


def scan(source: str) -> tuple[Segment, ...]:
    """Split ``source`` into literal spans and compiled splices, in source order.

    Args:
        source (str): The template text.

    Returns:
        tuple[Segment, ...]: Literal ``str`` spans (never empty, never adjacent) and
            [`Splice`][typstry.templates.scanner.Splice] objects.

    Raises:
        TemplateSyntaxError: On the first malformed splice; no segments are returned.
    """
    segments: list[Segment] = []
    literal: list[str] = []
    i = 0
    n = len(source)

    def flush() -> None:
        text = "".join(literal)
        if text:
            segments.append(text)
        literal.clear()

    while i < n:
        k = source.find("\\", i)
        if k < 0:
            literal.append(source[i:])
            break
        literal.append(source[i:k])

        j = k
        while j < n and source[j] == "\\":
            j += 1
        if j == n or source[j] != "(":
            literal.append(source[k:j])
            i = j
            continue

        preceding = j - k - 1
        literal.append("\\" * (preceding // 2))
        if preceding % 2:
            literal.append(SPLICE_MARKER)
            i = j + 1
            continue

        marker = j - 1
        close = find_closing_paren(source, j + 1, marker)
        flush()
        segments.append(compile_splice(source, source[j + 1 : close], marker))
        i = close + 1

    flush()
    logger.debug(
        "Scanned template of %d characters: %d splice(s)",
        n,
        sum(isinstance(s, Splice) for s in segments),
    )
    return tuple(segments)
