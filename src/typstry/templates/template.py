# topmark:header:start
#
#   project      : Typstry
#   file         : template.py
#   file_relpath : src/typstry/templates/template.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

r"""Typst templates: literal Typst source with spliced Python values.

A template is Typst source containing splices ``\(expression)``. Each splice is
evaluated and formatted with ``TypstString(expression)``; trailing keyword
arguments inside the same parentheses become formatting settings:

```python
from fractions import Fraction

x = 1
assert typst(r"$\(x) / \(x + 1)$") == "$1 / 2$"
assert typst(r"\(Fraction(x, 2), mode=Mode.MATH)") == "(1 / 2)"
assert typst(r"\\(x)") == r"\(x)"
```

Templates are parsed and compiled once, when constructed; all syntax errors are
raised then, before anything is evaluated. Like f-strings, splices run arbitrary
Python code in the caller's namespace, so only use trusted template text.
"""

from __future__ import annotations

import inspect
from functools import lru_cache
from typing import TYPE_CHECKING, Any

from typstry.config.logging import get_logger
from typstry.core.types import TypstString, TypstText
from typstry.templates.scanner import SPLICE_CONSTRUCTOR, Segment, Splice, scan

if TYPE_CHECKING:
    from collections.abc import Mapping

    from typstry.config.logging import TypstryLogger

logger: TypstryLogger = get_logger(__name__)


@lru_cache(maxsize=512)
def _parse(source: str) -> tuple[Segment, ...]:
    return scan(source)


class Template:
    """A parsed and compiled Typst template.

    Args:
        source (str): Template text. Use raw string literals (``r"..."``) so the
            splice marker's backslash reaches the template unchanged.

    Raises:
        TemplateSyntaxError: If a splice is unterminated or malformed.
    """

    __slots__ = ("source", "segments")

    source: str
    segments: tuple[Segment, ...]

    def __init__(self, source: str) -> None:
        self.source = source
        self.segments = _parse(source)

    @property
    def splices(self) -> tuple[Splice, ...]:
        """The compiled splices, in source order."""
        return tuple(s for s in self.segments if isinstance(s, Splice))

    def render(self, namespace: Mapping[str, Any] | None = None) -> TypstString:
        """Evaluate every splice against ``namespace`` and join the result.

        Args:
            namespace (Mapping[str, Any] | None): Names visible to splice expressions.

        Returns:
            TypstString: Literal spans and formatted splices, concatenated in source order.
        """
        env: dict[str, Any] = dict(namespace or {})
        env[SPLICE_CONSTRUCTOR] = TypstString
        parts: list[str] = [
            segment if isinstance(segment, str) else str(eval(segment.code, env))  # noqa: S307
            for segment in self.segments
        ]
        return TypstString(TypstText("".join(parts)))

    def substitute(self, **namespace: Any) -> TypstString:
        """Render with keyword arguments as the namespace."""
        return self.render(namespace)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Template):
            return NotImplemented
        return self.source == other.source

    def __hash__(self) -> int:
        return hash(self.source)

    def __repr__(self) -> str:
        return f"Template({self.source!r})"


def typst(source: str) -> TypstString:
    r"""Render a template against the caller's globals and locals.

    This is the Python counterpart of a string-literal macro: names used inside
    splices are looked up where ``typst`` is called.

    Args:
        source (str): Template text, usually a raw string literal.

    Returns:
        TypstString: The rendered Typst source.

    Raises:
        TemplateSyntaxError: If a splice is unterminated or malformed.

    Example:
        ```python
        x = 1
        assert typst(r"\(x) / \(x + 1)") == "1 / 2"
        ```
    """
    template = Template(source)
    frame = inspect.currentframe()
    caller = frame.f_back if frame is not None else None
    try:
        namespace: dict[str, Any] = {}
        if caller is not None:
            namespace.update(caller.f_globals)
            namespace.update(caller.f_locals)
    finally:
        del frame, caller
    return template.render(namespace)
