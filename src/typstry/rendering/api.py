# topmark:header:start
#
#   project      : Typstry
#   file         : api.py
#   file_relpath : src/typstry/rendering/api.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""API for formatting values as Typst source.

This module provides the entry points that turn Python values into Typst source
text. They build the effective context, dispatch to the registered rule for the
value's kind, and hand back the result:

- [`format_value`][typstry.rendering.api.format_value] returns a
  [`TypstString`][typstry.core.types.TypstString].
- [`write_value`][typstry.rendering.api.write_value] writes to a text stream.
- [`show_typst`][typstry.rendering.api.show_typst] is the recursive step used by
  rules to format nested values under a derived context.

Effective context (top-level call):
    global defaults ⊕ kind defaults of the value ⊕ caller settings.
"""

from __future__ import annotations

import io
from typing import TYPE_CHECKING, Any

from typstry.config.logging import get_logger
from typstry.core.context import FormatContext
from typstry.core.errors import UnsupportedKindError
from typstry.core.types import Matrix, TypstString, TypstText
from typstry.rendering.registry import get_rule, kind_defaults, resolve_rule

if TYPE_CHECKING:
    from collections.abc import Mapping

    from typstry.config.logging import TypstryLogger
    from typstry.rendering.escaping import Sink

logger: TypstryLogger = get_logger(__name__)


def _as_registered_kind(value: Any) -> Any:
    """Map array-likes (objects with ``ndim`` and ``tolist``) onto vectors and matrices.

    Raises:
        UnsupportedKindError: If ``value`` has no registered rule and is not a
            one- or two-dimensional array-like.
    """
    if resolve_rule(type(value)) is not None:
        return value
    ndim = getattr(value, "ndim", None)
    if ndim in (1, 2) and callable(getattr(value, "tolist", None)):
        items = value.tolist()
        return items if ndim == 1 else Matrix(items)
    raise UnsupportedKindError(type(value))


def show_typst(sink: Sink, value: Any, context: FormatContext) -> None:
    """Write ``value`` to ``sink`` as Typst source under ``context``.

    Kind defaults registered for the value's type fill in any settings missing
    from ``context``; settings already present are never replaced.

    Args:
        sink (Sink): Output stream.
        value (Any): The value to format.
        context (FormatContext): The effective formatting context.

    Raises:
        UnsupportedKindError: If no rule is registered for the value's type.
        ContextTypeError: If a rule finds a setting of the wrong type.
    """
    value = _as_registered_kind(value)
    defaults: Mapping[str, Any] = kind_defaults(value)
    if defaults:
        context = context.fill(defaults)
    logger.trace(
        "show_typst(%s) mode=%s depth=%s",
        type(value).__name__,
        context.get("mode"),
        context.get("depth"),
    )
    get_rule(value)(sink, value, context)


def effective_context(value: Any, settings: Mapping[str, Any] | None = None) -> FormatContext:
    """Return the top-level context for formatting ``value`` with caller ``settings``.

    Args:
        value (Any): The value about to be formatted; supplies kind defaults.
        settings (Mapping[str, Any] | None): Caller overrides.

    Returns:
        FormatContext: ``default ⊕ kind defaults ⊕ settings``.
    """
    return FormatContext.default().derive(kind_defaults(value)).derive(settings)


def render_text(value: Any, settings: Mapping[str, Any] | None = None) -> str:
    """Format ``value`` and return the result as a plain ``str``.

    The output is accumulated in a private buffer, so a failure raises before any
    text is returned.
    """
    buffer = io.StringIO()
    show_typst(buffer, value, effective_context(value, settings))
    return buffer.getvalue()


def format_value(value: Any, /, **settings: Any) -> TypstString:
    """Format ``value`` as Typst source.

    Args:
        value (Any): The value to format.
        **settings (Any): Overrides of the default context, e.g. ``mode=Mode.MATH``,
            ``inline=False``, ``indent="  "``, or Typst parameters such as ``delim='"["'``.

    Returns:
        TypstString: The serialized Typst source.

    Example:
        ```python
        from fractions import Fraction

        assert format_value(Fraction(1, 2)) == "$1 / 2$"
        assert format_value(Fraction(1, 2), mode=Mode.CODE) == "(1 / 2)"
        ```
    """
    return TypstString(TypstText(render_text(value, settings)))


def write_value(sink: Sink, value: Any, /, **settings: Any) -> None:
    """Format ``value`` as Typst source and write it to ``sink``.

    Nothing is written when formatting fails.

    Args:
        sink (Sink): Output stream, e.g. an open text file or ``io.StringIO``.
        value (Any): The value to format.
        **settings (Any): Overrides of the default context.
    """
    sink.write(render_text(value, settings))
