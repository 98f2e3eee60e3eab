# topmark:header:start
#
#   project      : Typstry
#   file         : containers.py
#   file_relpath : src/typstry/rendering/containers.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Multi-line, indentation-aware formatting of vectors and matrices.

| Type            | Settings                           | Parameters |
|:----------------|:-----------------------------------|:-----------|
| `list`, `tuple` | `mode`, `inline`, `indent`, `depth` | `delim`, `gap` |
| `Matrix`        | `mode`, `inline`, `indent`, `depth` | `delim`, `augment`, `gap`, `row_gap`, `column_gap` |

Layout:
    The outermost container switches to math mode and is wrapped in the
    delimiters chosen by [`math_pad`][typstry.rendering.escaping.math_pad]; nested
    containers are already in math mode and emit no delimiters. Each level of
    nesting increments ``depth`` by one, and element lines are indented by
    ``indent * depth``, so nested containers are staircased:

    ```
    $vec(
        vec(
            1, 2
        ), vec(
            3, 4
        )
    )$
    ```
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from typstry.core.modes import Mode
from typstry.core.types import Matrix
from typstry.rendering.api import show_typst
from typstry.rendering.escaping import enclose, join_with, math_pad
from typstry.rendering.registry import typst_formatter

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from typstry.core.context import FormatContext
    from typstry.rendering.escaping import Sink

VECTOR_PARAMETERS: tuple[str, ...] = ("delim", "gap")
MATRIX_PARAMETERS: tuple[str, ...] = ("delim", "augment", "gap", "row_gap", "column_gap")


def print_parameters(
    sink: Sink,
    context: FormatContext,
    function: str,
    keys: Iterable[str],
) -> None:
    """Write a Typst function head, its parameters found in ``context``, and a newline.

    Keys that are absent from ``context`` or hold an empty string are skipped.

    Example:
        ``print_parameters(sink, ctx.derive(delim='"["'), "vec", ["delim", "gap"])``
        writes ``vec(delim: "[", `` followed by a newline.

    Args:
        sink (Sink): Output stream.
        context (FormatContext): Source of the parameter values.
        function (str): The Typst function name, e.g. ``"vec"``.
        keys (Iterable[str]): Recognized parameter names, in emission order.

    Raises:
        ContextTypeError: If a parameter is present but not a ``str``.
    """
    sink.write(function + "(")
    for key in keys:
        value: str = context.parameter(key)
        if value:
            sink.write(f"{key}: {value}, ")
    sink.write("\n")


@typst_formatter(list)
@typst_formatter(tuple)
def show_vector(sink: Sink, value: Sequence[Any], context: FormatContext) -> None:
    """Write a one-dimensional sequence as a Typst ``vec``."""
    depth: int = context.depth
    indent: str = context.indent
    math_context: FormatContext = context.derive(mode=Mode.MATH)
    element_context: FormatContext = math_context.derive(depth=depth + 1)

    def body() -> None:
        print_parameters(sink, math_context, "vec", VECTOR_PARAMETERS)
        sink.write(indent * (depth + 1))
        join_with(sink, value, ", ", lambda x: show_typst(sink, x, element_context))
        sink.write("\n" + indent * depth + ")")

    enclose(sink, math_pad(context), body)


@typst_formatter(Matrix)
def show_matrix(sink: Sink, value: Matrix, context: FormatContext) -> None:
    """Write a two-dimensional matrix as a Typst ``mat``, one row per line."""
    depth: int = context.depth
    indent: str = context.indent
    element_context: FormatContext = context.derive(mode=Mode.MATH, depth=depth + 1)

    def row(elements: Sequence[Any]) -> None:
        sink.write(indent * (depth + 1))
        join_with(sink, elements, ", ", lambda x: show_typst(sink, x, element_context))

    def body() -> None:
        print_parameters(sink, element_context, "mat", MATRIX_PARAMETERS)
        join_with(sink, value, ";\n", row)
        sink.write("\n" + indent * depth + ")")

    enclose(sink, math_pad(context), body)
