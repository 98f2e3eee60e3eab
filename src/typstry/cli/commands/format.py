# topmark:header:start
#
#   project      : Typstry
#   file         : format.py
#   file_relpath : src/typstry/cli/commands/format.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Typstry `format` command.

Formats a Python literal as Typst source:

    typstry format "[1, 2, 3]" --mode math -p delim='"["'

With ``--template`` the argument is a Typst template instead, and ``--var``
binds names used by its splices:

    typstry format --template --var x=1 '$\\(x) / \\(x + 1)$'

Settings are layered: configuration ``[settings]``, then command-line options,
then ``--parameter`` values.
"""

from __future__ import annotations

import ast
import re
from decimal import Decimal
from fractions import Fraction
from typing import Any

import click

from typstry.cli.cli_types import AssignmentParam, ModeParam
from typstry.cli.cmd_common import get_config, get_console
from typstry.cli.errors import TypstryDataError, TypstryUsageError, library_errors
from typstry.config.logging import get_logger
from typstry.core.modes import Mode
from typstry.core.types import Char, Matrix, Raw, TypstText
from typstry.rendering.api import format_value
from typstry.templates.template import Template

logger = get_logger(__name__)

# Names available to template splices in addition to ``--var`` bindings.
TEMPLATE_NAMESPACE: dict[str, Any] = {
    "Char": Char,
    "Decimal": Decimal,
    "Fraction": Fraction,
    "Matrix": Matrix,
    "Mode": Mode,
    "Raw": Raw,
    "TypstText": TypstText,
    "re": re,
}


def parse_literal(text: str, what: str) -> Any:
    """Evaluate a Python literal with ``ast.literal_eval``.

    Raises:
        TypstryDataError: If ``text`` is not a valid literal.
    """
    try:
        return ast.literal_eval(text)
    except (ValueError, SyntaxError, TypeError, MemoryError, RecursionError) as exc:
        raise TypstryDataError(f"Invalid Python literal for {what}: {text!r}") from exc


def _render_template(source: str, variables: tuple[tuple[str, str], ...]) -> str:
    namespace: dict[str, Any] = dict(TEMPLATE_NAMESPACE)
    namespace.update({name: parse_literal(raw, f"--var {name}") for name, raw in variables})
    with library_errors():
        template = Template(source)
    try:
        return str(template.render(namespace))
    except (NameError, AttributeError, ArithmeticError, LookupError, ValueError, TypeError) as exc:
        raise TypstryDataError(f"Error evaluating template: {exc}") from exc


@click.command(
    name="format",
    help="Format VALUE, a Python literal, as Typst source.",
)
@click.argument("value")
@click.option("--mode", type=ModeParam(), default=None, help="code, markup or math.")
@click.option(
    "--inline/--block",
    "inline",
    default=None,
    help="Render math inline ($x$) or as a block ($ x $).",
)
@click.option("--indent", default=None, help="Indentation unit for vectors and matrices.")
@click.option("--depth", type=click.IntRange(min=0), default=None, help="Initial nesting depth.")
@click.option(
    "-p",
    "--parameter",
    "parameters",
    type=AssignmentParam(),
    multiple=True,
    metavar="KEY=TYPST",
    help="Typst parameter, e.g. delim='\"[\"'. Repeatable.",
)
@click.option(
    "--template",
    "is_template",
    is_flag=True,
    help="Treat VALUE as a Typst template with \\(...) splices.",
)
@click.option(
    "--var",
    "variables",
    type=AssignmentParam(),
    multiple=True,
    metavar="NAME=LITERAL",
    help="Bind a template variable to a Python literal. Repeatable.",
)
@click.option("-n", "--no-newline", is_flag=True, help="Do not print a trailing newline.")
@click.pass_context
def format_command(
    ctx: click.Context,
    value: str,
    mode: Mode | None,
    inline: bool | None,
    indent: str | None,
    depth: int | None,
    parameters: tuple[tuple[str, str], ...],
    is_template: bool,
    variables: tuple[tuple[str, str], ...],
    no_newline: bool,
) -> None:
    """Format a literal or render a template and print the Typst source.

    Raises:
        TypstryUsageError: If ``--var`` is used without ``--template``.
        TypstryDataError: If the value cannot be parsed or formatted.
    """
    console = get_console(ctx)

    if variables and not is_template:
        raise TypstryUsageError("--var requires --template")

    if is_template:
        output: str = _render_template(value, variables)
    else:
        settings: dict[str, Any] = get_config(ctx).format_settings()
        overrides = {"mode": mode, "inline": inline, "indent": indent, "depth": depth}
        settings.update({k: v for k, v in overrides.items() if v is not None})
        settings.update(parameters)
        logger.debug("format settings: %s", settings)

        parsed: Any = parse_literal(value, "VALUE")
        with library_errors():
            output = str(format_value(parsed, **settings))

    console.print(output, nl=not no_newline)
