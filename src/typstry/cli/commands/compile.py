# topmark:header:start
#
#   project      : Typstry
#   file         : compile.py
#   file_relpath : src/typstry/cli/commands/compile.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Typstry `compile` command.

Runs the Typst compiler with the given arguments, using the configured
executable and font paths, and exits with the compiler's status:

    typstry compile -- compile input.typ output.pdf
"""

from __future__ import annotations

import click

from typstry.cli.cmd_common import get_config, get_console
from typstry.cli.errors import library_errors
from typstry.compiler.command import run_compiler


@click.command(
    name="compile",
    help="Run the Typst compiler with ARGUMENTS and relay its output.",
    context_settings={"ignore_unknown_options": True},
)
@click.argument("arguments", nargs=-1, type=click.UNPROCESSED)
@click.pass_context
def compile_command(ctx: click.Context, arguments: tuple[str, ...]) -> None:
    """Run the Typst compiler.

    Raises:
        TypstryCompilerNotFoundError: If the compiler is not installed.
    """
    console = get_console(ctx)
    config = get_config(ctx)
    with library_errors():
        result = run_compiler(list(arguments), ignore_failure=True, config=config)
    if result.stdout:
        console.print(result.stdout, nl=False)
    if result.stderr:
        console.error(result.stderr, nl=False)
    ctx.exit(result.exit_status)
