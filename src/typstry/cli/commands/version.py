# topmark:header:start
#
#   project      : Typstry
#   file         : version.py
#   file_relpath : src/typstry/cli/commands/version.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Typstry `version` command.

Prints the current Typstry version as installed in the active Python environment.
"""

from __future__ import annotations

import click

from typstry.cli.cmd_common import get_console, get_effective_verbosity
from typstry.constants import TYPSTRY_VERSION


@click.command(
    name="version",
    help="Show the current version of Typstry.",
)
@click.pass_context
def version_command(ctx: click.Context) -> None:
    """Show the current version of Typstry."""
    console = get_console(ctx)
    if get_effective_verbosity(ctx) > 0:
        console.print(console.styled("Typstry version:\n", bold=True, underline=True))
        console.print(f"    {console.styled(TYPSTRY_VERSION, bold=True)}")
    else:
        console.print(console.styled(TYPSTRY_VERSION, bold=True))
