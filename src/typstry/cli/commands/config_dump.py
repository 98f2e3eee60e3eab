# topmark:header:start
#
#   project      : Typstry
#   file         : config_dump.py
#   file_relpath : src/typstry/cli/commands/config_dump.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Typstry `config` command.

Prints the effective configuration (bundled defaults merged with project files
and ``--config`` files) as a TOML document.
"""

from __future__ import annotations

import click

from typstry.cli.cmd_common import get_config, get_console


@click.command(
    name="config",
    help="Show the effective configuration as TOML.",
)
@click.option(
    "--pyproject",
    is_flag=True,
    help="Nest the output under [tool.typstry], ready for pyproject.toml.",
)
@click.option(
    "--sources",
    is_flag=True,
    help="List the config files that were merged.",
)
@click.pass_context
def config_dump_command(ctx: click.Context, pyproject: bool, sources: bool) -> None:
    """Print the effective configuration.

    Args:
        ctx (click.Context): Current Click context.
        pyproject (bool): Nest the document under ``[tool.typstry]``.
        sources (bool): Add a ``[sources]`` table listing merged files.
    """
    console = get_console(ctx)
    config = get_config(ctx)
    console.print(config.to_toml(pyproject=pyproject, include_files=sources), nl=False)
