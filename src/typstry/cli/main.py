# topmark:header:start
#
#   project      : Typstry
#   file         : main.py
#   file_relpath : src/typstry/cli/main.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Click entry point for the Typstry CLI.

Group-level options are initialized once and placed into ``ctx.obj``; the
subcommands read them back through `typstry.cli.cmd_common`.
"""

from __future__ import annotations

import click

from typstry.cli.commands.compile import compile_command
from typstry.cli.commands.config_dump import config_dump_command
from typstry.cli.commands.format import format_command
from typstry.cli.commands.version import version_command
from typstry.cli.console import ClickConsole
from typstry.cli.options import common_config_options, common_verbose_options, resolve_verbosity
from typstry.config.logging import get_logger, resolve_env_log_level, setup_logging

logger = get_logger(__name__)


def init_common_state(
    ctx: click.Context,
    *,
    verbose: int,
    quiet: int,
    no_color: bool,
    config_paths: tuple[str, ...],
    no_config: bool,
) -> None:
    """Initialize shared state (verbosity, logging, console, config) on the Click context.

    Args:
        ctx (click.Context): Current Click context; will have ``obj`` set.
        verbose (int): Count of ``-v`` flags.
        quiet (int): Count of ``-q`` flags.
        no_color (bool): Whether ``--no-color`` was passed.
        config_paths (tuple[str, ...]): Extra config files from ``--config``.
        no_config (bool): Whether to skip project config discovery.
    """
    ctx.obj = ctx.obj or {}

    level_cli: int = resolve_verbosity(verbose, quiet)
    ctx.obj["verbosity_level"] = level_cli

    # TYPSTRY_LOG_LEVEL wins; -v flags enable diagnostics otherwise
    level_env: int | None = resolve_env_log_level()
    log_level: int | None = level_env if level_env is not None else (level_cli if verbose else None)
    ctx.obj["log_level"] = log_level
    setup_logging(level=log_level)

    ctx.obj["config_paths"] = config_paths
    ctx.obj["no_config"] = no_config
    ctx.obj["console"] = ClickConsole(enable_color=not no_color)


@click.group(
    cls=click.Group,
    context_settings={"help_option_names": ["-h", "--help"]},
    invoke_without_command=True,
    help="Typstry: format Python values as Typst source.",
)
@common_verbose_options
@common_config_options
@click.option("--no-color", is_flag=True, help="Disable colored output.")
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: int,
    quiet: int,
    config_paths: tuple[str, ...],
    no_config: bool,
    no_color: bool,
) -> None:
    """Entry point for the Typstry CLI."""
    init_common_state(
        ctx,
        verbose=verbose,
        quiet=quiet,
        no_color=no_color,
        config_paths=config_paths,
        no_config=no_config,
    )

    if ctx.invoked_subcommand is None:
        console: ClickConsole = ctx.obj["console"]
        console.print("Hint: use 'typstry format VALUE' to format a Python literal.")
        console.print()
        console.print(ctx.get_help())


cli.add_command(version_command)

cli.add_command(config_dump_command)

cli.add_command(format_command)

cli.add_command(compile_command)

if __name__ == "__main__":
    cli()
