# topmark:header:start
#
#   project      : Typstry
#   file         : cmd_common.py
#   file_relpath : src/typstry/cli/cmd_common.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Helpers shared by Typstry CLI commands.

Commands read the state stored on the Click context by the ``typstry`` group:
the console, the verbosity level, and the config file options.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

import click

from typstry.cli.errors import library_errors
from typstry.config.model import load_config

if TYPE_CHECKING:
    from typstry.cli.console import ClickConsole
    from typstry.config.model import Config


def get_console(ctx: click.Context) -> ClickConsole:
    """Return the console created by the ``typstry`` group."""
    ctx.ensure_object(dict)
    return ctx.obj["console"]


def get_effective_verbosity(ctx: click.Context) -> int:
    """Return the program-output verbosity: 0 (terse) or 1 (verbose)."""
    level: int = int(ctx.obj.get("verbosity_level", logging.WARNING))
    return 1 if level <= logging.INFO else 0


def get_config(ctx: click.Context) -> Config:
    """Load the effective configuration once per invocation.

    Raises:
        TypstryConfigError: If a config file is unreadable or invalid.
    """
    ctx.ensure_object(dict)
    cached: Config | None = ctx.obj.get("config")
    if cached is None:
        with library_errors():
            cached = load_config(
                extra_config_files=[Path(p) for p in ctx.obj.get("config_paths", ())],
                no_config=bool(ctx.obj.get("no_config", False)),
            )
        ctx.obj["config"] = cached
    return cached
