# topmark:header:start
#
#   project      : Typstry
#   file         : errors.py
#   file_relpath : src/typstry/cli/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exceptions for the Typstry CLI.

Usage:
    Raise these exceptions in CLI commands to signal errors with standardized
    messages and exit codes. Library errors are translated by
    [`library_errors`][typstry.cli.errors.library_errors].

Styling:
    Exceptions prefer the project console if available (see `show()`); if no console
    is present in the Click context, they fall back to Click's default styling.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import IO, TYPE_CHECKING, Any

import click

from typstry.cli.exit_codes import ExitCode
from typstry.core.errors import (
    CompilerNotFoundError,
    ConfigError,
    ContextTypeError,
    TemplateSyntaxError,
    TypstryError,
    UnsupportedKindError,
)

if TYPE_CHECKING:
    from collections.abc import Iterator


class TypstryCliError(click.ClickException):
    """Base class for all Typstry CLI errors."""

    exit_code = ExitCode.FAILURE

    def format_message(self) -> str:  # pragma: no cover - trivial
        """Return the plain error message text, without color."""
        return str(getattr(self, "message", ""))

    def show(self, file: IO[Any] | None = None) -> None:  # pragma: no cover - Click prints errors
        """Display the error using the project console if available."""
        ctx = click.get_current_context(silent=True)
        console = ctx.obj.get("console") if ctx is not None and isinstance(ctx.obj, dict) else None
        if console is not None:
            console.error(f"Error: {self.format_message()}")
            return
        super().show(file)


class TypstryUsageError(TypstryCliError):
    """Error for command-line invocation errors (invalid flags/args)."""

    exit_code = ExitCode.USAGE_ERROR


class TypstryDataError(TypstryCliError):
    """Error for input that cannot be parsed or formatted."""

    exit_code = ExitCode.DATA_ERROR


class TypstryConfigError(TypstryCliError):
    """Error for configuration errors (missing/invalid/malformed config)."""

    exit_code = ExitCode.CONFIG_ERROR


class TypstryCompilerNotFoundError(TypstryCliError):
    """Error when the Typst compiler is not installed."""

    exit_code = ExitCode.UNAVAILABLE


class TypstryIOError(TypstryCliError):
    """Error for I/O errors reading/writing files."""

    exit_code = ExitCode.IO_ERROR


class TypstryUnexpectedError(TypstryCliError):
    """Error for unhandled/unknown library errors (last-resort)."""

    exit_code = ExitCode.UNEXPECTED_ERROR


@contextmanager
def library_errors() -> Iterator[None]:
    """Translate library exceptions raised in the block into CLI errors."""
    try:
        yield
    except (TemplateSyntaxError, UnsupportedKindError, ContextTypeError) as exc:
        raise TypstryDataError(str(exc)) from exc
    except ConfigError as exc:
        raise TypstryConfigError(str(exc)) from exc
    except CompilerNotFoundError as exc:
        raise TypstryCompilerNotFoundError(str(exc)) from exc
    except TypstryError as exc:
        raise TypstryUnexpectedError(str(exc)) from exc
    except OSError as exc:
        raise TypstryIOError(str(exc)) from exc
