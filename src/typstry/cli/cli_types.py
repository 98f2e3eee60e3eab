# topmark:header:start
#
#   project      : Typstry
#   file         : cli_types.py
#   file_relpath : src/typstry/cli/cli_types.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Custom Click parameter types for the Typstry CLI.

- `ModeParam` converts a mode name (``code``, ``markup``, ``math``) to a `Mode`.
- `AssignmentParam` splits ``KEY=VALUE`` into a ``(key, value)`` pair.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, NoReturn

import click

from typstry.core.modes import Mode

if TYPE_CHECKING:
    from click.shell_completion import CompletionItem as ClickCompletionItem


class ModeParam(click.ParamType):
    """A Click parameter type that converts a string to a `Mode`."""

    name = "mode"

    def _fail_noreturn(
        self,
        message: str,
        param: click.Parameter | None,
        ctx: click.Context | None,
    ) -> NoReturn:
        """Raise a BadParameter with a NoReturn signature (clear to type checkers)."""
        raise click.BadParameter(message, param=param, ctx=ctx)

    def convert(
        self,
        value: str | Mode | None,
        param: click.Parameter | None,
        ctx: click.Context | None,
    ) -> Mode | None:
        """Converts a mode name to a member of `Mode`, case-insensitively."""
        if value is None or isinstance(value, Mode):
            return value
        mode: Mode | None = Mode.parse(value)
        if mode is None:
            self._fail_noreturn(
                f"Invalid value '{value}'. Must be one of: {', '.join(str(m) for m in Mode)}",
                param,
                ctx,
            )
        return mode

    def shell_complete(
        self,
        ctx: click.Context,
        param: click.Parameter,
        incomplete: str,
    ) -> list[ClickCompletionItem]:
        """Tab completion for Click.

        Bash: `eval "$(_TYPSTRY_COMPLETE=bash_source typstry)"`
        """
        from click.shell_completion import CompletionItem

        return [CompletionItem(str(m)) for m in Mode if str(m).startswith(incomplete.lower())]


class AssignmentParam(click.ParamType):
    """A Click parameter type for ``KEY=VALUE`` pairs."""

    name = "key=value"

    def convert(
        self,
        value: str | tuple[str, str],
        param: click.Parameter | None,
        ctx: click.Context | None,
    ) -> tuple[str, str]:
        """Split on the first ``=``; the key must be a non-empty identifier."""
        if isinstance(value, tuple):
            return value
        key, sep, rhs = value.partition("=")
        key = key.strip()
        if not sep or not key.isidentifier():
            self.fail(f"Expected KEY=VALUE with an identifier key, got '{value}'", param, ctx)
        return key, rhs
