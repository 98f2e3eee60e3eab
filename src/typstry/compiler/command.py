# topmark:header:start
#
#   project      : Typstry
#   file         : command.py
#   file_relpath : src/typstry/compiler/command.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Thin wrapper around the Typst compiler executable.

- [`run_compiler`][typstry.compiler.command.run_compiler] runs the compiler once
  and returns its exit status and captured output.
- [`TypstCommand`][typstry.compiler.command.TypstCommand] is an immutable command
  value that can be inspected, modified (``ignorestatus``, ``addenv``,
  ``setenv``), compared, and run.
- [`render`][typstry.compiler.command.render] formats a value into a Typst source
  file and compiles it.

The executable is taken from the configuration (``compiler.executable``), then
``$TYPST_EXECUTABLE``, then ``typst`` on ``PATH``.
"""

from __future__ import annotations

import os
import shlex
import subprocess
from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass, replace
from pathlib import Path
from typing import TYPE_CHECKING, Any, NamedTuple, overload

from typstry.config.logging import get_logger
from typstry.config.model import load_config
from typstry.constants import DEFAULT_TYPST_EXECUTABLE, ENV_TYPST_EXECUTABLE
from typstry.core.errors import CompilerNotFoundError, TypstError
from typstry.rendering.api import format_value

if TYPE_CHECKING:
    from typstry.config.logging import TypstryLogger
    from typstry.config.model import Config

logger: TypstryLogger = get_logger(__name__)

# Page setup written before the formatted value by `render`.
PREAMBLE: str = """\
#set page(
    margin: 1em,
    height: auto,
    width: auto,
    fill: white
)

#set text(16pt)

"""


class CompilerResult(NamedTuple):
    """Outcome of one compiler run.

    Attributes:
        exit_status (int): The process exit status.
        stdout (str): Captured standard output.
        stderr (str): Captured standard error (Typst diagnostics).
    """

    exit_status: int
    stdout: str
    stderr: str

    @property
    def ok(self) -> bool:
        """Whether the compiler exited successfully."""
        return self.exit_status == 0


def run_compiler(
    arguments: Sequence[str],
    env: Mapping[str, str] | None = None,
    ignore_failure: bool = False,
    *,
    inherit_env: bool = True,
    executable: str | None = None,
    config: Config | None = None,
) -> CompilerResult:
    """Run the Typst compiler with ``arguments``.

    Args:
        arguments (Sequence[str]): Arguments after the executable, e.g.
            ``["compile", "input.typ", "output.pdf"]``.
        env (Mapping[str, str] | None): Variables added to the environment.
        ignore_failure (bool): Return the result of a failing run instead of raising.
        inherit_env (bool): Start from ``os.environ``; otherwise only ``env`` and
            the configured font paths are passed.
        executable (str | None): Executable overriding the configured one.
        config (Config | None): Configuration; discovered from the working
            directory when omitted.

    Returns:
        CompilerResult: Exit status and captured output.

    Raises:
        CompilerNotFoundError: If the executable cannot be started.
        TypstError: If the compiler exits unsuccessfully and ``ignore_failure`` is false.
    """
    cfg: Config = config if config is not None else load_config()
    program: str = executable or cfg.resolve_executable()
    full_env: dict[str, str] = dict(os.environ) if inherit_env else {}
    full_env.update(cfg.compiler_env())
    full_env.update(env or {})

    argv: list[str] = [program, *arguments]
    logger.info("Running %s", shlex.join(argv))
    try:
        completed: subprocess.CompletedProcess[str] = subprocess.run(
            argv,
            env=full_env,
            capture_output=True,
            text=True,
            check=False,
        )
    except FileNotFoundError as exc:
        raise CompilerNotFoundError(
            f"Typst compiler {program!r} not found; install Typst or set {ENV_TYPST_EXECUTABLE}"
        ) from exc

    result = CompilerResult(completed.returncode, completed.stdout, completed.stderr)
    logger.debug("Compiler exited with status %d", result.exit_status)
    if not result.ok:
        if not ignore_failure:
            raise TypstError(arguments, result.exit_status, result.stderr)
        logger.warning("Ignoring compiler failure (exit status %d)", result.exit_status)
    return result


def _freeze_env(env: Mapping[str, str]) -> tuple[tuple[str, str], ...]:
    return tuple(sorted((str(k), str(v)) for k, v in env.items()))


@dataclass(frozen=True, slots=True)
class TypstCommand(Sequence[str]):
    """An immutable Typst compiler invocation.

    Items are the executable followed by the parameters, so ``len`` counts the
    executable too.

    Attributes:
        parameters (tuple[str, ...]): Arguments passed after the executable.
        ignore_status (bool): Whether ``run`` tolerates a non-zero exit status.
        env (tuple[tuple[str, str], ...] | None): Replacement environment set by
            ``setenv``; ``None`` inherits ``os.environ``.
        extra_env (tuple[tuple[str, str], ...]): Variables added by ``addenv``.
        executable (str | None): Explicit executable; ``None`` uses the configured one.

    Example:
        ```python
        help = TypstCommand.from_string("help")
        assert list(help) == ["typst", "help"]
        assert help != help.ignorestatus()
        ```
    """

    parameters: tuple[str, ...]
    ignore_status: bool = False
    env: tuple[tuple[str, str], ...] | None = None
    extra_env: tuple[tuple[str, str], ...] = ()
    executable: str | None = None

    def __init__(
        self,
        parameters: Sequence[str] = (),
        ignore_status: bool = False,
        env: Mapping[str, str] | tuple[tuple[str, str], ...] | None = None,
        extra_env: Mapping[str, str] | tuple[tuple[str, str], ...] = (),
        executable: str | None = None,
    ) -> None:
        if isinstance(parameters, str):
            raise TypeError("parameters must be a sequence of strings, not a string")
        object.__setattr__(self, "parameters", tuple(str(p) for p in parameters))
        object.__setattr__(self, "ignore_status", ignore_status)
        object.__setattr__(
            self, "env", None if env is None else _freeze_env(dict(env))
        )
        object.__setattr__(self, "extra_env", _freeze_env(dict(extra_env)))
        object.__setattr__(self, "executable", executable)

    @classmethod
    def from_string(cls, text: str) -> TypstCommand:
        """Build a command from space-separated parameters.

        Example:
            ``TypstCommand.from_string("compile input.typ output.pdf")``
        """
        return cls(text.split(" ") if text else ())

    @property
    def program(self) -> str:
        """The executable this command names."""
        return self.executable or os.environ.get(ENV_TYPST_EXECUTABLE) or DEFAULT_TYPST_EXECUTABLE

    def ignorestatus(self) -> TypstCommand:
        """Return a copy whose ``run`` does not raise on a non-zero exit status."""
        return replace(self, ignore_status=True)

    def addenv(self, **variables: str) -> TypstCommand:
        """Return a copy with ``variables`` added to its environment."""
        return replace(self, extra_env={**dict(self.extra_env), **variables})

    def setenv(self, env: Mapping[str, str]) -> TypstCommand:
        """Return a copy that runs with exactly ``env`` as its environment."""
        return replace(self, env=dict(env), extra_env=())

    def run(self, *, config: Config | None = None) -> CompilerResult:
        """Run the command.

        Raises:
            CompilerNotFoundError: If the executable cannot be started.
            TypstError: On a non-zero exit status, unless ``ignore_status`` is set.
        """
        inherit: bool = self.env is None
        env: dict[str, str] = {**dict(self.env or ()), **dict(self.extra_env)}
        return run_compiler(
            self.parameters,
            env=env,
            ignore_failure=self.ignore_status,
            inherit_env=inherit,
            executable=self.executable,
            config=config,
        )

    @overload
    def __getitem__(self, index: int) -> str: ...
    @overload
    def __getitem__(self, index: slice) -> Sequence[str]: ...
    def __getitem__(self, index: int | slice) -> str | Sequence[str]:
        return (self.program, *self.parameters)[index]

    def __len__(self) -> int:
        return len(self.parameters) + 1

    def __iter__(self) -> Iterator[str]:
        yield self.program
        yield from self.parameters

    def __repr__(self) -> str:
        return f"typst`{' '.join(self.parameters)}`"


def render(
    value: Any,
    *,
    input: str | os.PathLike[str] = "input.typ",
    output: str | os.PathLike[str] = "output.pdf",
    preamble: str = PREAMBLE,
    ignore_status: bool = False,
    config: Config | None = None,
    **settings: Any,
) -> CompilerResult:
    """Format ``value``, write it after ``preamble`` to ``input``, and compile it.

    Args:
        value (Any): The value to render.
        input (str | os.PathLike[str]): Typst source file to write.
        output (str | os.PathLike[str]): Output document; the format follows its
            extension (``.pdf``, ``.png``, ``.svg``).
        preamble (str): Typst source written before the value.
        ignore_status (bool): Return a failing result instead of raising.
        config (Config | None): Compiler configuration.
        **settings (Any): Formatting settings for ``value``.

    Returns:
        CompilerResult: The compiler outcome.

    Raises:
        UnsupportedKindError: If ``value`` cannot be formatted; no file is written.
        TypstError: If compilation fails and ``ignore_status`` is false.
    """
    source: str = preamble + str(format_value(value, **settings)) + "\n"
    Path(input).write_text(source, encoding="utf8")
    logger.debug("Wrote %d characters to %s", len(source), input)
    return TypstCommand(["compile", os.fspath(input), os.fspath(output)]).run(config=config)
