# topmark:header:start
#
#   project      : Typstry
#   file         : errors.py
#   file_relpath : src/typstry/core/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exceptions raised by the Typstry library.

Usage:
    All library errors derive from [`TypstryError`][typstry.core.errors.TypstryError].
    Errors that correspond to a built-in category also derive from the matching
    built-in exception (``SyntaxError``, ``TypeError``) so callers can catch them
    either way.

Taxonomy:
    - ``TemplateSyntaxError``: an unterminated or malformed splice, raised when a
      template is constructed and before any value is evaluated.
    - ``UnsupportedKindError``: no formatting rule is registered for a value's type.
    - ``ContextTypeError``: a stored setting does not have the type a rule expects.
    - ``TypstError`` / ``CompilerNotFoundError``: the external compiler failed or is missing.
    - ``ConfigError``: a configuration file is unreadable or invalid.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence


class TypstryError(Exception):
    """Base class for all Typstry errors."""


class TemplateSyntaxError(TypstryError, SyntaxError):
    """Error for a template whose splice markers cannot be parsed.

    Attributes:
        source (str): The complete template text.
        position (int): Zero-based index of the offending splice marker.
    """

    def __init__(self, message: str, source: str, position: int) -> None:
        line: int = source.count("\n", 0, position) + 1
        column: int = position - (source.rfind("\n", 0, position) + 1) + 1
        SyntaxError.__init__(
            self,
            message,
            ("<typst template>", line, column, source.splitlines()[line - 1] if source else ""),
        )
        self.source = source
        self.position = position


class UnsupportedKindError(TypstryError, TypeError):
    """Error for a value whose type has no registered formatting rule.

    Attributes:
        kind (type): The offending value type.
    """

    def __init__(self, kind: type) -> None:
        super().__init__(
            f"No Typst formatting rule is registered for values of type "
            f"'{kind.__module__}.{kind.__qualname__}'"
        )
        self.kind = kind


class ContextTypeError(TypstryError, TypeError):
    """Error for a context setting whose value does not have the expected type.

    Attributes:
        key (str): The setting name.
        value (object): The offending stored value.
        expected (str): Human-readable description of the expected type.
    """

    def __init__(self, key: str, value: object, expected: str) -> None:
        super().__init__(
            f"Setting '{key}' must be {expected}, got {value!r} "
            f"of type '{type(value).__qualname__}'"
        )
        self.key = key
        self.value = value
        self.expected = expected


class TypstError(TypstryError):
    """Error for a Typst compiler invocation that exited unsuccessfully.

    Attributes:
        arguments (tuple[str, ...]): The arguments passed to the compiler.
        exit_status (int): The compiler's exit status.
        stderr (str): The captured standard error of the compiler.
    """

    def __init__(self, arguments: Sequence[str], exit_status: int, stderr: str = "") -> None:
        super().__init__(
            f"Typst compiler failed with exit status {exit_status}: "
            f"typst {' '.join(arguments)}"
        )
        self.arguments = tuple(arguments)
        self.exit_status = exit_status
        self.stderr = stderr


class CompilerNotFoundError(TypstryError):
    """Error when the Typst compiler executable cannot be found."""


class ConfigError(TypstryError):
    """Error for missing, unreadable, or invalid configuration."""
