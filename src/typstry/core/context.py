# topmark:header:start
#
#   project      : Typstry
#   file         : context.py
#   file_relpath : src/typstry/core/context.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Formatting context: the settings threaded through every formatting call.

A [`FormatContext`][typstry.core.context.FormatContext] is an immutable, ordered
mapping of setting names to values. It always carries the four core settings:

| Setting  | Default   | Type   | Description |
|:---------|:----------|:-------|:------------|
| `mode`   | `MARKUP`  | `Mode` | The Typst context the value is emitted into. |
| `inline` | `True`    | `bool` | Whether math is rendered inline (`$x$`) or as a block (`$ x $`). |
| `indent` | 4 spaces  | `str`  | The unit of horizontal indentation for multi-line output. |
| `depth`  | `0`       | `int`  | The current nesting level inside containers. |

Additional keys are allowed. Rules for specific value kinds read Typst function
parameters (e.g. ``delim``, ``gap``) from the same mapping; parameter values are
Typst source text and must be strings.

Immutability:
    ``derive`` always returns a new context; the receiver is never modified. This is
    what allows a nested call to switch mode or depth for its own subtree only.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from types import MappingProxyType
from typing import Any, Final

from typstry.core.errors import ContextTypeError
from typstry.core.modes import Mode

DEFAULT_SETTINGS: Final[Mapping[str, Any]] = MappingProxyType(
    {
        "mode": Mode.MARKUP,
        "inline": True,
        "indent": " " * 4,
        "depth": 0,
    }
)


class FormatContext(Mapping[str, Any]):
    """Immutable, mergeable settings bag for Typst formatting.

    Args:
        settings (Mapping[str, Any] | None): Initial settings. Core settings are *not*
            filled in; use [`default`][typstry.core.context.FormatContext.default] for that.

    Example:
        ```python
        ctx = FormatContext.default()
        math_ctx = ctx.derive(mode=Mode.MATH)
        assert ctx.mode is Mode.MARKUP and math_ctx.mode is Mode.MATH
        ```
    """

    __slots__ = ("_settings",)

    _settings: Mapping[str, Any]

    def __init__(self, settings: Mapping[str, Any] | None = None) -> None:
        self._settings = MappingProxyType(dict(settings or {}))

    @classmethod
    def default(cls) -> FormatContext:
        """Return a context holding only the default core settings."""
        return cls(DEFAULT_SETTINGS)

    # ------------------------------------------------------------------ mapping

    def __getitem__(self, key: str) -> Any:
        return self._settings[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._settings)

    def __len__(self) -> int:
        return len(self._settings)

    def __repr__(self) -> str:
        items = ", ".join(f"{k}={v!r}" for k, v in self._settings.items())
        return f"FormatContext({items})"

    # ------------------------------------------------------------------ merging

    def derive(self, overrides: Mapping[str, Any] | None = None, /, **kwargs: Any) -> FormatContext:
        """Return a new context with ``overrides`` replacing existing values.

        Keys absent from the overrides are inherited unchanged. Keyword arguments
        are applied after ``overrides``.

        Args:
            overrides (Mapping[str, Any] | None): Settings to replace or add.
            **kwargs (Any): Additional settings to replace or add.

        Returns:
            FormatContext: The derived context.
        """
        merged: dict[str, Any] = dict(self._settings)
        if overrides:
            merged.update(overrides)
        merged.update(kwargs)
        return FormatContext(merged)

    def fill(self, defaults: Mapping[str, Any]) -> FormatContext:
        """Return a new context where ``defaults`` supply only the keys this one lacks.

        Args:
            defaults (Mapping[str, Any]): Fallback settings.

        Returns:
            FormatContext: ``self`` when nothing is missing, otherwise a derived context.
        """
        missing: dict[str, Any] = {k: v for k, v in defaults.items() if k not in self._settings}
        return self.derive(missing) if missing else self

    # ---------------------------------------------------------- typed accessors

    @property
    def mode(self) -> Mode:
        """The current [`Mode`][typstry.core.modes.Mode]."""
        value = self._settings.get("mode")
        if not isinstance(value, Mode):
            raise ContextTypeError("mode", value, "a typstry Mode")
        return value

    @property
    def inline(self) -> bool:
        """Whether math is rendered inline rather than as a block."""
        value = self._settings.get("inline")
        if not isinstance(value, bool):
            raise ContextTypeError("inline", value, "a bool")
        return value

    @property
    def indent(self) -> str:
        """The unit of horizontal indentation."""
        value = self._settings.get("indent")
        if not isinstance(value, str):
            raise ContextTypeError("indent", value, "a str")
        return value

    @property
    def depth(self) -> int:
        """The current nesting level inside containers."""
        value = self._settings.get("depth")
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise ContextTypeError("depth", value, "a non-negative int")
        return value

    def parameter(self, key: str) -> str:
        """Return the Typst parameter stored under ``key``.

        Args:
            key (str): The parameter name, e.g. ``"delim"``.

        Returns:
            str: The Typst source text of the parameter, or ``""`` when absent.

        Raises:
            ContextTypeError: If a value is stored under ``key`` but is not a ``str``.
        """
        value = self._settings.get(key, "")
        if not isinstance(value, str):
            raise ContextTypeError(key, value, "a str of Typst source")
        return value
