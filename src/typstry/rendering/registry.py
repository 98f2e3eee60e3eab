# topmark:header:start
#
#   project      : Typstry
#   file         : registry.py
#   file_relpath : src/typstry/rendering/registry.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Registry of Typst formatting rules, keyed by value type.

A value kind becomes formattable by registering two things:

1. A **formatting rule** ``rule(sink, value, context) -> None`` with the
   [`typst_formatter`][typstry.rendering.registry.typst_formatter] decorator.
2. Optionally, **kind defaults** ``supplier(value) -> Mapping[str, Any]`` with the
   [`typst_context`][typstry.rendering.registry.typst_context] decorator, declaring
   settings that differ from the global defaults for this kind.

Lookups follow the method resolution order of the value's type (including
virtual subclasses of ABCs such as ``numbers.Integral``), so the most specific
registered kind wins. Both tables are backed by ``functools.singledispatch``; the
dispatchers are only used for resolution and are never called directly.

Example:
    ```python
    from typstry.rendering.registry import typst_context, typst_formatter

    class Celsius(float): ...

    @typst_formatter(Celsius)
    def show_celsius(sink, value, context):
        sink.write(f"{float(value)} °C")
    ```

Notes:
    Registration mutates process-global state. Register extension rules at import
    time of the defining module; do not re-register kinds concurrently with formatting.
"""

from __future__ import annotations

import importlib
from functools import singledispatch
from threading import RLock
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Callable, TypeVar

from typstry.config.logging import get_logger
from typstry.core.errors import UnsupportedKindError

if TYPE_CHECKING:
    from collections.abc import Mapping

    from typstry.config.logging import TypstryLogger
    from typstry.core.context import FormatContext
    from typstry.rendering.escaping import Sink

logger: TypstryLogger = get_logger(__name__)

Rule = Callable[["Sink", Any, "FormatContext"], None]
ContextSupplier = Callable[[Any], "Mapping[str, Any]"]

_R = TypeVar("_R", bound=Rule)
_C = TypeVar("_C", bound=ContextSupplier)

# Modules whose import registers the built-in rules.
BUILTIN_RULE_MODULES: tuple[str, ...] = (
    "typstry.rendering.formatters",
    "typstry.rendering.containers",
)

_EMPTY: Mapping[str, Any] = MappingProxyType({})


def _no_rule(value: object) -> None:
    """Sentinel implementation for unregistered kinds."""


def _no_context(value: object) -> Mapping[str, Any]:
    """Default kind-defaults supplier: no settings beyond the global defaults."""
    return _EMPTY


_rules = singledispatch(_no_rule)
_contexts = singledispatch(_no_context)
_lock = RLock()
_builtins_loaded = False


def typst_formatter(kind: type) -> Callable[[_R], _R]:
    """Decorator registering a formatting rule for values of type ``kind``.

    Args:
        kind (type): The value type (a class or an ABC) the rule formats.

    Returns:
        Callable[[_R], _R]: A decorator returning the rule unchanged, so several
            ``typst_formatter`` decorators may be stacked on one rule.
    """

    def decorator(rule: _R) -> _R:
        logger.debug("Registering Typst formatter %s for kind: %s", rule.__name__, kind.__name__)
        with _lock:
            _rules.register(kind, rule)
        return rule

    return decorator


def typst_context(kind: type) -> Callable[[_C], _C]:
    """Decorator registering the kind defaults supplier for values of type ``kind``.

    Args:
        kind (type): The value type (a class or an ABC) the defaults apply to.

    Returns:
        Callable[[_C], _C]: A decorator returning the supplier unchanged.
    """

    def decorator(supplier: _C) -> _C:
        logger.debug(
            "Registering Typst context supplier %s for kind: %s", supplier.__name__, kind.__name__
        )
        with _lock:
            _contexts.register(kind, supplier)
        return supplier

    return decorator


def register_builtin_rules() -> None:
    """Import the modules that register the built-in formatting rules (idempotent)."""
    global _builtins_loaded
    if _builtins_loaded:
        return
    with _lock:
        for module_name in BUILTIN_RULE_MODULES:
            importlib.import_module(module_name)
        _builtins_loaded = True


def resolve_rule(kind: type) -> Rule | None:
    """Return the most specific formatting rule for ``kind``, or ``None``."""
    register_builtin_rules()
    rule = _rules.dispatch(kind)
    return None if rule is _no_rule else rule


def kind_defaults(value: object) -> Mapping[str, Any]:
    """Return the kind defaults declared for ``value``'s type (empty when none)."""
    register_builtin_rules()
    return _contexts.dispatch(type(value))(value)


def get_rule(value: object) -> Rule:
    """Return the formatting rule for ``value``.

    Raises:
        UnsupportedKindError: If no rule is registered for the value's type.
    """
    rule = resolve_rule(type(value))
    if rule is None:
        raise UnsupportedKindError(type(value))
    return rule


class FormatterRegistry:
    """Stable, read-only oriented view of the registered formatting rules.

    Notes:
        - Use [`typst_formatter`][typstry.rendering.registry.typst_formatter] to add
          rules; this class only reports on them.
    """

    @staticmethod
    def kinds() -> tuple[type, ...]:
        """Return every kind with a registered rule, in registration order."""
        register_builtin_rules()
        with _lock:
            return tuple(k for k in _rules.registry if k is not object)

    @classmethod
    def names(cls) -> tuple[str, ...]:
        """Return the qualified names of all registered kinds (sorted).

        Returns:
            tuple[str, ...]: Names such as ``"builtins.bool"`` or ``"fractions.Fraction"``.
        """
        return tuple(sorted(f"{k.__module__}.{k.__qualname__}" for k in cls.kinds()))

    @staticmethod
    def is_registered(kind: type) -> bool:
        """Return True if values of ``kind`` can be formatted (directly or via a base)."""
        return resolve_rule(kind) is not None

    @staticmethod
    def resolve(kind: type) -> Rule | None:
        """Return the rule used for ``kind``, or ``None`` when unsupported."""
        return resolve_rule(kind)

    @staticmethod
    def as_mapping() -> Mapping[type, Rule]:
        """Return a read-only mapping of kind -> rule for explicitly registered kinds.

        Notes:
            The returned mapping is a `MappingProxyType` and must not be mutated.
        """
        register_builtin_rules()
        with _lock:
            return MappingProxyType({k: v for k, v in _rules.registry.items() if k is not object})
