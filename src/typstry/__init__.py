# topmark:header:start
#
#   project      : Typstry
#   file         : __init__.py
#   file_relpath : src/typstry/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Typstry: format Python values as Typst source.

This package exposes a **small, typed API** (stable surface); internal modules
remain private.

```python
from fractions import Fraction

from typstry import Mode, TypstString, format_value, typst

assert format_value(True) == "#true"
assert format_value(Fraction(1, 2), mode=Mode.CODE) == "(1 / 2)"

x = 1
assert typst(r"$\\(x) / \\(x + 1)$") == "$1 / 2$"
```

Versioning policy:
    Everything listed in ``__all__`` follows semver. Adding optional parameters
    with defaults is allowed in minor releases.
"""

from __future__ import annotations

from typstry.compiler.command import CompilerResult, TypstCommand, render, run_compiler
from typstry.config.model import Config, MutableConfig, load_config
from typstry.constants import TYPSTRY_VERSION
from typstry.core.context import FormatContext
from typstry.core.errors import (
    CompilerNotFoundError,
    ConfigError,
    ContextTypeError,
    TemplateSyntaxError,
    TypstError,
    TypstryError,
    UnsupportedKindError,
)
from typstry.core.modes import Mode
from typstry.core.types import Char, Matrix, Raw, TypstString, TypstText
from typstry.rendering.api import format_value, show_typst, write_value
from typstry.rendering.registry import FormatterRegistry, typst_context, typst_formatter
from typstry.templates.template import Template, typst

__version__: str = TYPSTRY_VERSION

__all__: list[str] = [
    # values
    "Char",
    "Matrix",
    "Raw",
    "TypstString",
    "TypstText",
    # formatting
    "FormatContext",
    "Mode",
    "format_value",
    "show_typst",
    "write_value",
    # templates
    "Template",
    "typst",
    # extension
    "FormatterRegistry",
    "typst_context",
    "typst_formatter",
    # compiler
    "CompilerResult",
    "TypstCommand",
    "render",
    "run_compiler",
    # configuration
    "Config",
    "MutableConfig",
    "load_config",
    # errors
    "CompilerNotFoundError",
    "ConfigError",
    "ContextTypeError",
    "TemplateSyntaxError",
    "TypstError",
    "TypstryError",
    "UnsupportedKindError",
]
