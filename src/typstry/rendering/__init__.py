# topmark:header:start
#
#   project      : Typstry
#   file         : __init__.py
#   file_relpath : src/typstry/rendering/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Rendering of Python values as Typst source.

This package holds the value-to-Typst serialization engine: the kind registry,
the escaping primitives, and the built-in formatting rules.

Public modules:
    - typstry.rendering.api
    - typstry.rendering.registry
    - typstry.rendering.escaping
    - typstry.rendering.formatters
    - typstry.rendering.containers
"""

from __future__ import annotations
