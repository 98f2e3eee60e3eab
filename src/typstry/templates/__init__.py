# topmark:header:start
#
#   project      : Typstry
#   file         : __init__.py
#   file_relpath : src/typstry/templates/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Typst templates with spliced Python values.

Public modules:
    - typstry.templates.template
    - typstry.templates.scanner
"""

from __future__ import annotations

from typstry.templates.template import Template, typst

__all__: list[str] = ["Template", "typst"]
