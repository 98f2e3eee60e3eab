# topmark:header:start
#
#   project      : Typstry
#   file         : __init__.py
#   file_relpath : src/typstry/compiler/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Running the Typst compiler.

Public modules:
    - typstry.compiler.command
"""

from __future__ import annotations

from typstry.compiler.command import (
    PREAMBLE,
    CompilerResult,
    TypstCommand,
    render,
    run_compiler,
)

__all__: list[str] = ["PREAMBLE", "CompilerResult", "TypstCommand", "render", "run_compiler"]
