# topmark:header:start
#
#   project      : Typstry
#   file         : __init__.py
#   file_relpath : src/typstry/core/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Core, UI-agnostic primitives shared across Typstry.

The ``typstry.core`` package provides the data model that every other layer
(rendering, templates, compiler, CLI) builds on, without pulling in any of them.

Included modules:

- ``modes``
  The three Typst lexical modes (code, markup, math).

- ``context``
  The immutable formatting context threaded through every formatting call.

- ``types``
  Value wrappers for kinds Python has no dedicated type for (raw text,
  serialized Typst, characters, matrices, raw blocks).

- ``errors``
  The library's exception taxonomy.

Design goals:

- Keep this package free of I/O and side effects.
- Keep the context immutable so nested calls never leak settings to their callers.
"""

from __future__ import annotations
