# topmark:header:start
#
#   project      : Typstry
#   file         : __init__.py
#   file_relpath : src/typstry/config/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Configuration handling for Typstry.

Typstry reads formatting settings and compiler options from the bundled
``typstry-default.toml``, then from ``typstry.toml`` or the ``[tool.typstry]``
table of ``pyproject.toml``.

Public modules:
    - typstry.config.model
    - typstry.config.io
    - typstry.config.logging
"""

from __future__ import annotations

from typstry.config.model import Config, MutableConfig, load_config

__all__: list[str] = ["Config", "MutableConfig", "load_config"]
