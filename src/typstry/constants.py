# topmark:header:start
#
#   project      : Typstry
#   file         : constants.py
#   file_relpath : src/typstry/constants.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Typstry Constants."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as get_version

try:
    TYPSTRY_VERSION: str = get_version("typstry")
except PackageNotFoundError:  # running from a source checkout
    TYPSTRY_VERSION = "0.0.0"

# Name of the bundled default config inside the package `typstry.config`:
DEFAULT_TOML_CONFIG_PACKAGE: str = "typstry.config"
DEFAULT_TOML_CONFIG_NAME: str = "typstry-default.toml"

# Project configuration discovered in the working directory:
PROJECT_TOML_CONFIG_NAME: str = "typstry.toml"
PYPROJECT_TOML_NAME: str = "pyproject.toml"
PYPROJECT_TOOL_SECTION: tuple[str, str] = ("tool", "typstry")

# Environment variables
ENV_LOG_LEVEL: str = "TYPSTRY_LOG_LEVEL"
ENV_TYPST_EXECUTABLE: str = "TYPST_EXECUTABLE"
ENV_TYPST_FONT_PATHS: str = "TYPST_FONT_PATHS"

DEFAULT_TYPST_EXECUTABLE: str = "typst"

# Typst sigils
CODE_SIGIL: str = "#"
MATH_SIGIL: str = "$"

# Template splice marker (backslash + opening parenthesis)
SPLICE_MARKER: str = "\\("
