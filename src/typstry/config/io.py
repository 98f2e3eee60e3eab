# topmark:header:start
#
#   project      : Typstry
#   file         : io.py
#   file_relpath : src/typstry/config/io.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Lightweight TOML I/O helpers for Typstry configuration.

This module centralizes **pure** helpers for reading and writing the TOML used by
Typstry's configuration layer. Keeping them apart from the model avoids import
cycles and keeps [`MutableConfig`][typstry.config.model.MutableConfig] focused
on merge policy.

Typical flow:
    1. Load defaults from the packaged resource (``load_defaults_dict``).
    2. Load project files (``load_toml_dict``).
    3. Inspect values with the typed helpers (``get_table_value``).
    4. Serialize back to TOML (``to_toml``), optionally nested under
       ``[tool.typstry]`` (``nest_toml_under_section``).

Notes:
    Reading uses `toml`; writing uses `tomlkit` so that the document keeps the
    insertion order of its keys and can carry a comment header.
"""

from __future__ import annotations

from importlib.resources import files
from typing import TYPE_CHECKING, Any, TypeGuard

import toml
import tomlkit
from tomlkit.exceptions import ParseError as TomlkitParseError
from tomlkit.items import Table

from typstry.config.logging import get_logger
from typstry.constants import DEFAULT_TOML_CONFIG_NAME, DEFAULT_TOML_CONFIG_PACKAGE
from typstry.core.errors import ConfigError

if TYPE_CHECKING:
    from pathlib import Path

    from typstry.config.logging import TypstryLogger

logger: TypstryLogger = get_logger(__name__)

TomlTable = dict[str, Any]

__all__: list[str] = [
    "TomlTable",
    "is_toml_table",
    "get_table_value",
    "load_defaults_dict",
    "load_toml_dict",
    "to_toml",
    "nest_toml_under_section",
]


def is_toml_table(val: Any) -> TypeGuard[TomlTable]:
    """Type guard for a TOML table-like mapping.

    Args:
        val (Any): Value to test.

    Returns:
        TypeGuard[TomlTable]: ``True`` if ``val`` is a ``dict[str, Any]``.
    """
    return isinstance(val, dict)


def get_table_value(table: TomlTable, key: str) -> TomlTable:
    """Extract a sub-table from a TOML table.

    Args:
        table (TomlTable): Parent table mapping.
        key (str): Sub-table key.

    Returns:
        TomlTable: The sub-table if present, otherwise an empty dict.

    Raises:
        ConfigError: If ``key`` is present but does not hold a table.
    """
    value: Any | None = table.get(key)
    if value is None:
        return {}
    if not is_toml_table(value):
        raise ConfigError(f"[{key}] must be a table, got {type(value).__name__}")
    return value


def load_defaults_dict() -> TomlTable:
    """Return the packaged default configuration as a Python dict.

    Returns:
        TomlTable: The parsed default configuration.

    Raises:
        RuntimeError: If the bundled resource cannot be read or parsed.
    """
    resource = files(DEFAULT_TOML_CONFIG_PACKAGE).joinpath(DEFAULT_TOML_CONFIG_NAME)
    logger.debug("Loading defaults from package resource: %s", resource)
    try:
        text: str = resource.read_text(encoding="utf8")
    except OSError as exc:
        raise RuntimeError(
            f"Cannot read bundled default config {DEFAULT_TOML_CONFIG_PACKAGE!r}/"
            f"{DEFAULT_TOML_CONFIG_NAME!r}: {exc}"
        ) from exc

    try:
        data: TomlTable = toml.loads(text)
    except toml.TomlDecodeError as exc:
        raise RuntimeError(
            f"Bundled default config {DEFAULT_TOML_CONFIG_PACKAGE!r}/"
            f"{DEFAULT_TOML_CONFIG_NAME!r} is invalid TOML: {exc}"
        ) from exc

    return data


def load_toml_dict(path: Path) -> TomlTable:
    """Load and parse a TOML file from the filesystem.

    Args:
        path (Path): Path to a TOML document (``typstry.toml`` or ``pyproject.toml``).

    Returns:
        TomlTable: The parsed TOML content.

    Raises:
        ConfigError: If the file cannot be read or is not valid TOML.
    """
    try:
        return toml.load(path)
    except OSError as exc:
        logger.error("Error loading TOML from %s: %s", path, exc)
        raise ConfigError(f"Cannot read config file {path}: {exc}") from exc
    except toml.TomlDecodeError as exc:
        logger.error("Error decoding TOML from %s: %s", path, exc)
        raise ConfigError(f"Invalid TOML in {path}: {exc}") from exc


def to_toml(toml_dict: TomlTable, *, header: str | None = None) -> str:
    """Serialize a TOML mapping to a string, keeping key order.

    Args:
        toml_dict (TomlTable): TOML mapping to render.
        header (str | None): Optional comment written above the first table.

    Returns:
        str: The rendered TOML document.
    """
    doc: tomlkit.TOMLDocument = tomlkit.document()
    if header:
        for line in header.splitlines():
            doc.add(tomlkit.comment(line))
        doc.add(tomlkit.nl())
    for key, value in toml_dict.items():
        doc.add(key, value)
    return doc.as_string()


def nest_toml_under_section(toml_doc: str, section_keys: str) -> str:
    """Return a new TOML document nested under a dotted section path.

    ``nest_toml_under_section("a = 1\\n", "tool.typstry")`` yields a document
    equivalent to ``[tool.typstry]`` followed by ``a = 1``. Comments attached to
    the original items and leading comments are kept because tomlkit nodes are
    re-used.

    Args:
        toml_doc (str): Original TOML document to nest.
        section_keys (str): Dotted section path such as ``"tool.typstry"``.

    Returns:
        str: The nested document.

    Raises:
        ValueError: If ``section_keys`` has no non-empty component.
        RuntimeError: If ``toml_doc`` cannot be parsed.
    """
    keys: list[str] = [k for k in section_keys.split(".") if k]
    if not keys:
        raise ValueError("section_keys must contain at least one non-empty component")

    try:
        doc: tomlkit.TOMLDocument = tomlkit.parse(toml_doc)
    except TomlkitParseError as exc:
        raise RuntimeError(f"Error parsing TOML document: {exc}") from exc

    # Leading comments and whitespace stay above the new section
    preamble_end: int = next(
        (i for i, (key, _) in enumerate(doc.body) if key is not None), len(doc.body)
    )

    new_doc: tomlkit.TOMLDocument = tomlkit.document()
    new_doc.body.extend(doc.body[:preamble_end])
    current: tomlkit.TOMLDocument | Table = new_doc
    for key in keys:
        table: Table = tomlkit.table(is_super_table=key != keys[-1])
        current.add(key, table)
        current = table

    for item_key, item_value in doc.items():
        current.add(item_key, item_value)

    return new_doc.as_string()
