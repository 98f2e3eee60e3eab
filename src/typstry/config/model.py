# topmark:header:start
#
#   project      : Typstry
#   file         : model.py
#   file_relpath : src/typstry/config/model.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Configuration model and merge policy.

This module defines:
    - `Config`: an immutable snapshot used by the CLI and the compiler runner.
    - `MutableConfig`: a mutable builder used during discovery and merging; it
      can be frozen into `Config` and thawed back for edits.

Layers (lowest to highest precedence):
    1. Bundled defaults (``typstry-default.toml``).
    2. Project configuration discovered upward from the working directory:
       ``[tool.typstry]`` in ``pyproject.toml``, then ``typstry.toml`` in the
       same directory.
    3. Files passed explicitly (``typstry --config PATH``), in the given order.

Path semantics:
    Relative ``compiler.font_paths`` entries are resolved against the directory
    of the config file that declares them.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from typstry.config.io import (
    get_table_value,
    load_defaults_dict,
    load_toml_dict,
    nest_toml_under_section,
    to_toml,
)
from typstry.config.logging import get_logger
from typstry.constants import (
    DEFAULT_TYPST_EXECUTABLE,
    ENV_TYPST_EXECUTABLE,
    ENV_TYPST_FONT_PATHS,
    PROJECT_TOML_CONFIG_NAME,
    PYPROJECT_TOML_NAME,
    PYPROJECT_TOOL_SECTION,
)
from typstry.core.errors import ConfigError
from typstry.core.modes import Mode

if TYPE_CHECKING:
    from collections.abc import Iterable

    from typstry.config.io import TomlTable
    from typstry.config.logging import TypstryLogger

logger: TypstryLogger = get_logger(__name__)

_BUNDLED_SOURCE: str = "<defaults>"


def _parse_setting(key: str, value: Any, source: str) -> Any:
    """Validate one ``[settings]`` entry and convert it to its runtime type.

    Raises:
        ConfigError: If the value has the wrong type for ``key``.
    """

    def fail(expected: str) -> ConfigError:
        return ConfigError(f"{source}: settings.{key} must be {expected}, got {value!r}")

    if key == "mode":
        mode: Mode | None = Mode.parse(value) if isinstance(value, str) else None
        if mode is None:
            raise fail("one of 'code', 'markup' or 'math'")
        return mode
    if key == "inline":
        if not isinstance(value, bool):
            raise fail("a boolean")
        return value
    if key == "indent":
        if not isinstance(value, str):
            raise fail("a string")
        return value
    if key == "depth":
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise fail("a non-negative integer")
        return value
    # Typst parameters and extension settings
    if isinstance(value, (str, int, float, bool)):
        return value
    raise fail("a string, number or boolean")


def parse_settings(table: TomlTable, source: str) -> dict[str, Any]:
    """Return the validated contents of a ``[settings]`` table.

    Args:
        table (TomlTable): The raw table.
        source (str): Where the table came from, for error messages.

    Returns:
        dict[str, Any]: Settings with ``mode`` converted to a `Mode`.

    Raises:
        ConfigError: If any value has the wrong type.
    """
    return {key: _parse_setting(key, value, source) for key, value in table.items()}


def _settings_to_toml(settings: Mapping[str, Any]) -> TomlTable:
    return {k: str(v) if isinstance(v, Mode) else v for k, v in settings.items()}


# ------------------ Immutable runtime config ------------------


@dataclass(frozen=True, slots=True)
class Config:
    """Immutable runtime configuration for Typstry.

    Attributes:
        settings (Mapping[str, Any]): Formatting settings applied to top-level values.
        executable (str | None): Configured Typst executable, ``None`` when unset.
        font_paths (tuple[str, ...]): Absolute font directories for the compiler.
        config_files (tuple[str, ...]): Config sources merged into this snapshot.
    """

    settings: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))
    executable: str | None = None
    font_paths: tuple[str, ...] = ()
    config_files: tuple[str, ...] = ()

    def format_settings(self) -> dict[str, Any]:
        """Return the settings as keyword overrides for `format_value`.

        Returns:
            dict[str, Any]: A fresh dict; callers may update it.
        """
        return dict(self.settings)

    def resolve_executable(self) -> str:
        """Return the Typst executable to run.

        Resolution order: ``compiler.executable``, then ``$TYPST_EXECUTABLE``,
        then ``typst`` looked up on ``PATH``.
        """
        return self.executable or os.environ.get(ENV_TYPST_EXECUTABLE) or DEFAULT_TYPST_EXECUTABLE

    def compiler_env(self) -> dict[str, str]:
        """Return environment variables the compiler needs for this configuration."""
        if not self.font_paths:
            return {}
        return {ENV_TYPST_FONT_PATHS: os.pathsep.join(self.font_paths)}

    def to_toml_dict(self, *, include_files: bool = False) -> TomlTable:
        """Return the configuration as a TOML-compatible dict.

        Args:
            include_files (bool): Whether to add a ``[sources]`` table listing the
                merged config files.

        Returns:
            TomlTable: ``{"settings": ..., "compiler": ...}``.
        """
        data: TomlTable = {
            "settings": _settings_to_toml(self.settings),
            "compiler": {
                "executable": self.executable or "",
                "font_paths": list(self.font_paths),
            },
        }
        if include_files:
            data["sources"] = {"files": list(self.config_files)}
        return data

    def to_toml(self, *, pyproject: bool = False, include_files: bool = False) -> str:
        """Render the configuration as a TOML document.

        Args:
            pyproject (bool): Nest the document under ``[tool.typstry]``.
            include_files (bool): Whether to list the merged config files.

        Returns:
            str: The TOML document.
        """
        doc: str = to_toml(
            self.to_toml_dict(include_files=include_files),
            header="Effective Typstry configuration",
        )
        if pyproject:
            return nest_toml_under_section(doc, ".".join(PYPROJECT_TOOL_SECTION))
        return doc

    def thaw(self) -> MutableConfig:
        """Return a mutable copy of this configuration."""
        return MutableConfig(
            settings=dict(self.settings),
            executable=self.executable,
            font_paths=list(self.font_paths),
            config_files=list(self.config_files),
        )


# ------------------ Mutable builder ------------------


@dataclass
class MutableConfig:
    """Mutable configuration builder.

    ``None`` fields mean "not set by this layer" and are inherited when merging.
    """

    settings: dict[str, Any] = field(default_factory=lambda: {})
    executable: str | None = None
    font_paths: list[str] | None = None
    config_files: list[str] = field(default_factory=lambda: [])

    def freeze(self) -> Config:
        """Freeze this builder into an immutable `Config`."""
        return Config(
            settings=MappingProxyType(dict(self.settings)),
            executable=self.executable or None,
            font_paths=tuple(self.font_paths or ()),
            config_files=tuple(self.config_files),
        )

    # --------------------------- Loaders/parsers --------------------------
    @classmethod
    def from_defaults(cls) -> MutableConfig:
        """Load the bundled default configuration."""
        draft: MutableConfig = cls.from_toml_dict(load_defaults_dict(), config_file=None)
        draft.config_files = [_BUNDLED_SOURCE]
        return draft

    @classmethod
    def from_toml_dict(cls, data: TomlTable, config_file: Path | None = None) -> MutableConfig:
        """Create a draft from a parsed TOML dict.

        Args:
            data (TomlTable): The ``typstry.toml`` layout: ``[settings]`` and ``[compiler]``.
            config_file (Path | None): The source file; relative font paths are
                resolved against its directory.

        Returns:
            MutableConfig: The resulting draft.

        Raises:
            ConfigError: If a table or value has the wrong type.
        """
        source: str = str(config_file) if config_file is not None else _BUNDLED_SOURCE
        settings: dict[str, Any] = parse_settings(get_table_value(data, "settings"), source)

        compiler: TomlTable = get_table_value(data, "compiler")
        executable: Any = compiler.get("executable")
        if executable is not None and not isinstance(executable, str):
            raise ConfigError(f"{source}: compiler.executable must be a string")

        raw_paths: Any = compiler.get("font_paths")
        font_paths: list[str] | None = None
        if raw_paths is not None:
            if not isinstance(raw_paths, list) or not all(isinstance(p, str) for p in raw_paths):
                raise ConfigError(f"{source}: compiler.font_paths must be a list of strings")
            base: Path = config_file.parent if config_file is not None else Path.cwd()
            font_paths = [str((base / p).resolve()) for p in raw_paths]

        return cls(settings=settings, executable=executable or None, font_paths=font_paths)

    @classmethod
    def from_toml_file(cls, path: Path) -> MutableConfig | None:
        """Load configuration from a single TOML file.

        For ``pyproject.toml`` only the ``[tool.typstry]`` table is read.

        Args:
            path (Path): Path to ``typstry.toml``, ``pyproject.toml`` or any TOML
                file with the ``typstry.toml`` layout.

        Returns:
            MutableConfig | None: The draft, or ``None`` for a ``pyproject.toml``
            without a ``[tool.typstry]`` table.

        Raises:
            ConfigError: If the file is unreadable or invalid.
        """
        logger.debug("Creating MutableConfig from TOML config: %s", path)
        data: TomlTable = load_toml_dict(path)

        if path.name == PYPROJECT_TOML_NAME:
            section: Any = data
            for key in PYPROJECT_TOOL_SECTION:
                section = section.get(key) if isinstance(section, dict) else None
            if not section:
                logger.debug("No [%s] table in %s", ".".join(PYPROJECT_TOOL_SECTION), path)
                return None
            if not isinstance(section, dict):
                raise ConfigError(f"[{'.'.join(PYPROJECT_TOOL_SECTION)}] in {path} is not a table")
            data = section

        draft: MutableConfig = cls.from_toml_dict(data, config_file=path)
        draft.config_files = [str(path)]
        logger.debug("Generated MutableConfig: %s", draft)
        return draft

    @classmethod
    def discover_local_config_files(cls, start: Path) -> list[Path]:
        """Return the config files of the nearest directory that has any.

        Walks upward from ``start``. Within a directory ``pyproject.toml`` comes
        first and ``typstry.toml`` second, so that a later merge gives
        ``typstry.toml`` precedence.

        Args:
            start (Path): Directory (or file) where discovery starts.

        Returns:
            list[Path]: Zero, one or two paths.
        """
        cur: Path = start.resolve()
        if cur.is_file():
            cur = cur.parent

        while True:
            found: list[Path] = []
            pyproject: Path = cur / PYPROJECT_TOML_NAME
            if pyproject.is_file() and "typstry" in pyproject.read_text(encoding="utf8"):
                found.append(pyproject)
            project: Path = cur / PROJECT_TOML_CONFIG_NAME
            if project.is_file():
                found.append(project)
            if found:
                logger.debug("Discovered config files: %s", found)
                return found
            if cur.parent == cur:
                return []
            cur = cur.parent

    @classmethod
    def load_merged(
        cls,
        *,
        start: Path | None = None,
        extra_config_files: Iterable[Path] | None = None,
        no_config: bool = False,
    ) -> MutableConfig:
        """Discover and merge configuration layers into a draft.

        Args:
            start (Path | None): Discovery anchor; defaults to the working directory.
            extra_config_files (Iterable[Path] | None): Files merged last, in order.
            no_config (bool): Skip project discovery.

        Returns:
            MutableConfig: The merged draft.

        Raises:
            ConfigError: If any merged file is unreadable or invalid.
        """
        draft: MutableConfig = cls.from_defaults()

        if not no_config:
            for path in cls.discover_local_config_files(start or Path.cwd()):
                layer: MutableConfig | None = cls.from_toml_file(path)
                if layer is not None:
                    draft = draft.merge_with(layer)

        for extra in extra_config_files or ():
            path = Path(extra)
            if not path.is_file():
                raise ConfigError(f"Config file not found: {path}")
            layer = cls.from_toml_file(path)
            if layer is not None:
                draft = draft.merge_with(layer)

        return draft

    # ------------------------------- Merging -------------------------------
    def merge_with(self, other: MutableConfig) -> MutableConfig:
        """Return a new draft where values set in ``other`` override this draft.

        Settings are merged key by key; other fields are replaced when ``other``
        sets them.
        """
        return MutableConfig(
            settings={**self.settings, **other.settings},
            executable=other.executable if other.executable is not None else self.executable,
            font_paths=other.font_paths if other.font_paths is not None else self.font_paths,
            config_files=self.config_files + other.config_files,
        )


def load_config(
    *,
    start: Path | None = None,
    extra_config_files: Iterable[Path] | None = None,
    no_config: bool = False,
) -> Config:
    """Discover, merge and freeze the effective configuration.

    See [`MutableConfig.load_merged`][typstry.config.model.MutableConfig.load_merged].
    """
    return MutableConfig.load_merged(
        start=start, extra_config_files=extra_config_files, no_config=no_config
    ).freeze()
