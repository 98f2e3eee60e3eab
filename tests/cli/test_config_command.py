# topmark:header:start
#
#   project      : Typstry
#   file         : test_config_command.py
#   file_relpath : tests/cli/test_config_command.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CLI tests for the `config` command."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import toml

from tests.cli.conftest import assert_CONFIG_ERROR, assert_SUCCESS, run_cli_in
from tests.conftest import mark_cli

if TYPE_CHECKING:
    from pathlib import Path


@mark_cli
def test_config_prints_defaults(tmp_path: Path) -> None:
    """The dump is valid TOML holding the bundled defaults."""
    result = run_cli_in(tmp_path, ["config"])
    assert_SUCCESS(result)

    assert result.output.startswith("# Effective Typstry configuration")
    data: dict[str, Any] = toml.loads(result.output)
    assert data["settings"] == {"mode": "markup", "inline": True, "indent": "    ", "depth": 0}
    assert data["compiler"] == {"executable": "", "font_paths": []}


@mark_cli
def test_config_reflects_project_file(tmp_path: Path) -> None:
    (tmp_path / "typstry.toml").write_text('[settings]\nmode = "math"\n', encoding="utf8")
    result = run_cli_in(tmp_path, ["config", "--sources"])
    assert_SUCCESS(result)

    data: dict[str, Any] = toml.loads(result.output)
    assert data["settings"]["mode"] == "math"
    assert data["sources"]["files"][0] == "<defaults>"
    assert data["sources"]["files"][-1].endswith("typstry.toml")


@mark_cli
def test_config_pyproject_layout(tmp_path: Path) -> None:
    result = run_cli_in(tmp_path, ["config", "--pyproject"])
    assert_SUCCESS(result)

    assert "[tool.typstry" in result.output
    data: dict[str, Any] = toml.loads(result.output)
    assert data["tool"]["typstry"]["settings"]["depth"] == 0


@mark_cli
def test_config_missing_file_is_rejected_by_click(tmp_path: Path) -> None:
    result = run_cli_in(tmp_path, ["--config", "absent.toml", "config"])
    assert result.exit_code == 2


@mark_cli
def test_config_invalid_file(tmp_path: Path) -> None:
    (tmp_path / "broken.toml").write_text("[settings\n", encoding="utf8")
    result = run_cli_in(tmp_path, ["--config", "broken.toml", "config"])
    assert_CONFIG_ERROR(result)
