# topmark:header:start
#
#   project      : Typstry
#   file         : test_command.py
#   file_relpath : tests/compiler/test_command.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for `typstry.compiler.command`."""

from __future__ import annotations

import os
from fractions import Fraction
from typing import TYPE_CHECKING

import pytest

from tests.conftest import make_config, mark_compiler
from typstry.compiler.command import PREAMBLE, CompilerResult, TypstCommand, render, run_compiler
from typstry.constants import ENV_TYPST_EXECUTABLE, ENV_TYPST_FONT_PATHS
from typstry.core.errors import CompilerNotFoundError, TypstError, UnsupportedKindError

if TYPE_CHECKING:
    from pathlib import Path

    from tests.compiler.conftest import FakeRun


@mark_compiler
def test_run_compiler_success(fake_run: FakeRun) -> None:
    fake_run.stdout = "ok"
    result = run_compiler(["--version"], config=make_config())
    assert result == CompilerResult(0, "ok", "")
    assert result.ok
    assert fake_run.argv == ["typst", "--version"]
    assert fake_run.calls[-1]["capture_output"] is True
    assert fake_run.calls[-1]["text"] is True


@mark_compiler
def test_run_compiler_failure_raises(fake_run: FakeRun) -> None:
    fake_run.returncode = 1
    fake_run.stderr = "error: file not found"
    with pytest.raises(TypstError) as excinfo:
        run_compiler(["compile", "missing.typ"], config=make_config())
    err = excinfo.value
    assert err.exit_status == 1
    assert err.arguments == ("compile", "missing.typ")
    assert err.stderr == "error: file not found"


@mark_compiler
def test_run_compiler_failure_can_be_ignored(fake_run: FakeRun) -> None:
    fake_run.returncode = 2
    result = run_compiler(["compile"], ignore_failure=True, config=make_config())
    assert result.exit_status == 2
    assert not result.ok


@mark_compiler
def test_missing_executable(fake_run: FakeRun) -> None:
    fake_run.missing = True
    with pytest.raises(CompilerNotFoundError, match=ENV_TYPST_EXECUTABLE):
        run_compiler(["--version"], config=make_config())


@mark_compiler
def test_executable_resolution(fake_run: FakeRun, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(ENV_TYPST_EXECUTABLE, "/opt/typst")
    run_compiler([], config=make_config())
    assert fake_run.argv == ["/opt/typst"]

    run_compiler([], config=make_config(executable="typst-nightly"))
    assert fake_run.argv == ["typst-nightly"]

    run_compiler([], config=make_config(executable="typst-nightly"), executable="t")
    assert fake_run.argv == ["t"]


@mark_compiler
def test_environment_layers(fake_run: FakeRun, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TYPSTRY_TEST_MARKER", "1")
    config = make_config(font_paths=["/fonts/a", "/fonts/b"])

    run_compiler([], env={"EXTRA": "x"}, config=config)
    env = fake_run.env
    assert env["TYPSTRY_TEST_MARKER"] == "1"
    assert env["EXTRA"] == "x"
    assert env[ENV_TYPST_FONT_PATHS] == os.pathsep.join(["/fonts/a", "/fonts/b"])

    run_compiler([], env={"EXTRA": "x"}, inherit_env=False, config=config)
    assert set(fake_run.env) == {"EXTRA", ENV_TYPST_FONT_PATHS}


class TestTypstCommand:
    def test_sequence_protocol(self) -> None:
        cmd = TypstCommand.from_string("compile input.typ output.pdf")
        assert list(cmd) == ["typst", "compile", "input.typ", "output.pdf"]
        assert len(cmd) == 4
        assert cmd[0] == "typst"
        assert cmd[-1] == "output.pdf"
        assert cmd[1:3] == ("compile", "input.typ")

    def test_explicit_executable(self) -> None:
        assert TypstCommand(["help"], executable="/bin/typst")[0] == "/bin/typst"

    def test_program_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(ENV_TYPST_EXECUTABLE, "/opt/typst")
        assert TypstCommand(["help"]).program == "/opt/typst"

    def test_rejects_a_bare_string(self) -> None:
        with pytest.raises(TypeError):
            TypstCommand("compile")

    def test_empty_string(self) -> None:
        assert len(TypstCommand.from_string("")) == 1

    def test_repr(self) -> None:
        assert repr(TypstCommand(["help"])) == "typst`help`"

    def test_modifiers_return_new_values(self) -> None:
        cmd = TypstCommand(["help"])
        ignoring = cmd.ignorestatus()
        assert ignoring.ignore_status
        assert not cmd.ignore_status
        assert ignoring != cmd

        with_env = cmd.addenv(A="1").addenv(B="2")
        assert dict(with_env.extra_env) == {"A": "1", "B": "2"}
        assert cmd.extra_env == ()

        replaced = with_env.setenv({"C": "3"})
        assert dict(replaced.env or ()) == {"C": "3"}
        assert replaced.extra_env == ()

    def test_equality_and_hash(self) -> None:
        a = TypstCommand(["help"]).addenv(X="1")
        b = TypstCommand(("help",), extra_env={"X": "1"})
        assert a == b
        assert hash(a) == hash(b)

    @mark_compiler
    def test_run_inherits_environment(
        self, fake_run: FakeRun, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("TYPSTRY_TEST_MARKER", "1")
        TypstCommand(["help"]).addenv(A="1").run(config=make_config())
        assert fake_run.argv == ["typst", "help"]
        assert fake_run.env["A"] == "1"
        assert fake_run.env["TYPSTRY_TEST_MARKER"] == "1"

    @mark_compiler
    def test_run_with_replaced_environment(self, fake_run: FakeRun) -> None:
        TypstCommand(["help"]).setenv({"ONLY": "1"}).addenv(B="2").run(config=make_config())
        assert fake_run.env == {"ONLY": "1", "B": "2"}

    @mark_compiler
    def test_run_respects_ignore_status(self, fake_run: FakeRun) -> None:
        fake_run.returncode = 1
        with pytest.raises(TypstError):
            TypstCommand(["compile"]).run(config=make_config())
        result = TypstCommand(["compile"]).ignorestatus().run(config=make_config())
        assert result.exit_status == 1


@mark_compiler
def test_render_writes_source_and_compiles(fake_run: FakeRun, tmp_path: Path) -> None:
    source = tmp_path / "input.typ"
    output = tmp_path / "output.png"
    render(Fraction(1, 2), input=source, output=output, config=make_config())

    assert source.read_text(encoding="utf8") == PREAMBLE + "$1 / 2$\n"
    assert fake_run.argv == ["typst", "compile", str(source), str(output)]


@mark_compiler
def test_render_passes_settings(fake_run: FakeRun, tmp_path: Path) -> None:
    source = tmp_path / "input.typ"
    render([1, 2], input=source, preamble="", inline=False, config=make_config())
    assert source.read_text(encoding="utf8") == "$ vec(\n    1, 2\n) $\n"


@mark_compiler
def test_render_unsupported_value_writes_nothing(fake_run: FakeRun, tmp_path: Path) -> None:
    source = tmp_path / "input.typ"
    with pytest.raises(UnsupportedKindError):
        render(object(), input=source, config=make_config())
    assert not source.exists()
    assert fake_run.calls == []


def test_preamble_sets_up_the_page() -> None:
    assert PREAMBLE.startswith("#set page(")
    assert "#set text(16pt)" in PREAMBLE
