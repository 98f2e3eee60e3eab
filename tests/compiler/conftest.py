# topmark:header:start
#
#   project      : Typstry
#   file         : conftest.py
#   file_relpath : tests/compiler/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Fixtures for the compiler wrapper tests.

No test in this package starts a real Typst process: `subprocess.run` is
replaced by a recorder that returns a canned `subprocess.CompletedProcess`.
"""

from __future__ import annotations

import subprocess
from dataclasses import dataclass, field
from typing import Any

import pytest


@dataclass
class FakeRun:
    """Recorder standing in for `subprocess.run`."""

    returncode: int = 0
    stdout: str = ""
    stderr: str = ""
    missing: bool = False
    calls: list[dict[str, Any]] = field(default_factory=lambda: [])

    def __call__(self, argv: list[str], **kwargs: Any) -> subprocess.CompletedProcess[str]:
        self.calls.append({"argv": list(argv), **kwargs})
        if self.missing:
            raise FileNotFoundError(2, "No such file or directory", argv[0])
        return subprocess.CompletedProcess(argv, self.returncode, self.stdout, self.stderr)

    @property
    def argv(self) -> list[str]:
        return self.calls[-1]["argv"]

    @property
    def env(self) -> dict[str, str]:
        return self.calls[-1]["env"]


@pytest.fixture
def fake_run(monkeypatch: pytest.MonkeyPatch) -> FakeRun:
    """Replace `subprocess.run` as seen by `typstry.compiler.command`."""
    fake = FakeRun()
    monkeypatch.setattr("typstry.compiler.command.subprocess.run", fake)
    return fake
