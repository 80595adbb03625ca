# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path
from subprocess import CompletedProcess

import pytest

from eslint_standalone.process_utils import SubprocessExecutionError

FORMATTERS_META = '[{"name": "stylish", "description": "Human-readable output."}]\n'


@dataclass
class FakeBundler:
    """Stand-in for ``run_command`` that writes each ``--outfile`` it is given."""

    commands: list[list[str]] = field(default_factory=list)
    fail_on: str | None = None

    def __call__(self, args: Sequence[str], **kwargs: object) -> CompletedProcess[str]:
        command = [str(arg) for arg in args]
        self.commands.append(command)
        if self.fail_on is not None and any(self.fail_on in part for part in command):
            raise SubprocessExecutionError(command, 1, "", "esbuild: build failed")
        for part in command:
            if part.startswith("--outfile="):
                outfile = Path(part.split("=", 1)[1])
                outfile.write_text(f"// bundled from {command[2]}\n", encoding="utf-8")
        return CompletedProcess(args=command, returncode=0, stdout="", stderr="")

    def outfiles(self) -> list[str]:
        return [part.split("=", 1)[1] for cmd in self.commands for part in cmd if part.startswith("--outfile=")]


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    """Return a project root with the ESLint formatter descriptor installed."""

    formatters = tmp_path / "node_modules" / "eslint" / "lib" / "cli-engine" / "formatters"
    formatters.mkdir(parents=True)
    (formatters / "formatters-meta.json").write_text(FORMATTERS_META, encoding="utf-8")
    return tmp_path


@pytest.fixture
def fake_bundler(monkeypatch: pytest.MonkeyPatch) -> FakeBundler:
    """Patch the build runner so esbuild invocations only create their output files."""

    bundler = FakeBundler()
    monkeypatch.setattr("eslint_standalone.process_utils.run_command", bundler)
    return bundler
