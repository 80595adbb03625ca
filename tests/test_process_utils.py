# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for subprocess helpers and the fail-fast command runner."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

from eslint_standalone.process_utils import (
    CommandRunner,
    SubprocessExecutionError,
    render_command,
    run_command,
)


def test_run_command_rejects_missing_executable() -> None:
    with pytest.raises(FileNotFoundError):
        run_command(["definitely-not-a-real-bundler-binary"])


def test_run_command_raises_on_non_zero_exit() -> None:
    with pytest.raises(SubprocessExecutionError) as excinfo:
        run_command([sys.executable, "-c", "import sys; sys.exit(3)"], capture_output=True)

    assert excinfo.value.returncode == 3


def test_run_command_returns_output(tmp_path: Path) -> None:
    completed = run_command(
        [sys.executable, "-c", "import os; print(os.getcwd())"],
        cwd=tmp_path,
        capture_output=True,
    )

    assert Path(completed.stdout.strip()).resolve() == tmp_path.resolve()


def test_render_command_quotes_arguments() -> None:
    rendered = render_command(["npx", "esbuild", "--footer:js=module.exports.version = '2.6.1';"])

    assert rendered.startswith("npx esbuild '--footer:js=")


def test_runner_exits_on_failure(monkeypatch: pytest.MonkeyPatch, capsys) -> None:
    def failing(args, **kwargs):  # noqa: ANN001
        raise SubprocessExecutionError(list(args), 2, None, "boom")

    monkeypatch.setattr("eslint_standalone.process_utils.run_command", failing)
    runner = CommandRunner(use_emoji=False)

    with pytest.raises(SystemExit) as excinfo:
        runner.run(["npx", "esbuild", "entry.js"])

    assert excinfo.value.code == 1
    assert "Command failed: npx esbuild entry.js" in capsys.readouterr().out


def test_runner_treats_missing_executable_as_fatal(monkeypatch: pytest.MonkeyPatch) -> None:
    def missing(args, **kwargs):  # noqa: ANN001
        raise FileNotFoundError("Executable 'npx' was not found on PATH")

    monkeypatch.setattr("eslint_standalone.process_utils.run_command", missing)

    with pytest.raises(SystemExit):
        CommandRunner(use_emoji=False).run(["npx", "esbuild"])


def test_runner_passes_working_directory(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    seen: list[tuple[list[str], Path | None]] = []

    def recording(args, *, cwd=None, **kwargs):  # noqa: ANN001
        seen.append((list(args), cwd))

    monkeypatch.setattr("eslint_standalone.process_utils.run_command", recording)
    runner = CommandRunner(cwd=tmp_path, use_emoji=False)
    runner.run(["npx", "esbuild", "a.js"])

    assert seen == [(["npx", "esbuild", "a.js"], tmp_path)]
    assert runner.history == [("npx", "esbuild", "a.js")]
