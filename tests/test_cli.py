# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""End-to-end tests for the ``build`` and ``smoke`` commands."""

from __future__ import annotations

import json
from pathlib import Path
from subprocess import CompletedProcess

import pytest
from typer.testing import CliRunner

from eslint_standalone.cli.app import app

runner = CliRunner()


def _fake_node(payload: object):
    def fake_run_command(args, **kwargs):  # noqa: ANN001
        return CompletedProcess(args=list(args), returncode=0, stdout=json.dumps(payload), stderr="")

    return fake_run_command


def test_build_command_produces_tree(project_root: Path, fake_bundler) -> None:
    result = runner.invoke(app, ["build", "--root", str(project_root), "--no-emoji"])

    assert result.exit_code == 0, result.output
    assert (project_root / "modules" / "lib" / "api.js").is_file()
    assert (project_root / "modules" / "bin" / "eslint-standalone.js").is_file()
    assert "Build complete" in result.output


def test_build_command_honours_overrides(project_root: Path, fake_bundler) -> None:
    result = runner.invoke(
        app,
        [
            "build",
            "--root",
            str(project_root),
            "--output",
            "dist",
            "--jiti-version",
            "2.7.0",
            "--formatter",
            "json.js",
            "--no-emoji",
        ],
    )

    assert result.exit_code == 0, result.output
    formatters = project_root / "dist" / "cli-engine" / "formatters"
    assert sorted(path.name for path in formatters.iterdir()) == ["formatters-meta.json", "json.js"]
    meta = json.loads((project_root / "dist" / "jiti-meta.json").read_text(encoding="utf-8"))
    assert meta == {"version": "2.7.0"}


def test_build_command_exits_non_zero_on_bundler_failure(project_root: Path, fake_bundler) -> None:
    fake_bundler.fail_on = "jiti.cjs"

    result = runner.invoke(app, ["build", "--root", str(project_root), "--no-emoji"])

    assert result.exit_code == 1
    assert len(fake_bundler.commands) == 1
    assert "Command failed" in result.output
    assert not (project_root / "modules" / "jiti-meta.json").exists()


def test_build_command_debug_output(project_root: Path, fake_bundler) -> None:
    quiet = runner.invoke(app, ["build", "--root", str(project_root), "--no-emoji"])
    verbose = runner.invoke(app, ["build", "--root", str(project_root), "--no-emoji", "--debug"])

    assert quiet.exit_code == verbose.exit_code == 0
    assert "[debug]" not in quiet.output
    assert "[debug] artifacts=9 created_dirs=0" in verbose.output


def test_build_command_dry_run(project_root: Path, fake_bundler) -> None:
    result = runner.invoke(app, ["build", "--root", str(project_root), "--dry-run", "--no-emoji"])

    assert result.exit_code == 0
    assert fake_bundler.commands == []
    assert "DRY RUN: 7 bundler command(s) not executed" in result.output


def test_build_command_reports_invalid_config(project_root: Path, fake_bundler) -> None:
    (project_root / ".eslint-standalone.toml").write_text("[build]\nbogus = 1\n", encoding="utf-8")

    result = runner.invoke(app, ["build", "--root", str(project_root), "--no-emoji"])

    assert result.exit_code == 1
    assert "Invalid configuration" in result.output
    assert fake_bundler.commands == []


def test_smoke_command_success(project_root: Path, fake_bundler, monkeypatch: pytest.MonkeyPatch) -> None:
    assert runner.invoke(app, ["build", "--root", str(project_root), "--no-emoji"]).exit_code == 0
    payload = [{"filePath": "<text>", "messages": [{"ruleId": "no-var", "message": "Unexpected var."}]}]
    monkeypatch.setattr("eslint_standalone.smoke.run_command", _fake_node(payload))

    result = runner.invoke(app, ["smoke", "--root", str(project_root), "--no-emoji"])

    assert result.exit_code == 0, result.output
    assert "[no-var] Unexpected var." in result.output
    assert "Smoke test passed" in result.output


def test_smoke_command_without_bundle_is_fatal(tmp_path: Path) -> None:
    result = runner.invoke(app, ["smoke", "--root", str(tmp_path), "--no-emoji"])

    assert result.exit_code == 1
    assert "Library bundle not found" in result.output


def test_smoke_command_strict_partial(project_root: Path, fake_bundler, monkeypatch: pytest.MonkeyPatch) -> None:
    assert runner.invoke(app, ["build", "--root", str(project_root), "--no-emoji"]).exit_code == 0
    payload = [{"filePath": "<text>", "messages": [{"ruleId": "semi", "message": "Missing semicolon."}]}]
    monkeypatch.setattr("eslint_standalone.smoke.run_command", _fake_node(payload))

    lenient = runner.invoke(app, ["smoke", "--root", str(project_root), "--no-emoji"])
    strict = runner.invoke(app, ["smoke", "--root", str(project_root), "--strict", "--no-emoji"])

    assert lenient.exit_code == 0
    assert "Partial success" in lenient.output
    assert strict.exit_code == 1
