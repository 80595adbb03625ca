# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Smoke test exercising the bundled ESLint library through Node."""

from __future__ import annotations

import json
import os
from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Final

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from .config import ProjectConfig
from .logging import detect_tty, fail, get_console_manager, info, ok, warn
from .process_utils import SubprocessExecutionError, run_command

REQUEST_ENV_VAR: Final[str] = "ESLINT_STANDALONE_REQUEST"

# Loads the bundle, lints the snippet and prints a trimmed copy of the results.
NODE_DRIVER: Final[str] = """
const request = JSON.parse(process.env.ESLINT_STANDALONE_REQUEST);
const { ESLint } = require(request.library);
(async () => {
  const eslint = new ESLint({ overrideConfig: request.overrideConfig });
  const results = await eslint.lintText(request.code);
  const payload = results.map((result) => ({
    filePath: result.filePath,
    messages: result.messages.map((m) => ({
      ruleId: m.ruleId,
      message: m.message,
      severity: m.severity,
      line: m.line,
      column: m.column,
    })),
  }));
  process.stdout.write(JSON.stringify(payload));
})().catch((error) => {
  process.stderr.write(String((error && error.stack) || error));
  process.exit(1);
});
"""


class LintMessage(BaseModel):
    """Single diagnostic reported by ESLint."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    rule_id: str | None = Field(default=None, alias="ruleId")
    message: str
    severity: int = 0
    line: int | None = None
    column: int | None = None


class LintResult(BaseModel):
    """Per-file result returned by ``ESLint#lintText``."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    file_path: str = Field(default="<text>", alias="filePath")
    messages: list[LintMessage] = Field(default_factory=list)


_RESULTS_ADAPTER: Final[TypeAdapter[list[LintResult]]] = TypeAdapter(list[LintResult])


class LintRequest(BaseModel):
    """Payload handed to the Node driver."""

    model_config = ConfigDict(populate_by_name=True)

    library: str
    override_config: list[dict[str, Any]] = Field(alias="overrideConfig")
    code: str

    def to_env_value(self) -> str:
        return json.dumps(self.model_dump(by_alias=True))


class SmokeOutcome(str, Enum):
    """Terminal states of a smoke run."""

    SUCCESS = "success"
    PARTIAL = "partial"
    NO_ERRORS = "no_errors"
    NO_RESULTS = "no_results"
    FATAL = "fatal"

    @property
    def exit_code(self) -> int:
        return 1 if self is SmokeOutcome.FATAL else 0


@dataclass(slots=True)
class SmokeReport:
    """Outcome of a smoke run together with the parsed results."""

    outcome: SmokeOutcome
    results: list[LintResult] = field(default_factory=list)
    error: str | None = None

    @property
    def messages(self) -> list[LintMessage]:
        """Return the diagnostics of the first result, the only one ``lintText`` yields."""

        return list(self.results[0].messages) if self.results else []


def parse_results(payload: str) -> list[LintResult]:
    """Validate the driver's JSON output."""

    return _RESULTS_ADAPTER.validate_json(payload)


def evaluate(results: Sequence[LintResult], expected_rule: str) -> SmokeOutcome:
    """Classify ``results`` against the rule the snippet is expected to violate."""

    if not results:
        return SmokeOutcome.NO_RESULTS
    messages = results[0].messages
    if not messages:
        return SmokeOutcome.NO_ERRORS
    if any(message.rule_id == expected_rule for message in messages):
        return SmokeOutcome.SUCCESS
    return SmokeOutcome.PARTIAL


def lint_text(request: LintRequest, *, node: str = "node", cwd: Path | None = None) -> list[LintResult]:
    """Lint ``request.code`` with the bundle at ``request.library``.

    Raises:
        FileNotFoundError: If ``node`` is not on ``PATH``.
        SubprocessExecutionError: If the driver exits non-zero.
        pydantic.ValidationError: If the driver output is not the expected JSON.
    """

    env = dict(os.environ)
    env[REQUEST_ENV_VAR] = request.to_env_value()
    completed = run_command(
        [node, "-e", NODE_DRIVER],
        cwd=cwd,
        env=env,
        capture_output=True,
    )
    return parse_results(completed.stdout)


def _report_outcome(report: SmokeReport, expected_rule: str, *, use_emoji: bool) -> None:
    outcome = report.outcome
    if outcome is SmokeOutcome.NO_RESULTS:
        warn("No lint results were returned.", use_emoji=use_emoji)
        return
    if outcome is SmokeOutcome.NO_ERRORS:
        warn("No errors detected; check that the rule configuration was applied.", use_emoji=use_emoji)
        return
    info("Lint results:", use_emoji=use_emoji)
    for message in report.messages:
        info(f"  [{message.rule_id}] {message.message}", use_emoji=False)
    if outcome is SmokeOutcome.SUCCESS:
        ok(f"Smoke test passed: '{expected_rule}' was reported.", use_emoji=use_emoji)
    else:
        warn(f"Partial success: errors were reported, but not '{expected_rule}'.", use_emoji=use_emoji)


def run_smoke_test(config: ProjectConfig, *, cwd: Path | None = None, use_emoji: bool = True) -> SmokeReport:
    """Load the library bundle, lint the configured snippet and report the outcome.

    Every failure while loading or linting is logged with its traceback and
    turned into :attr:`SmokeOutcome.FATAL`; nothing propagates to the caller.
    """

    smoke = config.smoke
    library = config.library_path()
    try:
        info(f"Loading ESLint from {library} ...", use_emoji=use_emoji)
        if not library.is_file():
            raise FileNotFoundError(f"Library bundle not found: {library}")
        request = LintRequest(
            library=str(library.resolve()),
            override_config=smoke.override_config,
            code=smoke.code,
        )
        results = lint_text(request, node=smoke.node, cwd=cwd)
    except Exception as exc:  # noqa: BLE001 - loading and linting failures are all fatal
        fail(f"Fatal error during smoke test: {exc}", use_emoji=use_emoji)
        if isinstance(exc, SubprocessExecutionError) and exc.stderr:
            fail(exc.stderr.strip(), use_emoji=False)
        get_console_manager().get(color=detect_tty(), emoji=use_emoji).print_exception()
        return SmokeReport(outcome=SmokeOutcome.FATAL, error=str(exc))

    info(f"ESLint loaded from {library}", use_emoji=use_emoji)
    info(f"Linted code: '{smoke.code}'", use_emoji=use_emoji)
    report = SmokeReport(outcome=evaluate(results, smoke.expected_rule), results=results)
    _report_outcome(report, smoke.expected_rule, use_emoji=use_emoji)
    return report


__all__ = [
    "LintMessage",
    "LintRequest",
    "LintResult",
    "NODE_DRIVER",
    "SmokeOutcome",
    "SmokeReport",
    "evaluate",
    "lint_text",
    "parse_results",
    "run_smoke_test",
]
