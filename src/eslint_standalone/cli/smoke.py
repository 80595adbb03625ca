# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""CLI command running the post-build smoke test."""

from __future__ import annotations

from pathlib import Path

import typer

from ..smoke import SmokeOutcome, run_smoke_test
from .options import (
    CODE_OPTION,
    DEBUG_OPTION,
    EMOJI_OPTION,
    LIBRARY_OPTION,
    NODE_OPTION,
    OUTPUT_OPTION,
    ROOT_OPTION,
    STRICT_OPTION,
    SmokeCLIOptions,
)
from .shared import CLIError, build_cli_logger, load_project_config


def smoke_command(
    root: ROOT_OPTION = Path("."),
    output: OUTPUT_OPTION = None,
    library: LIBRARY_OPTION = None,
    node: NODE_OPTION = None,
    code: CODE_OPTION = None,
    strict: STRICT_OPTION = False,
    emoji: EMOJI_OPTION = True,
    debug: DEBUG_OPTION = False,
) -> None:
    """Load the bundled library and lint a snippet that violates ``no-var``."""

    options = SmokeCLIOptions(
        root=root.resolve(),
        output=output,
        library=library,
        node=node,
        code=code,
        strict=strict,
        emoji=emoji,
        debug=debug,
    )
    logger = build_cli_logger(emoji=options.emoji, debug=options.debug)
    try:
        config = load_project_config(options.root, overrides=options.config_overrides(), logger=logger)
    except CLIError as exc:
        raise typer.Exit(code=exc.exit_code) from exc

    report = run_smoke_test(config, cwd=options.root, use_emoji=options.emoji)
    logger.debug(f"outcome={report.outcome.value} results={len(report.results)}")
    if options.strict and report.outcome is not SmokeOutcome.SUCCESS:
        raise typer.Exit(code=1)
    raise typer.Exit(code=report.outcome.exit_code)


def register(app: typer.Typer) -> None:
    """Register the smoke command on ``app``."""

    app.command("smoke", help="Lint a known-bad snippet with the bundled library.")(smoke_command)


__all__ = ["register", "smoke_command"]
