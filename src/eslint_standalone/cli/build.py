# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""CLI command producing the bundled ESLint tree."""

from __future__ import annotations

from pathlib import Path

import typer

from ..pipeline import build_bundle
from ..process_utils import CommandRunner, render_command
from .options import (
    DEBUG_OPTION,
    DRY_RUN_OPTION,
    EMOJI_OPTION,
    FORMATTER_OPTION,
    JITI_VERSION_OPTION,
    NODE_MODULES_OPTION,
    OUTPUT_OPTION,
    ROOT_OPTION,
    BuildCLIOptions,
    normalize_cli_values,
)
from .shared import CLIError, build_cli_logger, load_project_config


def build_command(
    root: ROOT_OPTION = Path("."),
    output: OUTPUT_OPTION = None,
    node_modules: NODE_MODULES_OPTION = None,
    jiti_version: JITI_VERSION_OPTION = None,
    formatter: FORMATTER_OPTION = None,
    dry_run: DRY_RUN_OPTION = False,
    emoji: EMOJI_OPTION = True,
    debug: DEBUG_OPTION = False,
) -> None:
    """Bundle ESLint, its formatters and jiti into a self-contained tree.

    Raises:
        typer.Exit: Always raised to terminate the command with an exit status.
    """

    options = BuildCLIOptions(
        root=root.resolve(),
        output=output,
        node_modules=node_modules,
        jiti_version=jiti_version,
        formatters=normalize_cli_values(formatter),
        dry_run=dry_run,
        emoji=emoji,
        debug=debug,
    )
    logger = build_cli_logger(emoji=options.emoji, debug=options.debug)
    try:
        config = load_project_config(options.root, overrides=options.config_overrides(), logger=logger)
    except CLIError as exc:
        raise typer.Exit(code=exc.exit_code) from exc

    runner = CommandRunner(cwd=options.root, dry_run=options.dry_run, use_emoji=options.emoji)
    result = build_bundle(config.build, runner)

    if options.dry_run:
        for command in runner.history:
            logger.echo(render_command(command))
        logger.warn(f"DRY RUN: {len(runner.history)} bundler command(s) not executed")
        raise typer.Exit(code=0)

    missing = result.missing()
    for path in missing:
        logger.fail(f"Expected artifact missing: {path}")
    if missing:
        raise typer.Exit(code=1)
    logger.debug(f"artifacts={len(result.artifacts)} created_dirs={len(result.created_directories)}")
    raise typer.Exit(code=0)


def register(app: typer.Typer) -> None:
    """Register the build command on ``app``."""

    app.command("build", help="Bundle ESLint into a self-contained output tree.")(build_command)


__all__ = ["build_command", "register"]
