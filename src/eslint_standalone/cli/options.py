# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared option declarations and option containers for the CLI commands."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Annotated, Any

import typer

from .shared import drop_unset

ROOT_OPTION = Annotated[
    Path,
    typer.Option("--root", "-r", help="Project root containing node_modules and configuration."),
]
OUTPUT_OPTION = Annotated[
    Path | None,
    typer.Option("--output", "-o", help="Output directory for the bundled tree."),
]
NODE_MODULES_OPTION = Annotated[
    Path | None,
    typer.Option("--node-modules", help="node_modules directory holding eslint and jiti."),
]
JITI_VERSION_OPTION = Annotated[
    str | None,
    typer.Option("--jiti-version", help="Version string injected into the bundled jiti helper."),
]
FORMATTER_OPTION = Annotated[
    list[str] | None,
    typer.Option("--formatter", "-f", help="Formatter file to bundle (repeatable, replaces defaults)."),
]
DRY_RUN_OPTION = Annotated[
    bool,
    typer.Option("--dry-run", help="Print the bundler commands without running them."),
]
LIBRARY_OPTION = Annotated[
    Path | None,
    typer.Option("--library", "-l", help="Library bundle to load (defaults to <output>/lib/api.js)."),
]
NODE_OPTION = Annotated[
    str | None,
    typer.Option("--node", help="Node.js executable used to load the bundle."),
]
CODE_OPTION = Annotated[
    str | None,
    typer.Option("--code", help="Source snippet to lint."),
]
STRICT_OPTION = Annotated[
    bool,
    typer.Option("--strict", help="Exit non-zero unless the expected rule is reported."),
]
EMOJI_OPTION = Annotated[
    bool,
    typer.Option("--emoji/--no-emoji", help="Toggle emoji output."),
]
DEBUG_OPTION = Annotated[
    bool,
    typer.Option("--debug", help="Emit debug logging."),
]


def normalize_cli_values(values: Sequence[str] | None) -> tuple[str, ...]:
    """Return sanitized CLI values preserving order."""

    if not values:
        return ()
    return tuple(stripped for entry in values if entry and (stripped := entry.strip()))


@dataclass(slots=True)
class BuildCLIOptions:
    """Capture CLI overrides supplied to the build command."""

    root: Path
    output: Path | None
    node_modules: Path | None
    jiti_version: str | None
    formatters: tuple[str, ...]
    dry_run: bool
    emoji: bool
    debug: bool

    def config_overrides(self) -> dict[str, Any]:
        return drop_unset(
            {
                "build": {
                    "output_root": self.output,
                    "node_modules": self.node_modules,
                    "jiti_version": self.jiti_version,
                    "formatters": list(self.formatters) or None,
                },
            },
        )


@dataclass(slots=True)
class SmokeCLIOptions:
    """Capture CLI overrides supplied to the smoke command."""

    root: Path
    output: Path | None
    library: Path | None
    node: str | None
    code: str | None
    strict: bool
    emoji: bool
    debug: bool

    def config_overrides(self) -> dict[str, Any]:
        return drop_unset(
            {
                "build": {"output_root": self.output},
                "smoke": {"library": self.library, "node": self.node, "code": self.code},
            },
        )


__all__ = [
    "BuildCLIOptions",
    "SmokeCLIOptions",
    "normalize_cli_values",
]
