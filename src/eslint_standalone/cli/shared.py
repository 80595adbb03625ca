# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared utilities for CLI commands (logging, errors, configuration)."""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import typer
from rich.console import Console
from rich.text import Text

from ..config import ConfigError, ProjectConfig, load_config
from ..logging import fail as core_fail
from ..logging import warn as core_warn


class CLIError(RuntimeError):
    """Error raised when a CLI command fails and should exit with a status code."""

    def __init__(self, message: str, *, exit_code: int = 1) -> None:
        super().__init__(message)
        self.exit_code = exit_code


@dataclass(slots=True)
class CLILogger:
    """Adapter around project logging helpers respecting CLI emoji settings.

    Attributes:
        console: Rich console receiving debug output.
        use_emoji: Whether status lines are prefixed with emoji.
        debug_enabled: Whether :meth:`debug` writes anything.
    """

    console: Console
    use_emoji: bool
    debug_enabled: bool = False
    _key_value_re: re.Pattern[str] = re.compile(r"([\w-]+)=(\".*?\"|\S+)")

    def fail(self, message: str) -> None:
        """Emit an error line.

        Args:
            message: Text describing the failure.
        """

        core_fail(message, use_emoji=self.use_emoji)

    def warn(self, message: str) -> None:
        """Emit a warning line.

        Args:
            message: Text describing the condition worth attention.
        """

        core_warn(message, use_emoji=self.use_emoji)

    def echo(self, message: str) -> None:
        """Write ``message`` to stdout using Typer's echo helper.

        Args:
            message: Raw text, such as a rendered command line.
        """

        typer.echo(message)

    def debug(self, message: str) -> None:
        """Emit a debug message when debug logging is enabled.

        ``key=value`` pairs are highlighted; ``cmd`` and ``command`` values are
        rendered in blue so command lines stand out.

        Args:
            message: Debug text, optionally containing ``key=value`` pairs.
        """

        if not self.debug_enabled:
            return
        text = Text("[debug] ", style="bold cyan")
        cursor = 0
        for match in self._key_value_re.finditer(message):
            start, end = match.span()
            if start > cursor:
                text.append(message[cursor:start], style="dim")
            key, raw_value = match.group(1), match.group(2)
            text.append(key, style="bold magenta")
            text.append("=", style="dim")
            value_style = "bold blue" if key in {"command", "cmd"} else "bold green"
            text.append(raw_value, style=value_style)
            cursor = end
        if cursor < len(message):
            text.append(message[cursor:], style="dim")
        self.console.print(text)


def build_cli_logger(*, emoji: bool, debug: bool = False) -> CLILogger:
    """Return a ``CLILogger`` bound to a dedicated Rich console.

    Args:
        emoji: Whether status lines carry emoji prefixes.
        debug: Whether debug messages are printed.

    Returns:
        CLILogger: Logger used by a single command invocation.
    """

    console = Console(highlight=False)
    return CLILogger(console=console, use_emoji=emoji, debug_enabled=debug)


def load_project_config(
    root: Path,
    *,
    overrides: Mapping[str, Any],
    logger: CLILogger,
) -> ProjectConfig:
    """Load configuration for ``root``, converting failures into :class:`CLIError`."""

    try:
        config = load_config(root, overrides=overrides)
    except ConfigError as exc:
        logger.fail(str(exc))
        raise CLIError(str(exc)) from exc
    logger.debug(f"root={root} output={config.build.output_root} node_modules={config.build.node_modules}")
    return config


def drop_unset(values: Mapping[str, Any]) -> dict[str, Any]:
    """Return ``values`` without ``None`` entries or empty override groups."""

    cleaned: dict[str, Any] = {}
    for key, value in values.items():
        if isinstance(value, Mapping):
            nested = drop_unset(value)
            if nested:
                cleaned[key] = nested
        elif value is not None:
            cleaned[key] = value
    return cleaned


__all__ = [
    "CLIError",
    "CLILogger",
    "build_cli_logger",
    "drop_unset",
    "load_project_config",
]
