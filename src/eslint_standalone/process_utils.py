# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Safe wrappers around ``subprocess`` execution."""

from __future__ import annotations

import shlex
import shutil

# Bandit: subprocess usage is intentional; commands are argument lists and
# ``shell=True`` is never used.
import subprocess  # nosec B404
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from .logging import fail, info

if TYPE_CHECKING:
    from subprocess import CompletedProcess as _CompletedProcess  # nosec B404

BUILD_FAILURE_EXIT_CODE = 1


class SubprocessExecutionError(RuntimeError):
    """Raised when a subprocess exits with a non-zero status while ``check`` is true."""

    def __init__(
        self,
        command: Sequence[str],
        returncode: int,
        stdout: str | None,
        stderr: str | None,
    ) -> None:
        super().__init__(
            f"Command '{command[0]}' exited with status {returncode}. stderr: {stderr or '<none>'}",
        )
        self.command = tuple(command)
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr


def _normalize_args(args: Sequence[str]) -> list[str]:
    if not args:
        msg = "subprocess command requires at least one argument"
        raise ValueError(msg)

    head, *rest = args
    head_path = Path(head)
    if head_path.is_absolute():
        return [str(head_path), *rest]

    resolved = shutil.which(head)
    if resolved is None:
        msg = f"Executable '{head}' was not found on PATH"
        raise FileNotFoundError(msg)
    return [resolved, *rest]


def render_command(args: Sequence[str]) -> str:
    """Return ``args`` as a single shell-quoted command line for display."""

    return shlex.join(str(arg) for arg in args)


def run_command(
    args: Sequence[str],
    *,
    cwd: Path | None = None,
    env: Mapping[str, str] | None = None,
    check: bool = True,
    capture_output: bool = False,
    text: bool = True,
    timeout: float | None = None,
) -> _CompletedProcess[str]:
    """Execute *args* after normalising the executable path."""
    normalized = _normalize_args(args)

    # Bandit: argument lists are passed directly without shell expansion.
    completed: _CompletedProcess[str] = subprocess.run(  # nosec B603
        normalized,
        cwd=str(cwd) if cwd is not None else None,
        env=dict(env) if env is not None else None,
        check=False,
        capture_output=capture_output,
        text=text,
        timeout=timeout,
    )

    if check and completed.returncode != 0:
        raise SubprocessExecutionError(
            normalized,
            completed.returncode,
            completed.stdout if isinstance(completed.stdout, str) else None,
            completed.stderr if isinstance(completed.stderr, str) else None,
        )

    return completed


@dataclass(slots=True)
class CommandRunner:
    """Run build commands one at a time and abort the process on the first failure.

    Output is streamed straight to the console. A failing command is logged and
    the interpreter exits with :data:`BUILD_FAILURE_EXIT_CODE`; there is no
    recovery path for callers.

    Attributes:
        cwd: Working directory for every command, ``None`` for the current one.
        dry_run: When ``True`` commands are logged but never executed.
        use_emoji: Emoji preference forwarded to the console helpers.
        history: Commands issued so far, in order.
    """

    cwd: Path | None = None
    dry_run: bool = False
    use_emoji: bool = True
    history: list[tuple[str, ...]] = field(default_factory=list)

    def run(self, args: Sequence[str]) -> None:
        """Execute ``args`` or terminate the process when it fails."""

        rendered = render_command(args)
        info(f"Running: {rendered}", use_emoji=self.use_emoji)
        self.history.append(tuple(args))
        if self.dry_run:
            return
        try:
            run_command(args, cwd=self.cwd)
        except (SubprocessExecutionError, FileNotFoundError) as exc:
            fail(f"Command failed: {rendered}", use_emoji=self.use_emoji)
            fail(str(exc), use_emoji=self.use_emoji)
            raise SystemExit(BUILD_FAILURE_EXIT_CODE) from exc


__all__ = [
    "BUILD_FAILURE_EXIT_CODE",
    "CommandRunner",
    "SubprocessExecutionError",
    "render_command",
    "run_command",
]
