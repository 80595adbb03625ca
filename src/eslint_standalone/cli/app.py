# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CLI application entry point wiring commands."""

from __future__ import annotations

from . import build, smoke
from .typer_ext import create_typer

app = create_typer(help="Package ESLint into a self-contained bundle.", no_args_is_help=True)
build.register(app)
smoke.register(app)


def main() -> None:
    """Console-script entry point."""

    app()


__all__ = ["app", "main"]
