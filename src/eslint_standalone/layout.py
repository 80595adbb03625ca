# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Paths making up the bundled output tree."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Final

from .logging import info

LIB_DIR: Final[str] = "lib"
BIN_DIR: Final[str] = "bin"
FORMATTERS_DIR: Final[str] = "cli-engine/formatters"
HELPER_BUNDLE: Final[str] = "jiti.js"
HELPER_METADATA: Final[str] = "jiti-meta.json"
LIBRARY_BUNDLE: Final[str] = "api.js"
FORMATTERS_META: Final[str] = "formatters-meta.json"


@dataclass(frozen=True, slots=True)
class OutputLayout:
    """Resolve every artifact location under a single output root."""

    root: Path
    cli_name: str

    @property
    def directories(self) -> tuple[Path, ...]:
        """Return the directories that must exist before bundling."""

        return (self.root / LIB_DIR, self.root / BIN_DIR, self.formatters_dir)

    @property
    def formatters_dir(self) -> Path:
        return self.root / FORMATTERS_DIR

    @property
    def helper_bundle(self) -> Path:
        return self.root / HELPER_BUNDLE

    @property
    def helper_metadata(self) -> Path:
        return self.root / HELPER_METADATA

    @property
    def formatters_meta(self) -> Path:
        return self.formatters_dir / FORMATTERS_META

    @property
    def cli_bundle(self) -> Path:
        return self.root / BIN_DIR / self.cli_name

    @property
    def library_bundle(self) -> Path:
        return self.root / LIB_DIR / LIBRARY_BUNDLE

    def formatter_bundle(self, name: str) -> Path:
        """Return the output path for the formatter file ``name``."""

        return self.formatters_dir / name


def prepare_directories(layout: OutputLayout, *, use_emoji: bool = True) -> list[Path]:
    """Create the output directories, returning the ones that did not exist yet.

    esbuild does not create parent directories for ``--outfile``, so this runs
    before any bundling step.
    """

    created: list[Path] = []
    for directory in layout.directories:
        if directory.is_dir():
            info(f"Exists: {directory}", use_emoji=use_emoji)
            continue
        directory.mkdir(parents=True, exist_ok=True)
        created.append(directory)
        info(f"Created: {directory}", use_emoji=use_emoji)
    return created


__all__ = ["OutputLayout", "prepare_directories"]
