# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Package metadata written next to the bundles."""

from __future__ import annotations

import json
import shutil
from pathlib import Path

from pydantic import BaseModel, ConfigDict

from .logging import ok, warn


class PackageMetadata(BaseModel):
    """Minimal stand-in for a dependency's ``package.json``.

    ESLint reads ``jiti/package.json`` to check the loader version; the bundles
    alias that read to a file holding only the ``version`` key.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    version: str

    def to_json(self) -> str:
        return json.dumps({"version": self.version}, indent=2)


def write_version_metadata(metadata: PackageMetadata, destination: Path, *, use_emoji: bool = True) -> Path:
    """Write ``metadata`` to ``destination``, replacing any previous file."""

    destination.write_text(metadata.to_json(), encoding="utf-8")
    ok(f"Wrote {destination.name} ({metadata.name} {metadata.version})", use_emoji=use_emoji)
    return destination


def read_version_metadata(path: Path) -> str:
    """Return the ``version`` recorded in a metadata file written by this module."""

    payload = json.loads(path.read_text(encoding="utf-8"))
    return str(payload["version"])


def copy_formatter_metadata(source: Path, destination: Path, *, use_emoji: bool = True) -> Path | None:
    """Copy ESLint's formatter descriptor verbatim.

    Returns:
        Path | None: ``destination`` when copied, ``None`` when ``source`` is missing.
    """

    if not source.is_file():
        warn(f"Formatter metadata not found: {source}", use_emoji=use_emoji)
        return None
    shutil.copyfile(source, destination)
    ok(f"Copied {source.name}", use_emoji=use_emoji)
    return destination


__all__ = [
    "PackageMetadata",
    "copy_formatter_metadata",
    "read_version_metadata",
    "write_version_metadata",
]
