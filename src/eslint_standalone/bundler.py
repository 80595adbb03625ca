# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""esbuild command construction."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True, slots=True)
class EsbuildInvocation:
    """Describe a single esbuild run mapping one entry point to one output file.

    Attributes:
        entry: Source entry point handed to esbuild.
        outfile: Output file; its parent directory must already exist.
        platform: Target platform passed as ``--platform``.
        bundle: Whether to inline every dependency (``--bundle``).
        output_format: Optional module format passed as ``--format``.
        aliases: Module name to replacement path pairs, emitted in order.
        externals: Module names left as runtime ``require`` calls.
        footer: JavaScript appended verbatim after the bundle.
    """

    entry: Path
    outfile: Path
    platform: str = "node"
    bundle: bool = True
    output_format: str | None = None
    aliases: Mapping[str, str] = field(default_factory=dict)
    externals: Sequence[str] = ()
    footer: str | None = None

    def to_args(self, bundler: Sequence[str]) -> list[str]:
        """Return the full command line, prefixed by the ``bundler`` argv."""

        args = [*bundler, str(self.entry)]
        if self.bundle:
            args.append("--bundle")
        args.append(f"--platform={self.platform}")
        if self.output_format:
            args.append(f"--format={self.output_format}")
        args.append(f"--outfile={self.outfile}")
        args.extend(f"--alias:{name}={target}" for name, target in self.aliases.items())
        args.extend(f"--external:{name}" for name in self.externals)
        if self.footer:
            args.append(f"--footer:js={self.footer}")
        return args


def version_footer(version: str) -> str:
    """Return the trailer that publishes ``version`` on the bundle's exports.

    Backslashes and single quotes are escaped so the literal stays valid JavaScript.
    """

    escaped = version.replace("\\", "\\\\").replace("'", "\\'")
    return f"module.exports.version = '{escaped}';"


__all__ = ["EsbuildInvocation", "version_footer"]
