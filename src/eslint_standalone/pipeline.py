# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Build pipeline producing the self-contained ESLint output tree.

The pipeline is strictly linear: prepare directories, bundle jiti, bundle the
lazily loaded formatters, then bundle the CLI and library entry points. Each
esbuild call goes through :class:`~eslint_standalone.process_utils.CommandRunner`,
which terminates the process on the first failure so later steps never run
against a half-built tree.

ESLint resolves ``jiti`` (and reads ``jiti/package.json``) by module name. Both
references are aliased at bundle time to the local helper bundle and the
fabricated metadata file, which keeps the output free of ``node_modules``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Final

from .bundler import EsbuildInvocation, version_footer
from .config import BuildConfig
from .layout import HELPER_BUNDLE, OutputLayout, prepare_directories
from .logging import ok, section
from .metadata import PackageMetadata, copy_formatter_metadata, write_version_metadata
from .process_utils import CommandRunner

HELPER_PACKAGE: Final[str] = "jiti"
HELPER_ENTRY: Final[str] = "jiti/lib/jiti.cjs"
FORMATTERS_SOURCE: Final[str] = "eslint/lib/cli-engine/formatters"
CLI_ENTRY: Final[str] = "eslint/bin/eslint.js"
LIBRARY_ENTRY: Final[str] = "eslint/lib/api.js"
CLI_FORMAT: Final[str] = "cjs"
HELPER_REQUIRE_PATH: Final[str] = f"../{HELPER_BUNDLE}"


@dataclass(slots=True)
class BuildResult:
    """Capture the artifacts produced by a build run."""

    layout: OutputLayout
    artifacts: list[Path] = field(default_factory=list)
    created_directories: list[Path] = field(default_factory=list)

    def register(self, *paths: Path | None) -> None:
        """Record produced artifacts, ignoring ``None`` placeholders."""

        self.artifacts.extend(path for path in paths if path is not None)

    def missing(self) -> list[Path]:
        """Return recorded artifacts that are not present on disk."""

        return [path for path in self.artifacts if not path.is_file()]


def _alias_target(path: Path, cwd: Path) -> str:
    """Return ``path`` in the form esbuild expects for an alias replacement.

    esbuild resolves alias targets from its working directory, and a bare
    relative path would be treated as a package name, hence the ``./`` prefix.
    """

    try:
        return f"./{path.resolve().relative_to(cwd.resolve()).as_posix()}"
    except ValueError:
        return str(path)


def helper_aliases(layout: OutputLayout, cwd: Path) -> dict[str, str]:
    """Return the alias map redirecting ``jiti`` to the bundled helper."""

    return {
        HELPER_PACKAGE: HELPER_REQUIRE_PATH,
        f"{HELPER_PACKAGE}/package.json": _alias_target(layout.helper_metadata, cwd),
    }


def bundle_helper(config: BuildConfig, layout: OutputLayout, runner: CommandRunner) -> list[Path]:
    """Bundle jiti and write the metadata file its version check reads."""

    invocation = EsbuildInvocation(
        entry=config.node_modules / HELPER_ENTRY,
        outfile=layout.helper_bundle,
        platform=config.platform,
        footer=version_footer(config.jiti_version),
    )
    runner.run(invocation.to_args(config.bundler))
    if runner.dry_run:
        return [layout.helper_bundle, layout.helper_metadata]
    metadata = PackageMetadata(name=HELPER_PACKAGE, version=config.jiti_version)
    write_version_metadata(metadata, layout.helper_metadata, use_emoji=runner.use_emoji)
    return [layout.helper_bundle, layout.helper_metadata]


def bundle_formatters(config: BuildConfig, layout: OutputLayout, runner: CommandRunner) -> list[Path]:
    """Bundle each formatter file ESLint loads lazily by path."""

    source_dir = config.node_modules / FORMATTERS_SOURCE
    produced: list[Path] = []
    for name in config.formatters:
        invocation = EsbuildInvocation(
            entry=source_dir / name,
            outfile=layout.formatter_bundle(name),
            platform=config.platform,
        )
        runner.run(invocation.to_args(config.bundler))
        produced.append(invocation.outfile)
    if runner.dry_run:
        return produced
    copied = copy_formatter_metadata(
        source_dir / layout.formatters_meta.name,
        layout.formatters_meta,
        use_emoji=runner.use_emoji,
    )
    if copied is not None:
        produced.append(copied)
    return produced


def bundle_cli(config: BuildConfig, layout: OutputLayout, runner: CommandRunner, cwd: Path) -> Path:
    """Bundle the ``eslint`` command-line entry point."""

    invocation = EsbuildInvocation(
        entry=config.node_modules / CLI_ENTRY,
        outfile=layout.cli_bundle,
        platform=config.platform,
        output_format=CLI_FORMAT,
        aliases=helper_aliases(layout, cwd),
        externals=(HELPER_REQUIRE_PATH, *config.externals),
    )
    runner.run(invocation.to_args(config.bundler))
    return layout.cli_bundle


def bundle_library(config: BuildConfig, layout: OutputLayout, runner: CommandRunner, cwd: Path) -> Path:
    """Bundle the public ``require('eslint')`` API entry point."""

    invocation = EsbuildInvocation(
        entry=config.node_modules / LIBRARY_ENTRY,
        outfile=layout.library_bundle,
        platform=config.platform,
        aliases=helper_aliases(layout, cwd),
        externals=(HELPER_REQUIRE_PATH,),
    )
    runner.run(invocation.to_args(config.bundler))
    return layout.library_bundle


def build_bundle(config: BuildConfig, runner: CommandRunner) -> BuildResult:
    """Run every build step in order and return the produced artifacts.

    Args:
        config: Build settings with paths already anchored at the project root.
        runner: Command runner used for each esbuild invocation.

    Returns:
        BuildResult: Artifacts written during the run.
    """

    cwd = runner.cwd or Path.cwd()
    layout = OutputLayout(root=config.output_root, cli_name=config.cli_name)
    result = BuildResult(layout=layout)

    section("Preparing output directories", use_color=True)
    if not runner.dry_run:
        result.created_directories = prepare_directories(layout, use_emoji=runner.use_emoji)

    section(f"Bundling {HELPER_PACKAGE} {config.jiti_version}", use_color=True)
    result.register(*bundle_helper(config, layout, runner))

    section("Bundling formatters", use_color=True)
    result.register(*bundle_formatters(config, layout, runner))

    section("Bundling ESLint", use_color=True)
    result.register(bundle_cli(config, layout, runner, cwd))
    result.register(bundle_library(config, layout, runner, cwd))

    if not runner.dry_run:
        ok(f"Build complete: {layout.root}", use_emoji=runner.use_emoji)
    return result


__all__ = [
    "BuildResult",
    "build_bundle",
    "bundle_cli",
    "bundle_formatters",
    "bundle_helper",
    "bundle_library",
    "helper_aliases",
]
