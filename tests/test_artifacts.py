# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for the output layout, metadata files and esbuild arguments."""

from __future__ import annotations

import json
from pathlib import Path

from eslint_standalone.bundler import EsbuildInvocation, version_footer
from eslint_standalone.layout import OutputLayout, prepare_directories
from eslint_standalone.metadata import (
    PackageMetadata,
    copy_formatter_metadata,
    read_version_metadata,
    write_version_metadata,
)


def test_prepare_directories_is_idempotent(tmp_path: Path, capsys) -> None:
    layout = OutputLayout(root=tmp_path / "out", cli_name="eslint.js")

    created = prepare_directories(layout, use_emoji=False)
    again = prepare_directories(layout, use_emoji=False)

    assert {path.relative_to(layout.root).as_posix() for path in created} == {
        "lib",
        "bin",
        "cli-engine/formatters",
    }
    assert again == []
    output = capsys.readouterr().out
    assert output.count("Created:") == 3
    assert output.count("Exists:") == 3


def test_layout_paths(tmp_path: Path) -> None:
    layout = OutputLayout(root=tmp_path, cli_name="eslint-standalone.js")

    assert layout.cli_bundle == tmp_path / "bin" / "eslint-standalone.js"
    assert layout.library_bundle == tmp_path / "lib" / "api.js"
    assert layout.formatter_bundle("json.js") == tmp_path / "cli-engine" / "formatters" / "json.js"
    assert layout.helper_metadata == tmp_path / "jiti-meta.json"


def test_version_metadata_is_written_as_indented_json(tmp_path: Path) -> None:
    target = tmp_path / "jiti-meta.json"
    target.write_text("old", encoding="utf-8")

    write_version_metadata(PackageMetadata(name="jiti", version="2.6.1"), target, use_emoji=False)

    assert target.read_text(encoding="utf-8") == '{\n  "version": "2.6.1"\n}'
    assert json.loads(target.read_text(encoding="utf-8")) == {"version": "2.6.1"}
    assert read_version_metadata(target) == "2.6.1"


def test_formatter_metadata_copy(tmp_path: Path, capsys) -> None:
    source = tmp_path / "formatters-meta.json"
    destination = tmp_path / "out.json"

    assert copy_formatter_metadata(source, destination, use_emoji=False) is None
    assert "Formatter metadata not found" in capsys.readouterr().out

    source.write_text('[{"name": "json"}]', encoding="utf-8")
    assert copy_formatter_metadata(source, destination, use_emoji=False) == destination
    assert destination.read_bytes() == source.read_bytes()


def test_esbuild_arguments() -> None:
    invocation = EsbuildInvocation(
        entry=Path("node_modules/eslint/bin/eslint.js"),
        outfile=Path("modules/bin/eslint.js"),
        output_format="cjs",
        aliases={"jiti": "../jiti.js", "jiti/package.json": "./modules/jiti-meta.json"},
        externals=("../jiti.js", "fsevents"),
    )

    assert invocation.to_args(["npx", "esbuild"]) == [
        "npx",
        "esbuild",
        "node_modules/eslint/bin/eslint.js",
        "--bundle",
        "--platform=node",
        "--format=cjs",
        "--outfile=modules/bin/eslint.js",
        "--alias:jiti=../jiti.js",
        "--alias:jiti/package.json=./modules/jiti-meta.json",
        "--external:../jiti.js",
        "--external:fsevents",
    ]


def test_footer_argument() -> None:
    invocation = EsbuildInvocation(
        entry=Path("jiti.cjs"),
        outfile=Path("jiti.js"),
        footer=version_footer("2.6.1"),
    )

    assert invocation.to_args(["esbuild"])[-1] == "--footer:js=module.exports.version = '2.6.1';"


def test_footer_escapes_quotes_and_backslashes() -> None:
    assert version_footer("2.6.1'x") == "module.exports.version = '2.6.1\\'x';"
    assert version_footer("2.6.1\\") == "module.exports.version = '2.6.1\\\\';"
