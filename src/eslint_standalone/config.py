# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Configuration models and loaders for the bundle build and smoke test."""

from __future__ import annotations

import os
import re
import tomllib
from collections.abc import Mapping, MutableMapping
from pathlib import Path
from typing import Any, Final

from pydantic import BaseModel, ConfigDict, Field, ValidationError

DEFAULT_OUTPUT_ROOT: Final[str] = "modules"
DEFAULT_NODE_MODULES: Final[str] = "node_modules"
DEFAULT_JITI_VERSION: Final[str] = "2.6.1"
DEFAULT_CLI_NAME: Final[str] = "eslint-standalone.js"
DEFAULT_FORMATTERS: Final[tuple[str, ...]] = (
    "stylish.js",
    "html.js",
    "json.js",
    "json-with-metadata.js",
)
DEFAULT_BUNDLER: Final[tuple[str, ...]] = ("npx", "esbuild")
DEFAULT_EXTERNALS: Final[tuple[str, ...]] = ("fsevents",)
DEFAULT_SMOKE_CODE: Final[str] = 'var foo = "bar";'
DEFAULT_EXPECTED_RULE: Final[str] = "no-var"

PYPROJECT_FILENAME: Final[str] = "pyproject.toml"
PYPROJECT_SECTION: Final[str] = "eslint-standalone"
CONFIG_FILENAME: Final[str] = ".eslint-standalone.toml"

_ENV_VAR_PATTERN = re.compile(r"\$(\w+)|\$\{([^}]+)\}")


class ConfigError(Exception):
    """Raised when configuration input is invalid."""


def _default_override_config() -> list[dict[str, Any]]:
    return [
        {
            "languageOptions": {"ecmaVersion": 2022, "sourceType": "module"},
            "rules": {DEFAULT_EXPECTED_RULE: "error"},
        },
    ]


class BuildConfig(BaseModel):
    """Settings controlling the esbuild invocations and output tree."""

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    node_modules: Path = Path(DEFAULT_NODE_MODULES)
    output_root: Path = Path(DEFAULT_OUTPUT_ROOT)
    jiti_version: str = DEFAULT_JITI_VERSION
    formatters: list[str] = Field(default_factory=lambda: list(DEFAULT_FORMATTERS))
    bundler: list[str] = Field(default_factory=lambda: list(DEFAULT_BUNDLER), min_length=1)
    platform: str = "node"
    cli_name: str = DEFAULT_CLI_NAME
    externals: list[str] = Field(default_factory=lambda: list(DEFAULT_EXTERNALS))


class SmokeConfig(BaseModel):
    """Settings for the post-build smoke test."""

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    node: str = "node"
    library: Path | None = None
    code: str = DEFAULT_SMOKE_CODE
    expected_rule: str = DEFAULT_EXPECTED_RULE
    override_config: list[dict[str, Any]] = Field(default_factory=_default_override_config)


class ProjectConfig(BaseModel):
    """Primary configuration container."""

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    build: BuildConfig = Field(default_factory=BuildConfig)
    smoke: SmokeConfig = Field(default_factory=SmokeConfig)

    def resolve_paths(self, root: Path) -> ProjectConfig:
        """Return a copy whose relative paths are anchored at ``root``."""

        root = root.resolve()
        build = self.build.model_copy(
            update={
                "node_modules": _anchor(self.build.node_modules, root),
                "output_root": _anchor(self.build.output_root, root),
            },
        )
        library = self.smoke.library
        smoke = self.smoke.model_copy(
            update={"library": _anchor(library, root) if library is not None else None},
        )
        return self.model_copy(update={"build": build, "smoke": smoke})

    def library_path(self) -> Path:
        """Return the library bundle the smoke test loads."""

        if self.smoke.library is not None:
            return self.smoke.library
        return self.build.output_root / "lib" / "api.js"


def _anchor(path: Path, root: Path) -> Path:
    return path if path.is_absolute() else root / path


def _deep_merge(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    result: dict[str, Any] = dict(base)
    for key, value in override.items():
        if key in result and isinstance(result[key], Mapping) and isinstance(value, Mapping):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _expand_env_value(value: Any, env: Mapping[str, str]) -> Any:
    if isinstance(value, str):
        return _expand_env_string(value, env)
    if isinstance(value, Mapping):
        return {k: _expand_env_value(v, env) for k, v in value.items()}
    if isinstance(value, list):
        return [_expand_env_value(v, env) for v in value]
    return value


def _expand_env_string(value: str, env: Mapping[str, str]) -> str:
    def _replace(match: re.Match[str]) -> str:
        key = match.group(1) or match.group(2)
        if key is None:
            return match.group(0)
        return env.get(key, match.group(0))

    return _ENV_VAR_PATTERN.sub(_replace, value)


def _read_toml(path: Path) -> dict[str, Any]:
    if not path.is_file():
        return {}
    try:
        with path.open("rb") as handle:
            data = tomllib.load(handle)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Invalid TOML in {path}: {exc}") from exc
    if not isinstance(data, MutableMapping):
        raise ConfigError(f"Configuration at {path} must be a table")
    return dict(data)


def load_pyproject_fragment(root: Path) -> dict[str, Any]:
    """Return the ``[tool.eslint-standalone]`` table from ``pyproject.toml``."""

    data = _read_toml(root / PYPROJECT_FILENAME)
    tool_section = data.get("tool")
    if not isinstance(tool_section, Mapping):
        return {}
    section = tool_section.get(PYPROJECT_SECTION)
    if section is None:
        return {}
    if not isinstance(section, Mapping):
        raise ConfigError(f"[tool.{PYPROJECT_SECTION}] must be a table")
    return dict(section)


def load_config(
    root: Path,
    *,
    overrides: Mapping[str, Any] | None = None,
    env: Mapping[str, str] | None = None,
) -> ProjectConfig:
    """Load configuration for ``root`` from defaults, files and overrides.

    Sources are merged in order: built-in defaults, ``[tool.eslint-standalone]``
    in ``pyproject.toml``, ``.eslint-standalone.toml`` and finally ``overrides``.
    String values may reference environment variables as ``$NAME`` or ``${NAME}``.

    Args:
        root: Project root containing the configuration files.
        overrides: Nested mapping applied last, typically from CLI options.
        env: Environment used for variable expansion; defaults to ``os.environ``.

    Returns:
        ProjectConfig: Validated configuration with paths anchored at ``root``.

    Raises:
        ConfigError: If a file cannot be parsed or the merged data is invalid.
    """

    environment = os.environ if env is None else env
    merged: dict[str, Any] = {}
    for fragment in (load_pyproject_fragment(root), _read_toml(root / CONFIG_FILENAME)):
        merged = _deep_merge(merged, _expand_env_value(fragment, environment))
    if overrides:
        merged = _deep_merge(merged, overrides)
    try:
        config = ProjectConfig.model_validate(merged)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc
    return config.resolve_paths(root)


__all__ = [
    "BuildConfig",
    "CONFIG_FILENAME",
    "ConfigError",
    "DEFAULT_FORMATTERS",
    "DEFAULT_JITI_VERSION",
    "ProjectConfig",
    "SmokeConfig",
    "load_config",
    "load_pyproject_fragment",
]
