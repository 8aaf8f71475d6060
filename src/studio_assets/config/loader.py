# SPDX-License-Identifier: MIT
# Copyright (c) 2026 The studio-assets contributors
"""Load configuration from defaults, ``pyproject.toml`` and a standalone TOML file."""

from __future__ import annotations

import tomllib
from collections.abc import Mapping, MutableMapping, Sequence
from pathlib import Path
from typing import Any, Final, Protocol

from pydantic import ValidationError

from ..errors import ConfigError
from .models import Config

PYPROJECT_NAME: Final[str] = "pyproject.toml"
PYPROJECT_TOOL_KEY: Final[str] = "tool"
PYPROJECT_SECTION_KEY: Final[str] = "studio-assets"
STANDALONE_CONFIG_NAME: Final[str] = "studio-assets.toml"


class ConfigSource(Protocol):
    """Configuration fragment provider."""

    name: str

    def load(self) -> Mapping[str, Any]:
        """Return the configuration fragment supplied by this source."""

        raise NotImplementedError


def _read_toml(path: Path) -> dict[str, Any]:
    """Return the parsed TOML document at ``path`` or an empty mapping."""

    if not path.is_file():
        return {}
    try:
        with path.open("rb") as handle:
            data = tomllib.load(handle)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Failed to parse {path}: {exc}") from exc
    if not isinstance(data, MutableMapping):
        raise ConfigError(f"Configuration at {path} must be a table")
    return dict(data)


class TomlConfigSource:
    """Load a standalone TOML configuration document."""

    def __init__(self, path: Path) -> None:
        self._path = path
        self.name = str(path)

    def load(self) -> Mapping[str, Any]:
        return _read_toml(self._path)


class PyProjectConfigSource:
    """Load the ``[tool.studio-assets]`` table from ``pyproject.toml``."""

    def __init__(self, path: Path) -> None:
        self._path = path
        self.name = f"{path}[tool.{PYPROJECT_SECTION_KEY}]"

    def load(self) -> Mapping[str, Any]:
        tool_section = _read_toml(self._path).get(PYPROJECT_TOOL_KEY, {})
        if not isinstance(tool_section, Mapping):
            raise ConfigError(f"[{PYPROJECT_TOOL_KEY}] in {self._path} must be a table")
        section = tool_section.get(PYPROJECT_SECTION_KEY, {})
        if not isinstance(section, Mapping):
            raise ConfigError(f"[tool.{PYPROJECT_SECTION_KEY}] in {self._path} must be a table")
        return dict(section)


def _deep_merge(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    result: dict[str, Any] = dict(base)
    for key, value in override.items():
        if key in result and isinstance(result[key], Mapping) and isinstance(value, Mapping):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def default_sources(root: Path) -> list[ConfigSource]:
    """Return the configuration sources for ``root`` ordered by increasing precedence."""

    return [PyProjectConfigSource(root / PYPROJECT_NAME), TomlConfigSource(root / STANDALONE_CONFIG_NAME)]


def load_config(
    root: Path,
    *,
    sources: Sequence[ConfigSource] | None = None,
    overrides: Mapping[str, Any] | None = None,
) -> Config:
    """Build a :class:`Config` for ``root`` from layered sources.

    Args:
        root: Project root; relative paths in the configuration resolve against it.
        sources: Optional explicit sources. Defaults to :func:`default_sources`.
        overrides: Optional fragment applied last (e.g. from CLI flags).

    Returns:
        Config: Validated configuration.

    Raises:
        ConfigError: If any source is malformed or validation fails.
    """

    resolved_root = root.resolve()
    merged: dict[str, Any] = {}
    for source in sources if sources is not None else default_sources(resolved_root):
        merged = _deep_merge(merged, source.load())
    if overrides:
        merged = _deep_merge(merged, overrides)
    merged["root"] = resolved_root
    try:
        return Config.model_validate(merged)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration for {resolved_root}:\n{exc}") from exc


__all__ = [
    "ConfigSource",
    "PYPROJECT_SECTION_KEY",
    "PyProjectConfigSource",
    "STANDALONE_CONFIG_NAME",
    "TomlConfigSource",
    "default_sources",
    "load_config",
]
