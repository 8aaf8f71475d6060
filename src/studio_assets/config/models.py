# SPDX-License-Identifier: MIT
# Copyright (c) 2026 The studio-assets contributors
"""Configuration models for the asset pipeline."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Final

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

DEFAULT_LOCALE: Final[str] = "en"
DEFAULT_POLYFILLS: Final[list[Path]] = [
    Path("node_modules/web-animations-js/web-animations.min.js"),
    Path("node_modules/@webcomponents/custom-elements/custom-elements.min.js"),
]


class PathsConfig(BaseModel):
    """Source, content and output locations.

    ``studio_assets`` is the base overlay root and ``project_assets`` the
    override root whose files win by canonical name.
    """

    model_config = ConfigDict(validate_assignment=True)

    studio_assets: Path = Field(default_factory=lambda: Path("studio/frontend"))
    project_assets: Path = Field(default_factory=lambda: Path("frontend"))
    content: Path = Field(default_factory=lambda: Path("content"))
    output: Path = Field(default_factory=lambda: Path("public"))
    translations: Path | None = Field(default_factory=lambda: Path("translations"))
    polyfills: list[Path] = Field(default_factory=lambda: list(DEFAULT_POLYFILLS))

    def resolved(self, root: Path) -> PathsConfig:
        """Return a copy with every relative path anchored at ``root``."""

        def _anchor(path: Path) -> Path:
            return path if path.is_absolute() else (root / path)

        return self.model_copy(
            update={
                "studio_assets": _anchor(self.studio_assets),
                "project_assets": _anchor(self.project_assets),
                "content": _anchor(self.content),
                "output": _anchor(self.output),
                "translations": _anchor(self.translations) if self.translations is not None else None,
                "polyfills": [_anchor(path) for path in self.polyfills],
            },
        )


class SiteConfig(BaseModel):
    """Site identity used in headers and the sitemap."""

    model_config = ConfigDict(validate_assignment=True)

    banner: str = "(c) Studio"
    domain: str = "localhost"
    sitemap: list[str] = Field(default_factory=list)
    course_url: str = "/course/{course}"
    changefreq: str = "weekly"
    priority: str = "1.0"

    @field_validator("course_url")
    @classmethod
    def _require_course_placeholder(cls, value: str) -> str:
        if "{course}" not in value:
            raise ValueError("course_url must contain a '{course}' placeholder")
        return value


class BuildConfig(BaseModel):
    """Build behaviour: locales, minification and concurrency."""

    model_config = ConfigDict(validate_assignment=True)

    locales: list[str] = Field(default_factory=lambda: [DEFAULT_LOCALE])
    default_locale: str = DEFAULT_LOCALE
    minify: bool = False
    jobs: int = Field(default=8, ge=1)
    course_workers: int = Field(default=1, ge=1)
    script_env: str = "WEB"
    course_global_name: str = "StepFunctions"

    @model_validator(mode="after")
    def _require_locales(self) -> BuildConfig:
        if not self.locales:
            raise ValueError("at least one locale must be configured")
        return self


class ToolsConfig(BaseModel):
    """Executables backing the external transforms."""

    model_config = ConfigDict(validate_assignment=True)

    sass: str = "sass"
    rtlcss: str = "rtlcss"
    esbuild: str = "esbuild"
    timeout: float | None = Field(default=120.0, ge=0)


class OutputConfig(BaseModel):
    """Console presentation preferences."""

    model_config = ConfigDict(validate_assignment=True)

    emoji: bool = True
    color: bool = True
    verbose: bool = False


class Config(BaseModel):
    """Top-level configuration object aggregating every section."""

    model_config = ConfigDict(validate_assignment=True)

    root: Path = Field(default_factory=Path.cwd)
    paths: PathsConfig = Field(default_factory=PathsConfig)
    site: SiteConfig = Field(default_factory=SiteConfig)
    build: BuildConfig = Field(default_factory=BuildConfig)
    tools: ToolsConfig = Field(default_factory=ToolsConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-compatible representation of the configuration."""

        return self.model_dump(mode="json")

    def resolved_paths(self) -> PathsConfig:
        """Return :attr:`paths` anchored at :attr:`root`."""

        return self.paths.resolved(self.root)


__all__ = [
    "BuildConfig",
    "Config",
    "DEFAULT_LOCALE",
    "OutputConfig",
    "PathsConfig",
    "SiteConfig",
    "ToolsConfig",
]
