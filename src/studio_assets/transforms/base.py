# SPDX-License-Identifier: MIT
# Copyright (c) 2026 The studio-assets contributors
"""Call contracts for the external transforms used by the pipeline."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol, runtime_checkable

from ..models import CourseData

Translate = Callable[[str, str], str | None]
"""Translation callback ``(locale, key) -> text``; ``None`` when no entry exists."""


def no_translation(_locale: str, _key: str) -> str | None:
    """Translation callback that never has an entry."""

    return None


@dataclass(frozen=True, slots=True)
class CompiledStyle:
    """Stylesheet text plus every file the preprocessor pulled in."""

    css: str
    included_files: tuple[Path, ...]


@dataclass(frozen=True, slots=True)
class CompiledScript:
    """Bundled script text plus every project file the bundler read."""

    text: str
    inputs: tuple[Path, ...]


@dataclass(frozen=True, slots=True)
class ScriptOptions:
    """Options forwarded to :meth:`ScriptTransform.bundle`."""

    locale: str
    minify: bool = False
    global_name: str | None = None
    env: str = "WEB"
    translate: Translate = no_translation


@runtime_checkable
class StyleTransform(Protocol):
    """Compile a source stylesheet to CSS and mirror CSS for right-to-left layouts."""

    def compile(self, source: Path, *, include_paths: Sequence[Path], minify: bool) -> CompiledStyle:
        """Return the CSS compiled from ``source``."""

        raise NotImplementedError

    def mirror(self, css: str) -> str:
        """Return ``css`` with direction-dependent properties flipped."""

        raise NotImplementedError


@runtime_checkable
class ScriptTransform(Protocol):
    """Bundle a module entry point into one self-contained script."""

    def bundle(self, source: Path, options: ScriptOptions) -> CompiledScript:
        """Return the bundled script for ``source``."""

        raise NotImplementedError


@runtime_checkable
class DocumentTransform(Protocol):
    """Parse course sources into structured course data."""

    def source_file(self, course_dir: Path, locale: str) -> Path:
        """Return the file holding the ``locale`` variant of the course in ``course_dir``."""

        raise NotImplementedError

    def parse(self, course_dir: Path, locale: str, locales: Sequence[str]) -> CourseData | None:
        """Return course data for ``locale`` or ``None`` when the course has no such variant."""

        raise NotImplementedError


@dataclass(frozen=True, slots=True)
class TransformSuite:
    """Bundle of the transforms one pipeline run depends on."""

    styles: StyleTransform
    scripts: ScriptTransform
    documents: DocumentTransform


__all__ = [
    "CompiledScript",
    "CompiledStyle",
    "DocumentTransform",
    "ScriptOptions",
    "ScriptTransform",
    "StyleTransform",
    "Translate",
    "TransformSuite",
    "no_translation",
]
