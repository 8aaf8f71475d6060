# SPDX-License-Identifier: MIT
# Copyright (c) 2026 The studio-assets contributors
"""Value objects shared by the resolver, transforms and orchestrator."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any


class AssetKind(str, Enum):
    """Enumerate the compilable asset kinds."""

    SCRIPT = "script"
    STYLE = "style"
    ICON = "icon"
    MARKDOWN = "markdown"
    POLYFILL = "polyfill"


@dataclass(frozen=True, slots=True)
class AssetUnit:
    """One logical compilable asset prior to locale fan-out."""

    source: Path
    destination: Path
    kind: AssetKind

    @property
    def identity(self) -> tuple[Path, AssetKind]:
        """Return the ``(source, kind)`` pair identifying the unit."""

        return self.source, self.kind

    @property
    def unit_id(self) -> str:
        """Return the string key used for watch registrations and reporting."""

        return f"{self.kind.value}:{self.source}"


@dataclass(frozen=True, slots=True)
class BuildResult:
    """Outcome of compiling a single unit."""

    unit_id: str
    success: bool
    duration_ms: float
    error: str | None = None
    skipped: bool = False


@dataclass(slots=True)
class BuildReport:
    """Results accumulated across every stage of one build."""

    results: list[BuildResult] = field(default_factory=list)
    sitemap_urls: list[str] = field(default_factory=list)

    def extend(self, results: list[BuildResult]) -> None:
        """Append ``results`` to the report."""

        self.results.extend(results)

    @property
    def succeeded(self) -> list[BuildResult]:
        return [result for result in self.results if result.success]

    @property
    def failed(self) -> list[BuildResult]:
        return [result for result in self.results if not result.success]


@dataclass(frozen=True, slots=True)
class CourseData:
    """Structured course data returned by the document transform.

    Attributes:
        course: JSON-compatible course payload, ``None`` when the course has no
            content for the requested locale.
        source_file: Primary source file the payload was parsed from.
        url: Canonical URL of the course.
        dependencies: Every file read while producing the payload.
    """

    course: Mapping[str, Any] | None
    source_file: Path
    url: str
    dependencies: tuple[Path, ...] = ()


__all__ = ["AssetKind", "AssetUnit", "BuildReport", "BuildResult", "CourseData"]
