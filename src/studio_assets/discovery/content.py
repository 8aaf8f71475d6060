# SPDX-License-Identifier: MIT
# Copyright (c) 2026 The studio-assets contributors
"""Course enumeration inside the content root."""

from __future__ import annotations

from pathlib import Path
from typing import Final

from ..models import AssetKind, AssetUnit

RESERVED_PREFIXES: Final[tuple[str, ...]] = ("shared", "_")
COURSE_OUTPUT_DIR: Final[str] = "content"


def is_reserved_name(name: str) -> bool:
    """Return whether a content subdirectory is excluded from course enumeration."""

    return name.startswith(RESERVED_PREFIXES) or name.startswith(".")


def _course_directories(content_root: Path) -> list[Path]:
    if not content_root.is_dir():
        return []
    try:
        entries = sorted(content_root.iterdir())
    except OSError:
        return []
    return [entry for entry in entries if entry.is_dir() and not is_reserved_name(entry.name)]


def list_courses(content_root: Path) -> list[str]:
    """Return the identifiers of every course under ``content_root``.

    Reserved directories and names containing a dot are skipped.
    """

    return [entry.name for entry in _course_directories(content_root) if "." not in entry.name]


def find_course_files(pattern: str, content_root: Path, output_root: Path, kind: AssetKind) -> list[AssetUnit]:
    """Return per-course units matching ``pattern`` directly inside each course directory.

    Args:
        pattern: Glob evaluated inside every course directory, e.g. ``*.scss``.
        content_root: Directory holding one subdirectory per course.
        output_root: Build output root; units land under ``content/<course>/``.
        kind: Asset kind assigned to the produced units.

    Returns:
        list[AssetUnit]: Units ordered by course then file name.
    """

    units: list[AssetUnit] = []
    for course_dir in _course_directories(content_root):
        for source in sorted(course_dir.glob(pattern)):
            if not source.is_file():
                continue
            destination = output_root / COURSE_OUTPUT_DIR / source.relative_to(content_root)
            units.append(AssetUnit(source=source, destination=destination, kind=kind))
    return units


__all__ = ["COURSE_OUTPUT_DIR", "RESERVED_PREFIXES", "find_course_files", "is_reserved_name", "list_courses"]
