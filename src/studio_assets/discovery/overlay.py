# SPDX-License-Identifier: MIT
# Copyright (c) 2026 The studio-assets contributors
"""Merge the base and override source trees into one set of asset units."""

from __future__ import annotations

from pathlib import Path
from typing import Final

from ..filesystem.paths import INDEX_STEM, canonical_name
from ..models import AssetKind, AssetUnit

_WILDCARD: Final[str] = "*"


def expand_pattern(pattern: str) -> tuple[str, str]:
    """Return the flat-file and directory-as-module forms of ``pattern``.

    ``*.ts`` expands to ``*.ts`` and ``*/index.ts``.

    Args:
        pattern: Relative glob pattern containing at least one ``*``.

    Returns:
        tuple[str, str]: Flat and index-module patterns.

    Raises:
        ValueError: If the pattern is empty, absolute or has no wildcard.
    """

    if not pattern or Path(pattern).is_absolute():
        raise ValueError(f"asset pattern must be a non-empty relative glob: {pattern!r}")
    if _WILDCARD not in pattern:
        raise ValueError(f"asset pattern must contain a '{_WILDCARD}' wildcard: {pattern!r}")
    return pattern, pattern.replace(_WILDCARD, f"{_WILDCARD}/{INDEX_STEM}", 1)


def scan_root(root: Path, pattern: str) -> list[Path]:
    """Return files under ``root`` matching ``pattern`` in either module form.

    A missing or unreadable root yields no matches.

    Args:
        root: Overlay root directory to scan.
        pattern: Relative glob pattern (see :func:`expand_pattern`).

    Returns:
        list[Path]: Sorted matching files, hidden entries excluded.
    """

    patterns = expand_pattern(pattern)
    if not root.is_dir():
        return []
    matches: set[Path] = set()
    try:
        for candidate_pattern in patterns:
            for match in root.glob(candidate_pattern):
                relative = match.relative_to(root)
                if any(part.startswith(".") for part in relative.parts):
                    continue
                if match.is_file():
                    matches.add(match)
    except OSError:
        return []
    return sorted(matches)


class AssetResolver:
    """Resolve asset units across an ``(base, override)`` pair of roots.

    Files under the override root win by canonical name: a base file is dropped
    whenever an override file shares its canonical name. Base matches come
    first in the result, followed by every override match.
    """

    def __init__(self, base: Path, override: Path, output: Path) -> None:
        self.base = base
        self.override = override
        self.output = output

    def resolve(self, pattern: str, kind: AssetKind) -> list[AssetUnit]:
        """Return the override-resolved units matching ``pattern``.

        Args:
            pattern: Relative glob pattern such as ``*.ts``.
            kind: Asset kind assigned to every produced unit.

        Returns:
            list[AssetUnit]: Deduplicated units, base matches first.
        """

        override_files = scan_root(self.override, pattern)
        overridden = {canonical_name(path) for path in override_files}
        base_files = [path for path in scan_root(self.base, pattern) if canonical_name(path) not in overridden]
        return [self._unit(path, kind) for path in (*base_files, *override_files)]

    def _unit(self, source: Path, kind: AssetKind) -> AssetUnit:
        return AssetUnit(source=source, destination=self.output / canonical_name(source), kind=kind)


__all__ = ["AssetResolver", "expand_pattern", "scan_root"]
