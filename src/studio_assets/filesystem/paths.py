# SPDX-License-Identifier: MIT
# Copyright (c) 2026 The studio-assets contributors
"""Helpers for reasoning about source and output paths."""

from __future__ import annotations

import hashlib
from pathlib import Path
from typing import Final

INDEX_STEM: Final[str] = "index"
_ENCODING: Final[str] = "utf-8"


def canonical_name(path: Path) -> str:
    """Return the override-matching name of ``path``.

    ``a/b/c/index.ts`` resolves to ``c.ts`` so that a directory-as-module and a
    flat file of the same name collide.

    Args:
        path: Source path to normalise.

    Returns:
        str: Basename used for override matching and destination naming.
    """

    if path.name.startswith(f"{INDEX_STEM}."):
        return f"{path.parent.name}{path.suffix}"
    return path.name


def with_suffix(path: Path, old: str, new: str) -> Path:
    """Return ``path`` with a trailing ``old`` suffix replaced by ``new``."""

    if path.name.endswith(old):
        return path.with_name(path.name[: -len(old)] + new)
    return path


def locale_destination(destination: Path, locale: str, default_locale: str) -> Path:
    """Return the per-locale output path for ``destination``.

    The default locale keeps the original name; other locales insert
    ``.<locale>`` immediately before the file extension.
    """

    if locale == default_locale:
        return destination
    return destination.with_name(f"{destination.stem}.{locale}{destination.suffix}")


def text_hash(text: str, length: int = 8) -> str:
    """Return the first ``length`` hex characters of the SHA-256 digest of ``text``."""

    return hashlib.sha256(text.encode(_ENCODING)).hexdigest()[:length]


def write_text(path: Path, text: str) -> Path:
    """Write ``text`` to ``path`` creating parent directories as needed."""

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding=_ENCODING)
    return path


__all__ = ["canonical_name", "locale_destination", "text_hash", "with_suffix", "write_text"]
