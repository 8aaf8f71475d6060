# SPDX-License-Identifier: MIT
# Copyright (c) 2026 The studio-assets contributors
"""Locale string catalogs and translation-key substitution."""

from __future__ import annotations

import json
import re
from collections.abc import Iterable
from pathlib import Path
from threading import Lock
from typing import Final

from ..errors import TransformError
from .base import Translate

TRANSLATION_KEY: Final[re.Pattern[str]] = re.compile(r"<<([\w\s:]+)>>")
_Stamp = tuple[int, int] | None


def replace_translation_keys(text: str, locale: str, translate: Translate) -> str:
    """Replace every ``<<key>>`` marker in ``text`` with its ``locale`` translation.

    Keys without an entry are replaced by the raw key text.
    """

    return TRANSLATION_KEY.sub(lambda match: translate(locale, match.group(1)) or match.group(1), text)


class TranslationCatalog:
    """Load ``<directory>/<locale>.json`` string tables on first use.

    A cached table is re-read once its file's modification time or size
    changes, so a long-running watch process sees edited catalogs.
    """

    def __init__(self, directory: Path | None) -> None:
        self._directory = directory
        self._tables: dict[str, tuple[_Stamp, dict[str, str]]] = {}
        self._lock = Lock()

    def path(self, locale: str) -> Path | None:
        """Return the file holding the ``locale`` table, ``None`` without a directory."""

        if self._directory is None:
            return None
        return self._directory / f"{locale}.json"

    def paths(self, locales: Iterable[str]) -> list[Path]:
        return [path for path in (self.path(locale) for locale in locales) if path is not None]

    def table(self, locale: str) -> dict[str, str]:
        """Return the key to text mapping for ``locale``; empty when none exists.

        Raises:
            TransformError: If the locale file exists but is not a JSON object.
        """

        path = self.path(locale)
        stamp = _stamp(path)
        with self._lock:
            cached = self._tables.get(locale)
            if cached is None or cached[0] != stamp:
                cached = (stamp, self._load(path) if stamp is not None else {})
                self._tables[locale] = cached
            return cached[1]

    def translate(self, locale: str, key: str) -> str | None:
        """Return the ``locale`` text for ``key`` or ``None`` when missing."""

        return self.table(locale).get(key.strip())

    def clear(self) -> None:
        """Forget loaded tables so every catalog is re-read."""

        with self._lock:
            self._tables.clear()

    @staticmethod
    def _load(path: Path | None) -> dict[str, str]:
        if path is None:
            return {}
        try:
            payload = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise TransformError(str(path), f"unreadable translation table: {exc}") from exc
        if not isinstance(payload, dict):
            raise TransformError(str(path), "translation table must be a JSON object")
        return {str(key): str(value) for key, value in payload.items()}


def _stamp(path: Path | None) -> _Stamp:
    if path is None or not path.is_file():
        return None
    status = path.stat()
    return status.st_mtime_ns, status.st_size


__all__ = ["TRANSLATION_KEY", "TranslationCatalog", "replace_translation_keys"]
