# SPDX-License-Identifier: MIT
# Copyright (c) 2026 The studio-assets contributors
"""Replicate one compiled unit into per-locale output files."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from pathlib import Path

from ..filesystem.paths import locale_destination, write_text
from ..transforms.base import Translate
from ..transforms.translations import replace_translation_keys


class LocaleFanout:
    """Invoke a render callable once per locale and write one file per locale.

    The default locale keeps the destination name; every other locale inserts
    ``.<locale>`` before the extension. ``<<key>>`` markers in the rendered text
    are replaced with the locale's translation, or the raw key when missing.
    ``catalog_files`` lists the string tables ``translate`` reads from; every
    fanned-out unit depends on them.
    """

    def __init__(
        self,
        locales: Sequence[str],
        default_locale: str,
        translate: Translate,
        *,
        catalog_files: Iterable[Path] = (),
    ) -> None:
        self.locales = tuple(dict.fromkeys(locales))
        self.default_locale = default_locale
        self.translate = translate
        self.catalog_files = tuple(catalog_files)

    def destination(self, destination: Path, locale: str) -> Path:
        """Return the output path of ``destination`` for ``locale``."""

        return locale_destination(destination, locale, self.default_locale)

    def translate_text(self, text: str, locale: str) -> str:
        """Return ``text`` with translation markers resolved for ``locale``."""

        return replace_translation_keys(text, locale, self.translate)

    def run(self, destination: Path, render: Callable[[str], str]) -> list[Path]:
        """Render and write every locale variant of ``destination``.

        Args:
            destination: Output path of the default-locale variant.
            render: Callable producing the compiled text for a locale.

        Returns:
            list[Path]: Written files, one per configured locale.
        """

        written: list[Path] = []
        for locale in self.locales:
            text = self.translate_text(render(locale), locale)
            written.append(write_text(self.destination(destination, locale), text))
        return written


__all__ = ["LocaleFanout"]
