# SPDX-License-Identifier: MIT
# Copyright (c) 2026 The studio-assets contributors
"""Tests for per-locale output replication."""

from __future__ import annotations

from pathlib import Path

from studio_assets.orchestration import LocaleFanout


def _translate(locale: str, key: str) -> str | None:
    table = {"fr": {"hello": "Bonjour"}, "de": {"hello": "Hallo"}}
    return table.get(locale, {}).get(key)


def test_one_file_per_locale_with_default_unsuffixed(tmp_path: Path) -> None:
    fanout = LocaleFanout(["en", "fr", "de"], "en", _translate)
    rendered: list[str] = []

    def _render(locale: str) -> str:
        rendered.append(locale)
        return f"say(<<hello>>) in {locale}"

    written = fanout.run(tmp_path / "main.js", _render)

    assert rendered == ["en", "fr", "de"]
    assert written == [tmp_path / "main.js", tmp_path / "main.fr.js", tmp_path / "main.de.js"]
    assert sorted(path.name for path in tmp_path.iterdir()) == ["main.de.js", "main.fr.js", "main.js"]
    assert (tmp_path / "main.fr.js").read_text(encoding="utf-8") == "say(Bonjour) in fr"
    assert (tmp_path / "main.de.js").read_text(encoding="utf-8") == "say(Hallo) in de"


def test_missing_translation_falls_back_to_raw_key(tmp_path: Path) -> None:
    fanout = LocaleFanout(["en"], "en", _translate)

    fanout.run(tmp_path / "main.js", lambda _locale: "<<hello>> <<missing key>>")

    assert (tmp_path / "main.js").read_text(encoding="utf-8") == "hello missing key"


def test_duplicate_locales_are_written_once(tmp_path: Path) -> None:
    fanout = LocaleFanout(["en", "fr", "en"], "en", _translate)

    assert fanout.locales == ("en", "fr")
    assert len(fanout.run(tmp_path / "app.js", lambda locale: locale)) == 2
