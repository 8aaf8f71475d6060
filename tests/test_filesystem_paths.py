# SPDX-License-Identifier: MIT
# Copyright (c) 2026 The studio-assets contributors
"""Tests for path naming helpers."""

from __future__ import annotations

from pathlib import Path

from studio_assets.filesystem import canonical_name, locale_destination, text_hash, with_suffix, write_text


def test_canonical_name_normalises_index_modules() -> None:
    assert canonical_name(Path("src/widget/index.ts")) == "widget.ts"
    assert canonical_name(Path("src/widget.ts")) == "widget.ts"
    assert canonical_name(Path("src/indexer.ts")) == "indexer.ts"


def test_locale_destination_suffixes_non_default_locales() -> None:
    destination = Path("public/main.js")

    assert locale_destination(destination, "en", "en") == destination
    assert locale_destination(destination, "fr", "en") == Path("public/main.fr.js")
    assert locale_destination(Path("public/data.rtl.css"), "de", "en") == Path("public/data.rtl.de.css")


def test_with_suffix_only_replaces_matching_suffix() -> None:
    assert with_suffix(Path("a/main.ts"), ".ts", ".js") == Path("a/main.js")
    assert with_suffix(Path("a/main.css"), ".ts", ".js") == Path("a/main.css")


def test_text_hash_is_short_and_stable() -> None:
    digest = text_hash("<svg/>")

    assert len(digest) == 8
    assert digest == text_hash("<svg/>")
    assert digest != text_hash("<svg />")
    assert all(char in "0123456789abcdef" for char in digest)


def test_write_text_creates_parents(tmp_path: Path) -> None:
    target = write_text(tmp_path / "a" / "b" / "c.txt", "hello")

    assert target.read_text(encoding="utf-8") == "hello"
