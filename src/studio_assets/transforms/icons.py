# SPDX-License-Identifier: MIT
# Copyright (c) 2026 The studio-assets contributors
"""Assemble individual SVG icons into one symbol sprite."""

from __future__ import annotations

import re
from collections.abc import Sequence
from pathlib import Path
from typing import Final

from ..filesystem.paths import canonical_name

SPRITE_HEADER: Final[str] = (
    '<?xml version="1.0" encoding="UTF-8"?>'
    '<!DOCTYPE svg PUBLIC "-//W3C//DTD SVG 1.1//EN" "http://www.w3.org/Graphics/SVG/1.1/DTD/svg11.dtd">'
    '<svg xmlns="http://www.w3.org/2000/svg" xmlns:xlink="http://www.w3.org/1999/xlink">'
)
SPRITE_FOOTER: Final[str] = "</svg>"
_SVG_NAMESPACE: Final[str] = ' xmlns="http://www.w3.org/2000/svg"'
_PROLOG: Final[re.Pattern[str]] = re.compile(r"<\?xml[^>]*\?>|<!DOCTYPE[^>]*>", re.IGNORECASE)
_SVG_OPEN: Final[re.Pattern[str]] = re.compile(r"<svg\b")
_SVG_CLOSE: Final[re.Pattern[str]] = re.compile(r"</svg>\s*$")


def icon_symbol(symbol_id: str, svg: str) -> str:
    """Return ``svg`` rewritten as a ``<symbol>`` element with id ``symbol_id``."""

    body = _PROLOG.sub("", svg).strip().replace(_SVG_NAMESPACE, "", 1)
    body = _SVG_OPEN.sub(f'<symbol id="{symbol_id}"', body, count=1)
    return _SVG_CLOSE.sub("</symbol>", body, count=1)


def icon_id(path: Path) -> str:
    """Return the symbol id of an icon file: its canonical name without extension."""

    return Path(canonical_name(path)).stem


def build_sprite(icons: Sequence[Path]) -> str:
    """Return one SVG document wrapping every icon in ``icons`` as a symbol.

    Symbols keep the order of ``icons``.
    """

    symbols = [icon_symbol(icon_id(path), path.read_text(encoding="utf-8")) for path in icons]
    return f"{SPRITE_HEADER}{''.join(symbols)}{SPRITE_FOOTER}"


__all__ = ["build_sprite", "icon_id", "icon_symbol"]
