# SPDX-License-Identifier: MIT
# Copyright (c) 2026 The studio-assets contributors
"""Concatenate vendored polyfills into one script."""

from __future__ import annotations

import re
from collections.abc import Sequence
from pathlib import Path
from typing import Final

_SOURCE_MAP: Final[re.Pattern[str]] = re.compile(r"^//# sourceMappingURL=.*(?:\n|$)", re.MULTILINE)


def build_polyfill(sources: Sequence[Path]) -> str:
    """Return the concatenation of ``sources`` without source map references.

    Raises:
        OSError: If any polyfill source cannot be read.
    """

    joined = "\n".join(path.read_text(encoding="utf-8") for path in sources)
    return _SOURCE_MAP.sub("", joined)


__all__ = ["build_polyfill"]
