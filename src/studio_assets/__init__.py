# SPDX-License-Identifier: MIT
# Copyright (c) 2026 The studio-assets contributors
"""Front-end asset pipeline for course and documentation sites."""

from __future__ import annotations

from importlib import metadata

__all__ = ["__version__"]

try:
    __version__ = metadata.version("studio-assets")
except metadata.PackageNotFoundError:  # pragma: no cover - local development fallback
    __version__ = "0.0.0"
