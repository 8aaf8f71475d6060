# SPDX-License-Identifier: MIT
# Copyright (c) 2026 The studio-assets contributors
"""In-process caching helpers scoped to a single build run."""

from __future__ import annotations

from .in_memory import CacheInfo, memoize

__all__ = ["CacheInfo", "memoize"]
