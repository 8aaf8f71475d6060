# SPDX-License-Identifier: MIT
# Copyright (c) 2026 The studio-assets contributors
"""Filesystem helpers for reading sources and writing build outputs."""

from __future__ import annotations

from .paths import canonical_name, locale_destination, text_hash, with_suffix, write_text

__all__ = ["canonical_name", "locale_destination", "text_hash", "with_suffix", "write_text"]
