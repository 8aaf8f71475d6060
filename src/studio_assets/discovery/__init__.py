# SPDX-License-Identifier: MIT
# Copyright (c) 2026 The studio-assets contributors
"""Source discovery across the overlay roots and the course content tree."""

from __future__ import annotations

from .content import find_course_files, is_reserved_name, list_courses
from .overlay import AssetResolver, expand_pattern, scan_root

__all__ = [
    "AssetResolver",
    "expand_pattern",
    "find_course_files",
    "is_reserved_name",
    "list_courses",
    "scan_root",
]
