# SPDX-License-Identifier: MIT
# Copyright (c) 2026 The studio-assets contributors
"""Stage sequencing, locale fan-out and per-unit execution for asset builds."""

from __future__ import annotations

from .courses import CourseBuildSerializer, SitemapURLSet
from .executor import UnitTask, run_settled, run_unit
from .fanout import LocaleFanout
from .orchestrator import PipelineOrchestrator, build_assets, default_transforms
from .registry import CacheBustedPath, CacheBustRegistry
from .sitemap import SitemapAggregator
from .stages import BuildSettings, UnitBuilder

__all__ = [
    "BuildSettings",
    "CacheBustRegistry",
    "CacheBustedPath",
    "CourseBuildSerializer",
    "LocaleFanout",
    "PipelineOrchestrator",
    "SitemapAggregator",
    "SitemapURLSet",
    "UnitBuilder",
    "UnitTask",
    "build_assets",
    "default_transforms",
    "run_settled",
    "run_unit",
]
