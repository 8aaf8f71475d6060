# SPDX-License-Identifier: MIT
# Copyright (c) 2026 The studio-assets contributors
"""Configuration models and loaders for the asset pipeline."""

from __future__ import annotations

from ..errors import ConfigError
from .loader import PYPROJECT_SECTION_KEY, STANDALONE_CONFIG_NAME, load_config
from .models import BuildConfig, Config, OutputConfig, PathsConfig, SiteConfig, ToolsConfig

__all__ = [
    "BuildConfig",
    "Config",
    "ConfigError",
    "OutputConfig",
    "PYPROJECT_SECTION_KEY",
    "PathsConfig",
    "STANDALONE_CONFIG_NAME",
    "SiteConfig",
    "ToolsConfig",
    "load_config",
]
