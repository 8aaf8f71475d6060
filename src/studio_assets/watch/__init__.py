# SPDX-License-Identifier: MIT
# Copyright (c) 2026 The studio-assets contributors
"""Watch-mode invalidation: dependency registrations and filesystem events."""

from __future__ import annotations

from .invalidator import RegistrationDiff, WatchInvalidator, WatchRegistration
from .observer import FileWatcher

__all__ = ["FileWatcher", "RegistrationDiff", "WatchInvalidator", "WatchRegistration"]
