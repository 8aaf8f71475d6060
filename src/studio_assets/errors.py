# SPDX-License-Identifier: MIT
# Copyright (c) 2026 The studio-assets contributors
"""Exception hierarchy shared across the asset pipeline."""

from __future__ import annotations


class StudioAssetsError(Exception):
    """Base class for errors raised by the asset pipeline."""


class ConfigError(StudioAssetsError):
    """Raised when configuration input is invalid."""


class TransformError(StudioAssetsError):
    """Raised when an external transform fails to compile a unit."""

    def __init__(self, label: str, message: str, *, stderr: str | None = None) -> None:
        """Initialise the error with the failing unit and diagnostic output.

        Args:
            label: Human-readable identity of the unit being compiled.
            message: Short description of the failure.
            stderr: Optional captured error output of the transform.
        """

        detail = f"{label}: {message}"
        if stderr:
            detail = f"{detail}\n{stderr.strip()}"
        super().__init__(detail)
        self.label = label
        self.stderr = stderr


__all__ = ["ConfigError", "StudioAssetsError", "TransformError"]
