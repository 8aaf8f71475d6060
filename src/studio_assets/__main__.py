# SPDX-License-Identifier: MIT
# Copyright (c) 2026 The studio-assets contributors
"""Allow ``python -m studio_assets``."""

from __future__ import annotations

from .cli.app import main

if __name__ == "__main__":
    main()
