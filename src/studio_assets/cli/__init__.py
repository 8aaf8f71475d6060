# SPDX-License-Identifier: MIT
# Copyright (c) 2026 The studio-assets contributors
"""Typer command line interface."""
