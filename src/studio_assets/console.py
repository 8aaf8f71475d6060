# SPDX-License-Identifier: MIT
# Copyright (c) 2026 The studio-assets contributors
"""Shared Rich consoles for build output."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from threading import Lock

from rich.console import Console

from .cache import memoize


def detect_tty() -> bool:
    """Return whether standard output is an interactive terminal."""

    try:
        return sys.stdout.isatty()
    except (AttributeError, ValueError):
        return False


@dataclass(frozen=True, slots=True)
class ConsoleKey:
    """Presentation flags distinguishing one shared console from another."""

    color: bool
    emoji: bool
    terminal: bool


class RichConsoleManager:
    """Hand out one Rich console per combination of presentation flags.

    Consoles write to whatever ``sys.stdout`` is at print time, so captured
    output in tests and CLI runners still sees every line.
    """

    def __init__(self) -> None:
        self._consoles: dict[ConsoleKey, Console] = {}
        self._lock = Lock()

    def get(self, *, color: bool, emoji: bool) -> Console:
        """Return the console for ``color`` and ``emoji``.

        Colour is only honoured when standard output is a terminal.
        """

        key = ConsoleKey(color=color, emoji=emoji, terminal=detect_tty())
        with self._lock:
            console = self._consoles.get(key)
            if console is None:
                styled = key.color and key.terminal
                console = Console(
                    color_system="auto" if styled else None,
                    force_terminal=key.terminal,
                    no_color=not styled,
                    emoji=key.emoji,
                    highlight=False,
                    soft_wrap=True,
                )
                self._consoles[key] = console
            return console


@memoize(maxsize=1)
def get_console_manager() -> RichConsoleManager:
    """Return the process-wide console manager."""

    return RichConsoleManager()


__all__ = ["ConsoleKey", "RichConsoleManager", "detect_tty", "get_console_manager"]
