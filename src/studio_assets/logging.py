# SPDX-License-Identifier: MIT
# Copyright (c) 2026 The studio-assets contributors
"""Build progress messages rendered through Rich.

Every helper follows the process-wide :class:`LogStyle` set by
:func:`configure`; the ``use_emoji`` and ``use_color`` keywords override it for
a single message.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from rich.rule import Rule
from rich.text import Text

from .console import get_console_manager

OK_SYMBOL: Final[str] = "✅"
INFO_SYMBOL: Final[str] = "ℹ️"
WARN_SYMBOL: Final[str] = "⚠️"
FAIL_SYMBOL: Final[str] = "❌"


@dataclass(frozen=True, slots=True)
class LogStyle:
    """Presentation flags shared by every message helper."""

    emoji: bool = True
    color: bool = True
    verbose: bool = False


_STYLE = LogStyle()


def configure(*, emoji: bool = True, color: bool = True, verbose: bool = False) -> None:
    """Set the presentation flags used by subsequent messages."""

    global _STYLE  # noqa: PLW0603 - single process-wide presentation preference
    _STYLE = LogStyle(emoji=emoji, color=color, verbose=verbose)


def emoji(symbol: str, enable: bool) -> str:
    """Return ``symbol`` followed by a space when emoji are enabled, else blank."""

    return f"{symbol} " if enable else ""


def _emit(symbol: str | None, msg: str, *, style: str, use_emoji: bool | None, use_color: bool | None) -> None:
    show_emoji = _STYLE.emoji if use_emoji is None else use_emoji
    show_color = _STYLE.color if use_color is None else use_color
    console = get_console_manager().get(color=show_color, emoji=show_emoji)
    text = Text(f"{emoji(symbol, show_emoji) if symbol else ''}{msg}")
    if show_color:
        text.stylize(style)
    console.print(text)


def section(title: str, *, use_color: bool | None = None) -> None:
    """Print a header separating the output of two stage groups."""

    show_color = _STYLE.color if use_color is None else use_color
    console = get_console_manager().get(color=show_color, emoji=_STYLE.emoji)
    if show_color:
        console.print(Rule(title))
    else:
        console.print(f"--- {title} ---")


def info(msg: str, *, use_emoji: bool | None = None, use_color: bool | None = None) -> None:
    _emit(INFO_SYMBOL, msg, style="cyan", use_emoji=use_emoji, use_color=use_color)


def ok(msg: str, *, use_emoji: bool | None = None, use_color: bool | None = None) -> None:
    _emit(OK_SYMBOL, msg, style="green", use_emoji=use_emoji, use_color=use_color)


def warn(msg: str, *, use_emoji: bool | None = None, use_color: bool | None = None) -> None:
    _emit(WARN_SYMBOL, msg, style="yellow", use_emoji=use_emoji, use_color=use_color)


def fail(msg: str, *, use_emoji: bool | None = None, use_color: bool | None = None) -> None:
    _emit(FAIL_SYMBOL, msg, style="bold red", use_emoji=use_emoji, use_color=use_color)


def success(label: str, duration_ms: float) -> None:
    """Report a unit built from ``label`` in ``duration_ms`` milliseconds."""

    ok(f"{label} ({duration_ms:.0f}ms)")


def failure(label: str, error: BaseException | str) -> None:
    """Report a unit built from ``label`` failing with ``error``."""

    fail(f"{label}\n  {error}")


def debug(msg: str) -> None:
    """Print ``msg`` dimmed, only when verbose output is enabled."""

    if _STYLE.verbose:
        _emit(None, f"[debug] {msg}", style="dim", use_emoji=False, use_color=None)


__all__ = [
    "LogStyle",
    "configure",
    "debug",
    "emoji",
    "fail",
    "failure",
    "info",
    "ok",
    "section",
    "success",
    "warn",
]
