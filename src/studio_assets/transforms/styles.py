# SPDX-License-Identifier: MIT
# Copyright (c) 2026 The studio-assets contributors
"""Stylesheet compilation through the ``sass`` and ``rtlcss`` command line tools."""

from __future__ import annotations

import re
from collections.abc import Iterator, Sequence
from pathlib import Path
from typing import Final

from ..cache import memoize
from ..errors import TransformError
from ..process import CommandOptions, SubprocessExecutionError, run_command
from .base import CompiledStyle

NODE_MODULES: Final[str] = "node_modules"
NODE_PATH_DEPTH: Final[int] = 6
STYLE_SUFFIXES: Final[tuple[str, ...]] = (".scss", ".sass", ".css")

SAFE_AREA_VARS: Final[tuple[str, ...]] = (
    "safe-area-inset-top",
    "safe-area-inset-bottom",
    "safe-area-inset-left",
    "safe-area-inset-right",
)
SAFE_AREA_EXPR: Final[re.Pattern[str]] = re.compile(
    rf"env\(\s*({'|'.join(SAFE_AREA_VARS)})\s*,?\s*([^)]+)?\s*\)",
)
_DECLARATION: Final[re.Pattern[str]] = re.compile(
    r"(?P<prop>[\w-]+)\s*:\s*(?P<value>[^;{}]*env\([^;{}]*)(?P<end>[;}])",
)
_IMPORT_RULE: Final[re.Pattern[str]] = re.compile(r"@(?:use|forward|import)\s+([^;{]+)")
_QUOTED: Final[re.Pattern[str]] = re.compile(r"""["']([^"']+)["']""")
_LINE_COMMENT: Final[re.Pattern[str]] = re.compile(r"^\s*//.*$", re.MULTILINE)
_BLOCK_COMMENT: Final[re.Pattern[str]] = re.compile(r"/\*.*?\*/", re.DOTALL)


@memoize(maxsize=256)
def node_include_paths(source_dir: Path) -> tuple[Path, ...]:
    """Return ``node_modules`` directories in ``source_dir`` and its ancestors.

    Args:
        source_dir: Directory of the stylesheet being compiled.

    Returns:
        tuple[Path, ...]: Existing directories, nearest first.
    """

    candidates = [source_dir, *source_dir.parents][:NODE_PATH_DEPTH]
    return tuple(path / NODE_MODULES for path in candidates if (path / NODE_MODULES).is_dir())


def add_safe_area_fallbacks(css: str) -> str:
    """Insert a static fallback before every declaration using a safe-area ``env()``.

    ``padding: env(safe-area-inset-top, 4px)`` gains a preceding
    ``padding: 4px`` declaration; variables without a default fall back to ``0``.
    """

    def _expand(match: re.Match[str]) -> str:
        value = match["value"]
        fallback = SAFE_AREA_EXPR.sub(lambda inner: (inner.group(2) or "0").strip(), value)
        if fallback == value:
            return match.group(0)
        return f"{match['prop']}:{fallback.strip()};{match.group(0)}"

    return _DECLARATION.sub(_expand, css)


def _import_targets(text: str) -> Iterator[str]:
    """Yield module references from ``@use``, ``@forward`` and ``@import`` rules."""

    stripped = _LINE_COMMENT.sub("", _BLOCK_COMMENT.sub("", text))
    for rule in _IMPORT_RULE.finditer(stripped):
        for target in _QUOTED.findall(rule.group(1)):
            if target.startswith(("sass:", "http:", "https:", "//")) or target.endswith(".css"):
                continue
            yield target.removeprefix("~")


def _candidates(base: Path, target: str) -> Iterator[Path]:
    path = base / target
    if path.suffix in STYLE_SUFFIXES:
        yield path
        yield path.with_name(f"_{path.name}")
        return
    for suffix in (".scss", ".sass"):
        yield path.with_name(f"{path.name}{suffix}")
        yield path.with_name(f"_{path.name}{suffix}")
    for suffix in (".scss", ".sass"):
        yield path / f"_index{suffix}"
        yield path / f"index{suffix}"


def resolve_import(target: str, importer: Path, include_paths: Sequence[Path]) -> Path | None:
    """Return the file a Sass module reference resolves to, if any."""

    for base in (importer.parent, *include_paths):
        for candidate in _candidates(base, target):
            if candidate.is_file():
                return candidate.resolve()
    return None


def scss_dependencies(source: Path, include_paths: Sequence[Path] = ()) -> tuple[Path, ...]:
    """Return ``source`` and every stylesheet it pulls in transitively.

    Args:
        source: Entry stylesheet.
        include_paths: Extra directories searched after the importer's directory.

    Returns:
        tuple[Path, ...]: Sorted resolved paths including ``source`` itself.
    """

    pending = [source.resolve()]
    seen: set[Path] = set()
    while pending:
        current = pending.pop()
        if current in seen:
            continue
        seen.add(current)
        try:
            text = current.read_text(encoding="utf-8")
        except OSError:
            continue
        for target in _import_targets(text):
            resolved = resolve_import(target, current, include_paths)
            if resolved is not None and resolved not in seen:
                pending.append(resolved)
    return tuple(sorted(seen))


class SassStyleTransform:
    """Compile stylesheets with the Dart Sass CLI and mirror them with ``rtlcss``."""

    def __init__(
        self,
        *,
        sass: str = "sass",
        rtlcss: str = "rtlcss",
        timeout: float | None = None,
    ) -> None:
        self._sass = sass
        self._rtlcss = rtlcss
        self._timeout = timeout

    def compile(self, source: Path, *, include_paths: Sequence[Path], minify: bool) -> CompiledStyle:
        """Compile ``source`` and return CSS with safe-area fallbacks applied.

        Raises:
            TransformError: If the compiler is missing or reports an error.
        """

        command = [
            self._sass,
            "--no-source-map",
            f"--style={'compressed' if minify else 'expanded'}",
            *(f"--load-path={path}" for path in include_paths),
            str(source),
        ]
        css = self._run(command, label=str(source))
        return CompiledStyle(
            css=add_safe_area_fallbacks(css),
            included_files=scss_dependencies(source, include_paths),
        )

    def mirror(self, css: str) -> str:
        """Return the right-to-left variant of ``css``."""

        return self._run([self._rtlcss, "--stdin"], label="rtlcss", input_text=css)

    def _run(self, command: list[str], *, label: str, input_text: str | None = None) -> str:
        options = CommandOptions(timeout=self._timeout, input_text=input_text)
        try:
            completed = run_command(command, options=options)
        except FileNotFoundError as exc:
            raise TransformError(label, str(exc)) from exc
        except SubprocessExecutionError as exc:
            raise TransformError(label, f"{command[0]} exited with status {exc.returncode}", stderr=exc.stderr) from exc
        return completed.stdout


__all__ = [
    "SAFE_AREA_EXPR",
    "SassStyleTransform",
    "add_safe_area_fallbacks",
    "node_include_paths",
    "resolve_import",
    "scss_dependencies",
]
