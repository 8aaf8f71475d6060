# SPDX-License-Identifier: MIT
# Copyright (c) 2026 The studio-assets contributors
"""Script bundling through the ``esbuild`` command line tool."""

from __future__ import annotations

import json
import re
import tempfile
from pathlib import Path
from typing import Final

from ..errors import TransformError
from ..process import CommandOptions, SubprocessExecutionError, run_command
from .base import CompiledScript, ScriptOptions

DECLARATION_SUFFIX: Final[str] = ".d.ts"
TARGET: Final[str] = "es2016"
_PRESERVED_COMMENT: Final[re.Pattern[str]] = re.compile(r"/\*![\s\S]*?\*/")
_VUE_REQUIRE: Final[re.Pattern[str]] = re.compile(r"""require\(['"]vue['"]\)""")


def is_declaration_file(path: Path) -> bool:
    """Return whether ``path`` is a type declaration file that produces no bundle."""

    return path.name.endswith(DECLARATION_SUFFIX)


def clean_bundle(text: str) -> str:
    """Strip preserved comments and bind the external ``vue`` import to ``window.Vue``."""

    stripped = _PRESERVED_COMMENT.sub("", text.strip())
    return _VUE_REQUIRE.sub("window.Vue", stripped)


class EsbuildScriptTransform:
    """Bundle module entry points into browser IIFE scripts with ``esbuild``.

    ``ScriptOptions.translate`` is unused here; template plugins are not
    available through the CLI, so translation happens on the bundled text.
    """

    def __init__(self, *, esbuild: str = "esbuild", cwd: Path | None = None, timeout: float | None = None) -> None:
        self._esbuild = esbuild
        self._cwd = cwd
        self._timeout = timeout

    def bundle(self, source: Path, options: ScriptOptions) -> CompiledScript:
        """Bundle ``source`` returning the script text and its project inputs.

        Raises:
            TransformError: If the bundler is missing or reports an error.
        """

        cwd = self._cwd or source.parent
        with tempfile.TemporaryDirectory(prefix="studio-assets-") as scratch:
            outfile = Path(scratch) / "bundle.js"
            metafile = Path(scratch) / "meta.json"
            command = [
                self._esbuild,
                str(source),
                "--bundle",
                "--format=iife",
                "--platform=browser",
                f"--target={TARGET}",
                f'--define:ENV="{options.env}"',
                "--define:ICONS=undefined",
                "--external:vue",
                "--log-level=error",
                f"--outfile={outfile}",
                f"--metafile={metafile}",
            ]
            if options.minify:
                command.append("--minify")
            if options.global_name:
                command.append(f"--global-name={options.global_name}")
            try:
                run_command(command, options=CommandOptions(cwd=cwd, timeout=self._timeout))
            except FileNotFoundError as exc:
                raise TransformError(str(source), str(exc)) from exc
            except SubprocessExecutionError as exc:
                raise TransformError(
                    str(source),
                    f"{self._esbuild} exited with status {exc.returncode}",
                    stderr=exc.stderr,
                ) from exc
            text = outfile.read_text(encoding="utf-8")
            inputs = _metafile_inputs(metafile, cwd)
        return CompiledScript(text=text, inputs=inputs)


def _metafile_inputs(metafile: Path, cwd: Path) -> tuple[Path, ...]:
    """Return the project files listed in an esbuild metafile, ignoring dependencies."""

    try:
        payload = json.loads(metafile.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError):
        return ()
    inputs = payload.get("inputs", {}) if isinstance(payload, dict) else {}
    return tuple(
        sorted((cwd / name).resolve() for name in inputs if "node_modules" not in Path(name).parts),
    )


__all__ = ["EsbuildScriptTransform", "clean_bundle", "is_declaration_file"]
