# SPDX-License-Identifier: MIT
# Copyright (c) 2026 The studio-assets contributors
"""Tests for stylesheet helpers and the Sass adapter."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

from studio_assets.errors import TransformError
from studio_assets.transforms.styles import (
    SassStyleTransform,
    add_safe_area_fallbacks,
    node_include_paths,
    resolve_import,
    scss_dependencies,
)


def _write(path: Path, text: str = "") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


def test_safe_area_fallback_uses_default_value() -> None:
    css = ".bar{padding-top: env(safe-area-inset-top, 12px);}"

    result = add_safe_area_fallbacks(css)

    assert result == ".bar{padding-top:12px;padding-top: env(safe-area-inset-top, 12px);}"


def test_safe_area_fallback_defaults_to_zero() -> None:
    result = add_safe_area_fallbacks("a { margin-left: env(safe-area-inset-left); }")

    assert "margin-left:0;margin-left: env(safe-area-inset-left);" in result


def test_unrelated_env_values_are_untouched() -> None:
    css = "a { width: env(keyboard-inset-width, 10px); color: red; }"

    assert add_safe_area_fallbacks(css) == css


def test_scss_dependencies_follow_partials_and_index_modules(tmp_path: Path) -> None:
    entry = _write(tmp_path / "main.scss", '@use "vars";\n@import "components", "lib/theme.css";\n// @use "ignored";')
    variables = _write(tmp_path / "_vars.scss", '@forward "mixins";')
    mixins = _write(tmp_path / "_mixins.scss", "")
    components = _write(tmp_path / "components" / "_index.scss", '@use "sass:math";\n@use "../vars";')
    _write(tmp_path / "_ignored.scss")

    deps = scss_dependencies(entry)

    assert set(deps) == {path.resolve() for path in (entry, variables, mixins, components)}


def test_scss_dependencies_search_include_paths(tmp_path: Path) -> None:
    entry = _write(tmp_path / "src" / "main.scss", '@use "~pkg/grid";')
    grid = _write(tmp_path / "node_modules" / "pkg" / "_grid.scss")

    assert resolve_import("pkg/grid", entry, [tmp_path / "node_modules"]) == grid.resolve()
    assert grid.resolve() in scss_dependencies(entry, [tmp_path / "node_modules"])


def test_node_include_paths_walks_ancestors(tmp_path: Path) -> None:
    (tmp_path / "node_modules").mkdir()
    (tmp_path / "a" / "node_modules").mkdir(parents=True)
    source_dir = tmp_path / "a" / "b"
    source_dir.mkdir()

    assert node_include_paths(source_dir) == (tmp_path / "a" / "node_modules", tmp_path / "node_modules")


def test_missing_compiler_raises_transform_error(tmp_path: Path) -> None:
    source = _write(tmp_path / "main.scss", "a{}")
    transform = SassStyleTransform(sass="studio-assets-missing-sass")

    with pytest.raises(TransformError) as excinfo:
        transform.compile(source, include_paths=(), minify=False)

    assert excinfo.value.label == str(source)


@pytest.mark.skipif(sys.platform == "win32", reason="requires POSIX shebang scripts")
def test_compile_and_mirror_through_command_line_tools(tmp_path: Path) -> None:
    sass = _write(
        tmp_path / "bin" / "sass",
        f"#!{sys.executable}\nimport sys\nsys.stdout.write(' '.join(sys.argv[1:-1]) + '|' + open(sys.argv[-1]).read())\n",
    )
    rtlcss = _write(
        tmp_path / "bin" / "rtlcss",
        f"#!{sys.executable}\nimport sys\nsys.stdout.write(sys.stdin.read().replace('left', 'right'))\n",
    )
    sass.chmod(0o755)
    rtlcss.chmod(0o755)
    source = _write(tmp_path / "main.scss", "a{padding: env(safe-area-inset-top);}")
    transform = SassStyleTransform(sass=str(sass), rtlcss=str(rtlcss), timeout=30)

    compiled = transform.compile(source, include_paths=(tmp_path / "node_modules",), minify=True)

    assert compiled.css.startswith(f"--no-source-map --style=compressed --load-path={tmp_path / 'node_modules'}|")
    assert "padding:0;" in compiled.css
    assert compiled.included_files == (source.resolve(),)
    assert transform.mirror("a{margin-left:0}") == "a{margin-right:0}"
