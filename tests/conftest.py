# SPDX-License-Identifier: MIT
# Copyright (c) 2026 The studio-assets contributors
"""Shared pytest fixtures."""

from __future__ import annotations

import threading
from collections.abc import Sequence
from pathlib import Path

import pytest

from studio_assets.config import Config
from studio_assets.errors import TransformError
from studio_assets.logging import configure
from studio_assets.models import CourseData
from studio_assets.transforms import CompiledScript, CompiledStyle, ScriptOptions, TransformSuite


class FakeStyles:
    """Style transform echoing the source with a marker."""

    def __init__(self, failing: Sequence[str] = ()) -> None:
        self.failing = set(failing)
        self.compiled: list[Path] = []

    def compile(self, source: Path, *, include_paths: Sequence[Path], minify: bool) -> CompiledStyle:
        if source.name in self.failing:
            raise TransformError(str(source), "syntax error")
        self.compiled.append(source)
        css = source.read_text(encoding="utf-8")
        return CompiledStyle(css=f"{css}{'/*min*/' if minify else ''}", included_files=(source,))

    def mirror(self, css: str) -> str:
        return css.replace("left", "right")


class FakeScripts:
    """Script transform returning the source text tagged with the locale."""

    def __init__(self, failing: Sequence[str] = ()) -> None:
        self.failing = set(failing)
        self.calls: list[tuple[Path, ScriptOptions]] = []
        self._lock = threading.Lock()

    def bundle(self, source: Path, options: ScriptOptions) -> CompiledScript:
        if source.name in self.failing:
            raise TransformError(str(source), "unexpected token")
        with self._lock:
            self.calls.append((source, options))
        text = source.read_text(encoding="utf-8")
        return CompiledScript(text=f"/*! license */{text}\n// locale={options.locale}", inputs=(source,))


class FakeDocuments:
    """Document transform recording the peak number of concurrent parses."""

    def __init__(self, failing: Sequence[str] = ()) -> None:
        self.failing = set(failing)
        self.calls: list[tuple[str, str]] = []
        self.active = 0
        self.peak = 0
        self._lock = threading.Lock()

    def source_file(self, course_dir: Path, locale: str) -> Path:
        return course_dir / "content.md"

    def parse(self, course_dir: Path, locale: str, locales: Sequence[str]) -> CourseData | None:
        with self._lock:
            self.active += 1
            self.peak = max(self.peak, self.active)
            self.calls.append((course_dir.name, locale))
        try:
            if course_dir.name in self.failing:
                raise TransformError(str(course_dir), "broken course")
            source = course_dir / "content.md"
            if not source.is_file():
                return None
            return CourseData(
                course={"id": course_dir.name, "locale": locale, "title": source.read_text(encoding="utf-8").strip()},
                source_file=source,
                url=f"/course/{course_dir.name}",
                dependencies=(source,),
            )
        finally:
            with self._lock:
                self.active -= 1


def write(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def plain_output() -> None:
    configure(emoji=False, color=False, verbose=False)


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """Return a project root with both overlay roots, courses and polyfills."""

    root = tmp_path / "project"
    base = root / "studio" / "frontend"
    override = root / "frontend"
    write(base / "main.ts", 'const sprite = "/icons.svg"; const a = "/icons.svg";\nlabel("<<greeting>>");')
    write(base / "shared.ts", "export const origin = 'base';")
    write(base / "globals.d.ts", "declare const ENV: string;")
    write(base / "theme.scss", "body { margin-left: 0; }")
    write(base / "assets" / "icons" / "star.svg", '<svg xmlns="http://www.w3.org/2000/svg"><path d="M0"/></svg>')
    write(base / "assets" / "icons" / "arrow.svg", '<svg xmlns="http://www.w3.org/2000/svg"><path d="M1"/></svg>')
    write(override / "shared" / "index.ts", "export const origin = 'override';")
    write(root / "content" / "course-a" / "content.md", "Course A")
    write(root / "content" / "course-a" / "functions.ts", 'use("/icons.svg");')
    write(root / "content" / "course-a" / "styles.scss", ".a { float: left; }")
    write(root / "content" / "course-b" / "content.md", "Course B")
    write(root / "content" / "shared" / "content.md", "Shared")
    write(root / "content" / "_drafts" / "content.md", "Draft")
    write(root / "node_modules" / "web-animations-js" / "web-animations.min.js", "var wa=1;\n//# sourceMappingURL=wa.map")
    write(root / "node_modules" / "@webcomponents" / "custom-elements" / "custom-elements.min.js", "var ce=1;")
    write(root / "translations" / "fr.json", '{"greeting": "Bonjour"}')
    return root


@pytest.fixture
def config(project: Path) -> Config:
    return Config.model_validate(
        {
            "root": project,
            "site": {"banner": "(c) Test", "domain": "example.org", "sitemap": ["/about"]},
            "build": {"locales": ["en", "fr"], "jobs": 4},
            "output": {"emoji": False, "color": False},
        },
    )


@pytest.fixture
def fakes() -> tuple[FakeStyles, FakeScripts, FakeDocuments]:
    return FakeStyles(), FakeScripts(), FakeDocuments()


@pytest.fixture
def transforms(fakes: tuple[FakeStyles, FakeScripts, FakeDocuments]) -> TransformSuite:
    styles, scripts, documents = fakes
    return TransformSuite(styles=styles, scripts=scripts, documents=documents)
