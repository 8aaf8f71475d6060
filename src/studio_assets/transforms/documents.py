# SPDX-License-Identifier: MIT
# Copyright (c) 2026 The studio-assets contributors
"""Markdown course parsing into JSON-compatible course data.

A course directory holds ``content.md`` for the default locale and
``translations/<locale>.md`` for every other locale. The optional YAML
front-matter becomes the course metadata; the body is split into steps at
lines consisting only of ``---``.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from pathlib import Path
from typing import Any, Final

import markdown
import yaml

from ..errors import TransformError
from ..models import CourseData

CONTENT_FILE: Final[str] = "content.md"
TRANSLATIONS_DIR: Final[str] = "translations"
MARKDOWN_EXTENSIONS: Final[tuple[str, ...]] = ("tables", "fenced_code", "attr_list")

FRONTMATTER_PATTERN: Final[re.Pattern[str]] = re.compile(r"^---\s*\n(.*?)\n---\s*\n?", re.DOTALL)
STEP_SEPARATOR: Final[re.Pattern[str]] = re.compile(r"^---\s*$", re.MULTILINE)
HEADING_PATTERN: Final[re.Pattern[str]] = re.compile(r"^#{1,6}\s+(.+?)\s*#*\s*$", re.MULTILINE)
_SLUG_STRIP: Final[re.Pattern[str]] = re.compile(r"[^a-z0-9]+")


def slugify(text: str) -> str:
    """Return a lowercase, dash-separated identifier for ``text``."""

    return _SLUG_STRIP.sub("-", text.lower()).strip("-")


def split_frontmatter(text: str, *, source: Path) -> tuple[dict[str, Any], str]:
    """Return the parsed YAML front-matter of ``text`` and the remaining body.

    Raises:
        TransformError: If the front-matter is not a valid YAML mapping.
    """

    match = FRONTMATTER_PATTERN.match(text)
    if not match:
        return {}, text
    try:
        loaded = yaml.safe_load(match.group(1))
    except yaml.YAMLError as exc:
        raise TransformError(str(source), f"invalid front-matter: {exc}") from exc
    if loaded is None:
        return {}, text[match.end() :]
    if not isinstance(loaded, dict):
        raise TransformError(str(source), "front-matter must be a mapping")
    return {str(key): value for key, value in loaded.items()}, text[match.end() :]


def _render_step(index: int, body: str) -> dict[str, Any]:
    heading = HEADING_PATTERN.search(body)
    title = heading.group(1).strip() if heading else ""
    return {
        "id": slugify(title) or f"step-{index + 1}",
        "title": title,
        "html": markdown.markdown(body.strip(), extensions=list(MARKDOWN_EXTENSIONS)),
    }


class MarkdownDocumentTransform:
    """Parse markdown course sources with ``markdown`` and ``PyYAML``."""

    def __init__(self, *, default_locale: str, course_url: str = "/course/{course}") -> None:
        self._default_locale = default_locale
        self._course_url = course_url

    def source_file(self, course_dir: Path, locale: str) -> Path:
        """Return the markdown file holding ``locale``'s variant of the course."""

        if locale == self._default_locale:
            return course_dir / CONTENT_FILE
        return course_dir / TRANSLATIONS_DIR / f"{locale}.md"

    def parse(self, course_dir: Path, locale: str, locales: Sequence[str]) -> CourseData | None:
        """Return course data for ``locale`` or ``None`` when no variant exists.

        Raises:
            TransformError: If the source cannot be read or parsed.
        """

        source = self.source_file(course_dir, locale)
        if not source.is_file():
            return None
        try:
            text = source.read_text(encoding="utf-8")
        except OSError as exc:
            raise TransformError(str(source), str(exc)) from exc

        metadata, body = split_frontmatter(text, source=source)
        blocks = [block for block in STEP_SEPARATOR.split(body) if block.strip()]
        steps = [_render_step(index, block) for index, block in enumerate(blocks)]
        available = [
            candidate for candidate in locales if self.source_file(course_dir, candidate).is_file()
        ]
        course = {
            "id": course_dir.name,
            "locale": locale,
            "title": str(metadata.pop("title", steps[0]["title"] if steps else course_dir.name)),
            "description": str(metadata.pop("description", "")),
            "metadata": metadata,
            "availableLocales": available,
            "steps": steps,
        }
        return CourseData(
            course=course,
            source_file=source,
            url=self._course_url.format(course=course_dir.name),
            dependencies=(source,),
        )


__all__ = ["CONTENT_FILE", "MarkdownDocumentTransform", "slugify", "split_frontmatter"]
