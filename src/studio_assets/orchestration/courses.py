# SPDX-License-Identifier: MIT
# Copyright (c) 2026 The studio-assets contributors
"""Bounded-concurrency driver for course content compilation."""

from __future__ import annotations

import json
from collections.abc import Sequence
from pathlib import Path
from threading import Lock
from typing import Final

from ..discovery.content import COURSE_OUTPUT_DIR
from ..filesystem.paths import write_text
from ..models import BuildResult
from ..transforms.base import DocumentTransform
from ..watch.invalidator import WatchInvalidator
from .executor import UnitTask, run_settled, run_unit

COURSE_DATA_TEMPLATE: Final[str] = "data_{locale}.json"


class SitemapURLSet:
    """Insertion-ordered set of site URLs collected while courses compile."""

    def __init__(self) -> None:
        self._urls: dict[str, None] = {}
        self._lock = Lock()

    def add(self, url: str) -> bool:
        """Add ``url`` returning ``True`` when it was not already present."""

        with self._lock:
            if url in self._urls:
                return False
            self._urls[url] = None
            return True

    def urls(self) -> list[str]:
        with self._lock:
            return list(self._urls)

    def clear(self) -> None:
        with self._lock:
            self._urls.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._urls)

    def __contains__(self, url: object) -> bool:
        with self._lock:
            return url in self._urls


def course_unit_id(course: str, locale: str) -> str:
    """Return the report and watch key of one ``(course, locale)`` pair."""

    return f"course:{course}[{locale}]"


class CourseBuildSerializer:
    """Compile course data one ``(course, locale)`` pair at a time.

    The pool size defaults to one so the memory-hungry document transform never
    runs concurrently with itself. Each produced course writes
    ``content/<course>/data_<locale>.json`` and contributes its canonical URL to
    the shared :class:`SitemapURLSet` once, whatever the number of locales.
    """

    def __init__(
        self,
        documents: DocumentTransform,
        *,
        content_root: Path,
        output_root: Path,
        url_set: SitemapURLSet,
        invalidator: WatchInvalidator | None = None,
        max_workers: int = 1,
    ) -> None:
        self._documents = documents
        self._content_root = content_root
        self._output_root = output_root
        self._url_set = url_set
        self._invalidator = invalidator
        self._max_workers = max_workers

    def destination(self, course: str, locale: str) -> Path:
        """Return the output file of ``course`` compiled for ``locale``."""

        return self._output_root / COURSE_OUTPUT_DIR / course / COURSE_DATA_TEMPLATE.format(locale=locale)

    def task(self, course: str, locale: str, locales: Sequence[str]) -> UnitTask:
        """Return the unit task compiling ``course`` for ``locale``."""

        return UnitTask(
            unit_id=course_unit_id(course, locale),
            label=f"course {course} [{locale}]",
            run=lambda: self.bundle_course(course, locale, locales),
        )

    def run_all(self, courses: Sequence[str], locales: Sequence[str]) -> list[BuildResult]:
        """Compile every course for every locale, courses outermost.

        Args:
            courses: Course identifiers in compilation order.
            locales: Locales each course is compiled for.

        Returns:
            list[BuildResult]: One result per ``(course, locale)`` pair.
        """

        tasks = [self.task(course, locale, locales) for course in courses for locale in locales]
        return run_settled(tasks, max_workers=self._max_workers)

    def bundle_course(self, course: str, locale: str, locales: Sequence[str]) -> bool:
        """Compile one course variant; return ``False`` when the course lacks it.

        The variant's source file is watched before parsing, so a course that
        fails or does not exist yet is built once that file is written.
        """

        course_dir = self._content_root / course
        task = self.task(course, locale, locales)
        if self._invalidator is not None:
            source = self._documents.source_file(course_dir, locale)
            self._invalidator.seed(task.unit_id, (source,), lambda: run_unit(task))
        data = self._documents.parse(course_dir, locale, locales)
        if data is None or data.course is None:
            return False
        payload = json.dumps(data.course, ensure_ascii=False)
        write_text(self.destination(course, locale), payload)
        self._url_set.add(data.url)
        if self._invalidator is not None:
            self._invalidator.register(task.unit_id, data.dependencies, lambda: run_unit(task))
        return True


__all__ = ["COURSE_DATA_TEMPLATE", "CourseBuildSerializer", "SitemapURLSet", "course_unit_id"]
