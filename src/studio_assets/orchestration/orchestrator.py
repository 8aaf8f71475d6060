# SPDX-License-Identifier: MIT
# Copyright (c) 2026 The studio-assets contributors
"""Sequence the asset stage groups of one build."""

from __future__ import annotations

import time
from collections.abc import Sequence
from pathlib import Path
from typing import Final

from ..config import Config, PathsConfig, load_config
from ..discovery import AssetResolver, find_course_files, list_courses
from ..logging import configure, info, ok, section, warn
from ..models import AssetKind, AssetUnit, BuildReport
from ..transforms import (
    EsbuildScriptTransform,
    MarkdownDocumentTransform,
    SassStyleTransform,
    TransformSuite,
    TranslationCatalog,
)
from ..watch import FileWatcher, WatchInvalidator
from .courses import CourseBuildSerializer, SitemapURLSet
from .executor import UnitTask, run_settled, run_unit
from .fanout import LocaleFanout
from .registry import CacheBustRegistry
from .sitemap import SitemapAggregator
from .stages import BuildSettings, UnitBuilder

ICON_PATTERN: Final[str] = "assets/icons/*.svg"
SCRIPT_PATTERN: Final[str] = "*.ts"
STYLE_PATTERN: Final[str] = "*.scss"
SITEMAP_UNIT_ID: Final[str] = "sitemap"
WATCH_POLL_SECONDS: Final[float] = 1.0


def default_transforms(config: Config) -> TransformSuite:
    """Return the command-line backed transforms configured by ``config``."""

    tools = config.tools
    return TransformSuite(
        styles=SassStyleTransform(sass=tools.sass, rtlcss=tools.rtlcss, timeout=tools.timeout),
        scripts=EsbuildScriptTransform(esbuild=tools.esbuild, cwd=config.root, timeout=tools.timeout),
        documents=MarkdownDocumentTransform(
            default_locale=config.build.default_locale,
            course_url=config.site.course_url,
        ),
    )


class PipelineOrchestrator:
    """Run the icon, asset, course and sitemap stage groups in order.

    The icon stage settles before any script task is created so scripts always
    read the sprite hash it published. Top-level scripts, the polyfill, styles
    and per-course assets then share one concurrent group. Courses follow on
    their own bounded pool, and the sitemap always runs last, even after unit
    failures.
    """

    def __init__(
        self,
        config: Config,
        *,
        transforms: TransformSuite | None = None,
        invalidator: WatchInvalidator | None = None,
    ) -> None:
        self.config = config
        self.transforms = transforms if transforms is not None else default_transforms(config)
        self.invalidator = invalidator
        self.registry = CacheBustRegistry()
        self.catalog = TranslationCatalog(config.resolved_paths().translations)

    def run(
        self,
        *,
        minify: bool | None = None,
        locales: Sequence[str] | None = None,
        extra_urls: Sequence[str] = (),
    ) -> BuildReport:
        """Build every unit once and return the collected results.

        Args:
            minify: Minify compiled output; defaults to the configured value.
            locales: Locales to emit; defaults to the configured locales.
            extra_urls: Additional sitemap URLs supplied by the caller.

        Returns:
            BuildReport: One result per unit plus the sitemap URLs written.
        """

        paths = self.config.resolved_paths()
        build = self.config.build
        selected = list(dict.fromkeys(locales or build.locales))
        self.registry.reset()
        self.catalog.clear()

        fanout = LocaleFanout(
            selected,
            build.default_locale,
            self.catalog.translate,
            catalog_files=self.catalog.paths(selected),
        )
        builder = UnitBuilder(
            BuildSettings(
                output_root=paths.output,
                banner=self.config.site.banner,
                minify=build.minify if minify is None else minify,
                env=build.script_env,
            ),
            self.transforms,
            registry=self.registry,
            fanout=fanout,
            invalidator=self.invalidator,
        )
        resolver = AssetResolver(paths.studio_assets, paths.project_assets, paths.output)
        report = BuildReport()
        started = time.perf_counter()

        section("Icons")
        icons = self._resolve(resolver, ICON_PATTERN, AssetKind.ICON)
        report.extend(run_settled([builder.icons_task(icons)], max_workers=1))

        section("Scripts and styles")
        report.extend(run_settled(self._asset_tasks(builder, resolver, paths), max_workers=build.jobs))

        section("Courses")
        url_set = SitemapURLSet()
        serializer = CourseBuildSerializer(
            self.transforms.documents,
            content_root=paths.content,
            output_root=paths.output,
            url_set=url_set,
            invalidator=self.invalidator,
            max_workers=build.course_workers,
        )
        report.extend(serializer.run_all(list_courses(paths.content), selected))

        section("Sitemap")
        aggregator = SitemapAggregator(url_set, self.config.site, paths.output)

        def _write_sitemap() -> bool:
            aggregator.build(extra_urls)
            return True

        report.extend([run_unit(UnitTask(SITEMAP_UNIT_ID, str(aggregator.path), _write_sitemap))])
        report.sitemap_urls = aggregator.urls(extra_urls)

        self._summarise(report, (time.perf_counter() - started) * 1000)
        return report

    def _asset_tasks(self, builder: UnitBuilder, resolver: AssetResolver, paths: PathsConfig) -> list[UnitTask]:
        scripts = self._resolve(resolver, SCRIPT_PATTERN, AssetKind.SCRIPT)
        styles = self._resolve(resolver, STYLE_PATTERN, AssetKind.STYLE)
        course_scripts = find_course_files(SCRIPT_PATTERN, paths.content, paths.output, AssetKind.SCRIPT)
        course_styles = find_course_files(STYLE_PATTERN, paths.content, paths.output, AssetKind.STYLE)
        global_name = self.config.build.course_global_name
        return [
            *(builder.script_task(unit) for unit in scripts),
            builder.polyfill_task(paths.polyfills),
            *(builder.style_task(unit) for unit in styles),
            *(builder.script_task(unit, global_name=global_name) for unit in course_scripts),
            *(builder.style_task(unit) for unit in course_styles),
        ]

    @staticmethod
    def _resolve(resolver: AssetResolver, pattern: str, kind: AssetKind) -> list[AssetUnit]:
        """Resolve ``pattern``, reporting a malformed pattern as zero matches."""

        try:
            return resolver.resolve(pattern, kind)
        except ValueError as exc:
            warn(str(exc))
            return []

    @staticmethod
    def _summarise(report: BuildReport, duration_ms: float) -> None:
        built = len([result for result in report.succeeded if not result.skipped])
        if report.failed:
            warn(f"{built} units built, {len(report.failed)} failed ({duration_ms:.0f}ms)")
        else:
            ok(f"{built} units built ({duration_ms:.0f}ms)")


def build_assets(
    minify: bool | None = None,
    watch: bool = False,
    locales: Sequence[str] | None = None,
    *,
    root: Path | None = None,
    config: Config | None = None,
    transforms: TransformSuite | None = None,
) -> None:
    """Build every asset once and, when ``watch`` is set, keep rebuilding on change.

    Unit failures are reported, never raised. In watch mode the call blocks
    until interrupted.

    Args:
        minify: Minify compiled scripts and styles; ``None`` uses the configured value.
        watch: Keep watching registered dependencies after the initial build.
        locales: Locales to emit; defaults to the configured locales.
        root: Project root used to load configuration when ``config`` is omitted.
        config: Pre-loaded configuration.
        transforms: Transform suite overriding the command-line defaults.

    Raises:
        ConfigError: If configuration cannot be loaded.
    """

    resolved = config if config is not None else load_config(root or Path.cwd())
    configure(emoji=resolved.output.emoji, color=resolved.output.color, verbose=resolved.output.verbose)
    invalidator = WatchInvalidator() if watch else None
    orchestrator = PipelineOrchestrator(resolved, transforms=transforms, invalidator=invalidator)
    orchestrator.run(minify=minify, locales=locales)
    if invalidator is None:
        return

    watcher = FileWatcher(invalidator)
    watcher.start()
    info(f"Watching {len(watcher.directories)} directories, press Ctrl+C to stop")
    try:
        while watcher.is_alive():
            watcher.join(WATCH_POLL_SECONDS)
    except KeyboardInterrupt:
        info("Stopping watch")
    finally:
        watcher.stop()
        watcher.join()


__all__ = ["PipelineOrchestrator", "build_assets", "default_transforms"]
