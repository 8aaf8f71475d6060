# SPDX-License-Identifier: MIT
# Copyright (c) 2026 The studio-assets contributors
"""End-to-end tests for stage sequencing with fake transforms."""

from __future__ import annotations

import re
from pathlib import Path

from studio_assets.config import Config
from studio_assets.orchestration import PipelineOrchestrator, build_assets
from studio_assets.transforms import TransformSuite
from studio_assets.watch import WatchInvalidator

VERSIONED_ICONS = re.compile(r"/icons\.[0-9a-f]{8}\.svg")


def _public(config: Config) -> Path:
    return config.resolved_paths().output


def test_build_writes_every_artifact(config: Config, transforms: TransformSuite) -> None:
    report = PipelineOrchestrator(config, transforms=transforms).run()
    public = _public(config)

    assert not report.failed
    expected = {
        "icons.svg",
        "polyfill.js",
        "main.js",
        "main.fr.js",
        "shared.js",
        "shared.fr.js",
        "theme.css",
        "theme.rtl.css",
        "sitemap.xml",
    }
    assert expected <= {path.name for path in public.iterdir()}
    assert not (public / "globals.d.js").exists()
    course = public / "content" / "course-a"
    assert {path.name for path in course.iterdir()} == {
        "functions.js",
        "functions.fr.js",
        "styles.css",
        "styles.rtl.css",
        "data_en.json",
        "data_fr.json",
    }
    assert (public / "content" / "course-b" / "data_en.json").is_file()
    assert not (public / "content" / "shared").exists()


def test_scripts_reference_the_published_sprite(config: Config, transforms: TransformSuite) -> None:
    orchestrator = PipelineOrchestrator(config, transforms=transforms)
    orchestrator.run()
    public = _public(config)

    published = orchestrator.registry.current()
    assert VERSIONED_ICONS.fullmatch(published)
    for script in [*public.glob("*.js"), *(public / "content" / "course-a").glob("*.js")]:
        if script.name == "polyfill.js":
            continue
        text = script.read_text(encoding="utf-8")
        assert "/icons.svg" not in text, script
    main = (public / "main.js").read_text(encoding="utf-8")
    assert main.count(published) == 2


def test_script_post_processing(config: Config, transforms: TransformSuite, fakes) -> None:
    PipelineOrchestrator(config, transforms=transforms).run()
    public = _public(config)
    _, scripts, _ = fakes

    main_en = (public / "main.js").read_text(encoding="utf-8")
    main_fr = (public / "main.fr.js").read_text(encoding="utf-8")
    assert main_en.startswith("/* (c) Test, generated by studio-assets */\n")
    assert "/*! license */" not in main_en
    assert 'label("greeting")' in main_en
    assert 'label("Bonjour")' in main_fr
    assert "locale=fr" in main_fr
    shared = (public / "shared.js").read_text(encoding="utf-8")
    assert "override" in shared and "'base'" not in shared
    global_names = {source.name: options.global_name for source, options in scripts.calls}
    assert global_names["functions.ts"] == "StepFunctions"
    assert global_names["main.ts"] is None


def test_styles_and_polyfill_outputs(config: Config, transforms: TransformSuite) -> None:
    PipelineOrchestrator(config, transforms=transforms).run(minify=True)
    public = _public(config)

    rtl = (public / "content" / "course-a" / "styles.rtl.css").read_text(encoding="utf-8")
    assert "float: right" in rtl
    assert rtl.startswith("/* (c) Test")
    assert (public / "theme.css").read_text(encoding="utf-8").endswith("/*min*/")
    polyfill = (public / "polyfill.js").read_text(encoding="utf-8")
    assert "var wa=1;" in polyfill and "var ce=1;" in polyfill
    assert "sourceMappingURL" not in polyfill


def test_unit_failure_is_isolated(config: Config, transforms: TransformSuite, fakes) -> None:
    styles, scripts, documents = fakes
    styles.failing.add("theme.scss")
    scripts.failing.add("main.ts")
    documents.failing.add("course-a")

    report = PipelineOrchestrator(config, transforms=transforms).run()
    public = _public(config)

    failed = sorted(result.unit_id.split(":")[0] for result in report.failed)
    assert failed == ["course", "course", "script", "style"]
    assert (public / "shared.js").is_file()
    assert (public / "content" / "course-a" / "styles.css").is_file()
    assert (public / "content" / "course-b" / "data_fr.json").is_file()
    sitemap = (public / "sitemap.xml").read_text(encoding="utf-8")
    assert "https://example.org/course/course-b" in sitemap
    assert "course-a" not in sitemap


def test_sitemap_has_one_url_per_course(config: Config, transforms: TransformSuite) -> None:
    report = PipelineOrchestrator(config, transforms=transforms).run(extra_urls=["/search"])

    assert report.sitemap_urls == ["/", "/course/course-a", "/course/course-b", "/about", "/search"]


def test_locale_override_limits_fanout(config: Config, transforms: TransformSuite) -> None:
    PipelineOrchestrator(config, transforms=transforms).run(locales=["en"])
    public = _public(config)

    assert (public / "main.js").is_file()
    assert not (public / "main.fr.js").exists()
    assert not (public / "content" / "course-a" / "data_fr.json").exists()


def test_watch_rebuilds_only_the_changed_unit(config: Config, transforms: TransformSuite, fakes) -> None:
    _, scripts, documents = fakes
    invalidator = WatchInvalidator()
    PipelineOrchestrator(config, transforms=transforms, invalidator=invalidator).run()
    scripts.calls.clear()
    documents.calls.clear()
    source = config.resolved_paths().studio_assets / "main.ts"
    source.write_text('icon("/icons.svg"); const v = 2;', encoding="utf-8")

    results = invalidator.notify(source)

    assert [result.unit_id for result in results] == [f"script:{source}"]
    assert {call[0].name for call in scripts.calls} == {"main.ts"}
    assert documents.calls == []
    rebuilt = (_public(config) / "main.fr.js").read_text(encoding="utf-8")
    assert "const v = 2;" in rebuilt
    assert VERSIONED_ICONS.search(rebuilt)


def test_watch_rebuilds_style_that_failed_first_build(config: Config, transforms: TransformSuite, fakes) -> None:
    styles, _, _ = fakes
    styles.failing.add("theme.scss")
    invalidator = WatchInvalidator()
    report = PipelineOrchestrator(config, transforms=transforms, invalidator=invalidator).run()
    source = config.resolved_paths().studio_assets / "theme.scss"
    assert f"style:{source}" in [result.unit_id for result in report.failed]

    styles.failing.clear()
    source.write_text("body { margin-left: 1px; }", encoding="utf-8")
    (result,) = invalidator.notify(source)

    assert result.unit_id == f"style:{source}"
    assert result.success
    assert "margin-left: 1px" in (_public(config) / "theme.css").read_text(encoding="utf-8")


def test_failed_rebuild_keeps_watching_the_unit(config: Config, transforms: TransformSuite, fakes) -> None:
    styles, _, _ = fakes
    invalidator = WatchInvalidator()
    PipelineOrchestrator(config, transforms=transforms, invalidator=invalidator).run()
    source = config.resolved_paths().studio_assets / "theme.scss"

    styles.failing.add("theme.scss")
    (failed,) = invalidator.notify(source)
    styles.failing.clear()
    (rebuilt,) = invalidator.notify(source)

    assert not failed.success
    assert rebuilt.success


def test_watch_rebuilds_course_that_failed_first_build(config: Config, transforms: TransformSuite, fakes) -> None:
    _, _, documents = fakes
    documents.failing.add("course-a")
    invalidator = WatchInvalidator()
    PipelineOrchestrator(config, transforms=transforms, invalidator=invalidator).run()
    content = config.resolved_paths().content / "course-a" / "content.md"
    assert not (_public(config) / "content" / "course-a" / "data_en.json").exists()

    documents.failing.clear()
    results = invalidator.notify(content)

    assert [result.unit_id for result in results] == ["course:course-a[en]", "course:course-a[fr]"]
    assert all(result.success for result in results)
    assert (_public(config) / "content" / "course-a" / "data_en.json").is_file()


def test_translation_edit_rebuilds_scripts(config: Config, transforms: TransformSuite) -> None:
    invalidator = WatchInvalidator()
    PipelineOrchestrator(config, transforms=transforms, invalidator=invalidator).run()
    catalog = config.resolved_paths().translations
    assert catalog is not None
    table = catalog / "fr.json"
    table.write_text('{"greeting": "Salut"}', encoding="utf-8")

    results = invalidator.notify(table)

    assert results and all(result.unit_id.startswith("script:") for result in results)
    assert 'label("Salut")' in (_public(config) / "main.fr.js").read_text(encoding="utf-8")


def test_icon_rebuild_republishes_hash(config: Config, transforms: TransformSuite) -> None:
    invalidator = WatchInvalidator()
    orchestrator = PipelineOrchestrator(config, transforms=transforms, invalidator=invalidator)
    orchestrator.run()
    before = orchestrator.registry.current()
    icon = config.resolved_paths().studio_assets / "assets" / "icons" / "star.svg"
    icon.write_text('<svg xmlns="http://www.w3.org/2000/svg"><circle r="2"/></svg>', encoding="utf-8")

    (result,) = invalidator.notify(icon)

    assert result.unit_id == "icon:sprite"
    assert orchestrator.registry.current() != before
    assert 'id="star"' in (_public(config) / "icons.svg").read_text(encoding="utf-8")


def test_build_assets_one_shot(config: Config, transforms: TransformSuite) -> None:
    build_assets(minify=False, watch=False, locales=["en", "fr"], config=config, transforms=transforms)

    assert (_public(config) / "sitemap.xml").is_file()


def test_build_assets_explicit_minify_overrides_configuration(config: Config, transforms: TransformSuite) -> None:
    config.build.minify = True
    theme = _public(config) / "theme.css"

    build_assets(minify=False, config=config, transforms=transforms)
    assert not theme.read_text(encoding="utf-8").endswith("/*min*/")

    build_assets(config=config, transforms=transforms)
    assert theme.read_text(encoding="utf-8").endswith("/*min*/")
