# SPDX-License-Identifier: MIT
# Copyright (c) 2026 The studio-assets contributors
"""Per-unit build functions for icons, polyfills, styles and scripts.

Every build function seeds the watch invalidator (when one is attached) with
the unit's entry sources before compiling, writes its outputs, then replaces
that registration with the dependency set discovered while building. A failed
build leaves the previous registration in place.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Final

from ..filesystem.paths import text_hash, with_suffix, write_text
from ..models import AssetUnit
from ..transforms.base import ScriptOptions, TransformSuite
from ..transforms.icons import build_sprite
from ..transforms.polyfill import build_polyfill
from ..transforms.scripts import clean_bundle, is_declaration_file
from ..transforms.styles import node_include_paths
from ..watch.invalidator import WatchInvalidator
from .executor import UnitTask, run_unit
from .fanout import LocaleFanout
from .registry import CacheBustRegistry

ICONS_UNIT_ID: Final[str] = "icon:sprite"
POLYFILL_UNIT_ID: Final[str] = "polyfill:bundle"
ICON_SPRITE_FILE: Final[str] = "icons.svg"
POLYFILL_FILE: Final[str] = "polyfill.js"
RTL_SUFFIX: Final[str] = ".rtl.css"
GENERATOR: Final[str] = "studio-assets"


def asset_header(banner: str) -> str:
    """Return the comment prepended to every compiled script and stylesheet."""

    return f"/* {banner}, generated by {GENERATOR} */\n"


@dataclass(frozen=True, slots=True)
class BuildSettings:
    """Per-run options shared by every unit build."""

    output_root: Path
    banner: str
    minify: bool = False
    env: str = "WEB"


class UnitBuilder:
    """Compile single asset units and keep their watch registrations current."""

    def __init__(
        self,
        settings: BuildSettings,
        transforms: TransformSuite,
        *,
        registry: CacheBustRegistry,
        fanout: LocaleFanout,
        invalidator: WatchInvalidator | None = None,
    ) -> None:
        self.settings = settings
        self.transforms = transforms
        self.registry = registry
        self.fanout = fanout
        self.invalidator = invalidator

    @property
    def header(self) -> str:
        return asset_header(self.settings.banner)

    def icons_task(self, icons: Sequence[AssetUnit]) -> UnitTask:
        return UnitTask(ICONS_UNIT_ID, "icons", lambda: self.bundle_icons(icons))

    def polyfill_task(self, sources: Sequence[Path]) -> UnitTask:
        return UnitTask(POLYFILL_UNIT_ID, POLYFILL_FILE, lambda: self.create_polyfill(sources))

    def style_task(self, unit: AssetUnit) -> UnitTask:
        return UnitTask(unit.unit_id, str(unit.source), lambda: self.bundle_style(unit))

    def script_task(self, unit: AssetUnit, *, global_name: str | None = None) -> UnitTask:
        return UnitTask(unit.unit_id, str(unit.source), lambda: self.bundle_script(unit, global_name=global_name))

    def bundle_icons(self, icons: Sequence[AssetUnit]) -> bool:
        """Write the icon sprite and publish its content-hashed path.

        Args:
            icons: Resolved icon units in sprite order.

        Returns:
            bool: Always ``True``; an empty icon set still yields a sprite.
        """

        sources = [unit.source for unit in icons]
        task = self.icons_task(icons)
        self._seed(task, sources)
        sprite = build_sprite(sources)
        self.registry.publish(text_hash(sprite))
        write_text(self.settings.output_root / ICON_SPRITE_FILE, sprite)
        self._watch(task, sources)
        return True

    def create_polyfill(self, sources: Sequence[Path]) -> bool:
        """Concatenate ``sources`` into ``polyfill.js``."""

        task = self.polyfill_task(sources)
        self._seed(task, sources)
        write_text(self.settings.output_root / POLYFILL_FILE, build_polyfill(sources))
        self._watch(task, sources)
        return True

    def bundle_style(self, unit: AssetUnit) -> bool:
        """Compile one stylesheet and its right-to-left mirror.

        Both files carry the asset header. The watch registration covers every
        stylesheet the compiler pulled in, not only the entry point.
        """

        task = self.style_task(unit)
        self._seed(task, (unit.source,))
        compiled = self.transforms.styles.compile(
            unit.source,
            include_paths=node_include_paths(unit.source.parent),
            minify=self.settings.minify,
        )
        destination = with_suffix(unit.destination, unit.source.suffix, ".css")
        write_text(destination, self.header + compiled.css)
        write_text(with_suffix(destination, ".css", RTL_SUFFIX), self.header + self.transforms.styles.mirror(compiled.css))
        self._watch(task, (unit.source, *compiled.included_files))
        return True

    def bundle_script(self, unit: AssetUnit, *, global_name: str | None = None) -> bool:
        """Bundle one script for every locale.

        Declaration files are skipped. The icon sprite path is read from the
        registry on every run so rebuilt scripts pick up a re-published hash.

        Returns:
            bool: ``False`` when the unit was skipped.
        """

        if is_declaration_file(unit.source):
            return False
        task = self.script_task(unit, global_name=global_name)
        inputs: set[Path] = {unit.source, *self.fanout.catalog_files}
        self._seed(task, inputs)

        def _render(locale: str) -> str:
            options = ScriptOptions(
                locale=locale,
                minify=self.settings.minify,
                global_name=global_name,
                env=self.settings.env,
                translate=self.fanout.translate,
            )
            compiled = self.transforms.scripts.bundle(unit.source, options)
            inputs.update(compiled.inputs)
            return self.header + self.registry.apply(clean_bundle(compiled.text))

        self.fanout.run(with_suffix(unit.destination, unit.source.suffix, ".js"), _render)
        self._watch(task, inputs)
        return True

    def _watch(self, task: UnitTask, dependencies: Iterable[Path]) -> None:
        if self.invalidator is None:
            return
        self.invalidator.register(task.unit_id, dependencies, lambda: run_unit(task))

    def _seed(self, task: UnitTask, sources: Iterable[Path]) -> None:
        if self.invalidator is None:
            return
        self.invalidator.seed(task.unit_id, sources, lambda: run_unit(task))


__all__ = [
    "BuildSettings",
    "ICONS_UNIT_ID",
    "ICON_SPRITE_FILE",
    "POLYFILL_FILE",
    "POLYFILL_UNIT_ID",
    "RTL_SUFFIX",
    "UnitBuilder",
    "asset_header",
]
