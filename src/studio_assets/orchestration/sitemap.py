# SPDX-License-Identifier: MIT
# Copyright (c) 2026 The studio-assets contributors
"""Render the sitemap from the URLs gathered during a build."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from typing import Final
from xml.etree import ElementTree

from ..config.models import SiteConfig
from ..filesystem.paths import write_text
from .courses import SitemapURLSet

SITEMAP_NAMESPACE: Final[str] = "http://www.sitemaps.org/schemas/sitemap/0.9"
SITEMAP_FILE: Final[str] = "sitemap.xml"
ROOT_URL: Final[str] = "/"


class SitemapAggregator:
    """Build ``sitemap.xml`` from the root URL, course URLs and configured extras."""

    def __init__(self, url_set: SitemapURLSet, site: SiteConfig, output_root: Path) -> None:
        self._url_set = url_set
        self._site = site
        self._output_root = output_root

    @property
    def path(self) -> Path:
        return self._output_root / SITEMAP_FILE

    def urls(self, extra_urls: Iterable[str] = ()) -> list[str]:
        """Return the deduplicated site-relative URLs, root first."""

        ordered = [ROOT_URL, *self._url_set.urls(), *self._site.sitemap, *extra_urls]
        return list(dict.fromkeys(ordered))

    def render(self, extra_urls: Iterable[str] = ()) -> str:
        """Return the XML URL-set document listing :meth:`urls`."""

        urlset = ElementTree.Element("urlset", xmlns=SITEMAP_NAMESPACE)
        for url in self.urls(extra_urls):
            entry = ElementTree.SubElement(urlset, "url")
            ElementTree.SubElement(entry, "loc").text = f"https://{self._site.domain}{url}"
            ElementTree.SubElement(entry, "changefreq").text = self._site.changefreq
            ElementTree.SubElement(entry, "priority").text = self._site.priority
        body = ElementTree.tostring(urlset, encoding="unicode")
        return f'<?xml version="1.0" encoding="UTF-8"?>\n{body}\n'

    def build(self, extra_urls: Iterable[str] = ()) -> str:
        """Write the sitemap to the output root and return its text."""

        document = self.render(extra_urls)
        write_text(self.path, document)
        return document


__all__ = ["ROOT_URL", "SITEMAP_FILE", "SitemapAggregator"]
