# SPDX-License-Identifier: MIT
# Copyright (c) 2026 The studio-assets contributors
"""Publication cell for the content-hashed icon sprite path."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import PurePosixPath
from threading import Lock
from typing import Final

DEFAULT_ICONS_PATH: Final[str] = "/icons.svg"


@dataclass(frozen=True, slots=True)
class CacheBustedPath:
    """A logical URL path paired with the content hash that versions it."""

    logical_path: str
    content_hash: str

    @property
    def versioned(self) -> str:
        """Return ``/name.<hash>.ext`` for ``/name.ext``."""

        logical = PurePosixPath(self.logical_path)
        return str(logical.with_name(f"{logical.stem}.{self.content_hash}{logical.suffix}"))


class CacheBustRegistry:
    """Single-writer, many-reader cell holding the current icon sprite URL.

    The icon stage publishes once per run; script builds read :meth:`current`
    each time they run. Ordering between the two is the orchestrator's job.
    """

    def __init__(self, logical_path: str = DEFAULT_ICONS_PATH) -> None:
        self._logical_path = logical_path
        self._published: CacheBustedPath | None = None
        self._lock = Lock()

    @property
    def logical_path(self) -> str:
        return self._logical_path

    @property
    def published(self) -> bool:
        with self._lock:
            return self._published is not None

    def publish(self, content_hash: str) -> str:
        """Publish ``content_hash`` and return the resulting versioned path.

        Raises:
            ValueError: If ``content_hash`` is empty.
        """

        if not content_hash:
            raise ValueError("content hash must not be empty")
        entry = CacheBustedPath(self._logical_path, content_hash)
        with self._lock:
            self._published = entry
        return entry.versioned

    def current(self) -> str:
        """Return the published path, or the unversioned path before any publish."""

        with self._lock:
            return self._published.versioned if self._published is not None else self._logical_path

    def reset(self) -> None:
        """Forget the published value."""

        with self._lock:
            self._published = None

    def apply(self, text: str) -> str:
        """Replace every occurrence of the unversioned path in ``text`` with :meth:`current`."""

        return text.replace(self._logical_path, self.current())


__all__ = ["CacheBustRegistry", "CacheBustedPath", "DEFAULT_ICONS_PATH"]
