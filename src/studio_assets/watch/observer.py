# SPDX-License-Identifier: MIT
# Copyright (c) 2026 The studio-assets contributors
"""Bridge ``watchdog`` filesystem events to the watch invalidator."""

from __future__ import annotations

from pathlib import Path
from threading import Lock
from typing import Final

from watchdog.events import (
    EVENT_TYPE_CREATED,
    EVENT_TYPE_MODIFIED,
    EVENT_TYPE_MOVED,
    FileSystemEvent,
    FileSystemEventHandler,
)
from watchdog.observers import Observer
from watchdog.observers.api import BaseObserver, ObservedWatch

from ..logging import debug
from .invalidator import RegistrationDiff, WatchInvalidator

REBUILD_EVENTS: Final[frozenset[str]] = frozenset({EVENT_TYPE_CREATED, EVENT_TYPE_MODIFIED, EVENT_TYPE_MOVED})


def _event_paths(event: FileSystemEvent) -> list[Path]:
    paths = [event.src_path]
    dest_path = getattr(event, "dest_path", "")
    if dest_path:
        paths.append(dest_path)
    return [Path(path if isinstance(path, str) else path.decode()) for path in paths]


class DependencyEventHandler(FileSystemEventHandler):
    """Forward file change events to :meth:`FileWatcher.dispatch`."""

    def __init__(self, watcher: FileWatcher) -> None:
        super().__init__()
        self._watcher = watcher

    def on_any_event(self, event: FileSystemEvent) -> None:
        if event.is_directory or event.event_type not in REBUILD_EVENTS:
            return
        for path in _event_paths(event):
            self._watcher.dispatch(path)


class FileWatcher:
    """Schedule the directories holding registered dependencies and dispatch changes.

    The set of scheduled directories follows the invalidator: every
    registration diff schedules newly needed directories and unschedules
    directories no dependency lives in any more.
    """

    def __init__(self, invalidator: WatchInvalidator, *, observer: BaseObserver | None = None) -> None:
        self._invalidator = invalidator
        self._observer = observer if observer is not None else Observer()
        self._handler = DependencyEventHandler(self)
        self._watches: dict[Path, ObservedWatch] = {}
        self._lock = Lock()
        invalidator.subscribe(self._on_registration)

    @property
    def directories(self) -> frozenset[Path]:
        with self._lock:
            return frozenset(self._watches)

    def start(self) -> None:
        """Schedule current dependencies and start the observer thread."""

        self.sync()
        self._observer.start()

    def stop(self) -> None:
        self._observer.stop()

    def join(self, timeout: float | None = None) -> None:
        self._observer.join(timeout)

    def is_alive(self) -> bool:
        return self._observer.is_alive()

    def dispatch(self, path: Path) -> None:
        """Rebuild the units depending on ``path``."""

        debug(f"change path={path}")
        self._invalidator.notify(path)

    def sync(self) -> None:
        """Align scheduled directories with the invalidator's dependency paths."""

        wanted = {path.parent for path in self._invalidator.watched_paths() if path.parent.is_dir()}
        with self._lock:
            for directory in sorted(set(self._watches) - wanted):
                self._observer.unschedule(self._watches.pop(directory))
            for directory in sorted(wanted - set(self._watches)):
                self._watches[directory] = self._observer.schedule(self._handler, str(directory), recursive=False)

    def _on_registration(self, diff: RegistrationDiff) -> None:
        if diff.changed:
            self.sync()


__all__ = ["DependencyEventHandler", "FileWatcher", "REBUILD_EVENTS"]
