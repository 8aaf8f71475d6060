# SPDX-License-Identifier: MIT
# Copyright (c) 2026 The studio-assets contributors
"""Per-unit dependency registrations and targeted rebuild on change."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from pathlib import Path
from threading import RLock
from typing import cast

from ..models import BuildResult

RebuildCallable = Callable[[], BuildResult]


@dataclass(frozen=True, slots=True)
class WatchRegistration:
    """The current dependency set of one unit and the callable that rebuilds it."""

    unit_id: str
    dependency_paths: frozenset[Path]
    rebuild: RebuildCallable


@dataclass(frozen=True, slots=True)
class RegistrationDiff:
    """Dependency paths gained and lost by a unit on (re-)registration."""

    unit_id: str
    added: frozenset[Path]
    removed: frozenset[Path]

    @property
    def changed(self) -> bool:
        return bool(self.added or self.removed)


RegistrationListener = Callable[[RegistrationDiff], None]


def _normalise(paths: Iterable[Path]) -> frozenset[Path]:
    return frozenset(Path(path).resolve() for path in paths)


class WatchInvalidator:
    """Map unit ids to their current watch registration.

    Registering a unit again replaces its previous dependency set. A change to
    a path reruns only the registrations whose dependency set contains it.
    """

    def __init__(self) -> None:
        self._registrations: dict[str, WatchRegistration] = {}
        self._dependents: dict[Path, set[str]] = {}
        self._listeners: list[RegistrationListener] = []
        self._lock = RLock()

    def subscribe(self, listener: RegistrationListener) -> None:
        """Call ``listener`` with the diff of every subsequent registration change."""

        with self._lock:
            self._listeners.append(listener)

    def register(self, unit_id: str, dependency_paths: Iterable[Path], rebuild: RebuildCallable) -> RegistrationDiff:
        """Register or replace the dependency set of ``unit_id``.

        Args:
            unit_id: Key of the unit being watched.
            dependency_paths: Every file whose change must rebuild the unit.
            rebuild: Callable rebuilding the unit.

        Returns:
            RegistrationDiff: Paths added and removed relative to the previous registration.
        """

        return cast(RegistrationDiff, self._store(unit_id, dependency_paths, rebuild, replace=True))

    def seed(self, unit_id: str, dependency_paths: Iterable[Path], rebuild: RebuildCallable) -> RegistrationDiff | None:
        """Register ``unit_id`` only when it has no registration yet.

        Builds seed their entry points before compiling, so a unit whose first
        build fails is still rebuilt once one of those files changes. An
        existing registration, which holds the last successful dependency set,
        is left untouched.

        Returns:
            RegistrationDiff | None: The new registration's diff, or ``None``
            when ``unit_id`` was already registered.
        """

        return self._store(unit_id, dependency_paths, rebuild, replace=False)

    def _store(
        self,
        unit_id: str,
        dependency_paths: Iterable[Path],
        rebuild: RebuildCallable,
        *,
        replace: bool,
    ) -> RegistrationDiff | None:
        dependencies = _normalise(dependency_paths)
        with self._lock:
            previous = self._registrations.get(unit_id)
            if previous is not None and not replace:
                return None
            old = previous.dependency_paths if previous is not None else frozenset()
            self._registrations[unit_id] = WatchRegistration(unit_id, dependencies, rebuild)
            for path in old - dependencies:
                self._drop_dependent(path, unit_id)
            for path in dependencies - old:
                self._dependents.setdefault(path, set()).add(unit_id)
            diff = RegistrationDiff(unit_id, added=dependencies - old, removed=old - dependencies)
            listeners = tuple(self._listeners)
        for listener in listeners:
            listener(diff)
        return diff

    def unregister(self, unit_id: str) -> RegistrationDiff | None:
        """Remove ``unit_id`` returning the released paths, or ``None`` when unknown."""

        with self._lock:
            previous = self._registrations.pop(unit_id, None)
            if previous is None:
                return None
            for path in previous.dependency_paths:
                self._drop_dependent(path, unit_id)
            diff = RegistrationDiff(unit_id, added=frozenset(), removed=previous.dependency_paths)
            listeners = tuple(self._listeners)
        for listener in listeners:
            listener(diff)
        return diff

    def affected(self, path: Path) -> list[WatchRegistration]:
        """Return the registrations depending on ``path``, ordered by unit id."""

        resolved = Path(path).resolve()
        with self._lock:
            unit_ids = sorted(self._dependents.get(resolved, ()))
            return [self._registrations[unit_id] for unit_id in unit_ids]

    def notify(self, path: Path) -> list[BuildResult]:
        """Rebuild every unit that depends on ``path`` and nothing else.

        Rebuilds run outside the lock so they can re-register themselves.
        """

        return [registration.rebuild() for registration in self.affected(path)]

    def watched_paths(self) -> frozenset[Path]:
        """Return the union of every registered dependency path."""

        with self._lock:
            return frozenset(self._dependents)

    def __len__(self) -> int:
        with self._lock:
            return len(self._registrations)

    def __contains__(self, unit_id: object) -> bool:
        with self._lock:
            return unit_id in self._registrations

    def _drop_dependent(self, path: Path, unit_id: str) -> None:
        dependents = self._dependents.get(path)
        if dependents is None:
            return
        dependents.discard(unit_id)
        if not dependents:
            del self._dependents[path]


__all__ = [
    "RebuildCallable",
    "RegistrationDiff",
    "RegistrationListener",
    "WatchInvalidator",
    "WatchRegistration",
]
