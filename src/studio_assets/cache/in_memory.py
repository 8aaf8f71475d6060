# SPDX-License-Identifier: MIT
# Copyright (c) 2026 The studio-assets contributors
"""Thread-safe memoisation for lookups repeated within one build.

Entries live for the lifetime of the process only; nothing is persisted
between runs.
"""

from __future__ import annotations

from collections import OrderedDict
from collections.abc import Callable, Hashable
from dataclasses import dataclass
from functools import update_wrapper
from threading import Lock
from typing import Final, Generic, ParamSpec, TypeVar, cast

P = ParamSpec("P")
R = TypeVar("R")

_KWARGS_MARKER: Final[object] = object()


@dataclass(frozen=True, slots=True)
class CacheInfo:
    """Snapshot of a memoised callable's cache.

    Attributes:
        current_size: Entries currently stored.
        hits: Calls answered from the cache since the last clear.
        maxsize: Capacity, ``None`` when unbounded.
    """

    current_size: int
    hits: int
    maxsize: int | None


def _cache_key(args: tuple[object, ...], kwargs: dict[str, object]) -> Hashable:
    """Return a hashable key for one call.

    Raises:
        TypeError: If an argument cannot be hashed.
    """

    key: tuple[object, ...] = args
    if kwargs:
        key = (*args, _KWARGS_MARKER, *sorted(kwargs.items()))
    try:
        hash(key)
    except TypeError as exc:
        raise TypeError(f"memoised call arguments must be hashable: {exc}") from exc
    return key


class _Memoized(Generic[P, R]):
    """Least-recently-used cache in front of ``func``.

    Concurrent first calls with the same key may both compute the value; the
    last result stored wins. The lock only guards the mapping.
    """

    def __init__(self, func: Callable[P, R], maxsize: int | None) -> None:
        self._func = func
        self._maxsize = maxsize
        self._entries: OrderedDict[Hashable, R] = OrderedDict()
        self._hits = 0
        self._lock = Lock()
        update_wrapper(self, func)

    def __call__(self, *args: P.args, **kwargs: P.kwargs) -> R:
        key = _cache_key(args, kwargs)
        with self._lock:
            if key in self._entries:
                self._entries.move_to_end(key)
                self._hits += 1
                return self._entries[key]
        value = self._func(*args, **kwargs)
        with self._lock:
            self._entries[key] = value
            while self._maxsize is not None and len(self._entries) > self._maxsize:
                self._entries.popitem(last=False)
        return value

    def cache_clear(self) -> None:
        """Drop every entry and reset the hit counter."""

        with self._lock:
            self._entries.clear()
            self._hits = 0

    def cache_metadata(self) -> CacheInfo:
        with self._lock:
            return CacheInfo(current_size=len(self._entries), hits=self._hits, maxsize=self._maxsize)


def memoize(maxsize: int | None = None) -> Callable[[Callable[P, R]], Callable[P, R]]:
    """Return a decorator caching results by call arguments.

    Args:
        maxsize: Maximum entries kept; the least recently used entry is
            evicted first. ``None`` keeps every entry.

    Returns:
        Callable[[Callable[P, R]], Callable[P, R]]: Decorator exposing
        ``cache_clear`` and ``cache_metadata`` on the wrapped callable.
    """

    def _decorate(func: Callable[P, R]) -> Callable[P, R]:
        return cast(Callable[P, R], _Memoized(func, maxsize))

    return _decorate


__all__: Final = ["CacheInfo", "memoize"]
