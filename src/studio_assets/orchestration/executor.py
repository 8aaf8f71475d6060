# SPDX-License-Identifier: MIT
# Copyright (c) 2026 The studio-assets contributors
"""Run unit tasks with per-task failure isolation."""

from __future__ import annotations

import time
from collections.abc import Callable, Sequence
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass

from ..logging import failure, success
from ..models import BuildResult

UnitCallable = Callable[[], bool | None]
"""Build callable; returning ``False`` marks the unit as skipped."""


@dataclass(frozen=True, slots=True)
class UnitTask:
    """One schedulable unit of work.

    Attributes:
        unit_id: Stable key used for reporting and watch registration.
        label: Source identity shown in success and failure messages.
        run: Callable performing the build.
    """

    unit_id: str
    label: str
    run: UnitCallable


def run_unit(task: UnitTask) -> BuildResult:
    """Execute ``task`` converting any exception into a failed result.

    Args:
        task: Unit of work to run.

    Returns:
        BuildResult: Outcome with timing; failures carry the error text.
    """

    start = time.perf_counter()
    try:
        outcome = task.run()
    except Exception as exc:  # noqa: BLE001 - one unit must never abort its siblings
        duration_ms = (time.perf_counter() - start) * 1000
        failure(task.label, exc)
        return BuildResult(unit_id=task.unit_id, success=False, duration_ms=duration_ms, error=str(exc))
    duration_ms = (time.perf_counter() - start) * 1000
    if outcome is False:
        return BuildResult(unit_id=task.unit_id, success=True, duration_ms=duration_ms, skipped=True)
    success(task.label, duration_ms)
    return BuildResult(unit_id=task.unit_id, success=True, duration_ms=duration_ms)


def run_settled(tasks: Sequence[UnitTask], *, max_workers: int) -> list[BuildResult]:
    """Run ``tasks`` on a pool of ``max_workers`` threads and wait for all of them.

    Every task settles (succeeds or fails) before this returns; a failing task
    never cancels its siblings. With ``max_workers=1`` tasks run one at a time
    in submission order.

    Args:
        tasks: Units of work to run.
        max_workers: Upper bound on concurrently running tasks.

    Returns:
        list[BuildResult]: One result per task, in submission order.
    """

    if not tasks:
        return []
    results: dict[int, BuildResult] = {}
    with ThreadPoolExecutor(max_workers=max(1, min(max_workers, len(tasks)))) as executor:
        future_map = {executor.submit(run_unit, task): index for index, task in enumerate(tasks)}
        for future in as_completed(future_map):
            results[future_map[future]] = future.result()
    return [results[index] for index in range(len(tasks))]


__all__ = ["UnitCallable", "UnitTask", "run_settled", "run_unit"]
