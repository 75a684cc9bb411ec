"""Dependency levels for import tasks.

A task's level is the length of the longest reference chain below it; every
task in a level only references tasks in strictly lower levels, so a level can
run concurrently once everything beneath it is committed.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from OutlookMigrator.errors import SchedulingError
from OutlookMigrator.tasks import ImportTask


@dataclass(frozen=True)
class Stage:
    level: int
    tasks: tuple[ImportTask, ...]

    @property
    def names(self) -> list[str]:
        return [t.name for t in self.tasks]

    @property
    def label(self) -> str:
        return f"L{self.level}"


def compute_stages(tasks: Iterable[ImportTask]) -> list[Stage]:
    by_name: dict[str, ImportTask] = {}
    for task in tasks:
        if task.name in by_name:
            raise SchedulingError(f"Duplicate import task: {task.name}")
        by_name[task.name] = task

    for task in by_name.values():
        unknown = sorted(task.references - by_name.keys())
        if unknown:
            raise SchedulingError(f"{task.name} references unknown types: {', '.join(unknown)}")

    remaining = {name: set(t.references) for name, t in by_name.items()}
    stages: list[Stage] = []
    level = 0
    while remaining:
        ready = sorted(name for name, deps in remaining.items() if not deps)
        if not ready:
            raise SchedulingError(
                f"Dependency cycle among: {', '.join(sorted(remaining))}"
            )
        stages.append(Stage(level=level, tasks=tuple(by_name[n] for n in ready)))
        for name in ready:
            del remaining[name]
        for deps in remaining.values():
            deps.difference_update(ready)
        level += 1
    return stages
