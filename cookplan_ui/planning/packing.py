from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from .schema import Task


@dataclass(frozen=True)
class LaneTasks:
    lane: str
    tasks: tuple[Task, ...]


@dataclass(frozen=True)
class AssignedTask:
    task: Task
    row: int

    @property
    def task_id(self) -> str:
        return self.task.task_id


@dataclass(frozen=True)
class PackedLane:
    lane: str
    tasks: tuple[AssignedTask, ...]
    row_count: int

    def task_ids(self) -> tuple[str, ...]:
        return tuple(item.task_id for item in self.tasks)

    def rows(self) -> tuple[tuple[AssignedTask, ...], ...]:
        buckets: list[list[AssignedTask]] = [[] for _ in range(self.row_count)]
        for item in self.tasks:
            buckets[item.row].append(item)
        return tuple(tuple(bucket) for bucket in buckets)


def build_schedule_index(tasks: Iterable[Task]) -> tuple[LaneTasks, ...]:
    lanes: dict[str, list[Task]] = {}
    for task in tasks:
        lanes.setdefault(task.lane, []).append(task)
    return tuple(LaneTasks(lane=lane, tasks=tuple(lanes[lane])) for lane in sorted(lanes.keys()))


def pack_lane(lane: LaneTasks) -> PackedLane:
    """First-fit greedy row assignment over tasks ordered by (start, duration).

    Intervals are half-open, so a task starting exactly when another ends can share its row.
    Processing in start order makes the row count equal to the maximum number of simultaneously
    running tasks in the lane.
    """

    ordered = sorted(lane.tasks, key=lambda t: (t.start_min, t.duration_min))
    row_ends: list[float] = []
    assigned: list[AssignedTask] = []
    for task in ordered:
        row = _first_free_row(row_ends, task.start_min)
        if row is None:
            row_ends.append(task.end_min)
            row = len(row_ends) - 1
        else:
            row_ends[row] = task.end_min
        assigned.append(AssignedTask(task=task, row=row))
    return PackedLane(lane=lane.lane, tasks=tuple(assigned), row_count=len(row_ends))


def pack_plan(tasks: Iterable[Task]) -> tuple[PackedLane, ...]:
    return tuple(pack_lane(lane) for lane in build_schedule_index(tasks))


def _first_free_row(row_ends: list[float], start: float) -> int | None:
    for index, end in enumerate(row_ends):
        if end <= start:
            return index
    return None
