from __future__ import annotations

import dataclasses
from dataclasses import dataclass

from .schema import Task


@dataclass(frozen=True)
class PinBoard:
    pinned: tuple[Task, ...] = ()
    limit: int = 3

    def __post_init__(self) -> None:
        if self.limit < 1:
            raise ValueError("limit must be >= 1")
        if len(self.pinned) > self.limit:
            raise ValueError("pinned exceeds limit")

    def pinned_ids(self) -> tuple[str, ...]:
        return tuple(task.task_id for task in self.pinned)


def pin_task(board: PinBoard, task: Task) -> PinBoard:
    """Move `task` to the front, dropping the oldest pins past the limit."""
    rest = tuple(item for item in board.pinned if item.task_id != task.task_id)
    return dataclasses.replace(board, pinned=((task,) + rest)[: board.limit])


def unpin_task(board: PinBoard, task_id: str) -> PinBoard:
    return dataclasses.replace(
        board,
        pinned=tuple(item for item in board.pinned if item.task_id != task_id),
    )


def clear_pins(board: PinBoard) -> PinBoard:
    return dataclasses.replace(board, pinned=())


def lane_task_ids(tasks: tuple[Task, ...], lane: str) -> tuple[str, ...]:
    return tuple(task.task_id for task in tasks if task.lane == lane)
