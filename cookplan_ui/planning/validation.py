from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

import numpy as np

from .gantt_renderer import GanttRenderConfig, render_plan_ascii
from .layout import LayoutConfig, compose_layout
from .packing import PackedLane, pack_plan
from .schema import Task


@dataclass(frozen=True)
class ValidationReport:
    errors: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.errors


def max_concurrency(tasks: Sequence[Task]) -> int:
    """Largest number of half-open task intervals covering one instant."""
    if not tasks:
        return 0
    starts = np.array([task.start_min for task in tasks], dtype=np.float64)
    ends = np.array([task.end_min for task in tasks], dtype=np.float64)
    times = np.concatenate([starts, ends])
    deltas = np.concatenate([np.ones(len(tasks), dtype=np.int64), -np.ones(len(tasks), dtype=np.int64)])
    # At equal timestamps ends (-1) sort before starts (+1), so touching intervals never count together.
    order = np.lexsort((deltas, times))
    return int(np.cumsum(deltas[order]).max())


def validate_row_packing(lanes: Iterable[PackedLane]) -> ValidationReport:
    errors: list[str] = []
    warnings: list[str] = []
    for lane in lanes:
        for row_index, row in enumerate(lane.rows()):
            if not row:
                warnings.append(f"Lane `{lane.lane}` row {row_index} is empty")
                continue
            ordered = sorted(row, key=lambda item: item.task.start_min)
            for prev, cur in zip(ordered, ordered[1:]):
                if prev.task.overlaps(cur.task):
                    errors.append(
                        f"Lane `{lane.lane}` row {row_index}: `{prev.task_id}` overlaps `{cur.task_id}`"
                    )
        depth = max_concurrency([item.task for item in lane.tasks])
        if lane.row_count != depth:
            errors.append(
                f"Lane `{lane.lane}` uses {lane.row_count} rows but peak concurrency is {depth}"
            )
    return ValidationReport(errors=tuple(errors), warnings=tuple(warnings))


def validate_render_consistency(tasks: Sequence[Task], config: LayoutConfig | None = None) -> ValidationReport:
    errors: list[str] = []

    once = compose_layout(pack_plan(tasks), config)
    twice = compose_layout(pack_plan(tasks), config)
    if once != twice:
        errors.append("Layout is not deterministic across repeated calls")

    text_once = render_plan_ascii(once, config=GanttRenderConfig())
    text_twice = render_plan_ascii(twice, config=GanttRenderConfig())
    if text_once != text_twice:
        errors.append("ASCII renderer output is not deterministic across repeated calls")
    if "Minutes:" not in text_once:
        errors.append("ASCII renderer output missing the minute axis")

    lane_names = [lane.lane for lane in once.lanes]
    if lane_names != sorted(lane_names):
        errors.append("Lanes are not sorted by name")

    return ValidationReport(errors=tuple(errors))


def validate_plan_suite(tasks: Sequence[Task], config: LayoutConfig | None = None) -> ValidationReport:
    packing = validate_row_packing(pack_plan(tasks))
    render = validate_render_consistency(tasks, config)
    return ValidationReport(
        errors=tuple(list(packing.errors) + list(render.errors)),
        warnings=tuple(list(packing.warnings) + list(render.warnings)),
    )


def require_valid_plan_suite(tasks: Sequence[Task], config: LayoutConfig | None = None) -> None:
    report = validate_plan_suite(tasks, config)
    if report.errors:
        joined = "; ".join(report.errors)
        raise ValueError(f"Plan validation failed: {joined}")
