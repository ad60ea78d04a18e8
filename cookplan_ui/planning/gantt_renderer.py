from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Protocol, Sequence

from .assignments import AssignmentBoard
from .formatting import format_minutes, format_mmss, format_span
from .layout import ChartLayout, LaneGeometry, TaskBar
from .schema import Task

PLAYHEAD_CHAR = "|"
EMPTY_CHAR = " "
BAR_FILL = "="


class TimerView(Protocol):
    timer_id: str
    name: str
    mode: str
    remaining_seconds: int

    @property
    def display_state(self) -> str:
        ...


@dataclass(frozen=True)
class GanttRenderConfig:
    minutes_per_column: float = 1.0
    show_assignments: bool = True
    show_timers: bool = True
    show_pins: bool = True
    label_width: int | None = None

    def __post_init__(self) -> None:
        if self.minutes_per_column <= 0:
            raise ValueError("minutes_per_column must be > 0")
        if self.label_width is not None and self.label_width < 4:
            raise ValueError("label_width must be >= 4")


def render_plan_ascii(
    layout: ChartLayout,
    *,
    current_minutes: float = 0.0,
    config: GanttRenderConfig | None = None,
    board: AssignmentBoard | None = None,
    timers: Sequence[TimerView] = (),
    pinned: Sequence[Task] = (),
    title: str = "Cooking Plan",
) -> str:
    cfg = config or GanttRenderConfig()
    columns = _column_count(layout.max_end_min, cfg.minutes_per_column)
    label_width = cfg.label_width or _label_width(layout, board)
    now_col = _column_for(current_minutes, cfg.minutes_per_column)

    lines: list[str] = []
    lines.append(title)
    lines.append(f"Elapsed: {format_mmss(current_minutes * 60)} | now={max(0, math.floor(current_minutes + 0.5))}m")
    lines.append(_build_axis(layout, columns, label_width, cfg.minutes_per_column))
    if not layout.lanes:
        lines.append("(no tasks loaded)")
    for lane in layout.lanes:
        lines.extend(_render_lane(lane, columns, label_width, now_col, cfg.minutes_per_column, board))

    if cfg.show_assignments and board is not None:
        lines.append("")
        lines.append("Assignments:")
        lines.extend(_render_assignments(layout, board))
    if cfg.show_timers and timers:
        lines.append("")
        lines.append("Timers:")
        lines.extend(_render_timers(timers))
    if cfg.show_pins:
        lines.append("")
        lines.append("Pinned:")
        lines.extend(_render_pins(pinned))
    return "\n".join(lines) + "\n"


def _render_lane(
    lane: LaneGeometry,
    columns: int,
    label_width: int,
    now_col: int,
    minutes_per_column: float,
    board: AssignmentBoard | None,
) -> list[str]:
    rows: list[list[TaskBar]] = [[] for _ in range(lane.row_count)]
    for bar in lane.bars:
        rows[bar.row].append(bar)

    lines: list[str] = []
    for index, row_bars in enumerate(rows):
        cells = [EMPTY_CHAR] * columns
        for bar in row_bars:
            _paint_bar(cells, bar.task, minutes_per_column)
        if 0 <= now_col < columns:
            cells[now_col] = PLAYHEAD_CHAR
        label = _lane_label(lane, board) if index == 0 else ""
        ids = ",".join(bar.task.task_id for bar in row_bars)
        lines.append(f"{label[:label_width].ljust(label_width)} |{''.join(cells)}| r{index} {ids}")
    return lines


def _paint_bar(cells: list[str], task: Task, minutes_per_column: float) -> None:
    start = _column_for(task.start_min, minutes_per_column)
    end = max(start + 1, _column_for(task.end_min, minutes_per_column))
    end = min(end, len(cells))
    span = end - start
    if span <= 0:
        return
    text = f"[{task.title}"
    body = (text + BAR_FILL * span)[:span]
    if span >= 2:
        body = body[:-1] + "]"
    cells[start:end] = list(body)


def _lane_label(lane: LaneGeometry, board: AssignmentBoard | None) -> str:
    if board is None:
        return lane.lane
    ids = lane.task_ids()
    initials = "".join(p.initial for p in board.people if board.lane_has_person(ids, p.person_id))
    return f"{lane.lane} [{initials}]" if initials else lane.lane


def _render_assignments(layout: ChartLayout, board: AssignmentBoard) -> list[str]:
    lines: list[str] = []
    for lane in layout.lanes:
        for bar in lane.bars:
            people = board.assigned_people(bar.task.task_id)
            if people:
                lines.append(f"  {bar.task.task_id}: {', '.join(p.name for p in people)}")
    return lines or ["  (none)"]


def _render_timers(timers: Sequence[TimerView]) -> list[str]:
    lines: list[str] = []
    for timer in timers:
        name = f" {timer.name}" if timer.name else ""
        lines.append(
            f"  {timer.timer_id:<4} {timer.mode:<4} {format_mmss(timer.remaining_seconds):>6} "
            f"{timer.display_state}{name}"
        )
    return lines


def _render_pins(pinned: Sequence[Task]) -> list[str]:
    if not pinned:
        return ["  (none)"]
    return [
        f"  {task.title} | {task.lane} | {format_span(task.start_min, task.duration_min)}"
        for task in pinned
    ]


def _build_axis(layout: ChartLayout, columns: int, label_width: int, minutes_per_column: float) -> str:
    cells = [EMPTY_CHAR] * columns
    for tick in layout.ticks:
        if not tick.major:
            continue
        col = _column_for(tick.minute, minutes_per_column)
        text = format_minutes(tick.minute)
        if col + len(text) > columns:
            continue
        cells[col : col + len(text)] = list(text)
    return f"{'Minutes:'.ljust(label_width)} |{''.join(cells)}|"


def _label_width(layout: ChartLayout, board: AssignmentBoard | None) -> int:
    widths = [len(_lane_label(lane, board)) for lane in layout.lanes]
    return max([8] + widths)


def _column_count(max_end_min: int, minutes_per_column: float) -> int:
    return max(1, math.ceil(max_end_min / minutes_per_column) + 1)


def _column_for(minutes: float, minutes_per_column: float) -> int:
    return math.floor(max(0.0, minutes) / minutes_per_column)
