from __future__ import annotations

import math
import tomllib
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Iterable, Mapping

from cookplan_ui.style.palette import PALETTE, palette_color, validate_palette

from .packing import PackedLane, pack_plan
from .schema import Task


@dataclass(frozen=True)
class LayoutConfig:
    row_height: float = 48.0
    row_gap: float = 6.0
    lane_padding: float = 12.0
    label_width: float = 180.0
    top_axis_pad: float = 80.0
    px_per_minute: float = 12.0
    min_bar_width: float = 2.0
    min_chart_width: float = 800.0
    tick_interval_min: int = 5
    major_tick_every: int = 2
    palette: tuple[str, ...] = PALETTE

    def __post_init__(self) -> None:
        if self.row_height <= 0:
            raise ValueError("row_height must be > 0")
        if self.px_per_minute <= 0:
            raise ValueError("px_per_minute must be > 0")
        for name in ("row_gap", "lane_padding", "label_width", "top_axis_pad", "min_bar_width", "min_chart_width"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be >= 0")
        if self.tick_interval_min < 1:
            raise ValueError("tick_interval_min must be >= 1")
        if self.major_tick_every < 1:
            raise ValueError("major_tick_every must be >= 1")


@dataclass(frozen=True)
class TaskBar:
    task: Task
    row: int
    x: float
    y: float
    width: float
    height: float


@dataclass(frozen=True)
class LaneGeometry:
    lane: str
    color: str
    top: float
    height: float
    row_count: int
    bars: tuple[TaskBar, ...]

    def task_ids(self) -> tuple[str, ...]:
        return tuple(bar.task.task_id for bar in self.bars)


@dataclass(frozen=True)
class AxisTick:
    minute: int
    x: float
    major: bool


@dataclass(frozen=True)
class ChartLayout:
    lanes: tuple[LaneGeometry, ...]
    ticks: tuple[AxisTick, ...]
    width: float
    height: float
    max_end_min: int
    config: LayoutConfig

    def lane_lookup(self) -> dict[str, LaneGeometry]:
        return {lane.lane: lane for lane in self.lanes}

    def bar_lookup(self) -> dict[str, TaskBar]:
        return {bar.task.task_id: bar for lane in self.lanes for bar in lane.bars}

    def playhead_x(self, minutes: float) -> float:
        return max(0.0, minutes) * self.config.px_per_minute


def compose_layout(lanes: Iterable[PackedLane], config: LayoutConfig | None = None) -> ChartLayout:
    """Stack packed lanes top-down and place every bar.

    All vertical offsets are relative to the chart body (below the axis strip); horizontal offsets are
    relative to the time origin (right of the label column).
    """

    cfg = config or LayoutConfig()
    packed = tuple(lanes)
    geometry: list[LaneGeometry] = []
    cursor = 0.0
    for index, lane in enumerate(packed):
        height = (
            lane.row_count * cfg.row_height
            + max(0, lane.row_count - 1) * cfg.row_gap
            + cfg.lane_padding * 2
        )
        bars = tuple(
            TaskBar(
                task=item.task,
                row=item.row,
                x=item.task.start_min * cfg.px_per_minute,
                y=row_offset(cursor, item.row, cfg),
                width=max(cfg.min_bar_width, item.task.duration_min * cfg.px_per_minute),
                height=cfg.row_height,
            )
            for item in lane.tasks
        )
        geometry.append(
            LaneGeometry(
                lane=lane.lane,
                color=palette_color(cfg.palette, index),
                top=cursor,
                height=height,
                row_count=lane.row_count,
                bars=bars,
            )
        )
        cursor += height

    max_end = max_end_minute(item.task for lane in packed for item in lane.tasks)
    width = max(cfg.min_chart_width, max_end * cfg.px_per_minute + cfg.label_width)
    return ChartLayout(
        lanes=tuple(geometry),
        ticks=axis_ticks(max_end, cfg),
        width=width,
        height=cursor + cfg.top_axis_pad,
        max_end_min=max_end,
        config=cfg,
    )


def layout_plan(tasks: Iterable[Task], config: LayoutConfig | None = None) -> ChartLayout:
    return compose_layout(pack_plan(tasks), config)


def row_offset(lane_top: float, row: int, config: LayoutConfig) -> float:
    return lane_top + config.lane_padding + row * (config.row_height + config.row_gap)


def max_end_minute(tasks: Iterable[Task]) -> int:
    return math.ceil(max((task.end_min for task in tasks), default=0.0))


def axis_ticks(max_end_min: int, config: LayoutConfig) -> tuple[AxisTick, ...]:
    major_span = config.tick_interval_min * config.major_tick_every
    return tuple(
        AxisTick(minute=minute, x=minute * config.px_per_minute, major=minute % major_span == 0)
        for minute in range(0, max_end_min + 1, config.tick_interval_min)
    )


def layout_config_from_mapping(raw: Mapping[str, Any]) -> LayoutConfig:
    known = {f.name for f in fields(LayoutConfig)}
    values: dict[str, Any] = asdict(LayoutConfig())
    for key, value in raw.items():
        if key not in known:
            raise ValueError(f"Unknown layout setting: {key}")
        values[key] = value
    if "palette" in raw:
        palette = raw["palette"]
        if not isinstance(palette, list):
            raise TypeError("`palette` must be a list of hex colors")
        values["palette"] = validate_palette(palette)
    for key in ("tick_interval_min", "major_tick_every"):
        values[key] = _require_int(values[key], key)
    for f in fields(LayoutConfig):
        if f.name in ("palette", "tick_interval_min", "major_tick_every"):
            continue
        values[f.name] = _require_number(values[f.name], f.name)
    return LayoutConfig(**values)


def load_layout_config(path: str | Path) -> LayoutConfig:
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"layout config not found: {config_path}")
    with config_path.open("rb") as f:
        raw = tomllib.load(f)
    table = raw.get("layout", {})
    if not isinstance(table, Mapping):
        raise TypeError("`layout` must be a table")
    return layout_config_from_mapping(table)


def _require_number(value: object, name: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"Layout setting `{name}` must be a number")
    return float(value)


def _require_int(value: object, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"Layout setting `{name}` must be an integer")
    return value
