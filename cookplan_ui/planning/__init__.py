"""Cooking-plan schema, row packing, layout and export contracts."""

from .assignments import AssignmentBoard, Person, build_demo_board
from .exporters import PlanExportBundle, export_plan_bundle, render_layout_png
from .formatting import format_duration, format_mmss, format_span
from .gantt_renderer import GanttRenderConfig, render_plan_ascii
from .interaction import PinBoard, clear_pins, lane_task_ids, pin_task, unpin_task
from .layout import (
    AxisTick,
    ChartLayout,
    LaneGeometry,
    LayoutConfig,
    TaskBar,
    compose_layout,
    layout_plan,
    load_layout_config,
)
from .packing import AssignedTask, LaneTasks, PackedLane, build_schedule_index, pack_lane, pack_plan
from .schema import (
    COOKING_PLAN_JSON_SCHEMA,
    PlanLoadError,
    Task,
    build_demo_plan,
    cooking_plan_schema,
    load_plan_file,
    plan_from_payload,
    plan_to_payload,
)
from .validation import (
    ValidationReport,
    max_concurrency,
    require_valid_plan_suite,
    validate_plan_suite,
    validate_render_consistency,
    validate_row_packing,
)

__all__ = [
    "AssignedTask",
    "AssignmentBoard",
    "AxisTick",
    "COOKING_PLAN_JSON_SCHEMA",
    "ChartLayout",
    "GanttRenderConfig",
    "LaneGeometry",
    "LaneTasks",
    "LayoutConfig",
    "PackedLane",
    "Person",
    "PinBoard",
    "PlanExportBundle",
    "PlanLoadError",
    "Task",
    "TaskBar",
    "ValidationReport",
    "build_demo_board",
    "build_demo_plan",
    "build_schedule_index",
    "clear_pins",
    "compose_layout",
    "cooking_plan_schema",
    "export_plan_bundle",
    "format_duration",
    "format_mmss",
    "format_span",
    "lane_task_ids",
    "layout_plan",
    "load_layout_config",
    "load_plan_file",
    "max_concurrency",
    "pack_lane",
    "pack_plan",
    "pin_task",
    "plan_from_payload",
    "plan_to_payload",
    "render_layout_png",
    "render_plan_ascii",
    "require_valid_plan_suite",
    "unpin_task",
    "validate_plan_suite",
    "validate_render_consistency",
    "validate_row_packing",
]
