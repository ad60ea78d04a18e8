from __future__ import annotations

import math
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

from PIL import Image, ImageDraw, ImageFont

from cookplan_ui.style.palette import hex_to_rgb

from .assignments import AssignmentBoard
from .formatting import format_mmss, format_span
from .gantt_renderer import GanttRenderConfig, TimerView, render_plan_ascii
from .layout import ChartLayout
from .schema import Task

_BG = (255, 255, 255)
_LANE_BG = ((250, 250, 250), (255, 255, 255))
_GRID = (229, 231, 235)
_AXIS_TEXT = (107, 114, 128)
_INK = (17, 24, 39)
_BAR_TEXT = (255, 255, 255)


@dataclass(frozen=True)
class PlanExportBundle:
    ascii_chart: Path
    markdown_overview: Path
    png_chart: Path

    def as_dict(self) -> dict[str, str]:
        return {
            "ascii_chart": str(self.ascii_chart),
            "markdown_overview": str(self.markdown_overview),
            "png_chart": str(self.png_chart),
        }


def export_plan_bundle(
    layout: ChartLayout,
    *,
    out_dir: str | Path,
    prefix: str = "cookplan",
    current_minutes: float = 0.0,
    board: AssignmentBoard | None = None,
    timers: Sequence[TimerView] = (),
    pinned: Sequence[Task] = (),
    title: str = "Cooking Plan",
) -> PlanExportBundle:
    root = Path(out_dir)
    root.mkdir(parents=True, exist_ok=True)

    chart = render_plan_ascii(
        layout,
        current_minutes=current_minutes,
        config=GanttRenderConfig(),
        board=board,
        timers=timers,
        pinned=pinned,
        title=title,
    )
    overview = _build_markdown_overview(
        title=title,
        chart=chart,
        layout=layout,
        current_minutes=current_minutes,
        board=board,
    )

    path_chart = root / f"{prefix}_chart.txt"
    path_overview = root / f"{prefix}_overview.md"
    path_png = root / f"{prefix}_chart.png"

    path_chart.write_text(chart, encoding="utf-8")
    path_overview.write_text(overview, encoding="utf-8")
    render_layout_png(layout, out_path=path_png, current_minutes=current_minutes, board=board)

    return PlanExportBundle(ascii_chart=path_chart, markdown_overview=path_overview, png_chart=path_png)


def render_layout_png(
    layout: ChartLayout,
    *,
    out_path: Path,
    current_minutes: float = 0.0,
    board: AssignmentBoard | None = None,
) -> None:
    cfg = layout.config
    width = int(math.ceil(layout.width))
    height = int(math.ceil(layout.height))
    ox = cfg.label_width
    oy = cfg.top_axis_pad
    body_bottom = height

    font = ImageFont.load_default()
    image = Image.new("RGB", (max(1, width), max(1, height)), color=_BG)
    draw = ImageDraw.Draw(image)

    for index, lane in enumerate(layout.lanes):
        top = oy + lane.top
        draw.rectangle((0, top, width, top + lane.height), fill=_LANE_BG[index % 2])
        draw.text((8, top + 8), lane.lane, fill=_INK, font=font)
        if board is not None:
            ids = lane.task_ids()
            for pdx, person in enumerate(board.people):
                cx = 16 + pdx * 18
                cy = top + 30
                active = board.lane_has_person(ids, person.person_id)
                draw.ellipse(
                    (cx - 6, cy - 6, cx + 6, cy + 6),
                    fill=hex_to_rgb(person.color) if active else _GRID,
                    outline=_INK if active else None,
                )

    for tick in layout.ticks:
        x = ox + tick.x
        draw.line((x, oy, x, body_bottom), fill=_GRID, width=2 if tick.major else 1)
        draw.text((x - 4, oy - 52), str(tick.minute), fill=_AXIS_TEXT, font=font)

    for lane in layout.lanes:
        fill = hex_to_rgb(lane.color)
        for bar in lane.bars:
            x0 = ox + bar.x
            y0 = oy + bar.y
            x1 = x0 + bar.width
            y1 = y0 + bar.height
            draw.rounded_rectangle((x0, y0, x1, y1), radius=10, fill=fill)
            if board is not None:
                for inset, person in enumerate(board.assigned_people(bar.task.task_id)):
                    step = inset * 2
                    draw.rounded_rectangle(
                        (x0 + step, y0 + step, max(x0 + step + 2, x1 - step), max(y0 + step + 2, y1 - step)),
                        radius=max(1, 10 - step),
                        outline=hex_to_rgb(person.color),
                        width=2,
                    )
            draw.text((x0 + 8, y0 + 6), bar.task.title, fill=_BAR_TEXT, font=font)
            draw.text(
                (x0 + 8, y0 + 24),
                format_span(bar.task.start_min, bar.task.duration_min),
                fill=_BAR_TEXT,
                font=font,
            )

    px = ox + layout.playhead_x(current_minutes)
    draw.line((px, oy, px, body_bottom), fill=_INK, width=2)
    draw.rounded_rectangle((px - 22, oy - 68, px + 22, oy - 48), radius=6, fill=_INK)
    draw.text((px - 12, oy - 64), f"{max(0, math.floor(current_minutes + 0.5))}m", fill=_BAR_TEXT, font=font)

    image.save(out_path)


def _build_markdown_overview(
    *,
    title: str,
    chart: str,
    layout: ChartLayout,
    current_minutes: float,
    board: AssignmentBoard | None,
) -> str:
    lines = [
        f"# {title}",
        "",
        f"Elapsed: `{format_mmss(current_minutes * 60)}`",
        "",
        "## Chart",
        "",
        "```text",
        chart.rstrip(),
        "```",
        "",
        "## Steps",
        "",
        "| Lane | Row | Step | Time | Assigned |",
        "| --- | --- | --- | --- | --- |",
    ]
    for lane in layout.lanes:
        for bar in lane.bars:
            people = board.assigned_people(bar.task.task_id) if board is not None else ()
            lines.append(
                f"| {lane.lane} | {bar.row} | {bar.task.title} "
                f"| {format_span(bar.task.start_min, bar.task.duration_min)} "
                f"| {', '.join(p.name for p in people) or '-'} |"
            )
    return "\n".join(lines) + "\n"
