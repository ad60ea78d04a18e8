from __future__ import annotations

import json
import math
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Sequence

REQUIRED_TASK_FIELDS: tuple[str, ...] = ("id", "parent", "title", "start_min", "duration_min")


class PlanLoadError(ValueError):
    """Raised when a cooking plan payload fails validation."""


@dataclass(frozen=True)
class Task:
    task_id: str
    lane: str
    title: str
    start_min: float
    duration_min: float
    description: str = ""

    def __post_init__(self) -> None:
        if self.start_min < 0:
            raise ValueError("Task.start_min must be >= 0")
        if self.duration_min <= 0:
            raise ValueError("Task.duration_min must be > 0")

    @property
    def end_min(self) -> float:
        return self.start_min + self.duration_min

    def overlaps(self, other: "Task") -> bool:
        return self.start_min < other.end_min and other.start_min < self.end_min

    def as_record(self) -> dict[str, object]:
        return {
            "id": self.task_id,
            "parent": self.lane,
            "title": self.title,
            "start_min": self.start_min,
            "duration_min": self.duration_min,
            "description": self.description,
        }


COOKING_PLAN_JSON_SCHEMA: dict[str, object] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "$id": "https://cookplan.dev/schemas/cooking_plan.schema.json",
    "title": "Cookplan Cooking Plan",
    "type": "array",
    "items": {
        "type": "object",
        "required": list(REQUIRED_TASK_FIELDS),
        "properties": {
            "id": {"type": "string"},
            "parent": {"type": "string"},
            "title": {"type": "string"},
            "start_min": {"type": "number", "minimum": 0},
            "duration_min": {"type": "number", "exclusiveMinimum": 0},
            "description": {"type": "string", "default": ""},
        },
    },
}


def cooking_plan_schema() -> dict[str, object]:
    return json.loads(json.dumps(COOKING_PLAN_JSON_SCHEMA))


def plan_from_payload(payload: object) -> tuple[Task, ...]:
    """Validate a decoded JSON payload and build the task list.

    The whole payload is rejected on the first bad item; the message names the item index so it can
    be shown to the user verbatim.
    """

    if not isinstance(payload, Sequence) or isinstance(payload, (str, bytes)):
        raise PlanLoadError("Root must be an array of step objects")

    tasks: list[Task] = []
    seen: set[str] = set()
    for index, raw in enumerate(payload):
        if not isinstance(raw, Mapping):
            raise PlanLoadError(f"Item {index} must be an object")
        missing = [key for key in REQUIRED_TASK_FIELDS if key not in raw]
        if missing:
            raise PlanLoadError(f"Item {index} missing: {', '.join(missing)}")
        start = _coerce_number(raw["start_min"])
        duration = _coerce_number(raw["duration_min"])
        if math.isnan(start) or math.isnan(duration):
            raise PlanLoadError(f"Item {index} has non-numeric start/duration")
        if start < 0 or duration <= 0 or math.isinf(start) or math.isinf(duration):
            raise PlanLoadError(f"Item {index} invalid start/duration values")
        task_id = str(raw["id"])
        if task_id in seen:
            raise PlanLoadError(f"Item {index} duplicates id `{task_id}`")
        seen.add(task_id)
        description = raw.get("description")
        tasks.append(
            Task(
                task_id=task_id,
                lane=str(raw["parent"]),
                title=str(raw["title"]),
                start_min=start,
                duration_min=duration,
                description="" if description is None else str(description),
            )
        )
    return tuple(tasks)


def load_plan_file(path: str | Path) -> tuple[Task, ...]:
    plan_path = Path(path)
    try:
        payload = json.loads(plan_path.read_text(encoding="utf-8"))
    except UnicodeDecodeError as exc:
        raise PlanLoadError(f"Invalid JSON in {plan_path.name}: not UTF-8") from exc
    except json.JSONDecodeError as exc:
        raise PlanLoadError(f"Invalid JSON in {plan_path.name}: {exc.msg}") from exc
    return plan_from_payload(payload)


def plan_to_payload(tasks: Sequence[Task]) -> list[dict[str, object]]:
    return [task.as_record() for task in tasks]


def build_demo_plan() -> tuple[Task, ...]:
    return (
        Task(
            task_id="preheat_oven",
            lane="Side – Roasted Veg",
            title="Preheat oven to 425F",
            start_min=0,
            duration_min=65,
            description="Move rack to middle. Put sheet pan in oven to preheat.",
        ),
        Task(
            task_id="cut_veg",
            lane="Side – Roasted Veg",
            title="Cut vegetables",
            start_min=3,
            duration_min=12,
            description="Cut into 1-inch chunks. Toss with oil/salt.",
        ),
        Task(
            task_id="roast_veg",
            lane="Side – Roasted Veg",
            title="Roast vegetables",
            start_min=16,
            duration_min=30,
            description="Spread on hot pan, stir at 15 min.",
        ),
        Task(
            task_id="sear_steaks",
            lane="Main – Ribeye",
            title="Sear steaks",
            start_min=25,
            duration_min=8,
            description="Pat dry. Heat pan until just smoking. 2–3 min/side. Rest 5 min.",
        ),
        Task(
            task_id="make_pan_sauce",
            lane="Main – Ribeye",
            title="Make pan sauce",
            start_min=33,
            duration_min=10,
            description="Deglaze with stock/wine, reduce, finish with butter.",
        ),
        Task(
            task_id="greens_salad",
            lane="Salad",
            title="Dress greens",
            start_min=40,
            duration_min=66,
            description="Toss just before serving.",
        ),
    )


def _coerce_number(raw: Any) -> float:
    if isinstance(raw, bool):
        return float(raw)
    if isinstance(raw, (int, float)):
        try:
            return float(raw)
        except OverflowError:
            return math.inf if raw > 0 else -math.inf
    if isinstance(raw, str):
        text = raw.strip()
        if not text:
            return math.nan
        try:
            return float(text)
        except ValueError:
            return math.nan
    return math.nan
