from __future__ import annotations

import logging
import threading
import time
from pathlib import Path
from typing import Callable

from cookplan_ui.planning.assignments import AssignmentBoard, Person, build_demo_board
from cookplan_ui.planning.interaction import PinBoard, clear_pins, lane_task_ids, pin_task, unpin_task
from cookplan_ui.planning.layout import ChartLayout, LayoutConfig, compose_layout
from cookplan_ui.planning.packing import PackedLane, pack_plan
from cookplan_ui.planning.schema import PlanLoadError, Task, build_demo_plan, load_plan_file, plan_from_payload

from .clock import PlaybackClock, parse_jump_input
from .timer_bank import Timer, TimerBank

LOGGER = logging.getLogger(__name__)


class CookingSession:
    """Sequential event processor for one cooking plan.

    User actions and the timer tick thread both enter through these methods, and each runs under
    one lock, so no two mutations interleave.
    """

    def __init__(
        self,
        tasks: tuple[Task, ...] | None = None,
        *,
        layout_config: LayoutConfig | None = None,
        board: AssignmentBoard | None = None,
        timers: TimerBank | None = None,
        now_fn: Callable[[], float] = time.monotonic,
    ) -> None:
        self._lock = threading.Lock()
        self._tasks: tuple[Task, ...] = build_demo_plan() if tasks is None else tuple(tasks)
        self._layout_config = layout_config or LayoutConfig()
        self._board = board if board is not None else build_demo_board()
        self._timers = timers if timers is not None else TimerBank()
        self._clock = PlaybackClock(now_fn=now_fn)
        self._pins = PinBoard()
        self._error: str | None = None

    @property
    def tasks(self) -> tuple[Task, ...]:
        with self._lock:
            return self._tasks

    @property
    def error(self) -> str | None:
        with self._lock:
            return self._error

    @property
    def clock(self) -> PlaybackClock:
        return self._clock

    @property
    def layout_config(self) -> LayoutConfig:
        return self._layout_config

    # Plan loading

    def load_payload(self, payload: object) -> bool:
        try:
            tasks = plan_from_payload(payload)
        except PlanLoadError as exc:
            return self._reject_load(str(exc))
        return self._accept_load(tasks)

    def load_file(self, path: str | Path) -> bool:
        try:
            tasks = load_plan_file(path)
        except PlanLoadError as exc:
            return self._reject_load(str(exc))
        except OSError as exc:
            return self._reject_load(f"Failed to read {path}: {exc.strerror or exc}")
        return self._accept_load(tasks)

    def _accept_load(self, tasks: tuple[Task, ...]) -> bool:
        with self._lock:
            self._tasks = tasks
            self._error = None
            self._clock.reset()
            self._pins = clear_pins(self._pins)
        LOGGER.info("loaded cooking plan with %d tasks", len(tasks))
        return True

    def _reject_load(self, message: str) -> bool:
        with self._lock:
            self._error = message
        LOGGER.warning("rejected cooking plan: %s", message)
        return False

    # Layout

    def packed_lanes(self) -> tuple[PackedLane, ...]:
        return pack_plan(self.tasks)

    def layout(self) -> ChartLayout:
        return compose_layout(self.packed_lanes(), self._layout_config)

    def task(self, task_id: str) -> Task | None:
        return next((task for task in self.tasks if task.task_id == task_id), None)

    # Clock

    def start(self) -> None:
        self._clock.start()

    def pause(self) -> None:
        self._clock.pause()

    def reset(self) -> None:
        self._clock.reset()

    def jump(self, minutes: float) -> None:
        self._clock.jump(minutes)

    def jump_text(self, text: str) -> bool:
        target = parse_jump_input(text)
        if target is None:
            return False
        self._clock.jump(target)
        return True

    def current_minutes(self) -> float:
        return self._clock.current_minutes()

    def playhead_x(self) -> float:
        return self.current_minutes() * self._layout_config.px_per_minute

    # Timers

    @property
    def timers(self) -> tuple[Timer, ...]:
        with self._lock:
            return self._timers.timers

    def add_timer(self) -> Timer:
        with self._lock:
            return self._timers.add()

    def remove_timer(self, timer_id: str) -> bool:
        with self._lock:
            return self._timers.remove(timer_id)

    def start_timer(self, timer_id: str) -> Timer | None:
        with self._lock:
            return self._timers.start(timer_id)

    def stop_timer(self, timer_id: str) -> Timer | None:
        with self._lock:
            return self._timers.stop(timer_id)

    def clear_timer(self, timer_id: str) -> Timer | None:
        with self._lock:
            return self._timers.clear(timer_id)

    def reset_timers(self) -> None:
        with self._lock:
            self._timers.reset_all()

    def rename_timer(self, timer_id: str, name: str) -> Timer | None:
        with self._lock:
            return self._timers.rename(timer_id, name)

    def set_timer_mode(self, timer_id: str, mode: str) -> Timer | None:
        with self._lock:
            return self._timers.set_mode(timer_id, mode)

    def set_timer_duration(
        self, timer_id: str, *, minutes: str | None = None, seconds: str | None = None
    ) -> Timer | None:
        with self._lock:
            return self._timers.set_duration_text(timer_id, minutes=minutes, seconds=seconds)

    def tick_timers(self) -> tuple[str, ...]:
        with self._lock:
            expired = self._timers.tick()
        for timer_id in expired:
            LOGGER.info("timer %s expired", timer_id)
        return expired

    # People and assignments

    @property
    def people(self) -> tuple[Person, ...]:
        with self._lock:
            return self._board.people

    @property
    def board(self) -> AssignmentBoard:
        return self._board

    def add_person(self, name: str) -> Person | None:
        with self._lock:
            return self._board.add_person(name)

    def remove_person(self, person_id: str) -> bool:
        with self._lock:
            return self._board.remove_person(person_id)

    def toggle_task_assignment(self, task_id: str, person_id: str) -> bool:
        with self._lock:
            if not any(task.task_id == task_id for task in self._tasks):
                return False
            return self._board.toggle_task(task_id, person_id)

    def toggle_lane_assignment(self, lane: str, person_id: str) -> bool:
        with self._lock:
            return self._board.toggle_lane(lane_task_ids(self._tasks, lane), person_id)

    def lane_has_person(self, lane: str, person_id: str) -> bool:
        with self._lock:
            return self._board.lane_has_person(lane_task_ids(self._tasks, lane), person_id)

    def assignments(self) -> dict[str, tuple[str, ...]]:
        with self._lock:
            return self._board.snapshot()

    # Pins

    @property
    def pinned(self) -> tuple[Task, ...]:
        with self._lock:
            return self._pins.pinned

    def pin(self, task_id: str) -> bool:
        with self._lock:
            task = next((t for t in self._tasks if t.task_id == task_id), None)
            if task is None:
                return False
            self._pins = pin_task(self._pins, task)
            return True

    def unpin(self, task_id: str) -> None:
        with self._lock:
            self._pins = unpin_task(self._pins, task_id)
