from __future__ import annotations

import math
import threading
import time
from typing import Callable


class PlaybackClock:
    """Logical cooking time in minutes: committed base plus the live wall-clock interval.

    Reads are pull-based, so the value does not depend on how often a renderer samples it.
    """

    def __init__(self, *, now_fn: Callable[[], float] = time.monotonic, base_minutes: float = 0.0) -> None:
        self._now = now_fn
        self._lock = threading.Lock()
        self._base_minutes = _require_target(base_minutes)
        self._play_started_at: float | None = None

    @property
    def playing(self) -> bool:
        with self._lock:
            return self._play_started_at is not None

    @property
    def base_minutes(self) -> float:
        with self._lock:
            return self._base_minutes

    def start(self) -> None:
        with self._lock:
            if self._play_started_at is None:
                self._play_started_at = self._now()

    def pause(self) -> None:
        with self._lock:
            if self._play_started_at is None:
                return
            self._base_minutes += self._elapsed_minutes_locked()
            self._play_started_at = None

    def jump(self, target_minutes: float) -> None:
        target = _require_target(target_minutes)
        with self._lock:
            # The in-flight interval is abandoned, not committed.
            self._play_started_at = None
            self._base_minutes = target

    def reset(self) -> None:
        self.jump(0.0)

    def current_minutes(self) -> float:
        with self._lock:
            if self._play_started_at is None:
                return self._base_minutes
            return self._base_minutes + self._elapsed_minutes_locked()

    def elapsed_seconds(self) -> int:
        return math.floor(self.current_minutes() * 60)

    def _elapsed_minutes_locked(self) -> float:
        if self._play_started_at is None:
            return 0.0
        return max(0.0, self._now() - self._play_started_at) / 60.0


def parse_jump_input(text: str) -> float | None:
    """Parse a jump field; None for anything that is not a finite number."""
    raw = text.strip()
    if not raw:
        return None
    try:
        value = float(raw)
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return value


def _require_target(value: float) -> float:
    number = float(value)
    if not math.isfinite(number):
        raise ValueError("clock target must be a finite number")
    return max(0.0, number)
