from __future__ import annotations

import dataclasses
import re
from dataclasses import dataclass
from typing import Literal

TimerMode = Literal["down", "up"]
TimerPhase = Literal["idle", "running", "stopped", "expired"]
TimerDisplayState = Literal["idle", "counting-up", "counting-down", "expired", "stopped"]

TIMER_MODES: tuple[str, ...] = ("down", "up")
_NON_DIGITS = re.compile(r"[^0-9]")


@dataclass(frozen=True)
class Timer:
    """One bank timer.

    `phase` is the single source of truth; `running` and `cleared` are derived views of it:

    - idle: never run or explicitly cleared, remaining 0
    - running: counting in `mode` direction
    - stopped: paused by the user with progress kept
    - expired: countdown reached zero on its own and awaits a clear
    """

    timer_id: str
    name: str = ""
    minutes_text: str = "0"
    seconds_text: str = "00"
    mode: TimerMode = "down"
    phase: TimerPhase = "idle"
    remaining_seconds: int = 0

    def __post_init__(self) -> None:
        if not self.timer_id.strip():
            raise ValueError("Timer.timer_id must be non-empty")
        if self.mode not in TIMER_MODES:
            raise ValueError(f"Unsupported timer mode: {self.mode}")
        if self.remaining_seconds < 0:
            raise ValueError("Timer.remaining_seconds must be >= 0")
        if self.phase == "idle" and self.remaining_seconds != 0:
            raise ValueError("idle timers must have remaining_seconds == 0")
        if self.phase == "expired" and (self.mode != "down" or self.remaining_seconds != 0):
            raise ValueError("only a countdown at zero can be expired")
        if self.phase == "running" and self.mode == "down" and self.remaining_seconds == 0:
            raise ValueError("a running countdown must have time remaining")

    @property
    def running(self) -> bool:
        return self.phase == "running"

    @property
    def cleared(self) -> bool:
        return self.phase == "idle"

    @property
    def display_state(self) -> TimerDisplayState:
        if self.phase == "running":
            return "counting-up" if self.mode == "up" else "counting-down"
        if self.phase == "stopped":
            return "stopped"
        if self.phase == "expired" and not self.configured_seconds():
            # Nothing was ever set to count down from, so there is no alarm to show.
            return "idle"
        return self.phase

    def configured_seconds(self) -> int | None:
        minutes = _parse_field(self.minutes_text)
        seconds = _parse_field(self.seconds_text)
        if minutes is None or seconds is None:
            return None
        return minutes * 60 + min(59, seconds)


class TimerBank:
    """Ordered, id-keyed timers; every mutation goes through the operations below."""

    def __init__(self, *, initial_count: int = 3) -> None:
        if initial_count < 0:
            raise ValueError("initial_count must be >= 0")
        self._timers: dict[str, Timer] = {}
        self._next_index = 1
        for _ in range(initial_count):
            self.add()

    @property
    def timers(self) -> tuple[Timer, ...]:
        return tuple(self._timers.values())

    def get(self, timer_id: str) -> Timer | None:
        return self._timers.get(timer_id)

    def add(self, *, name: str = "", mode: TimerMode = "down") -> Timer:
        timer = Timer(timer_id=f"t{self._next_index}", name=name, mode=mode)
        self._next_index += 1
        self._timers[timer.timer_id] = timer
        return timer

    def remove(self, timer_id: str) -> bool:
        return self._timers.pop(timer_id, None) is not None

    def start(self, timer_id: str) -> Timer | None:
        timer = self._timers.get(timer_id)
        if timer is None:
            return None
        remaining = timer.remaining_seconds
        if remaining == 0 and timer.mode == "down":
            configured = timer.configured_seconds()
            if not configured:
                return timer
            remaining = configured
        return self._put(dataclasses.replace(timer, phase="running", remaining_seconds=remaining))

    def stop(self, timer_id: str) -> Timer | None:
        timer = self._timers.get(timer_id)
        if timer is None or timer.phase != "running":
            return timer
        return self._put(dataclasses.replace(timer, phase="stopped"))

    def clear(self, timer_id: str) -> Timer | None:
        timer = self._timers.get(timer_id)
        if timer is None:
            return None
        return self._put(dataclasses.replace(timer, phase="idle", remaining_seconds=0))

    def reset_all(self) -> None:
        for timer_id in list(self._timers):
            self.clear(timer_id)

    def tick(self) -> tuple[str, ...]:
        """Advance every running timer by one second; returns ids that expired on this tick."""
        expired: list[str] = []
        for timer in self.timers:
            if timer.phase != "running":
                continue
            if timer.mode == "up":
                self._put(dataclasses.replace(timer, remaining_seconds=timer.remaining_seconds + 1))
                continue
            remaining = max(0, timer.remaining_seconds - 1)
            if remaining == 0:
                self._put(dataclasses.replace(timer, phase="expired", remaining_seconds=0))
                expired.append(timer.timer_id)
            else:
                self._put(dataclasses.replace(timer, remaining_seconds=remaining))
        return tuple(expired)

    def rename(self, timer_id: str, name: str) -> Timer | None:
        timer = self._timers.get(timer_id)
        if timer is None:
            return None
        return self._put(dataclasses.replace(timer, name=name))

    def set_mode(self, timer_id: str, mode: str) -> Timer | None:
        timer = self._timers.get(timer_id)
        if timer is None or mode not in TIMER_MODES:
            return timer
        phase = timer.phase
        if mode == "down" and phase == "running" and timer.remaining_seconds == 0:
            phase = "expired" if timer.configured_seconds() else "idle"
        elif mode == "up" and phase == "expired":
            phase = "idle"
        return self._put(dataclasses.replace(timer, mode=mode, phase=phase))

    def set_duration_text(
        self,
        timer_id: str,
        *,
        minutes: str | None = None,
        seconds: str | None = None,
    ) -> Timer | None:
        timer = self._timers.get(timer_id)
        if timer is None:
            return None
        patch: dict[str, str] = {}
        if minutes is not None:
            patch["minutes_text"] = _NON_DIGITS.sub("", minutes)
        if seconds is not None:
            patch["seconds_text"] = _NON_DIGITS.sub("", seconds)
        return self._put(dataclasses.replace(timer, **patch))

    def _put(self, timer: Timer) -> Timer:
        self._timers[timer.timer_id] = timer
        return timer


def _parse_field(text: str) -> int | None:
    raw = text.strip() or "0"
    if _NON_DIGITS.search(raw):
        return None
    return int(raw)
