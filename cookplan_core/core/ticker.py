from __future__ import annotations

import logging
import threading
from typing import Callable

LOGGER = logging.getLogger(__name__)


class TimerTicker:
    """Background thread that invokes `tick` once per `interval_s` until stopped."""

    def __init__(
        self,
        tick: Callable[[], object],
        interval_s: float = 1.0,
        on_error: Callable[[Exception], None] | None = None,
    ) -> None:
        if interval_s <= 0:
            raise ValueError("interval_s must be > 0")
        self._tick = tick
        self._interval_s = interval_s
        self._on_error = on_error
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None
        self._ticks = 0
        self._last_error: Exception | None = None

    @property
    def ticks(self) -> int:
        return self._ticks

    @property
    def last_error(self) -> Exception | None:
        return self._last_error

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self._thread and self._thread.is_alive():
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self._run, name="cookplan-timer-ticker", daemon=True)
        self._thread.start()

    def stop(self) -> None:
        self._stop.set()
        if self._thread:
            self._thread.join(timeout=max(1.0, self._interval_s * 2))
            self._thread = None

    def _run(self) -> None:
        # Event.wait doubles as the sleep so stop() takes effect without waiting a full interval.
        while not self._stop.wait(self._interval_s):
            try:
                self._tick()
                self._ticks += 1
            except Exception as exc:  # noqa: BLE001
                self._last_error = exc
                LOGGER.exception("TimerTicker tick failed: %s", exc)
                if self._on_error is not None:
                    self._on_error(exc)
                self._stop.set()
                break
