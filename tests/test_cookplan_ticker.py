from __future__ import annotations

import threading
import time
import unittest

from cookplan_core.core.ticker import TimerTicker
from cookplan_core.core.timer_bank import TimerBank


class TimerTickerTests(unittest.TestCase):
    def test_rejects_invalid_interval(self) -> None:
        with self.assertRaises(ValueError):
            TimerTicker(lambda: None, interval_s=0)

    def test_ticks_until_stopped(self) -> None:
        bank = TimerBank(initial_count=1)
        bank.set_mode("t1", "up")
        bank.start("t1")
        ticker = TimerTicker(bank.tick, interval_s=0.01)
        ticker.start()
        deadline = time.monotonic() + 5.0
        while ticker.ticks < 3 and time.monotonic() < deadline:
            time.sleep(0.005)
        ticker.stop()
        self.assertFalse(ticker.running)
        self.assertGreaterEqual(ticker.ticks, 3)
        self.assertEqual(bank.get("t1").remaining_seconds, ticker.ticks)

        frozen = ticker.ticks
        time.sleep(0.05)
        self.assertEqual(ticker.ticks, frozen)

    def test_failing_tick_stops_thread_and_reports(self) -> None:
        failed = threading.Event()

        def boom() -> None:
            raise RuntimeError("tick exploded")

        ticker = TimerTicker(boom, interval_s=0.01, on_error=lambda exc: failed.set())
        with self.assertLogs("cookplan_core.core.ticker", level="ERROR"):
            ticker.start()
            self.assertTrue(failed.wait(timeout=5.0))
        ticker.stop()
        self.assertIsInstance(ticker.last_error, RuntimeError)
        self.assertEqual(ticker.ticks, 0)


if __name__ == "__main__":
    unittest.main()
