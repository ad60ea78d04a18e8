from __future__ import annotations

import unittest

from cookplan_ui.planning.packing import AssignedTask, PackedLane
from cookplan_ui.planning.schema import Task, build_demo_plan
from cookplan_ui.planning.validation import (
    max_concurrency,
    require_valid_plan_suite,
    validate_plan_suite,
    validate_row_packing,
)


def _task(task_id: str, start: float, duration: float) -> Task:
    return Task(task_id=task_id, lane="L", title=task_id, start_min=start, duration_min=duration)


class PlanValidationTests(unittest.TestCase):
    def test_max_concurrency_uses_half_open_intervals(self) -> None:
        self.assertEqual(max_concurrency(()), 0)
        self.assertEqual(max_concurrency((_task("a", 0, 10), _task("b", 10, 10))), 1)
        self.assertEqual(max_concurrency((_task("a", 0, 10), _task("b", 9.5, 10))), 2)
        self.assertEqual(
            max_concurrency((_task("a", 0, 65), _task("b", 3, 12), _task("c", 16, 30))),
            2,
        )

    def test_demo_plan_passes_suite(self) -> None:
        report = validate_plan_suite(build_demo_plan())
        self.assertTrue(report.ok)
        self.assertEqual(report.errors, ())
        require_valid_plan_suite(build_demo_plan())

    def test_row_packing_flags_overlaps_and_wasted_rows(self) -> None:
        a, b = _task("a", 0, 10), _task("b", 5, 10)
        overlapping = PackedLane(
            lane="L",
            tasks=(AssignedTask(task=a, row=0), AssignedTask(task=b, row=0)),
            row_count=1,
        )
        report = validate_row_packing((overlapping,))
        self.assertFalse(report.ok)
        self.assertTrue(any("overlaps" in message for message in report.errors))
        self.assertTrue(any("peak concurrency is 2" in message for message in report.errors))

        c = _task("c", 20, 5)
        wasteful = PackedLane(
            lane="L",
            tasks=(AssignedTask(task=a, row=0), AssignedTask(task=c, row=2)),
            row_count=3,
        )
        report = validate_row_packing((wasteful,))
        self.assertFalse(report.ok)
        self.assertEqual(report.warnings, ("Lane `L` row 1 is empty",))


if __name__ == "__main__":
    unittest.main()
