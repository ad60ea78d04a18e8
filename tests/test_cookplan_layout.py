from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

from cookplan_ui.planning.layout import LayoutConfig, compose_layout, layout_plan, load_layout_config
from cookplan_ui.planning.packing import pack_plan
from cookplan_ui.planning.schema import Task, build_demo_plan
from cookplan_ui.style.palette import PALETTE


class LayoutCompositorTests(unittest.TestCase):
    def test_demo_lanes_stack_top_down(self) -> None:
        layout = compose_layout(pack_plan(build_demo_plan()))
        tops = [(lane.lane, lane.top, lane.height) for lane in layout.lanes]
        self.assertEqual(
            tops,
            [
                ("Main – Ribeye", 0.0, 72.0),
                ("Salad", 72.0, 72.0),
                ("Side – Roasted Veg", 144.0, 126.0),
            ],
        )
        self.assertEqual(layout.height, 350.0)
        self.assertEqual(layout.max_end_min, 106)
        self.assertEqual(layout.width, 106 * 12 + 180)

    def test_bar_geometry_uses_row_offsets_and_time_scale(self) -> None:
        layout = layout_plan(build_demo_plan())
        bar = layout.bar_lookup()["cut_veg"]
        self.assertEqual(bar.row, 1)
        self.assertEqual(bar.x, 36.0)
        self.assertEqual(bar.width, 144.0)
        self.assertEqual(bar.y, 144.0 + 12.0 + 54.0)
        self.assertEqual(bar.height, 48.0)

    def test_lane_colors_follow_palette_order(self) -> None:
        layout = layout_plan(build_demo_plan())
        self.assertEqual([lane.color for lane in layout.lanes], list(PALETTE[:3]))

    def test_minimum_bar_and_chart_width(self) -> None:
        tasks = (Task(task_id="dash", lane="L", title="Dash", start_min=1, duration_min=0.1),)
        layout = layout_plan(tasks)
        self.assertEqual(layout.lanes[0].bars[0].width, 2.0)
        self.assertEqual(layout.width, 800.0)

    def test_axis_ticks_every_five_minutes_with_major_tens(self) -> None:
        layout = layout_plan(build_demo_plan())
        self.assertEqual(layout.ticks[0].minute, 0)
        self.assertEqual(layout.ticks[-1].minute, 105)
        self.assertEqual(len(layout.ticks), 22)
        self.assertTrue(layout.ticks[2].major)
        self.assertFalse(layout.ticks[1].major)

    def test_empty_plan_has_axis_only(self) -> None:
        layout = layout_plan(())
        self.assertEqual(layout.lanes, ())
        self.assertEqual(layout.height, 80.0)
        self.assertEqual([tick.minute for tick in layout.ticks], [0])

    def test_playhead_position_scales_minutes(self) -> None:
        layout = layout_plan(build_demo_plan())
        self.assertEqual(layout.playhead_x(2.5), 30.0)
        self.assertEqual(layout.playhead_x(-1), 0.0)


class LayoutConfigTests(unittest.TestCase):
    def test_rejects_invalid_constants(self) -> None:
        with self.assertRaises(ValueError):
            LayoutConfig(row_height=0)
        with self.assertRaises(ValueError):
            LayoutConfig(tick_interval_min=0)

    def test_load_layout_config_reads_toml_table(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "layout.toml"
            path.write_text(
                '[layout]\nrow_height = 30\npx_per_minute = 6.5\npalette = ["#112233", "#445566"]\n',
                encoding="utf-8",
            )
            config = load_layout_config(path)
        self.assertEqual(config.row_height, 30.0)
        self.assertEqual(config.px_per_minute, 6.5)
        self.assertEqual(config.palette, ("#112233", "#445566"))
        self.assertEqual(config.row_gap, 6.0)

    def test_load_layout_config_rejects_unknown_keys_and_bad_values(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "layout.toml"
            path.write_text("[layout]\nrow_hieght = 30\n", encoding="utf-8")
            with self.assertRaisesRegex(ValueError, "Unknown layout setting"):
                load_layout_config(path)
            path.write_text('[layout]\nrow_height = "tall"\n', encoding="utf-8")
            with self.assertRaisesRegex(ValueError, "must be a number"):
                load_layout_config(path)
            path.write_text('[layout]\npalette = ["red"]\n', encoding="utf-8")
            with self.assertRaisesRegex(ValueError, "hex color"):
                load_layout_config(path)

    def test_missing_config_file(self) -> None:
        with self.assertRaises(FileNotFoundError):
            load_layout_config("/nonexistent/cookplan/layout.toml")


if __name__ == "__main__":
    unittest.main()
