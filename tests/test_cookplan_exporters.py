from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

from PIL import Image

from cookplan_ui.planning.assignments import build_demo_board
from cookplan_ui.planning.exporters import export_plan_bundle
from cookplan_ui.planning.layout import layout_plan
from cookplan_ui.planning.schema import build_demo_plan


class PlanExportersTests(unittest.TestCase):
    def test_export_bundle_writes_ascii_markdown_png(self) -> None:
        board = build_demo_board()
        board.toggle_lane(("sear_steaks", "make_pan_sauce"), "p2")
        layout = layout_plan(build_demo_plan())
        with tempfile.TemporaryDirectory() as tmp:
            bundle = export_plan_bundle(
                layout,
                out_dir=Path(tmp) / "out",
                prefix="unit",
                current_minutes=20,
                board=board,
            )
            self.assertTrue(bundle.ascii_chart.exists())
            self.assertTrue(bundle.markdown_overview.exists())
            self.assertTrue(bundle.png_chart.exists())
            self.assertGreater(bundle.png_chart.stat().st_size, 0)
            self.assertEqual(bundle.png_chart.name, "unit_chart.png")

            with Image.open(bundle.png_chart) as image:
                self.assertEqual(image.size, (1452, 350))

            overview = bundle.markdown_overview.read_text(encoding="utf-8")
            self.assertIn("# Cooking Plan", overview)
            self.assertIn("Elapsed: `20:00`", overview)
            self.assertIn("| Main – Ribeye | 0 | Sear steaks | 8 min (25-33m) | Tiff |", overview)
            self.assertIn("| Side – Roasted Veg | 1 | Cut vegetables | 12 min (3-15m) | - |", overview)

            self.assertEqual(set(bundle.as_dict()), {"ascii_chart", "markdown_overview", "png_chart"})

    def test_export_empty_plan(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            bundle = export_plan_bundle(layout_plan(()), out_dir=tmp)
            with Image.open(bundle.png_chart) as image:
                self.assertEqual(image.size, (800, 80))


if __name__ == "__main__":
    unittest.main()
