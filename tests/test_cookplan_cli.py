from __future__ import annotations

import contextlib
import io
import json
import tempfile
import unittest
from pathlib import Path

from cookplan_ui.planning.schema import build_demo_plan, plan_to_payload
from main import main


def _run(argv: list[str]) -> tuple[int, str, str]:
    out = io.StringIO()
    err = io.StringIO()
    with contextlib.redirect_stdout(out), contextlib.redirect_stderr(err):
        code = main(argv)
    return code, out.getvalue(), err.getvalue()


class CookplanCliTests(unittest.TestCase):
    def test_render_demo_plan_at_minute(self) -> None:
        code, out, _ = _run(
            ["render", "--at", "12", "--pin", "cut_veg", "--assign", "cut_veg:p1", "--assign-lane", "Salad:p2"]
        )
        self.assertEqual(code, 0)
        self.assertIn("now=12m", out)
        self.assertIn("Salad [T]", out)
        self.assertIn("  cut_veg: Tim", out)
        self.assertIn("  greens_salad: Tiff", out)
        self.assertIn("Cut vegetables | Side – Roasted Veg", out)

    def test_render_reports_invalid_plan(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "plan.json"
            path.write_text(json.dumps({"not": "a list"}), encoding="utf-8")
            code, _, err = _run(["--log-level", "ERROR", "render", str(path)])
        self.assertEqual(code, 1)
        self.assertIn("Root must be an array of step objects", err)

    def test_export_writes_bundle(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            plan = Path(tmp) / "plan.json"
            plan.write_text(json.dumps(plan_to_payload(build_demo_plan())), encoding="utf-8")
            code, out, _ = _run(["export", str(plan), "--out", str(Path(tmp) / "exports"), "--prefix", "cli"])
            self.assertEqual(code, 0)
            manifest = json.loads(out)
            self.assertTrue(Path(manifest["png_chart"]).exists())
            self.assertTrue(manifest["ascii_chart"].endswith("cli_chart.txt"))

    def test_validate_demo_plan(self) -> None:
        code, out, _ = _run(["validate"])
        self.assertEqual(code, 0)
        self.assertTrue(out.strip().endswith("ok"))

    def test_headless_countdown_expires(self) -> None:
        code, out, _ = _run(["timers", "--countdown", "0:03", "--ticks", "4"])
        self.assertEqual(code, 0)
        self.assertEqual(
            out.splitlines(),
            ["0:02 counting-down", "0:01 counting-down", "0:00 expired", "0:00 expired"],
        )

    def test_headless_count_up(self) -> None:
        code, out, _ = _run(["timers", "--ticks", "2"])
        self.assertEqual(code, 0)
        self.assertEqual(out.splitlines(), ["0:01 counting-up", "0:02 counting-up"])

    def test_zero_countdown_is_rejected(self) -> None:
        code, _, err = _run(["timers", "--countdown", "0:00"])
        self.assertEqual(code, 1)
        self.assertIn("did not start", err)


if __name__ == "__main__":
    unittest.main()
