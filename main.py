from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
import sys
import time

from cookplan_core.core import CookingSession, TimerBank, TimerTicker
from cookplan_ui.planning import (
    GanttRenderConfig,
    LayoutConfig,
    export_plan_bundle,
    load_layout_config,
    render_plan_ascii,
    validate_plan_suite,
)
from cookplan_ui.planning.formatting import format_mmss

LOGGER = logging.getLogger("cookplan")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="cookplan")
    parser.add_argument("--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    sub = parser.add_subparsers(dest="command", required=True)

    render = sub.add_parser("render", help="Print the cooking plan as an ASCII chart.")
    _add_plan_args(render)
    render.add_argument("--minutes-per-column", type=float, default=1.0)

    export = sub.add_parser("export", help="Write ASCII/Markdown/PNG artifacts for a cooking plan.")
    _add_plan_args(export)
    export.add_argument("--out", type=Path, required=True)
    export.add_argument("--prefix", default="cookplan")

    validate = sub.add_parser("validate", help="Check row packing and render determinism.")
    validate.add_argument("plan", type=Path, nargs="?", default=None)
    validate.add_argument("--config", type=Path, default=None)

    timers = sub.add_parser("timers", help="Run one bank timer headlessly.")
    timers.add_argument("--countdown", default=None, help="MM:SS countdown; omit for count-up.")
    timers.add_argument("--ticks", type=int, default=10)
    timers.add_argument("--realtime", action="store_true", help="Tick once per wall-clock second.")
    return parser


def _add_plan_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("plan", type=Path, nargs="?", default=None, help="Plan JSON; demo plan when omitted.")
    parser.add_argument("--config", type=Path, default=None, help="TOML file with a [layout] table.")
    parser.add_argument("--at", default="0", help="Jump the clock to this minute before rendering.")
    parser.add_argument("--pin", action="append", default=[], help="Task id to pin (repeatable).")
    parser.add_argument("--assign", action="append", default=[], help="TASK_ID:PERSON_ID (repeatable).")
    parser.add_argument("--assign-lane", action="append", default=[], help="LANE:PERSON_ID (repeatable).")


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level), format="%(levelname)s %(name)s: %(message)s")

    if args.command == "render":
        session = _build_session(args)
        if session is None:
            return 1
        print(
            render_plan_ascii(
                session.layout(),
                current_minutes=session.current_minutes(),
                config=GanttRenderConfig(minutes_per_column=args.minutes_per_column),
                board=session.board,
                timers=session.timers,
                pinned=session.pinned,
            ),
            end="",
        )
        return 0

    if args.command == "export":
        session = _build_session(args)
        if session is None:
            return 1
        bundle = export_plan_bundle(
            session.layout(),
            out_dir=args.out,
            prefix=args.prefix,
            current_minutes=session.current_minutes(),
            board=session.board,
            timers=session.timers,
            pinned=session.pinned,
        )
        print(json.dumps(bundle.as_dict(), indent=2, sort_keys=True))
        return 0

    if args.command == "validate":
        session = CookingSession(layout_config=_layout_config(args.config))
        if args.plan is not None and not session.load_file(args.plan):
            print(f"error: {session.error}", file=sys.stderr)
            return 1
        report = validate_plan_suite(session.tasks, session.layout_config)
        for warning in report.warnings:
            print(f"warning: {warning}")
        for error in report.errors:
            print(f"error: {error}")
        print("ok" if report.ok else "failed")
        return 0 if report.ok else 1

    if args.command == "timers":
        return _run_timer(args.countdown, args.ticks, args.realtime)

    raise RuntimeError(f"unsupported command: {args.command}")


def _build_session(args: argparse.Namespace) -> CookingSession | None:
    session = CookingSession(layout_config=_layout_config(args.config))
    if args.plan is not None and not session.load_file(args.plan):
        print(f"error: {session.error}", file=sys.stderr)
        return None
    if not session.jump_text(args.at):
        LOGGER.warning("ignoring non-numeric --at value: %s", args.at)
    for pair in args.assign:
        task_id, _, person_id = pair.rpartition(":")
        if not session.toggle_task_assignment(task_id, person_id):
            LOGGER.warning("assignment had no effect: %s", pair)
    for pair in args.assign_lane:
        lane, _, person_id = pair.rpartition(":")
        if not session.toggle_lane_assignment(lane, person_id):
            LOGGER.warning("lane assignment had no effect: %s", pair)
    for task_id in args.pin:
        if not session.pin(task_id):
            LOGGER.warning("unknown task id for --pin: %s", task_id)
    return session


def _layout_config(path: Path | None) -> LayoutConfig:
    if path is None:
        return LayoutConfig()
    return load_layout_config(path)


def _run_timer(countdown: str | None, ticks: int, realtime: bool) -> int:
    if ticks <= 0:
        raise ValueError("ticks must be > 0")
    bank = TimerBank(initial_count=0)
    timer = bank.add(name="cli", mode="up" if countdown is None else "down")
    if countdown is not None:
        minutes, _, seconds = countdown.partition(":")
        bank.set_duration_text(timer.timer_id, minutes=minutes, seconds=seconds or "0")
    started = bank.start(timer.timer_id)
    if started is None or not started.running:
        print("error: timer did not start (zero or non-numeric duration)", file=sys.stderr)
        return 1

    def report() -> None:
        current = bank.get(timer.timer_id)
        if current is None:
            return
        print(f"{format_mmss(current.remaining_seconds)} {current.display_state}")

    if not realtime:
        for _ in range(ticks):
            bank.tick()
            report()
        return 0

    ticker = TimerTicker(lambda: (bank.tick(), report()))
    ticker.start()
    try:
        while ticker.running and ticker.ticks < ticks:
            time.sleep(0.05)
    finally:
        ticker.stop()
    return 0 if ticker.last_error is None else 1


if __name__ == "__main__":
    raise SystemExit(main())
