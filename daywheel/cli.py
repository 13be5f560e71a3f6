from __future__ import annotations

import argparse
import os
import sys
from typing import Callable, List, Optional

from .config import DEFAULT_STORE_PATH, EngineConfig, config_from_env, load_config
from .metrics import spare_capacity, summarize
from .model import OUTCOME_NOOP, OUTCOME_OK, EditResult, Timeline
from .session import DayPlanner
from .util.duration import parse_duration_to_minutes
from .util.timeparse import format_duration, format_hhmm, parse_minute_of_day
from .validate import validate_timeline


def _die(msg: str, rc: int = 2) -> int:
    print(f"[daywheel] ERROR: {msg}", file=sys.stderr)
    return rc


def _print_timeline(timeline: Timeline, *, show_gaps: bool = True) -> None:
    cursor = 0
    for i, seg in enumerate(timeline):
        start = cursor
        cursor += seg.duration
        if seg.is_gap and not show_gaps:
            continue
        title = seg.title if seg.is_activity else f"({seg.title})"
        print(
            f"{i:>3}  {format_hhmm(start)}-{format_hhmm(cursor)}  {format_duration(seg.duration):>7}  "
            f"{seg.color}  {title or '(untitled)'}  [{seg.id}]"
        )


def _print_summary(timeline: Timeline) -> None:
    for row in summarize(timeline):
        suffix = f" x{row.count}" if row.count > 1 else ""
        print(f"{format_duration(row.minutes):>7}  {row.label}{suffix}")
    print(f"{'':>7}  spare for inserts: {format_duration(spare_capacity(timeline))}")


def _report(op: str, res: EditResult) -> int:
    if res.outcome == OUTCOME_OK:
        if res.segment_id:
            print(f"[daywheel] {op}: ok ({res.segment_id})")
        else:
            print(f"[daywheel] {op}: ok")
        return 0
    if res.outcome == OUTCOME_NOOP:
        print(f"[daywheel] {op}: nothing to change")
        return 0
    print(f"[daywheel] WARN: {op}: {res.outcome}", file=sys.stderr)
    return 1


def _minute(s: str) -> int:
    try:
        return parse_minute_of_day(s)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e))


def _duration(s: str) -> int:
    v = parse_duration_to_minutes(s)
    if v is None:
        raise argparse.ArgumentTypeError(f"invalid duration: {s!r}")
    return v


def _build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="daywheel",
        description="Edit a 24-hour day partitioned into activities and free time.",
    )
    ap.add_argument(
        "--file",
        default=None,
        help=f"Snapshot JSON path (default: env DAYWHEEL_FILE, config store_path, or ./{DEFAULT_STORE_PATH})",
    )
    ap.add_argument("--config", default=None, help="Engine config JSON (default: env DAYWHEEL_CONFIG)")
    sub = ap.add_subparsers(dest="cmd", required=True)

    p = sub.add_parser("show", help="Print the timeline")
    p.add_argument("--no-gaps", action="store_true", help="Hide free time rows")
    sub.add_parser("summary", help="Print minutes per activity")
    sub.add_parser("validate", help="Check timeline invariants")

    p = sub.add_parser("insert-after", help="Insert an empty activity after a segment")
    p.add_argument("id")
    p.add_argument("--duration", type=_duration, default=None, help="Minutes or 1h30m (default: config, 15)")

    p = sub.add_parser("split", help="Carve an activity out of a gap around a time")
    p.add_argument("id")
    p.add_argument("at", type=_minute, help="HH:MM or minute of day")

    p = sub.add_parser("start", help="Change the start time of a segment")
    p.add_argument("id")
    p.add_argument("at", type=_minute)

    p = sub.add_parser("end", help="Change the end time of a segment")
    p.add_argument("id")
    p.add_argument("at", type=_minute)

    p = sub.add_parser("resize", help="Move the boundary after segment INDEX (like a drag)")
    p.add_argument("index", type=int)
    p.add_argument("at", type=_minute)

    p = sub.add_parser("delete", help="Turn a segment into free time")
    p.add_argument("id")

    sub.add_parser("clear", help="Replace the day with one free block")

    p = sub.add_parser("reorder", help="Move a segment to another segment's position")
    p.add_argument("source")
    p.add_argument("target")

    p = sub.add_parser("rename", help="Set an activity's title and/or color")
    p.add_argument("id")
    p.add_argument("--title", default=None)
    p.add_argument("--color", default=None)

    return ap


def _resolve_config(args: argparse.Namespace) -> EngineConfig:
    cfg = load_config(args.config) if args.config else config_from_env()
    return cfg


def _store_path(args: argparse.Namespace, cfg: EngineConfig) -> str:
    if args.file:
        return str(args.file)
    return cfg.store_path or os.getenv("DAYWHEEL_FILE") or DEFAULT_STORE_PATH


def main(argv: Optional[List[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    cfg = _resolve_config(args)
    path = _store_path(args, cfg)
    planner = DayPlanner.open(path, config=cfg)

    if args.cmd == "show":
        _print_timeline(planner.timeline, show_gaps=not args.no_gaps)
        return 0
    if args.cmd == "summary":
        _print_summary(planner.timeline)
        return 0
    if args.cmd == "validate":
        errs = validate_timeline(planner.timeline)
        if errs:
            print("[daywheel] FAIL", file=sys.stderr)
            for e in errs:
                print(f"  - {e}", file=sys.stderr)
            return 3
        print("[daywheel] OK")
        return 0

    if args.cmd == "resize":
        n = len(planner.timeline)
        if not (0 <= args.index < n):
            return _die(f"index {args.index} out of range (0..{n - 1})")
        planner.begin_drag(args.index)
        res = planner.drag_to(args.at)
        planner.end_drag()
        return _report("resize", res)

    edits: dict[str, Callable[[], EditResult]] = {
        "insert-after": lambda: planner.insert_after(args.id, args.duration),
        "split": lambda: planner.split_gap(args.id, args.at),
        "start": lambda: planner.change_start(args.id, args.at),
        "end": lambda: planner.change_end(args.id, args.at),
        "delete": lambda: planner.delete(args.id),
        "clear": planner.clear_all,
        "reorder": lambda: planner.reorder(args.source, args.target),
        "rename": lambda: planner.update(args.id, title=args.title, color=args.color),
    }
    fn = edits.get(args.cmd)
    if fn is None:
        return _die(f"unknown command: {args.cmd}")
    return _report(args.cmd, fn())


if __name__ == "__main__":
    raise SystemExit(main())
