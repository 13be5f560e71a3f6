#!/usr/bin/env python3
from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any, List

from daywheel.normalize import normalize
from daywheel.snapshot import deserialize, dumps, validate_snapshot
from daywheel.validate import validate_timeline


def _die(msg: str, rc: int = 2) -> int:
    print(f"[daywheel-validate-snapshot] ERROR: {msg}", file=sys.stderr)
    return rc


def _load_json(p: Path) -> Any:
    return json.loads(p.read_text(encoding="utf-8", errors="replace"))


def main(argv: List[str] | None = None) -> int:
    ap = argparse.ArgumentParser(
        prog="daywheel-validate-snapshot",
        description=(
            "Validate daywheel snapshot JSON files.\n"
            "By default the file is checked structurally and must also be a valid timeline as stored.\n"
            "With --lenient only the structure is checked; totals and merges are healed on load."
        ),
    )
    ap.add_argument("--in", dest="inputs", action="append", required=True, help="Snapshot JSON path (repeatable)")
    ap.add_argument("--lenient", action="store_true", help="Accept drift that normalize would repair")
    ap.add_argument(
        "--write-normalized",
        default=None,
        help="With a single --in, write the normalized timeline JSON to this path",
    )
    ns = ap.parse_args(argv)

    if ns.write_normalized and len(ns.inputs) != 1:
        return _die("--write-normalized needs exactly one --in")

    all_errs: List[str] = []
    for raw_path in ns.inputs:
        p = Path(raw_path)
        if not p.exists():
            return _die(f"Missing JSON file: {p}")
        try:
            obj = _load_json(p)
        except (OSError, ValueError) as e:
            return _die(f"Failed to load JSON snapshot: {p} ({e})")

        errs = validate_snapshot(obj, label="snapshot")
        if not errs:
            timeline = deserialize(obj)
            if not ns.lenient:
                errs = validate_timeline(timeline, label="snapshot")
            if ns.write_normalized:
                outp = Path(ns.write_normalized)
                outp.parent.mkdir(parents=True, exist_ok=True)
                outp.write_text(dumps(normalize(timeline)), encoding="utf-8", newline="\n")
        all_errs.extend([f"json:{p}: {e}" for e in errs])

    if all_errs:
        print("[daywheel-validate-snapshot] FAIL", file=sys.stderr)
        for e in all_errs:
            print(f"  - {e}", file=sys.stderr)
        return 3

    print("[daywheel-validate-snapshot] OK")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
