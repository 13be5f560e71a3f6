"""Snapshot (persistence boundary) encode/decode.

Format: a JSON array, chronological from minute 0, of
  {"id": str, "type": "activity"|"gap", "title": str, "color": str, "duration": int}
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Union

from .model import KINDS, SEED_TIMELINE, Segment, Timeline
from .normalize import normalize
from .util.console import eprint, obs_warn

JsonPath = Union[str, Path]


class SnapshotError(ValueError):
    """Raised when a snapshot value cannot be decoded into a timeline."""


def serialize(timeline: Timeline) -> List[Dict[str, Any]]:
    return [
        {
            "id": seg.id,
            "type": seg.kind,
            "title": seg.title,
            "color": seg.color,
            "duration": int(seg.duration),
        }
        for seg in timeline
    ]


def _as_minutes(v: Any) -> int | None:
    if isinstance(v, bool):
        return None
    if isinstance(v, int):
        return v
    if isinstance(v, float) and v.is_integer():
        return int(v)
    return None


def validate_snapshot(obj: Any, *, label: str = "snapshot") -> List[str]:
    """Structural checks only; totals and merges are healed by normalize on load."""
    if not isinstance(obj, list):
        return [f"{label}: must be a JSON array; got {type(obj).__name__}"]
    if not obj:
        return [f"{label}: must not be empty"]

    errs: List[str] = []
    seen: set[str] = set()
    for i, raw in enumerate(obj):
        if not isinstance(raw, dict):
            errs.append(f"{label}[{i}] must be an object")
            continue
        sid = raw.get("id")
        if not isinstance(sid, str) or not sid.strip():
            errs.append(f"{label}[{i}].id must be non-empty string")
        elif sid in seen:
            errs.append(f"{label}[{i}].id duplicated: {sid!r}")
        else:
            seen.add(sid)
        if raw.get("type") not in KINDS:
            errs.append(f"{label}[{i}].type must be one of {KINDS}; got {raw.get('type')!r}")
        if not isinstance(raw.get("title", ""), str):
            errs.append(f"{label}[{i}].title must be a string")
        if not isinstance(raw.get("color", ""), str):
            errs.append(f"{label}[{i}].color must be a string")
        if _as_minutes(raw.get("duration")) is None:
            errs.append(f"{label}[{i}].duration must be an integer number of minutes")
    return errs


def deserialize(obj: Any) -> Timeline:
    """Decode a snapshot value as-is (no normalization)."""
    errs = validate_snapshot(obj)
    if errs:
        raise SnapshotError(errs[0])
    return tuple(
        Segment(
            id=raw["id"],
            kind=raw["type"],
            title=str(raw.get("title") or ""),
            color=str(raw.get("color") or ""),
            duration=int(_as_minutes(raw["duration"]) or 0),
        )
        for raw in obj
    )


def dumps(timeline: Timeline) -> str:
    return json.dumps(serialize(timeline), ensure_ascii=False, indent=2) + "\n"


def load_snapshot(path: JsonPath, *, fallback: Timeline = SEED_TIMELINE) -> Timeline:
    """Read and normalize a snapshot file; anything unusable yields `fallback`."""
    p = Path(path)
    if not p.exists():
        obs_warn("snapshot", f"no snapshot at {p}; using seed timeline")
        return fallback
    try:
        obj = json.loads(p.read_text(encoding="utf-8", errors="replace"))
        timeline = deserialize(obj)
    except (OSError, ValueError) as e:
        obs_warn("snapshot", f"failed to load {p} ({e}); using seed timeline")
        return fallback
    return normalize(timeline)


def save_snapshot(path: JsonPath, timeline: Timeline) -> bool:
    """Best-effort write; failures are reported on stderr and never raised."""
    p = Path(path)
    try:
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(dumps(timeline), encoding="utf-8")
    except OSError as e:
        eprint(f"[daywheel.snapshot] WARN: failed to save {p}: {e}")
        return False
    return True


__all__ = [
    "SnapshotError",
    "deserialize",
    "dumps",
    "load_snapshot",
    "save_snapshot",
    "serialize",
    "validate_snapshot",
]
