"""Timeline invariant checks (library-facing)."""

from __future__ import annotations

from typing import Any, List

from daywheel.model import KINDS, MIN_ACTIVITY_MINUTES, TOTAL_MINUTES, Segment, is_homogeneous


class TimelineValidationError(ValueError):
    """Raised when a timeline breaks one of its invariants."""


def _require(cond: bool, msg: str, errs: List[str]) -> None:
    if not cond:
        errs.append(msg)


def validate_timeline(timeline: Any, *, label: str = "timeline", check_floor: bool = True) -> List[str]:
    """Return every invariant violation found (empty list == valid).

    Checked: non-empty, unique ids, known kinds, positive integer durations,
    exact total, no homogeneous linear neighbours and (optionally) the
    activity floor. The last/first pair straddles the origin and is never
    reported as unmerged.
    """
    errs: List[str] = []
    if not isinstance(timeline, (tuple, list)):
        return [f"{label}: must be a tuple/list of Segment; got {type(timeline).__name__}"]
    if not timeline:
        return [f"{label}: must not be empty"]

    seen: set[str] = set()
    for i, seg in enumerate(timeline):
        if not isinstance(seg, Segment):
            errs.append(f"{label}[{i}]: must be Segment; got {type(seg).__name__}")
            continue
        _require(isinstance(seg.id, str) and bool(seg.id), f"{label}[{i}].id must be non-empty string", errs)
        if seg.id in seen:
            errs.append(f"{label}[{i}].id duplicated: {seg.id!r}")
        seen.add(seg.id)
        _require(seg.kind in KINDS, f"{label}[{i}].kind must be one of {KINDS}; got {seg.kind!r}", errs)
        _require(
            isinstance(seg.duration, int) and not isinstance(seg.duration, bool) and seg.duration > 0,
            f"{label}[{i}].duration must be positive int; got {seg.duration!r}",
            errs,
        )
    if errs:
        return errs

    total = sum(s.duration for s in timeline)
    _require(total == TOTAL_MINUTES, f"{label}: total {total}min != {TOTAL_MINUTES}min", errs)

    for i in range(len(timeline) - 1):
        a, b = timeline[i], timeline[i + 1]
        if is_homogeneous(a, b):
            errs.append(f"{label}[{i}] and [{i + 1}] are homogeneous and should have been merged ({a.id!r}, {b.id!r})")

    if check_floor:
        for i, seg in enumerate(timeline):
            if seg.is_activity and seg.duration < MIN_ACTIVITY_MINUTES:
                errs.append(f"{label}[{i}] activity {seg.id!r} is {seg.duration}min (< {MIN_ACTIVITY_MINUTES}min)")

    return errs


def assert_valid_timeline(timeline: Any, **kwargs: Any) -> None:
    errs = validate_timeline(timeline, **kwargs)
    if errs:
        raise TimelineValidationError(errs[0])


__all__ = [
    "TimelineValidationError",
    "assert_valid_timeline",
    "validate_timeline",
]
