# daywheel/normalize.py
from __future__ import annotations

from typing import Iterable, List, Optional

from .model import TOTAL_MINUTES, Segment, Timeline, gap, is_homogeneous
from .providers import IdGenerator, UuidIds
from .util.console import obs_warn

_DRIFT_TOLERANCE = 0.1


def drop_transient(segments: Iterable[Segment]) -> List[Segment]:
    return [s for s in segments if s.duration > 0]


def merge_homogeneous(segments: Iterable[Segment]) -> List[Segment]:
    """Collapse runs of homogeneous neighbours; the first of a run keeps its identity.

    Only linear neighbours are merged. The last/first pair straddles the
    origin and is left alone so minute 0 stays where it is.
    """
    out: List[Segment] = []
    for seg in segments:
        if out and is_homogeneous(out[-1], seg):
            out[-1] = out[-1].with_duration(out[-1].duration + seg.duration)
        else:
            out.append(seg)
    return out


def repair_total(segments: List[Segment]) -> List[Segment]:
    """Force sum(duration) == TOTAL_MINUTES by adjusting (or dropping) the last segment."""
    out = list(segments)
    while out:
        total = sum(s.duration for s in out)
        diff = TOTAL_MINUTES - total
        if abs(diff) <= _DRIFT_TOLERANCE:
            break
        obs_warn("normalize", f"timeline total {total}min != {TOTAL_MINUTES}min; repairing last segment {out[-1].id!r}")
        new_duration = out[-1].duration + diff
        if new_duration > 0:
            out[-1] = out[-1].with_duration(new_duration)
        else:
            out.pop()
    return out


def normalize(segments: Iterable[Segment], ids: Optional[IdGenerator] = None) -> Timeline:
    """Clean a raw sequence into a valid timeline.

    Steps: drop non-positive durations, merge homogeneous runs, repair the
    total. Drift is healed silently (reported only through the obs log).
    An empty result becomes a single full-day gap.
    """
    out = repair_total(merge_homogeneous(drop_transient(segments)))
    if not out:
        ids = ids or UuidIds()
        return (gap(ids.new_id(), TOTAL_MINUTES),)
    return tuple(out)


__all__ = ["drop_transient", "merge_homogeneous", "normalize", "repair_total"]
