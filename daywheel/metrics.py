# daywheel/metrics.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List

from .model import GAP_COLOR, KIND_GAP, MIN_ACTIVITY_MINUTES, Timeline

FREE_LABEL = "Free time"
UNTITLED_LABEL = "New activity"


@dataclass(frozen=True)
class SummaryRow:
    label: str
    kind: str
    color: str
    minutes: int
    count: int


def summarize(timeline: Timeline) -> List[SummaryRow]:
    """Minutes per display label, largest first.

    All gaps share one "Free time" row; untitled activities share one
    "New activity" row. The first segment seen decides a row's color.
    """
    meta: Dict[str, tuple[str, str]] = {}
    minutes: Dict[str, int] = {}
    counts: Dict[str, int] = {}
    for seg in timeline:
        if seg.is_gap:
            label = FREE_LABEL
        else:
            label = seg.title.strip() or UNTITLED_LABEL
        if label not in meta:
            meta[label] = (seg.kind, GAP_COLOR if seg.is_gap else seg.color)
        minutes[label] = minutes.get(label, 0) + seg.duration
        counts[label] = counts.get(label, 0) + 1

    out = [
        SummaryRow(label=label, kind=kind, color=color, minutes=minutes[label], count=counts[label])
        for label, (kind, color) in meta.items()
    ]
    out.sort(key=lambda r: (-r.minutes, r.label))
    return out


def free_minutes(timeline: Timeline) -> int:
    return sum(s.duration for s in timeline if s.kind == KIND_GAP)


def spare_capacity(timeline: Timeline) -> int:
    """Minutes an insert could still borrow: all gap time plus activity time above the floor."""
    return sum(
        s.duration if s.is_gap else max(0, s.duration - MIN_ACTIVITY_MINUTES) for s in timeline
    )


__all__ = ["FREE_LABEL", "UNTITLED_LABEL", "SummaryRow", "free_minutes", "spare_capacity", "summarize"]
