# daywheel/model.py
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional, Tuple

TOTAL_MINUTES = 24 * 60
MIN_ACTIVITY_MINUTES = 15
SNAP_MINUTES = 15

INSERT_DURATION_MIN = 15
SPLIT_WHOLE_MAX_MIN = 30  # gaps up to this size become an activity in one piece
SPLIT_ACTIVITY_MIN = 60

KIND_ACTIVITY = "activity"
KIND_GAP = "gap"
KINDS = (KIND_ACTIVITY, KIND_GAP)

GAP_TITLE = "Free"
GAP_COLOR = "#f3f4f6"

# Pastel palette; the last entry is the gap gray and is never picked for new activities.
COLORS: Tuple[str, ...] = (
    "#fee2e2",
    "#ffedd5",
    "#fef3c7",
    "#dcfce7",
    "#d1fae5",
    "#ccfbf1",
    "#e0f2fe",
    "#e0e7ff",
    "#fae8ff",
    "#fce7f3",
    "#ffe4e6",
    GAP_COLOR,
)
ACTIVITY_COLORS: Tuple[str, ...] = COLORS[:-1]


@dataclass(frozen=True)
class Segment:
    id: str
    kind: str  # "activity" | "gap"
    title: str
    color: str
    duration: int  # minutes

    @property
    def is_gap(self) -> bool:
        return self.kind == KIND_GAP

    @property
    def is_activity(self) -> bool:
        return self.kind == KIND_ACTIVITY

    @property
    def floor(self) -> int:
        """Smallest duration this segment may be squeezed to by a boundary edit."""
        return 0 if self.is_gap else MIN_ACTIVITY_MINUTES

    def with_duration(self, duration: int) -> "Segment":
        return replace(self, duration=int(duration))

    def as_gap(self) -> "Segment":
        return replace(self, kind=KIND_GAP, title=GAP_TITLE, color=GAP_COLOR)


# Timelines are plain tuples: ordered from the origin (minute 0), circular, immutable.
Timeline = Tuple[Segment, ...]


def gap(id: str, duration: int) -> Segment:
    return Segment(id=id, kind=KIND_GAP, title=GAP_TITLE, color=GAP_COLOR, duration=int(duration))


def activity(id: str, title: str, color: str, duration: int) -> Segment:
    return Segment(id=id, kind=KIND_ACTIVITY, title=title, color=color, duration=int(duration))


def is_homogeneous(a: Segment, b: Segment) -> bool:
    """Two gaps, or two activities with the same title and color."""
    if a.is_gap and b.is_gap:
        return True
    return a.is_activity and b.is_activity and a.title == b.title and a.color == b.color


SEED_TIMELINE: Timeline = (
    activity("1", "Sleep", "#d1fae5", 420),
    gap("2", 30),
    activity("3", "Morning routine", "#e0f2fe", 60),
    activity("4", "Work", "#e0e7ff", 240),
    activity("5", "Lunch", "#fef3c7", 60),
    activity("6", "Work", "#e0e7ff", 240),
    gap("7", 60),
    activity("8", "Personal time", "#fce7f3", 120),
    gap("9", 30),
    activity("10", "Sleep", "#d1fae5", 180),
)


# Edit outcomes (never raised; carried on EditResult).
OUTCOME_OK = "ok"
OUTCOME_NOOP = "noop"
OUTCOME_NOT_FOUND = "not_found"
OUTCOME_INSUFFICIENT_SPACE = "insufficient_space"
OUTCOME_MIN_DURATION = "min_duration"
OUTCOME_WRAP_PAST_SELF = "wrap_past_self"


@dataclass(frozen=True)
class EditResult:
    timeline: Timeline
    outcome: str = OUTCOME_OK
    segment_id: Optional[str] = None  # segment produced or targeted by the edit

    @property
    def ok(self) -> bool:
        return self.outcome == OUTCOME_OK


__all__ = [
    "ACTIVITY_COLORS",
    "COLORS",
    "EditResult",
    "GAP_COLOR",
    "GAP_TITLE",
    "INSERT_DURATION_MIN",
    "KIND_ACTIVITY",
    "KIND_GAP",
    "KINDS",
    "MIN_ACTIVITY_MINUTES",
    "OUTCOME_INSUFFICIENT_SPACE",
    "OUTCOME_MIN_DURATION",
    "OUTCOME_NOOP",
    "OUTCOME_NOT_FOUND",
    "OUTCOME_OK",
    "OUTCOME_WRAP_PAST_SELF",
    "SEED_TIMELINE",
    "SNAP_MINUTES",
    "SPLIT_ACTIVITY_MIN",
    "SPLIT_WHOLE_MAX_MIN",
    "Segment",
    "TOTAL_MINUTES",
    "Timeline",
    "activity",
    "gap",
    "is_homogeneous",
]
