# daywheel/positions.py
from __future__ import annotations

import math
from typing import List, Optional, Sequence, Tuple

from .model import SNAP_MINUTES, TOTAL_MINUTES, Segment


def project(segments: Sequence[Segment]) -> List[Tuple[Segment, int]]:
    """Pair each segment with its absolute start (prefix sum from minute 0)."""
    out: List[Tuple[Segment, int]] = []
    cursor = 0
    for seg in segments:
        out.append((seg, cursor))
        cursor += seg.duration
    return out


def absolute_start(segments: Sequence[Segment], index: int) -> int:
    return sum(s.duration for s in segments[:index])


def index_of(segments: Sequence[Segment], segment_id: str) -> int:
    for i, seg in enumerate(segments):
        if seg.id == segment_id:
            return i
    return -1


def segment_at(segments: Sequence[Segment], minute: int) -> Optional[Segment]:
    """Segment covering `minute` (taken mod TOTAL_MINUTES), or None for an empty sequence."""
    m = int(minute) % TOTAL_MINUTES
    for seg, start in project(segments):
        if start <= m < start + seg.duration:
            return seg
    return segments[-1] if segments else None


def snap_minute(minute: float, snap_min: int = SNAP_MINUTES) -> int:
    """Round half-up to the grid. May return TOTAL_MINUTES; callers take it mod the day."""
    if snap_min <= 1:
        return int(math.floor(minute + 0.5))
    return int(math.floor(minute / snap_min + 0.5)) * int(snap_min)


def shortest_delta(delta: int) -> int:
    """Map a circular difference into (-TOTAL_MINUTES/2, TOTAL_MINUTES/2]."""
    half = TOTAL_MINUTES // 2
    return -(((-int(delta)) + half) % TOTAL_MINUTES - half)


__all__ = [
    "absolute_start",
    "index_of",
    "project",
    "segment_at",
    "shortest_delta",
    "snap_minute",
]
