# daywheel/drag.py
from __future__ import annotations

from typing import Optional

from .model import OUTCOME_NOOP, OUTCOME_OK, SNAP_MINUTES, EditResult, Timeline
from .normalize import normalize
from .planner import op_resize_pair
from .positions import snap_minute
from .providers import IdGenerator, UuidIds


class DragSession:
    """One boundary-drag gesture.

    Every move is recomputed from the pre-gesture timeline, so dropped or
    reordered pointer events cannot corrupt the partition. A rejected move
    keeps the last accepted state. `finish()` runs the cleanup pass;
    committing to history is left to the caller.
    """

    def __init__(
        self,
        base: Timeline,
        index: int,
        *,
        snap_min: int = SNAP_MINUTES,
        ids: Optional[IdGenerator] = None,
    ) -> None:
        self.base = base
        self.index = int(index)
        self.snap_min = int(snap_min)
        self.current: Timeline = base
        self._ids = ids or UuidIds()

    @classmethod
    def begin(cls, timeline: Timeline, index: int, **kwargs) -> "DragSession":
        return cls(timeline, index, **kwargs)

    def move(self, minute: float) -> EditResult:
        target = snap_minute(minute, self.snap_min)
        res = op_resize_pair(self.base, self.index, target)
        if res.outcome == OUTCOME_OK:
            self.current = res.timeline
        elif res.outcome == OUTCOME_NOOP:
            # Dragged back onto the original boundary.
            self.current = self.base
        return EditResult(timeline=self.current, outcome=res.outcome, segment_id=res.segment_id)

    def finish(self) -> Timeline:
        """Drop zero-duration segments and re-merge."""
        return normalize(self.current, self._ids)

    def cancel(self) -> Timeline:
        return self.base


__all__ = ["DragSession"]
