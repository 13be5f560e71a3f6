"""DayPlanner: one editable day.

Binds the edit operations to a history and, optionally, a snapshot file:

  op -> normalize -> history (commit, or transient while dragging) -> save

Discrete operations commit one undo step each. A drag streams transient
updates and commits once when it ends. Saves are best effort and never
fail an edit.
"""

from __future__ import annotations

from dataclasses import replace
from typing import List, Optional, Tuple

from .config import EngineConfig
from .drag import DragSession
from .history import (
    HistoryState,
    can_redo,
    can_undo,
    history_init,
    history_redo,
    history_set,
    history_undo,
)
from .metrics import SummaryRow, summarize
from .model import OUTCOME_OK, SEED_TIMELINE, EditResult, Segment, Timeline
from .normalize import normalize
from .planner import (
    op_change_end,
    op_change_start,
    op_clear_all,
    op_delete,
    op_insert_after,
    op_reorder,
    op_split_gap,
    op_update_segment,
)
from .positions import project
from .providers import ColorPicker, IdGenerator, RandomColorPicker, UuidIds
from .snapshot import load_snapshot, save_snapshot


class DayPlanner:
    def __init__(
        self,
        timeline: Timeline = SEED_TIMELINE,
        *,
        config: Optional[EngineConfig] = None,
        colors: Optional[ColorPicker] = None,
        ids: Optional[IdGenerator] = None,
    ) -> None:
        self.config = config or EngineConfig()
        self.colors = colors or RandomColorPicker(self.config.palette)
        self.ids = ids or UuidIds()
        self.history: HistoryState = history_init(normalize(timeline, self.ids))
        self._drag: Optional[DragSession] = None

    @classmethod
    def open(cls, path: str, *, config: Optional[EngineConfig] = None, **kwargs) -> "DayPlanner":
        """Load from `path` (seed on any problem) and save there after each change."""
        cfg = replace(config or EngineConfig(), store_path=path)
        return cls(load_snapshot(path), config=cfg, **kwargs)

    # --- state ------------------------------------------------------------------

    @property
    def timeline(self) -> Timeline:
        return self.history.present

    def positions(self) -> List[Tuple[Segment, int]]:
        return project(self.timeline)

    def summary(self) -> List[SummaryRow]:
        return summarize(self.timeline)

    @property
    def dragging(self) -> bool:
        return self._drag is not None

    def _observe(self, new_state: HistoryState) -> None:
        changed = new_state.present != self.history.present
        self.history = new_state
        if changed and self.config.store_path:
            save_snapshot(self.config.store_path, self.history.present)

    def _commit(self, res: EditResult) -> EditResult:
        if res.outcome == OUTCOME_OK:
            self._observe(history_set(self.history, res.timeline, True, limit=self.config.history_limit))
        return res

    # --- discrete edits -----------------------------------------------------------

    def insert_after(self, segment_id: str, duration: Optional[int] = None) -> EditResult:
        d = self.config.insert_duration_min if duration is None else int(duration)
        return self._commit(op_insert_after(self.timeline, segment_id, duration=d, colors=self.colors, ids=self.ids))

    def split_gap(self, gap_id: str, click_minute: int) -> EditResult:
        return self._commit(
            op_split_gap(self.timeline, gap_id, None, None, click_minute, colors=self.colors, ids=self.ids)
        )

    def change_start(self, segment_id: str, minute: int) -> EditResult:
        return self._commit(op_change_start(self.timeline, segment_id, minute, ids=self.ids))

    def change_end(self, segment_id: str, minute: int) -> EditResult:
        return self._commit(op_change_end(self.timeline, segment_id, minute, ids=self.ids))

    def delete(self, segment_id: str) -> EditResult:
        return self._commit(op_delete(self.timeline, segment_id, ids=self.ids))

    def clear_all(self) -> EditResult:
        return self._commit(op_clear_all(self.timeline, ids=self.ids))

    def reorder(self, source_id: str, target_id: str) -> EditResult:
        return self._commit(op_reorder(self.timeline, source_id, target_id, ids=self.ids))

    def update(self, segment_id: str, *, title: Optional[str] = None, color: Optional[str] = None) -> EditResult:
        return self._commit(op_update_segment(self.timeline, segment_id, title=title, color=color, ids=self.ids))

    def undo(self) -> bool:
        if not can_undo(self.history):
            return False
        self._observe(history_undo(self.history))
        return True

    def redo(self) -> bool:
        if not can_redo(self.history):
            return False
        self._observe(history_redo(self.history))
        return True

    # --- drag gesture -------------------------------------------------------------

    def begin_drag(self, index: int) -> None:
        self._drag = DragSession.begin(self.timeline, index, snap_min=self.config.snap_min, ids=self.ids)

    def drag_to(self, minute: float) -> EditResult:
        if self._drag is None:
            raise RuntimeError("drag_to() called without begin_drag()")
        res = self._drag.move(minute)
        if res.timeline != self.timeline:
            self._observe(history_set(self.history, res.timeline, False))
        return res

    def end_drag(self, *, commit: bool = True) -> Timeline:
        """Clean up the gesture; with `commit` the whole drag becomes one undo step.

        A drag that ends on the last committed timeline records no step.
        """
        if self._drag is None:
            return self.timeline
        final = self._drag.finish()
        self._drag = None
        if final == self.history.last_committed:
            commit = False
        self._observe(history_set(self.history, final, commit, limit=self.config.history_limit))
        return self.timeline

    def cancel_drag(self) -> Timeline:
        if self._drag is None:
            return self.timeline
        base = self._drag.cancel()
        self._drag = None
        self._observe(history_set(self.history, base, False))
        return self.timeline


__all__ = ["DayPlanner"]
