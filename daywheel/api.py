"""daywheel.api

Stable *library* entrypoint for daywheel.

Policy:
  - Only names listed in __all__ are considered public API.
  - Everything else is internal and may change without notice.
"""

from __future__ import annotations

from daywheel.config import EngineConfig, config_from_env, load_config
from daywheel.drag import DragSession
from daywheel.history import (
    HistoryState,
    can_redo,
    can_undo,
    history_init,
    history_redo,
    history_set,
    history_undo,
)
from daywheel.metrics import SummaryRow, free_minutes, spare_capacity, summarize
from daywheel.model import (
    MIN_ACTIVITY_MINUTES,
    OUTCOME_INSUFFICIENT_SPACE,
    OUTCOME_MIN_DURATION,
    OUTCOME_NOOP,
    OUTCOME_NOT_FOUND,
    OUTCOME_OK,
    OUTCOME_WRAP_PAST_SELF,
    SEED_TIMELINE,
    TOTAL_MINUTES,
    EditResult,
    Segment,
    Timeline,
    activity,
    gap,
)
from daywheel.normalize import normalize
from daywheel.planner import (
    op_change_end,
    op_change_start,
    op_clear_all,
    op_delete,
    op_insert_after,
    op_reorder,
    op_resize_pair,
    op_split_gap,
    op_update_segment,
)
from daywheel.positions import project
from daywheel.providers import CounterIds, CyclingColorPicker, RandomColorPicker, UuidIds
from daywheel.session import DayPlanner
from daywheel.snapshot import SnapshotError, deserialize, load_snapshot, save_snapshot, serialize
from daywheel.validate import TimelineValidationError, assert_valid_timeline, validate_timeline


# --- Public API exports (locked by contract tests) ------------------------
# Keep changes intentional and reviewable.
# Prefer append-only unless you are intentionally reshaping the public surface.
_PUBLIC_EXPORTS = (
    "CounterIds",
    "CyclingColorPicker",
    "DayPlanner",
    "DragSession",
    "EditResult",
    "EngineConfig",
    "HistoryState",
    "MIN_ACTIVITY_MINUTES",
    "OUTCOME_INSUFFICIENT_SPACE",
    "OUTCOME_MIN_DURATION",
    "OUTCOME_NOOP",
    "OUTCOME_NOT_FOUND",
    "OUTCOME_OK",
    "OUTCOME_WRAP_PAST_SELF",
    "RandomColorPicker",
    "SEED_TIMELINE",
    "Segment",
    "SnapshotError",
    "SummaryRow",
    "TOTAL_MINUTES",
    "Timeline",
    "TimelineValidationError",
    "UuidIds",
    "activity",
    "assert_valid_timeline",
    "can_redo",
    "can_undo",
    "config_from_env",
    "deserialize",
    "free_minutes",
    "gap",
    "history_init",
    "history_redo",
    "history_set",
    "history_undo",
    "load_config",
    "load_snapshot",
    "normalize",
    "op_change_end",
    "op_change_start",
    "op_clear_all",
    "op_delete",
    "op_insert_after",
    "op_reorder",
    "op_resize_pair",
    "op_split_gap",
    "op_update_segment",
    "project",
    "save_snapshot",
    "serialize",
    "spare_capacity",
    "summarize",
    "validate_timeline",
)

__all__ = [n for n in _PUBLIC_EXPORTS if n in globals()]
# --- /Public API exports --------------------------------------------------
