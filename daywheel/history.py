"""Undo/redo over timeline snapshots.

`HistoryState` is one immutable value; every function returns a new state.
Commits and transient updates differ in what they record:

  - commit: the last committed timeline is pushed onto `past`, so a burst
    of transient updates followed by one commit yields exactly one undo
    step (pre-burst state -> final state).
  - transient: only `present` moves (and `future` is dropped, since any
    deviation invalidates redo).
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional, Tuple

from .model import Timeline


@dataclass(frozen=True)
class HistoryState:
    past: Tuple[Timeline, ...]
    present: Timeline
    future: Tuple[Timeline, ...]
    last_committed: Timeline


def history_init(timeline: Timeline) -> HistoryState:
    return HistoryState(past=(), present=timeline, future=(), last_committed=timeline)


def history_set(
    state: HistoryState,
    value: Timeline,
    commit: bool = True,
    *,
    limit: Optional[int] = None,
) -> HistoryState:
    """Replace `present`; on commit also record one undo step.

    Every commit pushes the last committed timeline, even an unchanged one;
    callers skip the commit when nothing changed. `limit` caps the length of
    `past` (oldest entries dropped).
    """
    if not commit:
        return replace(state, present=value, future=())

    past = state.past + (state.last_committed,)
    if limit is not None and limit >= 0 and len(past) > limit:
        past = past[len(past) - limit:]
    return HistoryState(past=past, present=value, future=(), last_committed=value)


def history_undo(state: HistoryState) -> HistoryState:
    if not state.past:
        return state
    previous = state.past[-1]
    return HistoryState(
        past=state.past[:-1],
        present=previous,
        future=(state.present,) + state.future,
        last_committed=previous,
    )


def history_redo(state: HistoryState) -> HistoryState:
    if not state.future:
        return state
    nxt = state.future[0]
    return HistoryState(
        past=state.past + (state.present,),
        present=nxt,
        future=state.future[1:],
        last_committed=nxt,
    )


def can_undo(state: HistoryState) -> bool:
    return bool(state.past)


def can_redo(state: HistoryState) -> bool:
    return bool(state.future)


__all__ = [
    "HistoryState",
    "can_redo",
    "can_undo",
    "history_init",
    "history_redo",
    "history_set",
    "history_undo",
]
