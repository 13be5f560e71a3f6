# daywheel/planner.py
from __future__ import annotations

from dataclasses import replace
from typing import List, Optional, Sequence

from .model import (
    INSERT_DURATION_MIN,
    KIND_ACTIVITY,
    MIN_ACTIVITY_MINUTES,
    OUTCOME_INSUFFICIENT_SPACE,
    OUTCOME_MIN_DURATION,
    OUTCOME_NOOP,
    OUTCOME_NOT_FOUND,
    OUTCOME_OK,
    OUTCOME_WRAP_PAST_SELF,
    SNAP_MINUTES,
    SPLIT_ACTIVITY_MIN,
    SPLIT_WHOLE_MAX_MIN,
    TOTAL_MINUTES,
    EditResult,
    Segment,
    Timeline,
    activity,
    gap,
)
from .normalize import normalize
from .positions import absolute_start, index_of, segment_at, shortest_delta, snap_minute
from .providers import ColorPicker, IdGenerator, RandomColorPicker, UuidIds
from .util.console import obs_warn


def _reject(timeline: Timeline, outcome: str, op: str, detail: str, segment_id: Optional[str] = None) -> EditResult:
    obs_warn("planner", f"{op} rejected ({outcome}): {detail}")
    return EditResult(timeline=timeline, outcome=outcome, segment_id=segment_id)


def _resolve_id(timeline: Timeline, prefer_id: Optional[str], anchor: Optional[int]) -> Optional[str]:
    """`prefer_id` if it survived normalization, else the segment now covering `anchor`."""
    if prefer_id is not None and index_of(timeline, prefer_id) >= 0:
        return prefer_id
    if anchor is None:
        return None
    seg = segment_at(timeline, anchor)
    return seg.id if seg else None


def _settle(
    before: Timeline,
    raw: Sequence[Segment],
    ids: IdGenerator,
    *,
    prefer_id: Optional[str] = None,
    anchor: Optional[int] = None,
) -> EditResult:
    after = normalize(raw, ids)
    if after == before:
        return EditResult(timeline=before, outcome=OUTCOME_NOOP, segment_id=prefer_id)
    return EditResult(timeline=after, outcome=OUTCOME_OK, segment_id=_resolve_id(after, prefer_id, anchor))


# --- boundary drag --------------------------------------------------------------

def op_resize_pair(timeline: Timeline, index: int, target_minute: int) -> EditResult:
    """Move the boundary after `timeline[index]` to `target_minute` (already snapped).

    The pair (index, index+1 mod n) shares its combined duration; nothing else
    changes and no merge runs here (zero-duration gaps survive until the drag
    cleanup). For the last index the pair is the last and first segment, both
    resized in place.
    """
    n = len(timeline)
    if n < 2:
        return EditResult(timeline=timeline, outcome=OUTCOME_NOOP)
    if not (0 <= index < n):
        return _reject(timeline, OUTCOME_NOT_FOUND, "resize_pair", f"index {index} out of range (n={n})")

    j = (index + 1) % n
    left, right = timeline[index], timeline[j]
    combined = left.duration + right.duration

    # The offset is never negative, so a target behind the pair lands past its end.
    new_left = min((int(target_minute) - absolute_start(timeline, index)) % TOTAL_MINUTES, combined)
    new_right = combined - new_left

    if new_left < left.floor or new_right < right.floor:
        return _reject(
            timeline,
            OUTCOME_MIN_DURATION,
            "resize_pair",
            f"{left.id!r}={new_left}min / {right.id!r}={new_right}min below floor",
            left.id,
        )
    if new_left == left.duration:
        return EditResult(timeline=timeline, outcome=OUTCOME_NOOP, segment_id=left.id)

    out: List[Segment] = list(timeline)
    out[index] = left.with_duration(new_left)
    out[j] = right.with_duration(new_right)
    return EditResult(timeline=tuple(out), outcome=OUTCOME_OK, segment_id=left.id)


# --- insertion ------------------------------------------------------------------

def op_insert_after(
    timeline: Timeline,
    segment_id: str,
    *,
    duration: int = INSERT_DURATION_MIN,
    colors: Optional[ColorPicker] = None,
    ids: Optional[IdGenerator] = None,
) -> EditResult:
    """Insert an empty activity of `duration` minutes right after `segment_id`.

    The minutes are funded by scanning forward (circularly) from the insertion
    point: gaps first, then activities down to their floor. Unfundable inserts
    fail with `insufficient_space` and leave the timeline untouched.
    """
    index = index_of(timeline, segment_id)
    if index < 0:
        return _reject(timeline, OUTCOME_NOT_FOUND, "insert_after", f"unknown segment {segment_id!r}")
    duration = int(duration)
    if duration <= 0:
        return EditResult(timeline=timeline, outcome=OUTCOME_NOOP)

    n = len(timeline)
    insertion = index + 1
    reductions = [0] * n
    remaining = duration

    for offset in range(n):
        if remaining <= 0:
            break
        k = (insertion + offset) % n
        seg = timeline[k]
        if seg.is_gap:
            take = min(seg.duration, remaining)
            if take > 0:
                reductions[k] += take
                remaining -= take

    if remaining > 0:
        for offset in range(n):
            if remaining <= 0:
                break
            k = (insertion + offset) % n
            seg = timeline[k]
            if seg.is_activity:
                available = max(0, seg.duration - reductions[k] - MIN_ACTIVITY_MINUTES)
                take = min(available, remaining)
                if take > 0:
                    reductions[k] += take
                    remaining -= take

    if remaining > 0:
        return _reject(
            timeline,
            OUTCOME_INSUFFICIENT_SPACE,
            "insert_after",
            f"{remaining}min of {duration}min could not be funded",
        )

    colors = colors or RandomColorPicker()
    ids = ids or UuidIds()

    out: List[Segment] = [
        seg.with_duration(seg.duration - r) if r else seg for seg, r in zip(timeline, reductions)
    ]
    new_seg = activity(ids.new_id(), "", colors.pick(), duration)
    out.insert(insertion, new_seg)
    new_start = sum(s.duration for s in out[:insertion])
    return _settle(timeline, out, ids, prefer_id=new_seg.id, anchor=new_start)


def op_split_gap(
    timeline: Timeline,
    gap_id: str,
    gap_start: Optional[int],
    gap_duration: Optional[int],
    click_minute: int,
    *,
    colors: Optional[ColorPicker] = None,
    ids: Optional[IdGenerator] = None,
) -> EditResult:
    """Carve a new activity out of a gap around `click_minute`.

    Small gaps (<= 30min) are converted whole, keeping their id. Larger gaps
    get an activity of min(60, gap) centred on the click, snapped to the
    15-minute grid, with leading/trailing remainder gaps. The leading
    remainder keeps the gap's id. `gap_start`/`gap_duration` are the caller's
    view of the gap; the projected values win when they disagree.
    """
    index = index_of(timeline, gap_id)
    if index < 0 or not timeline[index].is_gap:
        return _reject(timeline, OUTCOME_NOT_FOUND, "split_gap", f"no gap with id {gap_id!r}")

    seg = timeline[index]
    start = absolute_start(timeline, index)
    if (gap_start is not None and int(gap_start) != start) or (
        gap_duration is not None and int(gap_duration) != seg.duration
    ):
        obs_warn(
            "planner",
            f"split_gap {gap_id!r}: caller passed start={gap_start} duration={gap_duration}, "
            f"timeline has start={start} duration={seg.duration}",
        )
    dur = seg.duration

    colors = colors or RandomColorPicker()
    ids = ids or UuidIds()
    out: List[Segment] = list(timeline)

    if dur <= SPLIT_WHOLE_MAX_MIN:
        new_seg = replace(seg, kind=KIND_ACTIVITY, title="", color=colors.pick())
        out[index] = new_seg
        return _settle(timeline, out, ids, prefer_id=new_seg.id, anchor=start)

    new_dur = min(SPLIT_ACTIVITY_MIN, dur)
    rel_click = (int(click_minute) - start) % TOTAL_MINUTES
    target = rel_click - new_dur / 2
    target = max(0.0, min(float(target), float(dur - new_dur)))
    lead = snap_minute(target, SNAP_MINUTES)
    if lead + new_dur > dur:
        lead = ((dur - new_dur) // SNAP_MINUTES) * SNAP_MINUTES
    lead = max(0, lead)
    trail = dur - lead - new_dur

    new_seg = activity(ids.new_id(), "", colors.pick(), new_dur)
    pieces: List[Segment] = []
    if lead > 0:
        pieces.append(seg.with_duration(lead))
    pieces.append(new_seg)
    if trail > 0:
        pieces.append(gap(ids.new_id(), trail))
    out[index:index + 1] = pieces
    return _settle(timeline, out, ids, prefer_id=new_seg.id, anchor=start + lead)


# --- typed boundary edits -------------------------------------------------------

def op_change_start(
    timeline: Timeline,
    segment_id: str,
    minute: int,
    *,
    ids: Optional[IdGenerator] = None,
) -> EditResult:
    """Move the start of `segment_id` to `minute`, taking the shorter way round.

    A later start hands the minutes to the preceding (cyclic) gap, or to a new
    gap in front of the segment. An earlier start consumes preceding segments,
    walking backward around the circle.
    """
    index = index_of(timeline, segment_id)
    if index < 0:
        return _reject(timeline, OUTCOME_NOT_FOUND, "change_start", f"unknown segment {segment_id!r}")

    n = len(timeline)
    cur = timeline[index]
    start = absolute_start(timeline, index)
    delta = shortest_delta(int(minute) % TOTAL_MINUTES - start)
    if delta == 0:
        return EditResult(timeline=timeline, outcome=OUTCOME_NOOP, segment_id=cur.id)

    ids = ids or UuidIds()
    out: List[Segment] = list(timeline)
    new_start = (start + delta) % TOTAL_MINUTES

    if delta > 0:
        if n == 1 and cur.is_gap:
            return EditResult(timeline=timeline, outcome=OUTCOME_NOOP, segment_id=cur.id)
        if cur.duration - delta < cur.floor:
            return _reject(
                timeline,
                OUTCOME_MIN_DURATION,
                "change_start",
                f"{cur.id!r} would shrink to {cur.duration - delta}min",
                cur.id,
            )
        out[index] = cur.with_duration(cur.duration - delta)
        prev_i = (index - 1) % n
        if n > 1 and out[prev_i].is_gap:
            out[prev_i] = out[prev_i].with_duration(out[prev_i].duration + delta)
        else:
            out.insert(index, gap(ids.new_id(), delta))
        return _settle(timeline, out, ids, prefer_id=cur.id, anchor=new_start)

    consume = -delta
    if consume > TOTAL_MINUTES - cur.duration:
        return _reject(
            timeline,
            OUTCOME_WRAP_PAST_SELF,
            "change_start",
            f"{cur.id!r} would have to consume itself ({consume}min requested)",
            cur.id,
        )

    remaining = consume
    for step in range(1, n):
        if remaining <= 0:
            break
        k = (index - step) % n
        seg = out[k]
        if seg.duration <= remaining:
            remaining -= seg.duration
            out[k] = seg.with_duration(0)
        else:
            left = seg.duration - remaining
            if left < seg.floor:
                return _reject(
                    timeline, OUTCOME_MIN_DURATION, "change_start", f"{seg.id!r} would shrink to {left}min", cur.id
                )
            out[k] = seg.with_duration(left)
            remaining = 0
    if remaining > 0:
        return _reject(timeline, OUTCOME_WRAP_PAST_SELF, "change_start", f"{cur.id!r} ran out of room", cur.id)
    out[index] = cur.with_duration(cur.duration + consume)
    return _settle(timeline, out, ids, prefer_id=cur.id, anchor=new_start)


def op_change_end(
    timeline: Timeline,
    segment_id: str,
    minute: int,
    *,
    ids: Optional[IdGenerator] = None,
) -> EditResult:
    """Move the end of `segment_id` to `minute`, taking the shorter way round.

    Ending earlier hands the minutes to the following (cyclic) gap, or a new
    one. Ending later takes them from the next segment only, absorbing it
    whole when the request exceeds its duration.
    """
    index = index_of(timeline, segment_id)
    if index < 0:
        return _reject(timeline, OUTCOME_NOT_FOUND, "change_end", f"unknown segment {segment_id!r}")

    n = len(timeline)
    cur = timeline[index]
    start = absolute_start(timeline, index)
    end = (start + cur.duration) % TOTAL_MINUTES
    delta = shortest_delta(int(minute) % TOTAL_MINUTES - end)
    if delta == 0:
        return EditResult(timeline=timeline, outcome=OUTCOME_NOOP, segment_id=cur.id)

    ids = ids or UuidIds()
    out: List[Segment] = list(timeline)
    next_i = (index + 1) % n

    if delta < 0:
        shrink = -delta
        if n == 1 and cur.is_gap:
            return EditResult(timeline=timeline, outcome=OUTCOME_NOOP, segment_id=cur.id)
        if cur.duration - shrink < cur.floor:
            return _reject(
                timeline,
                OUTCOME_MIN_DURATION,
                "change_end",
                f"{cur.id!r} would shrink to {cur.duration - shrink}min",
                cur.id,
            )
        out[index] = cur.with_duration(cur.duration - shrink)
        if n > 1 and out[next_i].is_gap:
            out[next_i] = out[next_i].with_duration(out[next_i].duration + shrink)
        else:
            out.insert(index + 1, gap(ids.new_id(), shrink))
        return _settle(timeline, out, ids, prefer_id=cur.id, anchor=start)

    if n == 1:
        return EditResult(timeline=timeline, outcome=OUTCOME_NOOP, segment_id=cur.id)

    nxt = out[next_i]
    take = min(delta, nxt.duration)
    left = nxt.duration - take
    if 0 < left < nxt.floor:
        return _reject(timeline, OUTCOME_MIN_DURATION, "change_end", f"{nxt.id!r} would shrink to {left}min", cur.id)
    out[next_i] = nxt.with_duration(left)
    out[index] = cur.with_duration(cur.duration + take)
    return _settle(timeline, out, ids, prefer_id=cur.id, anchor=start)


# --- structural edits -----------------------------------------------------------

def op_delete(timeline: Timeline, segment_id: str, *, ids: Optional[IdGenerator] = None) -> EditResult:
    index = index_of(timeline, segment_id)
    if index < 0:
        return _reject(timeline, OUTCOME_NOT_FOUND, "delete", f"unknown segment {segment_id!r}")
    out: List[Segment] = list(timeline)
    out[index] = out[index].as_gap()
    return _settle(timeline, out, ids or UuidIds(), prefer_id=segment_id, anchor=absolute_start(timeline, index))


def op_clear_all(timeline: Timeline, *, ids: Optional[IdGenerator] = None) -> EditResult:
    ids = ids or UuidIds()
    seg = gap(ids.new_id(), TOTAL_MINUTES)
    return EditResult(timeline=(seg,), outcome=OUTCOME_OK, segment_id=seg.id)


def op_reorder(
    timeline: Timeline,
    source_id: str,
    target_id: str,
    *,
    ids: Optional[IdGenerator] = None,
) -> EditResult:
    """Move `source_id` to the position `target_id` held before the move."""
    src = index_of(timeline, source_id)
    dst = index_of(timeline, target_id)
    if src < 0 or dst < 0:
        return _reject(timeline, OUTCOME_NOT_FOUND, "reorder", f"unknown segment {source_id!r} or {target_id!r}")
    if src == dst:
        return EditResult(timeline=timeline, outcome=OUTCOME_NOOP, segment_id=source_id)
    out: List[Segment] = list(timeline)
    moved = out.pop(src)
    out.insert(dst, moved)
    return _settle(timeline, out, ids or UuidIds(), prefer_id=source_id, anchor=None)


def op_update_segment(
    timeline: Timeline,
    segment_id: str,
    *,
    title: Optional[str] = None,
    color: Optional[str] = None,
    ids: Optional[IdGenerator] = None,
) -> EditResult:
    """Rename and/or recolor an activity.

    A new color on a titled activity is applied to every activity with that
    title, so one label keeps one color across the day.
    """
    index = index_of(timeline, segment_id)
    if index < 0:
        return _reject(timeline, OUTCOME_NOT_FOUND, "update_segment", f"unknown segment {segment_id!r}")
    target = timeline[index]
    if target.is_gap:
        return EditResult(timeline=timeline, outcome=OUTCOME_NOOP, segment_id=segment_id)

    updated = replace(
        target,
        title=target.title if title is None else str(title),
        color=target.color if color is None else str(color),
    )
    out: List[Segment] = list(timeline)
    out[index] = updated
    if color is not None and target.title:
        for i, seg in enumerate(out):
            if i != index and seg.is_activity and seg.title == target.title:
                out[i] = replace(seg, color=updated.color)
    return _settle(timeline, out, ids or UuidIds(), prefer_id=segment_id, anchor=absolute_start(timeline, index))


__all__ = [
    "op_change_end",
    "op_change_start",
    "op_clear_all",
    "op_delete",
    "op_insert_after",
    "op_reorder",
    "op_resize_pair",
    "op_split_gap",
    "op_update_segment",
]
