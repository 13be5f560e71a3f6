from __future__ import annotations

import unittest

from daywheel.model import (
    OUTCOME_MIN_DURATION,
    OUTCOME_NOOP,
    OUTCOME_NOT_FOUND,
    OUTCOME_OK,
    TOTAL_MINUTES,
    activity,
    gap,
)
from daywheel.planner import op_resize_pair
from daywheel.validate import validate_timeline


def _durations(tl):
    return [(s.id, s.duration) for s in tl]


class TestResizePairContract(unittest.TestCase):
    def setUp(self) -> None:
        self.tl = (activity("a", "A", "#fee2e2", 60), gap("g", 60), activity("b", "B", "#e0e7ff", 1320))

    def test_pair_total_is_conserved(self) -> None:
        res = op_resize_pair(self.tl, 0, 90)
        self.assertEqual(res.outcome, OUTCOME_OK)
        self.assertEqual(_durations(res.timeline), [("a", 90), ("g", 30), ("b", 1320)])
        self.assertEqual(res.segment_id, "a")

    def test_activity_floor_rejects(self) -> None:
        res = op_resize_pair(self.tl, 0, 10)
        self.assertEqual(res.outcome, OUTCOME_MIN_DURATION)
        self.assertIs(res.timeline, self.tl)

    def test_gap_may_reach_zero_without_merge(self) -> None:
        res = op_resize_pair(self.tl, 0, 120)
        self.assertEqual(res.outcome, OUTCOME_OK)
        self.assertEqual(_durations(res.timeline), [("a", 120), ("g", 0), ("b", 1320)])

    def test_target_past_pair_end_clamps_to_combined(self) -> None:
        res = op_resize_pair(self.tl, 0, 300)
        self.assertEqual(_durations(res.timeline), [("a", 120), ("g", 0), ("b", 1320)])

    def test_target_behind_left_start_clamps_to_combined(self) -> None:
        tl = (
            activity("a", "A", "#fee2e2", 60),
            gap("g", 60),
            activity("c", "C", "#dcfce7", 60),
            gap("h", 1260),
        )
        # 45 lies before the gap's start at 60; the right activity would vanish.
        res = op_resize_pair(tl, 1, 45)
        self.assertEqual(res.outcome, OUTCOME_MIN_DURATION)
        self.assertIs(res.timeline, tl)

    def test_unchanged_boundary_is_noop(self) -> None:
        res = op_resize_pair(self.tl, 0, 60)
        self.assertEqual(res.outcome, OUTCOME_NOOP)
        self.assertIs(res.timeline, self.tl)

    def test_single_segment_is_noop(self) -> None:
        tl = (gap("g", TOTAL_MINUTES),)
        self.assertEqual(op_resize_pair(tl, 0, 100).outcome, OUTCOME_NOOP)

    def test_bad_index_is_not_found(self) -> None:
        self.assertEqual(op_resize_pair(self.tl, 7, 100).outcome, OUTCOME_NOT_FOUND)

    def test_last_segment_extends_past_midnight_in_place(self) -> None:
        tl = (activity("a", "A", "#fee2e2", 60), gap("g", 1320), activity("b", "B", "#e0e7ff", 60))
        res = op_resize_pair(tl, 2, 30)
        self.assertEqual(res.outcome, OUTCOME_OK)
        self.assertEqual(_durations(res.timeline), [("a", 30), ("g", 1320), ("b", 90)])
        self.assertEqual(res.segment_id, "b")

    def test_last_first_pair_total_is_conserved(self) -> None:
        tl = (activity("a", "A", "#fee2e2", 60), gap("g", 1320), activity("b", "B", "#e0e7ff", 60))
        res = op_resize_pair(tl, 2, 15)
        self.assertEqual(res.outcome, OUTCOME_OK)
        self.assertEqual(_durations(res.timeline), [("a", 45), ("g", 1320), ("b", 75)])
        self.assertEqual(res.timeline[-1].duration + res.timeline[0].duration, 120)
        self.assertEqual(len(res.timeline), len(tl))

    def test_first_segment_starts_before_midnight_in_place(self) -> None:
        tl = (activity("a", "A", "#fee2e2", 60), activity("b", "B", "#e0e7ff", 1320), gap("g", 60))
        res = op_resize_pair(tl, 2, 1410)
        self.assertEqual(res.outcome, OUTCOME_OK)
        self.assertEqual(_durations(res.timeline), [("a", 90), ("b", 1320), ("g", 30)])
        self.assertEqual(validate_timeline(res.timeline), [])


if __name__ == "__main__":
    unittest.main(verbosity=2)
