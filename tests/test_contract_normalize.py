from __future__ import annotations

import os
import unittest
from unittest.mock import patch

from daywheel.model import TOTAL_MINUTES, activity, gap
from daywheel.normalize import merge_homogeneous, normalize, repair_total
from daywheel.providers import CounterIds


class TestNormalizeContract(unittest.TestCase):
    def test_adjacent_gaps_merge_first_keeps_id(self) -> None:
        out = normalize([gap("g1", 30), gap("g2", 20), activity("x", "X", "#fee2e2", 1390)])
        self.assertEqual([s.id for s in out], ["g1", "x"])
        self.assertEqual([s.duration for s in out], [50, 1390])

    def test_same_title_and_color_merge(self) -> None:
        out = normalize(
            [
                activity("a", "Work", "#e0e7ff", 600),
                activity("b", "Work", "#e0e7ff", 240),
                gap("g", 600),
            ]
        )
        self.assertEqual([(s.id, s.duration) for s in out], [("a", 840), ("g", 600)])

    def test_same_title_different_color_does_not_merge(self) -> None:
        out = normalize(
            [
                activity("a", "Work", "#e0e7ff", 720),
                activity("b", "Work", "#fee2e2", 720),
            ]
        )
        self.assertEqual(len(out), 2)

    def test_zero_and_negative_durations_are_dropped(self) -> None:
        out = normalize(
            [
                activity("a", "A", "#fee2e2", 720),
                gap("z", 0),
                activity("b", "A", "#fee2e2", 720),
                gap("n", -5),
            ]
        )
        # Dropping the zero gap makes a and b neighbours, so they merge.
        self.assertEqual([(s.id, s.duration) for s in out], [("a", 1440)])

    def test_origin_pair_is_not_merged(self) -> None:
        segs = [gap("g1", 100), activity("a", "A", "#fee2e2", 1240), gap("g2", 100)]
        out = normalize(segs)
        self.assertEqual([s.id for s in out], ["g1", "a", "g2"])

    def test_total_is_repaired_on_last_segment(self) -> None:
        out = normalize([activity("a", "A", "#fee2e2", 700), gap("g", 800)])
        self.assertEqual(sum(s.duration for s in out), TOTAL_MINUTES)
        self.assertEqual(out[-1].duration, 740)

    def test_repair_drops_last_when_it_cannot_absorb(self) -> None:
        out = repair_total([activity("a", "A", "#fee2e2", 1500), gap("g", 50)])
        self.assertEqual([(s.id, s.duration) for s in out], [("a", 1440)])

    def test_empty_result_becomes_full_day_gap(self) -> None:
        out = normalize([gap("z", 0)], CounterIds("n"))
        self.assertEqual(len(out), 1)
        self.assertTrue(out[0].is_gap)
        self.assertEqual(out[0].duration, TOTAL_MINUTES)
        self.assertEqual(out[0].id, "n1")

    def test_idempotent(self) -> None:
        raw = [gap("g1", 30), gap("g2", 20), activity("x", "X", "#fee2e2", 1400)]
        once = normalize(raw)
        self.assertEqual(normalize(once), once)

    def test_merge_is_linear(self) -> None:
        out = merge_homogeneous([gap("a", 1), gap("b", 2), gap("c", 3)])
        self.assertEqual([(s.id, s.duration) for s in out], [("a", 6)])

    def test_drift_logs_when_obs_enabled(self) -> None:
        with patch.dict(os.environ, {"DAYWHEEL_OBS_LOG": "1"}, clear=False), patch(
            "daywheel.util.console.eprint"
        ) as ep:
            normalize([activity("a", "A", "#fee2e2", 700), gap("g", 800)])
        combined = "\n".join(str(c.args[0]) for c in ep.call_args_list if c.args)
        self.assertIn("[daywheel.normalize] WARN: timeline total 1500min", combined)

    def test_drift_is_silent_when_obs_disabled(self) -> None:
        with patch.dict(os.environ, {}, clear=True), patch("daywheel.util.console.eprint") as ep:
            normalize([activity("a", "A", "#fee2e2", 700), gap("g", 800)])
        self.assertFalse(ep.called)


if __name__ == "__main__":
    unittest.main(verbosity=2)
