from __future__ import annotations

import os
import unittest
from unittest.mock import patch

from daywheel.model import OUTCOME_NOT_FOUND, OUTCOME_OK, activity, gap
from daywheel.planner import op_split_gap
from daywheel.positions import project
from daywheel.providers import CounterIds, CyclingColorPicker
from daywheel.validate import validate_timeline

PICK = "#abcdef"


def _split(tl, gid, click, start=None, duration=None):
    return op_split_gap(
        tl, gid, start, duration, click, colors=CyclingColorPicker([PICK]), ids=CounterIds("n")
    )


def _durations(tl):
    return [(s.id, s.duration) for s in tl]


class TestSplitGapContract(unittest.TestCase):
    def setUp(self) -> None:
        self.tl = (activity("a", "A", "#fee2e2", 500), gap("g", 100), activity("b", "B", "#e0e7ff", 840))

    def test_click_near_gap_start(self) -> None:
        res = _split(self.tl, "g", 530, start=500, duration=100)
        self.assertEqual(res.outcome, OUTCOME_OK)
        self.assertEqual(_durations(res.timeline), [("a", 500), ("n1", 60), ("n2", 40), ("b", 840)])
        starts = {s.id: start for s, start in project(res.timeline)}
        self.assertEqual(starts["n1"], 500)
        self.assertEqual(starts["n2"], 560)
        self.assertEqual(res.segment_id, "n1")
        self.assertEqual(res.timeline[1].title, "")
        self.assertEqual(res.timeline[1].color, PICK)

    def test_small_gap_converts_whole_and_keeps_id(self) -> None:
        tl = (activity("a", "A", "#fee2e2", 700), gap("g", 30), activity("b", "B", "#e0e7ff", 710))
        res = _split(tl, "g", 710)
        self.assertEqual(_durations(res.timeline), [("a", 700), ("g", 30), ("b", 710)])
        self.assertTrue(res.timeline[1].is_activity)
        self.assertEqual(res.segment_id, "g")

    def test_centred_on_click_with_both_remainders(self) -> None:
        tl = (activity("a", "A", "#fee2e2", 300), gap("g", 600), activity("b", "B", "#e0e7ff", 540))
        res = _split(tl, "g", 600)
        self.assertEqual(_durations(res.timeline), [("a", 300), ("g", 270), ("n1", 60), ("n2", 270), ("b", 540)])

    def test_click_near_gap_end_clamps(self) -> None:
        tl = (activity("a", "A", "#fee2e2", 300), gap("g", 600), activity("b", "B", "#e0e7ff", 540))
        res = _split(tl, "g", 890)
        self.assertEqual(_durations(res.timeline), [("a", 300), ("g", 540), ("n1", 60), ("b", 540)])

    def test_snapped_placement_never_overflows_gap(self) -> None:
        tl = (gap("g", 100), activity("a", "A", "#fee2e2", 1340))
        res = _split(tl, "g", 95)
        self.assertEqual(_durations(res.timeline), [("g", 30), ("n1", 60), ("n2", 10), ("a", 1340)])
        self.assertEqual(validate_timeline(res.timeline), [])

    def test_activity_target_is_not_found(self) -> None:
        res = _split(self.tl, "a", 10)
        self.assertEqual(res.outcome, OUTCOME_NOT_FOUND)
        self.assertIs(res.timeline, self.tl)

    def test_unknown_id(self) -> None:
        self.assertEqual(_split(self.tl, "zz", 10).outcome, OUTCOME_NOT_FOUND)

    def test_stale_hint_uses_timeline_and_logs(self) -> None:
        with patch.dict(os.environ, {"DAYWHEEL_OBS_LOG": "1"}, clear=False), patch(
            "daywheel.util.console.eprint"
        ) as ep:
            res = _split(self.tl, "g", 530, start=0, duration=100)
        self.assertEqual(_durations(res.timeline), [("a", 500), ("n1", 60), ("n2", 40), ("b", 840)])
        combined = "\n".join(str(c.args[0]) for c in ep.call_args_list if c.args)
        self.assertIn("[daywheel.planner] WARN: split_gap 'g'", combined)


if __name__ == "__main__":
    unittest.main(verbosity=2)
