from __future__ import annotations

import unittest

from daywheel.metrics import FREE_LABEL, UNTITLED_LABEL, free_minutes, spare_capacity, summarize
from daywheel.model import GAP_COLOR, SEED_TIMELINE, activity, gap


class TestSummaryContract(unittest.TestCase):
    def test_seed_summary(self) -> None:
        rows = summarize(SEED_TIMELINE)
        self.assertEqual(
            [(r.label, r.minutes, r.count) for r in rows],
            [
                ("Sleep", 600, 2),
                ("Work", 480, 2),
                (FREE_LABEL, 120, 3),
                ("Personal time", 120, 1),
                ("Lunch", 60, 1),
                ("Morning routine", 60, 1),
            ],
        )
        self.assertEqual(sum(r.minutes for r in rows), 1440)
        free = next(r for r in rows if r.label == FREE_LABEL)
        self.assertEqual((free.kind, free.color), ("gap", GAP_COLOR))

    def test_untitled_activities_share_a_row(self) -> None:
        tl = (activity("a", "", "#fee2e2", 30), gap("g", 1380), activity("b", "  ", "#e0e7ff", 30))
        rows = {r.label: r for r in summarize(tl)}
        self.assertEqual(rows[UNTITLED_LABEL].minutes, 60)
        self.assertEqual(rows[UNTITLED_LABEL].color, "#fee2e2")

    def test_free_minutes_and_spare_capacity(self) -> None:
        self.assertEqual(free_minutes(SEED_TIMELINE), 120)
        self.assertEqual(spare_capacity(SEED_TIMELINE), 1335)
        tight = tuple(activity(f"a{i}", f"T{i}", "#fee2e2", 15) for i in range(96))
        self.assertEqual(spare_capacity(tight), 0)


if __name__ == "__main__":
    unittest.main(verbosity=2)
