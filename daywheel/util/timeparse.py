# daywheel/util/timeparse.py
from __future__ import annotations

import re
from typing import Tuple

from daywheel.model import TOTAL_MINUTES

_HHMM_RE = re.compile(r"^(\d{1,2}):(\d{2})$")


def parse_hhmm(s: str) -> Tuple[int, int]:
    m = _HHMM_RE.match(s.strip())
    if not m:
        raise ValueError(f"Invalid HH:MM: {s!r}")
    hh = int(m.group(1))
    mm = int(m.group(2))
    if not (0 <= hh <= 23 and 0 <= mm <= 59):
        raise ValueError(f"Invalid HH:MM: {s!r}")
    return hh, mm


def parse_minute_of_day(s: str) -> int:
    """Accept `HH:MM` or a bare minute count (0..1439)."""
    ss = str(s).strip()
    if ss.isdigit():
        v = int(ss)
        if not (0 <= v < TOTAL_MINUTES):
            raise ValueError(f"minute of day out of range: {v}")
        return v
    hh, mm = parse_hhmm(ss)
    return hh * 60 + mm


def format_hhmm(minutes: int) -> str:
    m = int(round(minutes)) % TOTAL_MINUTES
    return f"{m // 60:02d}:{m % 60:02d}"


def format_duration(minutes: int) -> str:
    h, m = divmod(int(minutes), 60)
    if h > 0 and m > 0:
        return f"{h}h {m}m"
    if h > 0:
        return f"{h}h"
    return f"{m}m"
