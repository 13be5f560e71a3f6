from __future__ import annotations

import re
from typing import Optional

# ISO-8601 style (PT1H30M) or compact (1h30m, 45m, 2h); bare digits mean minutes.
_ISO_RE = re.compile(r"^P(?:T(?:(\d+)H)?(?:(\d+)M)?(?:(\d+)S)?)$", re.IGNORECASE)
_COMPACT_RE = re.compile(r"^(?:(\d+)\s*h)?\s*(?:(\d+)\s*m(?:in)?)?$", re.IGNORECASE)


def parse_duration_to_minutes(s: str | None) -> Optional[int]:
    if not s:
        return None
    ss = str(s).strip()
    if not ss:
        return None

    if ss.isdigit():
        total = int(ss)
        return total if total > 0 else None

    m = _ISO_RE.match(ss)
    if m:
        h = int(m.group(1) or 0)
        mn = int(m.group(2) or 0)
        sec = int(m.group(3) or 0)
        total = h * 60 + mn
        if sec >= 30:
            total += 1
        return total if total > 0 else None

    m = _COMPACT_RE.match(ss)
    if m and (m.group(1) or m.group(2)):
        total = int(m.group(1) or 0) * 60 + int(m.group(2) or 0)
        return total if total > 0 else None

    return None
