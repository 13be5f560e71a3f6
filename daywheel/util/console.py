from __future__ import annotations
import os
import sys
from typing import Any

_TRUTHY = {"1", "true", "yes", "on"}


def eprint(*args: Any) -> None:
    print(*args, file=sys.stderr)


def obs_enabled() -> bool:
    v = (os.getenv("DAYWHEEL_OBS_LOG", "") or "").strip().lower()
    return v in _TRUTHY


def obs_warn(scope: str, msg: str) -> None:
    """Emit a `[daywheel.<scope>] WARN:` line when DAYWHEEL_OBS_LOG is on."""
    if obs_enabled():
        eprint(f"[daywheel.{scope}] WARN: {msg}")
