from __future__ import annotations

import json
import os
import re
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Tuple

from .model import ACTIVITY_COLORS, INSERT_DURATION_MIN, SNAP_MINUTES, TOTAL_MINUTES

DEFAULT_STORE_PATH = os.path.join("build", "daywheel.json")

_HEX_RE = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")


@dataclass(frozen=True)
class EngineConfig:
    snap_min: int = SNAP_MINUTES
    insert_duration_min: int = INSERT_DURATION_MIN
    history_limit: Optional[int] = None
    palette: Tuple[str, ...] = field(default=ACTIVITY_COLORS)
    store_path: Optional[str] = None


def _pos_int(v: Any, default: Optional[int], *, upper: int = TOTAL_MINUTES) -> Optional[int]:
    if isinstance(v, bool) or not isinstance(v, int):
        return default
    if v <= 0 or v > upper:
        return default
    return v


def config_from_dict(raw: Mapping[str, Any], base: Optional[EngineConfig] = None) -> EngineConfig:
    """Overlay known keys from `raw` on `base`; bad values keep the base value."""
    base = base or EngineConfig()

    palette = base.palette
    pal_raw = raw.get("palette")
    if isinstance(pal_raw, list):
        colors = tuple(str(x).strip() for x in pal_raw if isinstance(x, str) and _HEX_RE.match(x.strip()))
        if colors:
            palette = colors

    store = raw.get("store_path")
    store_path = store.strip() if isinstance(store, str) and store.strip() else base.store_path

    return EngineConfig(
        snap_min=_pos_int(raw.get("snap_min"), base.snap_min) or base.snap_min,
        insert_duration_min=_pos_int(raw.get("insert_duration_min"), base.insert_duration_min)
        or base.insert_duration_min,
        history_limit=_pos_int(raw.get("history_limit"), base.history_limit, upper=100_000),
        palette=palette,
        store_path=store_path,
    )


def load_config(path: Optional[str]) -> EngineConfig:
    """Load engine config JSON.

    Accepted keys (all optional):
      snap_min, insert_duration_min, history_limit (ints > 0)
      palette (list of #RRGGBB colors)
      store_path (snapshot file)
    A missing or unreadable file yields the defaults.
    """
    if not path:
        return EngineConfig()
    try:
        if not os.path.exists(path):
            return EngineConfig()
        with open(path, "r", encoding="utf-8") as f:
            raw = json.load(f)
    except (OSError, ValueError):
        return EngineConfig()
    if not isinstance(raw, dict):
        return EngineConfig()
    return config_from_dict(raw)


def config_from_env(env: Optional[Mapping[str, str]] = None) -> EngineConfig:
    """DAYWHEEL_CONFIG (JSON file), then DAYWHEEL_FILE / DAYWHEEL_SNAP overrides."""
    env = os.environ if env is None else env
    cfg = load_config(env.get("DAYWHEEL_CONFIG") or None)

    overrides: dict[str, Any] = {}
    store = (env.get("DAYWHEEL_FILE") or "").strip()
    if store:
        overrides["store_path"] = store
    snap = (env.get("DAYWHEEL_SNAP") or "").strip()
    if snap.isdigit():
        overrides["snap_min"] = int(snap)
    return config_from_dict(overrides, cfg) if overrides else cfg


__all__ = ["DEFAULT_STORE_PATH", "EngineConfig", "config_from_dict", "config_from_env", "load_config"]
