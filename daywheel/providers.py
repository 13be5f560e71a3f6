"""Injectable capabilities used by edit operations.

Operations that create segments need a color for new activities and a
fresh id. Both are passed in explicitly so tests can be deterministic;
nothing here keeps module-level mutable state.
"""

from __future__ import annotations

import itertools
import random
import uuid
from typing import Iterator, Optional, Protocol, Sequence

from .model import ACTIVITY_COLORS


class ColorPicker(Protocol):
    def pick(self) -> str:
        """Return a color token for a new activity."""


class IdGenerator(Protocol):
    def new_id(self) -> str:
        """Return an id not used before by this generator."""


class RandomColorPicker:
    def __init__(self, palette: Sequence[str] = ACTIVITY_COLORS, seed: Optional[int] = None) -> None:
        if not palette:
            raise ValueError("palette must not be empty")
        self._palette = tuple(palette)
        self._rng = random.Random(seed)

    def pick(self) -> str:
        return self._rng.choice(self._palette)


class CyclingColorPicker:
    """Hands out palette entries in order, wrapping around."""

    def __init__(self, palette: Sequence[str] = ACTIVITY_COLORS) -> None:
        if not palette:
            raise ValueError("palette must not be empty")
        self._it: Iterator[str] = itertools.cycle(tuple(palette))

    def pick(self) -> str:
        return next(self._it)


class CounterIds:
    """Monotonic ids: `<prefix>1`, `<prefix>2`, ..."""

    def __init__(self, prefix: str = "s", start: int = 1) -> None:
        self._prefix = prefix
        self._counter = itertools.count(start)

    def new_id(self) -> str:
        return f"{self._prefix}{next(self._counter)}"


class UuidIds:
    def new_id(self) -> str:
        return uuid.uuid4().hex


__all__ = [
    "ColorPicker",
    "CounterIds",
    "CyclingColorPicker",
    "IdGenerator",
    "RandomColorPicker",
    "UuidIds",
]
