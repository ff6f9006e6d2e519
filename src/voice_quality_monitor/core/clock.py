"""Millisecond clocks used to timestamp monitor events."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Protocol, runtime_checkable


@runtime_checkable
class Clock(Protocol):
    """Anything that can report the current time in milliseconds."""

    def now(self) -> float:
        ...


@dataclass
class MonotonicClock:
    """Wall-clock time from ``time.perf_counter``, in milliseconds."""

    def now(self) -> float:
        return time.perf_counter() * 1000


@dataclass
class ManualClock:
    """
    A clock that only moves when told to.

    Used for deterministic tests and for replaying recorded timelines:
    ``advance_to`` jumps instantly and never moves backwards.
    """

    _current: float = 0.0

    # -- public API ----------------------------------------------------------

    def now(self) -> float:
        """Return the current time in milliseconds."""
        return self._current

    def advance_to(self, target: float) -> None:
        """Move the clock to *target* milliseconds."""
        if target <= self._current:
            return
        self._current = float(target)

    def advance_by(self, delta: float) -> None:
        """Move the clock forward by *delta* milliseconds."""
        self.advance_to(self._current + delta)

    def reset(self, start: float = 0.0) -> None:
        self._current = float(start)
