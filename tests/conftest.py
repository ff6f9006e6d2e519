"""Shared pytest fixtures for the voice quality monitor."""

from __future__ import annotations

import pytest

from voice_quality_monitor.core.clock import ManualClock
from voice_quality_monitor.core.monitor import PerformanceMonitor


@pytest.fixture
def clock() -> ManualClock:
    return ManualClock()


@pytest.fixture
def monitor(clock: ManualClock) -> PerformanceMonitor:
    """A monitor on a manual clock, not yet started."""
    return PerformanceMonitor(clock=clock)


@pytest.fixture
def started(monitor: PerformanceMonitor) -> PerformanceMonitor:
    """A monitor whose session started at t=0ms."""
    monitor.record_session_start()
    return monitor


@pytest.fixture
def respond_at(clock: ManualClock):
    """Record one response on *monitor* at each absolute time (ms)."""

    def _respond(monitor: PerformanceMonitor, *times: float) -> None:
        for t in times:
            clock.advance_to(t)
            monitor.record_response()

    return _respond
