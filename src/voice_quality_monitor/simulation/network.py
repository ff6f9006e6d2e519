"""Network condition simulator: named profiles, condition labels, drops."""

from __future__ import annotations

import logging
from typing import Any

from ..core.clock import ManualClock
from ..core.events import ConnectionEventType, NetworkCondition
from ..core.monitor import PerformanceMonitor

logger = logging.getLogger(__name__)

# upper bounds (latency ms, loss rate) for each label, best first
CONDITION_LIMITS: list[tuple[float, float, NetworkCondition]] = [
    (50, 0.01, NetworkCondition.EXCELLENT),
    (150, 0.05, NetworkCondition.GOOD),
    (300, 0.15, NetworkCondition.POOR),
]


def classify_network(latency_ms: float, loss_rate: float = 0.0) -> str:
    """Map a measured round-trip latency and loss rate to a condition label."""
    for max_latency, max_loss, condition in CONDITION_LIMITS:
        if latency_ms <= max_latency and loss_rate <= max_loss:
            return condition.value
    return NetworkCondition.VERY_POOR.value


class NetworkSimulator:
    """
    Feed simulated network observations into a monitor.

    Profiles describe typical links; applying one records a network
    condition event. ``simulate_disconnect`` records a drop and its
    recovery on a ``ManualClock``.
    """

    PROFILES: dict[str, dict[str, Any]] = {
        "perfect":   {"latency": 10,  "jitter": 2,   "loss": 0.0,  "speed": "fast"},
        "good_4g":   {"latency": 50,  "jitter": 15,  "loss": 0.01, "speed": "fast"},
        "poor_4g":   {"latency": 150, "jitter": 50,  "loss": 0.05, "speed": "moderate"},
        "bad_wifi":  {"latency": 200, "jitter": 100, "loss": 0.10, "speed": "slow"},
        "elevator":  {"latency": 500, "jitter": 200, "loss": 0.30, "speed": "very_slow"},
    }

    def __init__(
        self,
        monitor: PerformanceMonitor,
        clock: ManualClock | None = None,
    ):
        self.monitor = monitor
        self.clock = clock
        self.profile: str | None = None

    def set_profile(self, profile: str) -> str:
        """Record the condition for *profile* and return its label."""
        p = self.PROFILES.get(profile)
        if p is None:
            logger.warning("Unknown network profile '%s', using 'perfect'", profile)
            profile, p = "perfect", self.PROFILES["perfect"]
        self.profile = profile
        condition = classify_network(p["latency"], p["loss"])
        self.monitor.record_network_condition(
            condition,
            {
                "profile": profile,
                "speed": p["speed"],
                "estimated_latency": p["latency"],
                "jitter": p["jitter"],
                "loss_rate": p["loss"],
            },
        )
        return condition

    def simulate_disconnect(self, duration_ms: float) -> None:
        """Record a drop lasting *duration_ms* followed by a reconnect."""
        if self.clock is None:
            raise RuntimeError("simulate_disconnect needs a ManualClock")
        self.monitor.record_connection_event(
            ConnectionEventType.DISCONNECTED, {"reason": "simulated", "profile": self.profile}
        )
        self.clock.advance_by(duration_ms)
        self.monitor.record_connection_event(
            ConnectionEventType.RECONNECTED, {"downtime_ms": duration_ms}
        )
