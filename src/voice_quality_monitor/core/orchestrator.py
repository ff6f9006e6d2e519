"""Session replayer: drives a monitor along a YAML event timeline."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from queue import PriorityQueue
from typing import Any

import yaml

from ..config import MonitorConfig
from ..simulation.network import NetworkSimulator
from .clock import ManualClock
from .events import ConnectionEventType
from .monitor import PerformanceMonitor

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Timeline event
# ---------------------------------------------------------------------------

@dataclass(order=True)
class TimelineEvent:
    """A single event on the scenario timeline, ordered by timestamp (ms)."""

    timestamp: float
    _seq: int = field(compare=True, repr=False)  # tie-breaker
    action: str = field(compare=False, default="")
    params: dict[str, Any] = field(compare=False, default_factory=dict)


# ---------------------------------------------------------------------------
# Replayer
# ---------------------------------------------------------------------------

class SessionReplayer:
    """
    Replay a recorded or hand-written session into a ``PerformanceMonitor``.

    The monitor runs on a ``ManualClock`` that jumps to each event's time,
    so a scenario covering minutes of conversation replays instantly and
    always yields the same numbers.

    Scenario format::

        scenario:
          name: flaky_wifi
          end_at: 20s
          timeline:
            - at: 0s
              action: start_session
            - at: 1.2s
              action: response
              message_length: 42
            - at: 5s
              action: network_drop
              duration_ms: 400
    """

    def __init__(
        self,
        scenario_path: str | Path | None = None,
        config: MonitorConfig | None = None,
    ):
        self.scenario: dict[str, Any] = {}
        if scenario_path is not None:
            self.scenario = self._load_scenario(scenario_path)

        self.timeline: PriorityQueue[TimelineEvent] = PriorityQueue()
        self.clock = ManualClock()
        self.monitor = PerformanceMonitor(config=config, clock=self.clock)
        self.network = NetworkSimulator(self.monitor, self.clock)
        self._seq = 0  # monotonic counter for stable ordering

    # -- running a scenario --------------------------------------------------

    def run(self, scenario: str | Path | dict | None = None) -> PerformanceMonitor:
        """Replay *scenario* and return the populated monitor."""
        if scenario is not None:
            if isinstance(scenario, dict):
                self.scenario = scenario.get("scenario", scenario)
            else:
                self.scenario = self._load_scenario(scenario)

        self._enqueue_timeline(self.scenario.get("timeline") or [])

        while not self.timeline.empty():
            event = self.timeline.get()
            self.clock.advance_to(event.timestamp)
            try:
                self._dispatch(event)
            except Exception:
                logger.exception("Error dispatching event %s", event)

        end_at = self.scenario.get("end_at")
        if end_at is not None:
            self.clock.advance_to(self._parse_time(end_at))

        logger.info(
            "Replayed scenario '%s' (%.0fms)",
            self.scenario.get("name", "unnamed"),
            self.clock.now(),
        )
        return self.monitor

    # -- event dispatch ------------------------------------------------------

    def _dispatch(self, event: TimelineEvent) -> None:
        params = event.params
        monitor = self.monitor

        match event.action:
            case "start_session":
                monitor.record_session_start()

            case "response":
                monitor.record_response(params or None)

            case "connection":
                monitor.record_connection_event(
                    params.get("type", ""), params.get("details")
                )

            case "disconnect":
                monitor.record_connection_event(
                    ConnectionEventType.DISCONNECTED, params.get("details")
                )

            case "reconnecting":
                monitor.record_connection_event(
                    ConnectionEventType.RECONNECTING, params.get("details")
                )

            case "reconnect":
                monitor.record_connection_event(
                    ConnectionEventType.RECONNECTED, params.get("details")
                )

            case "network_drop":
                self.network.simulate_disconnect(params.get("duration_ms", 0))

            case "network":
                if "profile" in params:
                    self.network.set_profile(params["profile"])
                else:
                    monitor.record_network_condition(
                        params.get("condition", "unknown"), params.get("details")
                    )

            case "rate_audio":
                monitor.record_audio_quality(
                    params.get("rating"), params.get("issues") or ()
                )

            case "error":
                monitor.record_error(
                    {"message": params.get("message"), "code": params.get("code")},
                    params.get("context"),
                )

            case "flow":
                monitor.record_conversation_flow(
                    params.get("type", ""), params.get("data")
                )

            case _:
                logger.warning("Unknown action: %s", event.action)

    # -- YAML loading --------------------------------------------------------

    @staticmethod
    def _load_scenario(path: str | Path) -> dict[str, Any]:
        path = Path(path)
        with open(path) as fh:
            data = yaml.safe_load(fh) or {}
        return data.get("scenario", data) or {}

    def _enqueue_timeline(self, events: list[dict[str, Any]]) -> None:
        """Parse a list of raw YAML timeline entries and enqueue them."""
        for entry in events:
            timestamp = self._parse_time(entry.get("at", "0s"))
            action = entry.get("action", "")
            params = {k: v for k, v in entry.items() if k not in ("at", "action")}
            self._seq += 1
            self.timeline.put(
                TimelineEvent(
                    timestamp=timestamp,
                    _seq=self._seq,
                    action=action,
                    params=params,
                )
            )

    @staticmethod
    def _parse_time(value: str | int | float) -> float:
        """Convert ``'2.5s'`` / ``'200ms'`` / a bare number (ms) to milliseconds."""
        if isinstance(value, (int, float)):
            return float(value)
        value = str(value).strip()
        if value.endswith("ms"):
            return float(value[:-2])
        if value.endswith("s"):
            return float(value[:-1]) * 1000
        return float(value)
