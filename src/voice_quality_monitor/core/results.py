"""Per-session event collections owned by the performance monitor."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .events import (
    AudioQualityEvent,
    ConnectionEvent,
    ConversationFlowEvent,
    ErrorEvent,
    NetworkConditionEvent,
    ResponseEvent,
)


@dataclass
class SessionRecord:
    """
    Everything recorded since the last session start.

    Only one session is retained; ``reset`` discards the previous one.
    """

    session_start: float | None = None
    responses: list[ResponseEvent] = field(default_factory=list)
    connection_events: list[ConnectionEvent] = field(default_factory=list)
    audio_quality: list[AudioQualityEvent] = field(default_factory=list)
    network_conditions: list[NetworkConditionEvent] = field(default_factory=list)
    errors: list[ErrorEvent] = field(default_factory=list)
    conversation_flow: list[ConversationFlowEvent] = field(default_factory=list)

    # -- convenience ---------------------------------------------------------

    @property
    def started(self) -> bool:
        return self.session_start is not None

    def elapsed(self, now: float) -> float:
        """Time since session start, or 0 when no session is running."""
        if self.session_start is None:
            return 0.0
        return now - self.session_start

    def reset(self, session_start: float) -> None:
        self.session_start = session_start
        self.responses = []
        self.connection_events = []
        self.audio_quality = []
        self.network_conditions = []
        self.errors = []
        self.conversation_flow = []

    @property
    def latencies(self) -> list[float]:
        return [r.latency for r in self.responses]

    def collections(self) -> dict[str, list[dict[str, Any]]]:
        """The six raw collections as plain data, in insertion order."""
        return {
            "responses": [e.to_dict() for e in self.responses],
            "connection_events": [e.to_dict() for e in self.connection_events],
            "audio_quality": [e.to_dict() for e in self.audio_quality],
            "network_conditions": [e.to_dict() for e in self.network_conditions],
            "errors": [e.to_dict() for e in self.errors],
            "conversation_flow": [e.to_dict() for e in self.conversation_flow],
        }
