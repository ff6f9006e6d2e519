"""Event records kept by the performance monitor, and the provider protocol."""

from __future__ import annotations

import enum
from dataclasses import asdict, dataclass, field
from typing import Any, Protocol, runtime_checkable


# ---------------------------------------------------------------------------
# Vocabularies
# ---------------------------------------------------------------------------

class ConnectionEventType(str, enum.Enum):
    CONNECTED = "connected"
    DISCONNECTED = "disconnected"
    RECONNECTING = "reconnecting"
    RECONNECTED = "reconnected"


class FlowEventType(str, enum.Enum):
    RESPONSE_RECEIVED = "response_received"
    CONNECTION_LOST = "connection_lost"
    CONNECTION_RESTORED = "connection_restored"
    ERROR_OCCURRED = "error_occurred"


class AudioIssue(str, enum.Enum):
    """Reference issue tags; any other tag string is accepted too."""

    CUTOUT = "cutout"
    STATIC = "static"
    VOLUME_DROP = "volume_drop"
    DELAY = "delay"
    DISTORTION = "distortion"


class NetworkCondition(str, enum.Enum):
    EXCELLENT = "excellent"
    GOOD = "good"
    POOR = "poor"
    VERY_POOR = "very_poor"


def label(value: Any) -> str:
    """Return the plain string for an enum member or free-form label."""
    if isinstance(value, enum.Enum):
        return str(value.value)
    return str(value)


# ---------------------------------------------------------------------------
# Recorded events
# ---------------------------------------------------------------------------

@dataclass
class _Event:
    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class ResponseEvent(_Event):
    """One agent reply; ``latency`` is measured from session start."""

    timestamp: float
    latency: float
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass
class ConnectionEvent(_Event):
    timestamp: float
    type: str
    details: dict[str, Any] = field(default_factory=dict)


@dataclass
class AudioQualityEvent(_Event):
    """A user rating (1-10) of a response, with optional issue tags."""

    timestamp: float
    rating: int
    issues: list[str] = field(default_factory=list)
    response_index: int = 0


@dataclass
class NetworkConditionEvent(_Event):
    timestamp: float
    condition: str
    details: dict[str, Any] = field(default_factory=dict)
    session_time: float = 0.0


@dataclass
class ErrorEvent(_Event):
    timestamp: float
    message: str
    code: Any = None
    context: dict[str, Any] = field(default_factory=dict)
    session_time: float = 0.0


@dataclass
class ConversationFlowEvent(_Event):
    """Audit-trail entry emitted alongside responses, drops and errors."""

    timestamp: float
    type: str
    data: dict[str, Any] = field(default_factory=dict)
    session_time: float = 0.0


# ---------------------------------------------------------------------------
# External collaborator
# ---------------------------------------------------------------------------

@runtime_checkable
class ConversationProvider(Protocol):
    """
    Callback surface of a conversational-session provider.

    The provider owns audio, transport and dialogue; the monitor only needs
    to hear about connects, disconnects, messages and errors.
    """

    def on_connect(self) -> None:
        ...

    def on_disconnect(self) -> None:
        ...

    def on_message(self, message: Any) -> None:
        ...

    def on_error(self, error: Any) -> None:
        ...
