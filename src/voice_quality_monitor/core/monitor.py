"""Performance monitor: records session events and derives quality metrics."""

from __future__ import annotations

import enum
import logging
import numbers
import threading
from typing import Any, Iterable, Mapping

from ..config import MonitorConfig
from ..evaluation.framework import EvaluationFramework
from .clock import Clock, MonotonicClock
from .events import (
    AudioQualityEvent,
    ConnectionEvent,
    ConnectionEventType,
    ConversationFlowEvent,
    ErrorEvent,
    FlowEventType,
    NetworkConditionEvent,
    ResponseEvent,
    label,
)
from .results import SessionRecord

logger = logging.getLogger(__name__)

MIN_RATING = 1
MAX_RATING = 10
UNKNOWN_ERROR = "Unknown error"

_FLOW_FOR_CONNECTION = {
    ConnectionEventType.DISCONNECTED.value: FlowEventType.CONNECTION_LOST.value,
    ConnectionEventType.RECONNECTED.value: FlowEventType.CONNECTION_RESTORED.value,
}


class PerformanceMonitor:
    """
    Stateful aggregator for one voice conversation session.

    The session orchestrator calls ``record_session_start`` once, then the
    matching ``record_*`` method as provider events arrive. The ``get_*``
    accessors recompute everything from the recorded events on every call,
    so they can be called at any time, mid-session included.

    Mutators never raise; an out-of-range audio rating is logged and
    ignored. Access is serialized by a re-entrant lock.
    """

    def __init__(
        self,
        config: MonitorConfig | None = None,
        clock: Clock | None = None,
    ) -> None:
        self.config = config or MonitorConfig()
        self.clock = clock or MonotonicClock()
        self.evaluation = EvaluationFramework(self.config)
        self._record = SessionRecord()
        self._lock = threading.RLock()

    @property
    def session_start(self) -> float | None:
        return self._record.session_start

    def view(self) -> PerformanceMonitorView:
        """Read-only facade for display and reporting layers."""
        return PerformanceMonitorView(self)

    # -- mutators ------------------------------------------------------------

    def record_session_start(self) -> None:
        """Start a new session, discarding everything recorded before."""
        with self._lock:
            now = self.clock.now()
            self._record.reset(now)
            self._record.connection_events.append(
                ConnectionEvent(timestamp=now, type=ConnectionEventType.CONNECTED.value)
            )
        logger.info("Monitoring session started at %.1fms", now)

    def record_response(self, metadata: Mapping[str, Any] | None = None) -> ResponseEvent | None:
        """Record an agent reply; ignored until a session has started."""
        with self._lock:
            if not self._record.started:
                logger.debug("Response before session start ignored")
                return None
            now = self.clock.now()
            event = ResponseEvent(
                timestamp=now,
                latency=self._record.elapsed(now),
                metadata=_as_mapping(metadata),
            )
            self._record.responses.append(event)
            self.record_conversation_flow(
                FlowEventType.RESPONSE_RECEIVED,
                {**event.metadata, "latency": event.latency},
            )
            return event

    def record_connection_event(
        self, event_type: str | ConnectionEventType, details: Mapping[str, Any] | None = None
    ) -> ConnectionEvent:
        with self._lock:
            event = ConnectionEvent(
                timestamp=self.clock.now(),
                type=label(event_type),
                details=_as_mapping(details),
            )
            self._record.connection_events.append(event)
            flow_type = _FLOW_FOR_CONNECTION.get(event.type)
            if flow_type is not None:
                self.record_conversation_flow(
                    flow_type, {"connection_event": event.type, **event.details}
                )
        logger.debug("Connection event: %s", event.type)
        return event

    def record_audio_quality(
        self, rating: int, issues: Iterable[str] = ()
    ) -> bool:
        """Record a 1-10 user rating; returns ``False`` when rejected."""
        if not _valid_rating(rating):
            logger.warning(
                "Audio quality rating must be an integer between %d and %d, got %r",
                MIN_RATING,
                MAX_RATING,
                rating,
            )
            return False
        tags = _issue_tags(issues)
        with self._lock:
            self._record.audio_quality.append(
                AudioQualityEvent(
                    timestamp=self.clock.now(),
                    rating=int(rating),
                    issues=tags,
                    response_index=len(self._record.responses),
                )
            )
        return True

    def record_conversation_flow(
        self, flow_type: str | FlowEventType, data: Mapping[str, Any] | None = None
    ) -> ConversationFlowEvent:
        with self._lock:
            now = self.clock.now()
            event = ConversationFlowEvent(
                timestamp=now,
                type=label(flow_type),
                data=_as_mapping(data),
                session_time=self._record.elapsed(now),
            )
            self._record.conversation_flow.append(event)
            return event

    def record_network_condition(
        self, condition: str, details: Mapping[str, Any] | None = None
    ) -> NetworkConditionEvent:
        with self._lock:
            now = self.clock.now()
            event = NetworkConditionEvent(
                timestamp=now,
                condition=label(condition),
                details=_as_mapping(details),
                session_time=self._record.elapsed(now),
            )
            self._record.network_conditions.append(event)
        logger.debug("Network condition: %s", event.condition)
        return event

    def record_error(
        self, error: Any, context: Mapping[str, Any] | None = None
    ) -> ErrorEvent:
        """Record an upstream failure. Accepts exceptions, mappings or strings."""
        message, code = _describe_error(error)
        with self._lock:
            now = self.clock.now()
            event = ErrorEvent(
                timestamp=now,
                message=message,
                code=code,
                context=_as_mapping(context),
                session_time=self._record.elapsed(now),
            )
            self._record.errors.append(event)
            self.record_conversation_flow(
                FlowEventType.ERROR_OCCURRED, {"message": message, "code": code}
            )
        logger.info("Session error recorded: %s (code=%s)", message, code)
        return event

    # -- accessors -----------------------------------------------------------

    def get_session_duration(self) -> float:
        with self._lock:
            return self._record.elapsed(self.clock.now())

    def get_latency_metrics(self) -> dict[str, Any] | None:
        with self._lock:
            return self.evaluation.latency(self._record)

    def get_connection_metrics(self) -> dict[str, Any] | None:
        with self._lock:
            return self.evaluation.connection(self._record, self.clock.now())

    def get_audio_quality_metrics(self) -> dict[str, Any] | None:
        with self._lock:
            return self.evaluation.audio_quality(self._record)

    def get_conversation_flow_metrics(self) -> dict[str, Any] | None:
        with self._lock:
            return self.evaluation.conversation_flow(self._record)

    def get_prd_assessment(self) -> dict[str, Any]:
        with self._lock:
            return self.evaluation.prd_assessment(self._record, self.clock.now())

    def is_performance_acceptable(self) -> dict[str, Any]:
        with self._lock:
            return self.evaluation.performance(self._record)

    def get_metrics_report(self) -> dict[str, Any]:
        with self._lock:
            now = self.clock.now()
            report = self.evaluation.evaluate(self._record, now)
            latency = report.latency
            return {
                "session_duration": self._record.elapsed(now),
                "total_responses": len(self._record.responses),
                "average_latency": latency["average"] if latency is not None else None,
                "error_count": len(self._record.errors),
                "latency": report.latency,
                "connection": report.connection,
                "audio_quality": report.audio_quality,
                "conversation_flow": report.conversation_flow,
                "prd_assessment": report.prd_assessment,
                "performance": report.performance,
                "export_data": self._export(now),
            }

    def get_export_data(self) -> dict[str, Any]:
        """Every raw event since the last session start, unsummarised."""
        with self._lock:
            return self._export(self.clock.now())

    def _export(self, now: float) -> dict[str, Any]:
        return {
            "session_metadata": {
                "start": self._record.session_start,
                "end": now,
                "duration": self._record.elapsed(now),
            },
            **self._record.collections(),
        }


class PerformanceMonitorView:
    """Accessor-only wrapper around a ``PerformanceMonitor``."""

    __slots__ = ("_monitor",)

    def __init__(self, monitor: PerformanceMonitor) -> None:
        self._monitor = monitor

    def get_session_duration(self) -> float:
        return self._monitor.get_session_duration()

    def get_latency_metrics(self) -> dict[str, Any] | None:
        return self._monitor.get_latency_metrics()

    def get_connection_metrics(self) -> dict[str, Any] | None:
        return self._monitor.get_connection_metrics()

    def get_audio_quality_metrics(self) -> dict[str, Any] | None:
        return self._monitor.get_audio_quality_metrics()

    def get_conversation_flow_metrics(self) -> dict[str, Any] | None:
        return self._monitor.get_conversation_flow_metrics()

    def get_prd_assessment(self) -> dict[str, Any]:
        return self._monitor.get_prd_assessment()

    def is_performance_acceptable(self) -> dict[str, Any]:
        return self._monitor.is_performance_acceptable()

    def get_metrics_report(self) -> dict[str, Any]:
        return self._monitor.get_metrics_report()

    def get_export_data(self) -> dict[str, Any]:
        return self._monitor.get_export_data()


# ---------------------------------------------------------------------------
# helpers
# ---------------------------------------------------------------------------

def _as_mapping(value: Any) -> dict[str, Any]:
    """Copy a mapping; wrap anything else under ``"value"``."""
    if value is None:
        return {}
    if isinstance(value, Mapping):
        return dict(value)
    return {"value": value}


def _issue_tags(issues: Any) -> list[str]:
    """Ordered, de-duplicated tag list from one tag or an iterable of tags."""
    if issues is None:
        return []
    if isinstance(issues, (str, enum.Enum)):
        issues = [issues]
    elif not isinstance(issues, Iterable):
        logger.warning("Ignoring audio issues that are not a tag list: %r", issues)
        return []
    tags: list[str] = []
    for issue in issues:
        tag = label(issue)
        if tag not in tags:
            tags.append(tag)
    return tags


def _valid_rating(rating: Any) -> bool:
    if isinstance(rating, bool) or not isinstance(rating, numbers.Integral):
        return False
    return MIN_RATING <= rating <= MAX_RATING


def _describe_error(error: Any) -> tuple[str, Any]:
    """Pull a message and optional code out of any error-like value."""
    if error is None:
        return UNKNOWN_ERROR, None
    if isinstance(error, str):
        return error or UNKNOWN_ERROR, None
    if isinstance(error, Mapping):
        return error.get("message") or UNKNOWN_ERROR, error.get("code")

    message = getattr(error, "message", None)
    if not message and isinstance(error, BaseException):
        message = str(error)
    code = getattr(error, "code", None)
    return str(message) if message else UNKNOWN_ERROR, code
