from .clock import Clock, ManualClock, MonotonicClock
from .events import (
    AudioIssue,
    AudioQualityEvent,
    ConnectionEvent,
    ConnectionEventType,
    ConversationFlowEvent,
    ConversationProvider,
    ErrorEvent,
    FlowEventType,
    NetworkCondition,
    NetworkConditionEvent,
    ResponseEvent,
)
from .results import SessionRecord

# monitor and orchestrator depend on ..evaluation, which imports from this
# package; they are exported from the top-level package instead.

__all__ = [
    "Clock",
    "ManualClock",
    "MonotonicClock",
    "AudioIssue",
    "AudioQualityEvent",
    "ConnectionEvent",
    "ConnectionEventType",
    "ConversationFlowEvent",
    "ConversationProvider",
    "ErrorEvent",
    "FlowEventType",
    "NetworkCondition",
    "NetworkConditionEvent",
    "ResponseEvent",
    "SessionRecord",
]
