"""
Voice Quality Monitor
=====================

Client-side instrumentation for real-time voice conversation sessions:
latency, connection stability, audio quality and conversation health,
plus a compliance verdict against fixed performance targets.

Quick start::

    from voice_quality_monitor import PerformanceMonitor, SessionEventRelay

    monitor = PerformanceMonitor()
    relay = SessionEventRelay(monitor)
    # hand relay.on_connect / on_disconnect / on_message / on_error
    # to the conversation provider, then at any time:
    report = monitor.get_metrics_report()
"""

from .config import MonitorConfig, RatingTiers, TargetThresholds, Tier
from .core.clock import Clock, ManualClock, MonotonicClock
from .core.events import (
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
from .core.results import SessionRecord
from .core.monitor import PerformanceMonitor, PerformanceMonitorView
from .core.orchestrator import SessionReplayer

from .evaluation.framework import EvaluationFramework, EvaluationReport
from .evaluation.latency import LatencyScorer
from .evaluation.connection import ConnectionScorer
from .evaluation.audio_quality import AudioQualityScorer
from .evaluation.conversation_flow import ConversationFlowScorer
from .evaluation.compliance import ComplianceAssessor

from .adapters.session import SessionEventRelay

from .simulation.network import NetworkSimulator, classify_network

from .reporting.html_report import HTMLReportGenerator
from .reporting.json_export import load_export, write_export
from .reporting.junit import JUnitXMLWriter
from .reporting.regression import RegressionDetector

__version__ = "0.1.0"

__all__ = [
    # Config
    "MonitorConfig",
    "RatingTiers",
    "TargetThresholds",
    "Tier",
    # Core
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
    "PerformanceMonitor",
    "PerformanceMonitorView",
    "SessionReplayer",
    # Evaluation
    "EvaluationFramework",
    "EvaluationReport",
    "LatencyScorer",
    "ConnectionScorer",
    "AudioQualityScorer",
    "ConversationFlowScorer",
    "ComplianceAssessor",
    # Adapters
    "SessionEventRelay",
    # Simulation
    "NetworkSimulator",
    "classify_network",
    # Reporting
    "HTMLReportGenerator",
    "JUnitXMLWriter",
    "RegressionDetector",
    "load_export",
    "write_export",
]
