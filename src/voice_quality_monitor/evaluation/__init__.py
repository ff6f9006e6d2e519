from .framework import EvaluationFramework, EvaluationReport
from .latency import LatencyScorer
from .connection import ConnectionScorer
from .audio_quality import AudioQualityScorer
from .conversation_flow import ConversationFlowScorer
from .compliance import ComplianceAssessor

__all__ = [
    "EvaluationFramework",
    "EvaluationReport",
    "LatencyScorer",
    "ConnectionScorer",
    "AudioQualityScorer",
    "ConversationFlowScorer",
    "ComplianceAssessor",
]
