"""Multi-dimensional evaluation of a recorded session."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any

from ..config import MonitorConfig
from ..core.results import SessionRecord
from .audio_quality import AudioQualityScorer
from .compliance import ComplianceAssessor
from .connection import ConnectionScorer
from .conversation_flow import ConversationFlowScorer
from .latency import LatencyScorer


@dataclass
class EvaluationReport:
    """Derived metrics for every dimension; ``None`` means no data yet."""

    latency: dict[str, Any] | None = None
    connection: dict[str, Any] | None = None
    audio_quality: dict[str, Any] | None = None
    conversation_flow: dict[str, Any] | None = None
    prd_assessment: dict[str, Any] = field(default_factory=dict)
    performance: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


class EvaluationFramework:
    """
    Runs every scorer over a ``SessionRecord``.

    All scorers share one ``MonitorConfig`` so compliance targets and label
    tiers cannot drift apart between dimensions.
    """

    def __init__(self, config: MonitorConfig | None = None) -> None:
        self.config = config or MonitorConfig()
        tiers = self.config.tiers
        self.scorers = {
            "latency": LatencyScorer(tiers),
            "connection": ConnectionScorer(tiers),
            "audio_quality": AudioQualityScorer(tiers),
            "conversation_flow": ConversationFlowScorer(tiers),
        }
        self.assessor = ComplianceAssessor(self.config.targets, tiers)

    # -- individual dimensions -----------------------------------------------

    def latency(self, record: SessionRecord) -> dict[str, Any] | None:
        return self.scorers["latency"].score(record.latencies)

    def connection(self, record: SessionRecord, now: float) -> dict[str, Any] | None:
        return self.scorers["connection"].score(
            record.connection_events, record.elapsed(now)
        )

    def audio_quality(self, record: SessionRecord) -> dict[str, Any] | None:
        return self.scorers["audio_quality"].score(record.audio_quality)

    def conversation_flow(self, record: SessionRecord) -> dict[str, Any] | None:
        return self.scorers["conversation_flow"].score(
            record.conversation_flow, len(record.responses)
        )

    def prd_assessment(self, record: SessionRecord, now: float) -> dict[str, Any]:
        return self.assessor.assess(
            self.latency(record),
            self.connection(record, now),
            self.audio_quality(record),
            self.conversation_flow(record),
        )

    def performance(self, record: SessionRecord) -> dict[str, Any]:
        """Coarse pass/fail on average latency and error rate."""
        targets = self.config.targets
        latency = self.latency(record)
        average = latency["average"] if latency is not None else None

        latency_ok = average < targets.max_average_latency_ms if average is not None else None
        error_rate = len(record.errors) / max(len(record.responses), 1)
        error_rate_ok = error_rate < targets.max_error_rate

        return {
            "latency_ok": latency_ok,
            "error_rate": error_rate,
            "error_rate_ok": error_rate_ok,
            "overall": bool(latency_ok) and error_rate_ok,
        }

    # -- everything ----------------------------------------------------------

    def evaluate(self, record: SessionRecord, now: float) -> EvaluationReport:
        report = EvaluationReport(
            latency=self.latency(record),
            connection=self.connection(record, now),
            audio_quality=self.audio_quality(record),
            conversation_flow=self.conversation_flow(record),
            performance=self.performance(record),
        )
        report.prd_assessment = self.assessor.assess(
            report.latency,
            report.connection,
            report.audio_quality,
            report.conversation_flow,
        )
        return report
