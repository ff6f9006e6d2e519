"""Compliance assessment against the product performance targets."""

from __future__ import annotations

from typing import Any

from ..config import RatingTiers, TargetThresholds

FULLY_COMPLIANT = "fully_compliant"
MOSTLY_COMPLIANT = "mostly_compliant"
PARTIALLY_COMPLIANT = "partially_compliant"
NON_COMPLIANT = "non_compliant"
INSUFFICIENT_DATA = "insufficient_data"

# (minimum score, status, message), checked top to bottom
STATUS_LEVELS: list[tuple[float, str, str]] = [
    (1.0, FULLY_COMPLIANT, "All performance targets are met."),
    (2 / 3, MOSTLY_COMPLIANT, "Most performance targets are met; one needs attention."),
    (1 / 3, PARTIALLY_COMPLIANT, "Only some performance targets are met."),
    (0.0, NON_COMPLIANT, "No performance targets are met."),
]

INSUFFICIENT_DATA_MESSAGE = (
    "Not enough data yet: latency, connection, audio quality and conversation "
    "flow metrics are all required for an assessment."
)


class ComplianceAssessor:
    """
    Combine the metric groups into a compliance verdict.

    Three targets are checked (average latency, uptime, average audio
    rating); the score is the fraction met.
    """

    def __init__(
        self,
        targets: TargetThresholds | None = None,
        tiers: RatingTiers | None = None,
    ) -> None:
        self.targets = targets or TargetThresholds()
        self.tiers = tiers or RatingTiers()

    def assess(
        self,
        latency: dict[str, Any] | None,
        connection: dict[str, Any] | None,
        audio: dict[str, Any] | None,
        flow: dict[str, Any] | None,
    ) -> dict[str, Any]:
        if latency is None or connection is None or audio is None or flow is None:
            return {"status": INSUFFICIENT_DATA, "message": INSUFFICIENT_DATA_MESSAGE}

        t = self.targets
        average_latency = latency["average"]
        uptime = connection["uptime_percentage"]
        audio_average = audio["average_rating"]

        dimensions = {
            "latency": {
                "compliant": average_latency < t.max_average_latency_ms,
                "target": f"< {t.max_average_latency_ms:g}ms",
                "actual": f"{average_latency:.0f}ms",
                "rating": self.tiers.latency.classify(average_latency),
            },
            "connection": {
                "compliant": uptime >= t.min_uptime,
                "target": f">= {t.min_uptime * 100:g}% uptime",
                "actual": f"{uptime * 100:.1f}%",
                "rating": connection["stability_rating"],
            },
            "audio_quality": {
                "compliant": audio_average >= t.min_audio_rating,
                "target": f">= {t.min_audio_rating:g}/10",
                "actual": f"{audio_average:.1f}/10",
                "rating": audio["overall_rating"],
            },
        }

        met = sum(1 for d in dimensions.values() if d["compliant"])
        score = met / len(dimensions)
        status, message = self._status(score)

        return {
            "status": status,
            "message": message,
            "compliance_score": score,
            "targets_met": met,
            "targets_total": len(dimensions),
            **dimensions,
        }

    @staticmethod
    def _status(score: float) -> tuple[str, str]:
        for minimum, status, message in STATUS_LEVELS:
            if score >= minimum:
                return status, message
        return NON_COMPLIANT, STATUS_LEVELS[-1][2]
