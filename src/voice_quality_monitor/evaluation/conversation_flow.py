"""Conversation flow scorer: error and connection-issue rates per exchange."""

from __future__ import annotations

from typing import Any, Sequence

from ..config import RatingTiers
from ..core.events import ConversationFlowEvent, FlowEventType


class ConversationFlowScorer:

    def __init__(self, tiers: RatingTiers | None = None) -> None:
        self.tiers = tiers or RatingTiers()

    def score(
        self, flow: Sequence[ConversationFlowEvent], total_exchanges: int
    ) -> dict[str, Any] | None:
        """Rates are computed against *total_exchanges* (the response count)."""
        if not flow:
            return None

        errors = sum(1 for e in flow if e.type == FlowEventType.ERROR_OCCURRED.value)
        issues = sum(
            1
            for e in flow
            if e.type
            in (FlowEventType.CONNECTION_LOST.value, FlowEventType.CONNECTION_RESTORED.value)
        )

        error_rate = errors / total_exchanges if total_exchanges else 0.0
        issue_rate = issues / total_exchanges if total_exchanges else 0.0

        return {
            "total_exchanges": total_exchanges,
            "total_flow_events": len(flow),
            "error_count": errors,
            "error_rate": error_rate,
            "connection_issues": issues,
            "connection_issue_rate": issue_rate,
            # both rates must clear a tier, so the worse one decides
            "conversation_health": self.tiers.conversation_health.classify(
                max(error_rate, issue_rate)
            ),
        }
