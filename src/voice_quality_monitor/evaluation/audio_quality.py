"""Audio quality scorer built from user ratings."""

from __future__ import annotations

from collections import Counter
from typing import Any, Sequence

from ..config import RatingTiers
from ..core.events import AudioQualityEvent


class AudioQualityScorer:

    def __init__(self, tiers: RatingTiers | None = None) -> None:
        self.tiers = tiers or RatingTiers()

    def score(self, ratings: Sequence[AudioQualityEvent]) -> dict[str, Any] | None:
        if not ratings:
            return None

        values = [r.rating for r in ratings]
        average = sum(values) / len(values)
        clear = sum(1 for v in values if v >= self.tiers.clear_rating)

        issue_counts: Counter[str] = Counter()
        for r in ratings:
            issue_counts.update(r.issues)

        return {
            "average_rating": average,
            "min_rating": min(values),
            "max_rating": max(values),
            "total_ratings": len(values),
            "issue_counts": dict(issue_counts),
            "clear_responses_percentage": clear / len(values) * 100,
            "overall_rating": self.tiers.audio.classify(average),
        }
