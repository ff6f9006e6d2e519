"""Latency scorer: mean, nearest-rank percentiles, spread and consistency."""

from __future__ import annotations

from typing import Any, Sequence

import numpy as np

from ..config import RatingTiers


class LatencyScorer:
    """
    Summarise response latencies (ms since session start).

    Percentiles use nearest rank on the ascending sort with no
    interpolation; the median is the upper median for even counts.
    """

    def __init__(self, tiers: RatingTiers | None = None) -> None:
        self.tiers = tiers or RatingTiers()

    def score(self, latencies: Sequence[float]) -> dict[str, Any] | None:
        if not latencies:
            return None

        values = np.asarray(latencies, dtype=float)
        ordered = np.sort(values)
        n = len(ordered)

        average = float(values.mean())
        std_dev = float(values.std())  # population (ddof=0)

        return {
            "average": average,
            "median": float(ordered[n // 2]),
            "min": float(ordered[0]),
            "max": float(ordered[-1]),
            "p95": float(ordered[self._rank(n, 0.95)]),
            "p99": float(ordered[self._rank(n, 0.99)]),
            "standard_deviation": std_dev,
            "consistency": self._consistency(average, std_dev, n),
            "first_response_time": float(values[0]),
            "sample_count": n,
        }

    # -- internals -----------------------------------------------------------

    @staticmethod
    def _rank(n: int, fraction: float) -> int:
        return min(int(n * fraction), n - 1)

    def _consistency(self, average: float, std_dev: float, n: int) -> str | None:
        if n < 2:
            return None
        if average == 0:
            cv = 0.0 if std_dev == 0 else float("inf")
        else:
            cv = std_dev / average
        return self.tiers.consistency.classify(cv)
