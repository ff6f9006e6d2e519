"""Regression detection: compare session reports against a baseline."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

# metric -> True when a larger value is better
METRIC_DIRECTIONS: dict[str, bool] = {
    "average_latency": False,
    "latency_p95": False,
    "error_rate": False,
    "uptime": True,
    "audio_average": True,
    "compliance_score": True,
}


@dataclass
class RegressionResult:
    """Outcome of a regression check."""

    has_regression: bool
    regressions: list[dict[str, Any]] = field(default_factory=list)
    improvements: list[dict[str, Any]] = field(default_factory=list)
    unchanged: list[str] = field(default_factory=list)


class RegressionDetector:
    """
    Compare current metrics reports against a stored baseline to detect
    regressions and improvements.

    Baselines are stored as JSON files so they can be committed to
    version control.
    """

    def __init__(
        self,
        baseline_dir: str | Path = ".baselines",
        threshold: float = 0.05,
    ):
        self.baseline_dir = Path(baseline_dir)
        self.threshold = threshold  # relative change that counts

    def check(
        self,
        reports: list[dict[str, Any]],
        baseline_name: str = "latest",
    ) -> RegressionResult:
        """Compare *reports* against the stored baseline."""
        baseline = self._load_baseline(baseline_name)
        if baseline is None:
            logger.info("No baseline '%s' found; saving current as baseline", baseline_name)
            self._save_baseline(reports, baseline_name)
            return RegressionResult(has_regression=False)

        current_metrics = self.extract_metrics(reports)
        regressions: list[dict[str, Any]] = []
        improvements: list[dict[str, Any]] = []
        unchanged: list[str] = []

        for key, current_value in current_metrics.items():
            baseline_value = baseline.get(key)
            if baseline_value is None:
                continue

            if baseline_value == 0:
                unchanged.append(key)
                continue

            delta = (current_value - baseline_value) / abs(baseline_value)
            if not METRIC_DIRECTIONS.get(key, True):
                delta = -delta  # lower is better

            entry = {
                "metric": key,
                "baseline": baseline_value,
                "current": current_value,
                "delta_pct": round(delta * 100, 2),
            }
            if delta < -self.threshold:
                regressions.append(entry)
            elif delta > self.threshold:
                improvements.append(entry)
            else:
                unchanged.append(key)

        return RegressionResult(
            has_regression=len(regressions) > 0,
            regressions=regressions,
            improvements=improvements,
            unchanged=unchanged,
        )

    def update_baseline(
        self,
        reports: list[dict[str, Any]],
        baseline_name: str = "latest",
    ) -> Path:
        """Save current reports as the new baseline."""
        return self._save_baseline(reports, baseline_name)

    # -- internals -----------------------------------------------------------

    @staticmethod
    def extract_metrics(reports: list[dict[str, Any]]) -> dict[str, float]:
        """Average each scalar metric over the sessions that have it."""
        samples: dict[str, list[float]] = {key: [] for key in METRIC_DIRECTIONS}
        for report in reports:
            latency = report.get("latency")
            if latency is not None:
                samples["average_latency"].append(latency["average"])
                samples["latency_p95"].append(latency["p95"])
            connection = report.get("connection")
            if connection is not None:
                samples["uptime"].append(connection["uptime_percentage"])
            audio = report.get("audio_quality")
            if audio is not None:
                samples["audio_average"].append(audio["average_rating"])
            performance = report.get("performance")
            if performance:
                samples["error_rate"].append(performance["error_rate"])
            score = (report.get("prd_assessment") or {}).get("compliance_score")
            if score is not None:
                samples["compliance_score"].append(score)

        return {key: sum(vals) / len(vals) for key, vals in samples.items() if vals}

    def _load_baseline(self, name: str) -> dict[str, float] | None:
        path = self.baseline_dir / f"{name}.json"
        if not path.exists():
            return None
        with open(path) as fh:
            return json.load(fh)

    def _save_baseline(self, reports: list[dict[str, Any]], name: str) -> Path:
        self.baseline_dir.mkdir(parents=True, exist_ok=True)
        path = self.baseline_dir / f"{name}.json"
        metrics = self.extract_metrics(reports)
        with open(path, "w") as fh:
            json.dump(metrics, fh, indent=2)
        return path
