"""
Threshold configuration.

Two separate threshold sets are kept on purpose:

* ``TargetThresholds`` decide compliance (pass/fail against the product
  targets).
* ``RatingTiers`` only choose the descriptive label
  (Excellent / Good / Acceptable / Poor) shown next to a metric.

Some numbers coincide (uptime 0.95 is both the target and the "Good" tier)
but they are configured independently.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Mapping

import yaml

logger = logging.getLogger(__name__)

EXCELLENT = "Excellent"
GOOD = "Good"
ACCEPTABLE = "Acceptable"
POOR = "Poor"

ENV_PREFIX = "VOICE_MONITOR_"


@dataclass(frozen=True)
class Tier:
    """Three cut-offs that split a metric into four labels."""

    excellent: float
    good: float
    acceptable: float
    higher_is_better: bool = True

    def classify(self, value: float) -> str:
        if self.higher_is_better:
            if value >= self.excellent:
                return EXCELLENT
            if value >= self.good:
                return GOOD
            if value >= self.acceptable:
                return ACCEPTABLE
            return POOR
        if value < self.excellent:
            return EXCELLENT
        if value < self.good:
            return GOOD
        if value < self.acceptable:
            return ACCEPTABLE
        return POOR

    def validate(self, name: str) -> None:
        ordered = (
            self.excellent >= self.good >= self.acceptable
            if self.higher_is_better
            else self.excellent <= self.good <= self.acceptable
        )
        if not ordered:
            raise ValueError(f"Tier '{name}' cut-offs are not monotonic: {self}")


@dataclass(frozen=True)
class TargetThresholds:
    """Compliance targets for a voice session."""

    max_average_latency_ms: float = 1500.0  # strict: average must be below
    min_uptime: float = 0.95
    min_audio_rating: float = 5.0
    max_error_rate: float = 0.05  # strict: rate must be below

    def validate(self) -> None:
        if self.max_average_latency_ms <= 0:
            raise ValueError("max_average_latency_ms must be positive")
        if not 0.0 <= self.min_uptime <= 1.0:
            raise ValueError("min_uptime must be a fraction between 0 and 1")
        if not 1.0 <= self.min_audio_rating <= 10.0:
            raise ValueError("min_audio_rating must be between 1 and 10")
        if not 0.0 <= self.max_error_rate <= 1.0:
            raise ValueError("max_error_rate must be a fraction between 0 and 1")


@dataclass(frozen=True)
class RatingTiers:
    """Descriptive-label cut-offs for every metric group."""

    latency: Tier = Tier(800, 1200, 1500, higher_is_better=False)
    consistency: Tier = Tier(0.10, 0.20, 0.30, higher_is_better=False)
    connection: Tier = Tier(0.99, 0.95, 0.90)
    audio: Tier = Tier(9, 7, 5)
    conversation_health: Tier = Tier(0.05, 0.10, 0.20, higher_is_better=False)
    clear_rating: int = 7  # ratings at or above count as a clear response

    def validate(self) -> None:
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, Tier):
                value.validate(f.name)


@dataclass(frozen=True)
class MonitorConfig:
    targets: TargetThresholds = field(default_factory=TargetThresholds)
    tiers: RatingTiers = field(default_factory=RatingTiers)

    def __post_init__(self) -> None:
        self.targets.validate()
        self.tiers.validate()

    # -- loading -------------------------------------------------------------

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> MonitorConfig:
        data = dict(data or {})
        data = data.get("monitor", data)

        targets = TargetThresholds()
        raw_targets = data.get("targets") or {}
        if raw_targets:
            targets = replace(targets, **_known(TargetThresholds, raw_targets))

        tiers = RatingTiers()
        raw_tiers = data.get("tiers") or {}
        overrides: dict[str, Any] = {}
        for name, value in _known(RatingTiers, raw_tiers).items():
            if isinstance(value, Mapping):
                overrides[name] = replace(getattr(tiers, name), **_known(Tier, value))
            else:
                overrides[name] = value
        if overrides:
            tiers = replace(tiers, **overrides)

        return cls(targets=targets, tiers=tiers)

    @classmethod
    def from_yaml(cls, path: str | Path) -> MonitorConfig:
        path = Path(path)
        with open(path) as fh:
            data = yaml.safe_load(fh)
        if data is not None and not isinstance(data, Mapping):
            raise ValueError(f"{path}: expected a mapping at the top level")
        logger.debug("Loaded monitor config from %s", path)
        return cls.from_dict(data)

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        base: MonitorConfig | None = None,
    ) -> MonitorConfig:
        """Apply ``VOICE_MONITOR_*`` overrides on top of *base*."""
        environ = os.environ if environ is None else environ
        base = base or cls()
        overrides: dict[str, float] = {}

        value = _env_float(environ, "MAX_LATENCY_MS")
        if value is not None:
            overrides["max_average_latency_ms"] = value
        value = _env_float(environ, "MIN_UPTIME_PERCENT")
        if value is not None:
            overrides["min_uptime"] = value / 100
        value = _env_float(environ, "MIN_AUDIO_RATING")
        if value is not None:
            overrides["min_audio_rating"] = value
        value = _env_float(environ, "MAX_ERROR_RATE")
        if value is not None:
            overrides["max_error_rate"] = value

        if not overrides:
            return base
        return cls(targets=replace(base.targets, **overrides), tiers=base.tiers)


def _known(cls: type, raw: Mapping[str, Any]) -> dict[str, Any]:
    names = {f.name for f in fields(cls)}
    unknown = set(raw) - names
    if unknown:
        logger.warning("Ignoring unknown %s keys: %s", cls.__name__, sorted(unknown))
    return {k: v for k, v in raw.items() if k in names}


def _env_float(environ: Mapping[str, str], name: str) -> float | None:
    raw = environ.get(ENV_PREFIX + name)
    if raw is None or raw.strip() == "":
        return None
    try:
        return float(raw)
    except ValueError as exc:
        raise ValueError(f"{ENV_PREFIX}{name} must be a number, got {raw!r}") from exc
