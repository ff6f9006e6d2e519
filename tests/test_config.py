"""Tests for threshold configuration."""

from __future__ import annotations

from pathlib import Path

import pytest

from voice_quality_monitor.config import MonitorConfig, RatingTiers, TargetThresholds, Tier
from voice_quality_monitor.core.monitor import PerformanceMonitor


class TestDefaults:

    def test_targets(self):
        targets = MonitorConfig().targets
        assert targets.max_average_latency_ms == 1500
        assert targets.min_uptime == 0.95
        assert targets.min_audio_rating == 5
        assert targets.max_error_rate == 0.05

    def test_tiers(self):
        tiers = RatingTiers()
        assert tiers.latency.classify(1199) == "Good"
        assert tiers.connection.classify(0.95) == "Good"
        assert tiers.audio.classify(5) == "Acceptable"
        assert tiers.conversation_health.classify(0.19) == "Acceptable"


class TestValidation:

    def test_bad_target(self):
        with pytest.raises(ValueError):
            MonitorConfig(targets=TargetThresholds(min_uptime=95))

    def test_non_monotonic_tier(self):
        with pytest.raises(ValueError):
            MonitorConfig(tiers=RatingTiers(audio=Tier(5, 7, 9)))


class TestYAML:

    def test_from_yaml(self, tmp_path: Path):
        path = tmp_path / "monitor.yaml"
        path.write_text(
            "monitor:\n"
            "  targets:\n"
            "    max_average_latency_ms: 1000\n"
            "  tiers:\n"
            "    latency: {excellent: 300, good: 600}\n"
            "    clear_rating: 8\n"
        )
        config = MonitorConfig.from_yaml(path)
        assert config.targets.max_average_latency_ms == 1000
        assert config.targets.min_uptime == 0.95
        assert config.tiers.latency == Tier(300, 600, 1500, higher_is_better=False)
        assert config.tiers.clear_rating == 8

    def test_empty_file(self, tmp_path: Path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert MonitorConfig.from_yaml(path) == MonitorConfig()

    def test_not_a_mapping(self, tmp_path: Path):
        path = tmp_path / "list.yaml"
        path.write_text("- 1\n- 2\n")
        with pytest.raises(ValueError):
            MonitorConfig.from_yaml(path)

    def test_unknown_keys_ignored(self, caplog):
        config = MonitorConfig.from_dict({"targets": {"bogus": 1, "min_audio_rating": 6}})
        assert config.targets.min_audio_rating == 6
        assert "bogus" in caplog.text


class TestEnvironment:

    def test_overrides(self):
        config = MonitorConfig.from_env(
            {
                "VOICE_MONITOR_MAX_LATENCY_MS": "1200",
                "VOICE_MONITOR_MIN_UPTIME_PERCENT": "99",
                "VOICE_MONITOR_MIN_AUDIO_RATING": "7",
                "VOICE_MONITOR_MAX_ERROR_RATE": "0.01",
            }
        )
        assert config.targets == TargetThresholds(1200, 0.99, 7, 0.01)

    def test_no_overrides_returns_base(self):
        base = MonitorConfig(targets=TargetThresholds(max_average_latency_ms=900))
        assert MonitorConfig.from_env({"VOICE_MONITOR_MAX_LATENCY_MS": " "}, base) is base

    def test_bad_number(self):
        with pytest.raises(ValueError, match="VOICE_MONITOR_MAX_LATENCY_MS"):
            MonitorConfig.from_env({"VOICE_MONITOR_MAX_LATENCY_MS": "fast"})

    def test_monitor_uses_config(self, clock):
        config = MonitorConfig.from_env({"VOICE_MONITOR_MAX_LATENCY_MS": "200"})
        monitor = PerformanceMonitor(config=config, clock=clock)
        monitor.record_session_start()
        clock.advance_to(300)
        monitor.record_response()
        assert monitor.is_performance_acceptable()["latency_ok"] is False
