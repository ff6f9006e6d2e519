"""Tests for replaying YAML session timelines."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from voice_quality_monitor.core.orchestrator import SessionReplayer


FLAKY_SESSION = """\
scenario:
  name: flaky_wifi
  end_at: 2s
  timeline:
    - at: 0s
      action: start_session
    - at: 100ms
      action: response
      message_length: 42
    - at: 200ms
      action: response
    - at: 1s
      action: disconnect
    - at: 1.4s
      action: reconnect
    - at: 1.5s
      action: rate_audio
      rating: 8
      issues: [delay]
    - at: 1.6s
      action: network
      condition: good
      details: {speed: fast}
    - at: 1.7s
      action: error
      message: tts timeout
      code: 504
"""


class TestSessionReplayer:

    def test_replay_from_file(self, tmp_path: Path):
        path = tmp_path / "flaky.yaml"
        path.write_text(FLAKY_SESSION)

        monitor = SessionReplayer(path).run()
        report = monitor.get_metrics_report()

        assert report["session_duration"] == 2000
        assert report["total_responses"] == 2
        assert report["average_latency"] == pytest.approx(150)
        assert report["connection"]["total_downtime"] == 400
        assert report["connection"]["uptime_percentage"] == pytest.approx(0.8)
        assert report["audio_quality"]["issue_counts"] == {"delay": 1}
        assert report["error_count"] == 1
        assert report["prd_assessment"]["status"] == "mostly_compliant"

        export = report["export_data"]
        assert export["responses"][0]["metadata"] == {"message_length": 42}
        assert export["errors"][0]["code"] == 504
        assert export["network_conditions"][0]["details"] == {"speed": "fast"}

    def test_replay_from_dict_orders_by_time(self):
        scenario = {
            "timeline": [
                {"at": 300, "action": "response"},
                {"at": 0, "action": "start_session"},
                {"at": 300, "action": "response"},
                {"at": 100, "action": "response"},
            ]
        }
        monitor = SessionReplayer().run(scenario)
        latencies = [r["latency"] for r in monitor.get_export_data()["responses"]]
        assert latencies == [100, 300, 300]

    def test_network_drop_and_profile(self):
        scenario = {
            "timeline": [
                {"at": "0s", "action": "start_session"},
                {"at": "1s", "action": "network", "profile": "bad_wifi"},
                {"at": "2s", "action": "network_drop", "duration_ms": 250},
            ],
            "end_at": "10s",
        }
        replayer = SessionReplayer()
        monitor = replayer.run(scenario)
        connection = monitor.get_connection_metrics()
        assert connection["reconnection_times"] == [250]
        assert monitor.get_export_data()["network_conditions"][0]["condition"] == "poor"
        assert replayer.clock.now() == 10_000

    def test_unknown_action_is_logged(self, caplog):
        with caplog.at_level(logging.WARNING):
            SessionReplayer().run({"timeline": [{"at": 0, "action": "teleport"}]})
        assert "Unknown action: teleport" in caplog.text

    def test_invalid_rating_does_not_stop_replay(self):
        scenario = {
            "timeline": [
                {"at": 0, "action": "start_session"},
                {"at": 10, "action": "rate_audio", "rating": 42},
                {"at": 20, "action": "rate_audio", "rating": 6},
            ]
        }
        monitor = SessionReplayer().run(scenario)
        assert monitor.get_audio_quality_metrics()["total_ratings"] == 1

    def test_failing_event_does_not_stop_replay(self, caplog):
        scenario = {
            "timeline": [
                {"at": 0, "action": "start_session"},
                {"at": 1000, "action": "network_drop", "duration_ms": "250"},
                {"at": 3000, "action": "response"},
            ]
        }
        with caplog.at_level(logging.ERROR):
            monitor = SessionReplayer().run(scenario)
        assert "Error dispatching event" in caplog.text
        assert [r["latency"] for r in monitor.get_export_data()["responses"]] == [3000]

    @pytest.mark.parametrize("content", ["", "scenario:\n", "scenario:\n  timeline:\n"])
    def test_empty_scenario_file(self, tmp_path: Path, content):
        path = tmp_path / "empty.yaml"
        path.write_text(content)
        monitor = SessionReplayer(path).run()
        assert monitor.session_start is None
        assert monitor.get_latency_metrics() is None

    @pytest.mark.parametrize(
        "value, expected",
        [("2.5s", 2500.0), ("200ms", 200.0), (750, 750.0), ("30", 30.0)],
    )
    def test_parse_time(self, value, expected):
        assert SessionReplayer._parse_time(value) == expected
