"""Tests for the network simulator."""

from __future__ import annotations

import pytest

from voice_quality_monitor.simulation.network import NetworkSimulator, classify_network


class TestClassifyNetwork:

    @pytest.mark.parametrize(
        "latency, loss, expected",
        [
            (20, 0.0, "excellent"),
            (120, 0.02, "good"),
            (40, 0.10, "poor"),
            (800, 0.0, "very_poor"),
        ],
    )
    def test_labels(self, latency, loss, expected):
        assert classify_network(latency, loss) == expected


class TestNetworkSimulator:

    def test_profile_records_condition(self, started):
        sim = NetworkSimulator(started)
        assert sim.set_profile("elevator") == "very_poor"
        event = started.get_export_data()["network_conditions"][0]
        assert event["condition"] == "very_poor"
        assert event["details"]["profile"] == "elevator"
        assert event["details"]["estimated_latency"] == 500

    def test_unknown_profile_falls_back(self, started, caplog):
        sim = NetworkSimulator(started)
        assert sim.set_profile("moon_base") == "excellent"
        assert sim.profile == "perfect"
        assert "moon_base" in caplog.text

    def test_simulate_disconnect(self, started, clock):
        sim = NetworkSimulator(started, clock)
        clock.advance_to(1000)
        sim.simulate_disconnect(500)
        clock.advance_to(5000)
        metrics = started.get_connection_metrics()
        assert metrics["total_downtime"] == 500
        assert metrics["uptime_percentage"] == pytest.approx(0.9)

    def test_disconnect_needs_clock(self, started):
        with pytest.raises(RuntimeError):
            NetworkSimulator(started).simulate_disconnect(100)
