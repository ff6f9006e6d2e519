"""Connection scorer: uptime from paired disconnect/reconnect events."""

from __future__ import annotations

from typing import Any, Sequence

from ..config import RatingTiers
from ..core.events import ConnectionEvent, ConnectionEventType


class ConnectionScorer:
    """
    Derive uptime and reconnection statistics.

    The i-th ``disconnected`` event is paired with the i-th ``reconnected``
    event in arrival order. A disconnect without its reconnect contributes
    no downtime; events arriving out of alternation are paired the same way
    and can therefore be mispaired.
    """

    def __init__(self, tiers: RatingTiers | None = None) -> None:
        self.tiers = tiers or RatingTiers()

    def score(
        self, events: Sequence[ConnectionEvent], session_time: float
    ) -> dict[str, Any] | None:
        if not events:
            return None

        drops = [e for e in events if e.type == ConnectionEventType.DISCONNECTED.value]
        recoveries = [e for e in events if e.type == ConnectionEventType.RECONNECTED.value]

        reconnection_times = [
            back.timestamp - down.timestamp for down, back in zip(drops, recoveries)
        ]
        total_downtime = sum(reconnection_times)

        if session_time > 0:
            uptime = (session_time - total_downtime) / session_time
        else:
            uptime = 1.0

        return {
            "total_session_time": session_time,
            "total_downtime": total_downtime,
            "uptime_percentage": uptime,
            "disconnections": len(drops),
            "reconnections": len(recoveries),
            "unpaired_disconnections": max(0, len(drops) - len(recoveries)),
            "reconnection_times": reconnection_times,
            "average_reconnection_time": (
                total_downtime / len(reconnection_times) if reconnection_times else 0.0
            ),
            "max_reconnection_time": max(reconnection_times, default=0.0),
            "stability_rating": self.tiers.connection.classify(uptime),
        }
