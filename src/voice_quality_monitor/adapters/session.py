"""
Relay from a conversational-session provider to the performance monitor.

The provider (an SDK handling audio, transport and dialogue) calls back on
connect, disconnect, message and error. ``SessionEventRelay`` exposes those
callbacks and turns each one into the matching monitor mutation. Pass its
bound methods straight to the provider::

    relay = SessionEventRelay(monitor)
    conversation = sdk.Conversation(
        on_connect=relay.on_connect,
        on_disconnect=relay.on_disconnect,
        on_message=relay.on_message,
        on_error=relay.on_error,
    )
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

from ..core.events import ConnectionEventType
from ..core.monitor import PerformanceMonitor

logger = logging.getLogger(__name__)

_TEXT_KEYS = ("message", "text", "transcript")
_TYPE_KEYS = ("type", "source", "role")


class SessionEventRelay:
    """
    Observe a provider session through its callbacks.

    The first connect starts a monitoring session; a connect after a
    disconnect is recorded as ``reconnected``. ``end_session`` forgets the
    connection state so the next connect starts a fresh session.
    """

    def __init__(self, monitor: PerformanceMonitor) -> None:
        self.monitor = monitor
        self._session_active = False
        self._connected = False
        self._reconnect_attempts = 0

    @property
    def connected(self) -> bool:
        return self._connected

    # -- provider callbacks --------------------------------------------------

    def on_connect(self, details: Mapping[str, Any] | None = None) -> None:
        logger.info("Conversation connected")
        if not self._session_active:
            self.monitor.record_session_start()
            self._session_active = True
        elif not self._connected:
            details = {"attempts": self._reconnect_attempts, **(details or {})}
            self.monitor.record_connection_event(ConnectionEventType.RECONNECTED, details)
        self._connected = True
        self._reconnect_attempts = 0

    def on_disconnect(self, details: Mapping[str, Any] | None = None) -> None:
        logger.info("Conversation disconnected")
        if not self._connected:
            return
        self._connected = False
        self.monitor.record_connection_event(ConnectionEventType.DISCONNECTED, details)

    def on_reconnecting(self, attempt: int | None = None) -> None:
        if attempt is None:
            attempt = self._reconnect_attempts + 1
        self._reconnect_attempts = attempt
        logger.info("Reconnecting (attempt %d)", self._reconnect_attempts)
        self.monitor.record_connection_event(
            ConnectionEventType.RECONNECTING, {"attempt": self._reconnect_attempts}
        )

    def on_message(self, message: Any = None) -> None:
        logger.debug("Message received: %r", message)
        self.monitor.record_response(self.extract_metadata(message))

    def on_error(self, error: Any, context: Mapping[str, Any] | None = None) -> None:
        logger.error("Conversation error: %s", error)
        self.monitor.record_error(error, context)

    def end_session(self) -> None:
        self._session_active = False
        self._connected = False
        self._reconnect_attempts = 0

    # -- helpers -------------------------------------------------------------

    @staticmethod
    def extract_metadata(message: Any) -> dict[str, Any]:
        """Message length, audio duration and message type, where present."""
        if message is None:
            return {}
        if isinstance(message, str):
            return {"message_length": len(message)}
        if not isinstance(message, Mapping):
            return {"message_type": type(message).__name__}

        meta: dict[str, Any] = {}
        for key in _TEXT_KEYS:
            text = message.get(key)
            if isinstance(text, str):
                meta["message_length"] = len(text)
                break
        duration = message.get("audio_duration", message.get("audioDuration"))
        if duration is not None:
            meta["audio_duration"] = duration
        for key in _TYPE_KEYS:
            if message.get(key) is not None:
                meta["message_type"] = message[key]
                break
        return meta
