from __future__ import annotations

import logging

from travel_skill.application.ports.telemetry import TelemetryPort


class LoggingTelemetry(TelemetryPort):
    def __init__(self, logger_name: str = "travel_skill.telemetry") -> None:
        self._logger = logging.getLogger(logger_name)

    def track_event(self, name: str, properties: dict[str, str] | None = None) -> None:
        props = dict(properties or {})
        self._logger.info(
            "Telemetry event %s %s",
            name,
            props,
            extra={"event": name, "conversation_id": props.get("conversationId")},
        )
