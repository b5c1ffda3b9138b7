from abc import ABC, abstractmethod


class TelemetryPort(ABC):
    @abstractmethod
    def track_event(self, name: str, properties: dict[str, str] | None = None) -> None:
        raise NotImplementedError
