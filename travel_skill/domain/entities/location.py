from dataclasses import dataclass


@dataclass(frozen=True)
class Location:
    latitude: float | None = None
    longitude: float | None = None
