from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass
class BookingRequest:
    destination: str | None = None
    origin: str | None = None
    travel_date: str | None = None  # ISO date or TIMEX expression
    multiple_dates: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Wire shape shared by event payloads and the completion result."""
        return {
            "destination": self.destination,
            "origin": self.origin,
            "travelDate": self.travel_date,
            "multipleDates": self.multiple_dates,
        }

    @staticmethod
    def from_dict(data: dict[str, Any] | None) -> "BookingRequest":
        data = data or {}
        return BookingRequest(
            destination=data.get("destination"),
            origin=data.get("origin"),
            travel_date=data.get("travelDate"),
            multiple_dates=bool(data.get("multipleDates", False)),
        )
