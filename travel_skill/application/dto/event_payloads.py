from __future__ import annotations

import json
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from travel_skill.application.exceptions import MalformedPayloadError
from travel_skill.domain.entities.booking_request import BookingRequest
from travel_skill.domain.entities.location import Location


class BookingRequestPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    destination: str | None = None
    origin: str | None = None
    travel_date: str | None = Field(default=None, alias="travelDate")
    multiple_dates: bool = Field(default=False, alias="multipleDates")

    def to_entity(self) -> BookingRequest:
        return BookingRequest(
            destination=self.destination,
            origin=self.origin,
            travel_date=self.travel_date,
            multiple_dates=self.multiple_dates,
        )


class LocationPayload(BaseModel):
    model_config = ConfigDict(extra="ignore")

    latitude: float | None = None
    longitude: float | None = None

    def to_entity(self) -> Location:
        return Location(latitude=self.latitude, longitude=self.longitude)


def parse_booking_payload(value: Any) -> BookingRequest:
    """
    Validate an event value into a BookingRequest.
    A missing value starts an empty booking; anything else must validate.
    """
    if value is None:
        return BookingRequest()
    data = _as_object(value)
    try:
        return BookingRequestPayload.model_validate(data).to_entity()
    except ValidationError as e:
        raise MalformedPayloadError(_describe(e)) from e


def parse_location_payload(value: Any) -> Location:
    if value is None:
        return Location()
    data = _as_object(value)
    try:
        return LocationPayload.model_validate(data).to_entity()
    except ValidationError as e:
        raise MalformedPayloadError(_describe(e)) from e


def _as_object(value: Any) -> dict[str, Any]:
    if isinstance(value, str):
        try:
            value = json.loads(value)
        except json.JSONDecodeError as e:
            raise MalformedPayloadError(f"invalid JSON ({e.msg})") from e
    if not isinstance(value, dict):
        raise MalformedPayloadError(f"expected a JSON object, got {type(value).__name__}")
    return value


def _describe(error: ValidationError) -> str:
    parts = []
    for item in error.errors():
        location = ".".join(str(p) for p in item.get("loc", ()))
        parts.append(f"{location}: {item.get('msg')}" if location else str(item.get("msg")))
    return "; ".join(parts)
