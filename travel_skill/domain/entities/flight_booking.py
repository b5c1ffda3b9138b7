from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from travel_skill.domain.entities.recognition import Entity, IntentScore, RecognitionResult


class FlightBookingIntent(str, Enum):
    BOOK_FLIGHT = "BookFlight"
    GET_WEATHER = "GetWeather"
    NONE = "None"


@dataclass(frozen=True)
class FlightBookingRecognition:
    """Typed view of a recognition result for the flight booking model."""

    text: str
    intent_name: str
    score: float
    entities: tuple[Entity, ...] = ()

    @property
    def intent(self) -> FlightBookingIntent:
        try:
            return FlightBookingIntent(self.intent_name)
        except ValueError:
            return FlightBookingIntent.NONE

    @staticmethod
    def from_recognition(result: RecognitionResult) -> "FlightBookingRecognition":
        top = result.top_scoring_intent()
        if top is None:
            name, score = FlightBookingIntent.NONE.value, IntentScore(score=0.0)
        else:
            name, score = top
        return FlightBookingRecognition(
            text=result.text,
            intent_name=name,
            score=score.score,
            entities=tuple(result.entities),
        )
