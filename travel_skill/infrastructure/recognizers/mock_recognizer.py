from __future__ import annotations

import re

from travel_skill.application.ports.intent_recognizer import IntentRecognizerPort
from travel_skill.application.utils.date_parser import MONTHS, WEEKDAYS
from travel_skill.application.utils.entity_resolver import DATE_CATEGORY, DESTINATION_CATEGORY
from travel_skill.domain.entities.flight_booking import FlightBookingIntent
from travel_skill.domain.entities.recognition import Entity, IntentScore, RecognitionResult

_MONTH_NAMES = "|".join(sorted(MONTHS, key=len, reverse=True))
_WEEKDAY_NAMES = "|".join(WEEKDAYS)

_DATE_PATTERNS = (
    re.compile(r"\bday after tomorrow\b", re.IGNORECASE),
    re.compile(r"\b(?:tomorrow|today|tonight)\b", re.IGNORECASE),
    re.compile(r"\b\d{4}-\d{2}-\d{2}\b"),
    re.compile(
        rf"\b(?:{_MONTH_NAMES})\.?\s+\d{{1,2}}(?:st|nd|rd|th)?(?:,?\s+\d{{4}})?\b",
        re.IGNORECASE,
    ),
    re.compile(rf"\b(?:next\s+|this\s+)?(?:{_WEEKDAY_NAMES})\b", re.IGNORECASE),
    re.compile(r"\bnext\s+(?:week|month)\b", re.IGNORECASE),
)

_DESTINATION_PATTERN = re.compile(r"\bto\s+([A-Z][\w'-]*(?:\s+[A-Z][\w'-]*)*)")


class MockRecognizer(IntentRecognizerPort):
    """Keyword recognizer for local runs without a language service."""

    @property
    def is_configured(self) -> bool:
        return True

    def recognize(self, text: str) -> RecognitionResult:
        normalized = text.lower()
        if any(word in normalized for word in ("book", "flight", "fly", "travel", "trip")):
            intent = FlightBookingIntent.BOOK_FLIGHT
        elif any(word in normalized for word in ("weather", "forecast", "sunny", "rain")):
            intent = FlightBookingIntent.GET_WEATHER
        else:
            intent = FlightBookingIntent.NONE

        intents = {
            name.value: IntentScore(score=0.9 if name == intent else 0.05)
            for name in FlightBookingIntent
        }

        entities: list[Entity] = []
        if intent == FlightBookingIntent.BOOK_FLIGHT:
            # last "to <Name>" wins: "I want to Fly to Paris" names Paris
            destinations = _DESTINATION_PATTERN.findall(text)
            if destinations:
                entities.append(Entity(category=DESTINATION_CATEGORY, text=destinations[-1], confidence=0.9))
            for pattern in _DATE_PATTERNS:
                found = pattern.search(text)
                if found:
                    entities.append(Entity(category=DATE_CATEGORY, text=found.group(0), confidence=0.9))
                    break

        return RecognitionResult(
            text=text,
            intents=intents,
            entities=tuple(entities),
            top_intent=intent.value,
        )
