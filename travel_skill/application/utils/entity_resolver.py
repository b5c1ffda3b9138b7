from __future__ import annotations

from datetime import date
from typing import Callable, Iterable

from travel_skill.application.utils.date_parser import try_parse_date
from travel_skill.domain.entities.booking_request import BookingRequest
from travel_skill.domain.entities.recognition import Entity

DESTINATION_CATEGORY = "Destination"
DATE_CATEGORY = "Date"


class EntityResolver:
    """
    Reduces raw recognizer entities to one winner per category and builds a
    partially filled booking from them.
    """

    def __init__(self, parse_date: Callable[[str | None], date | None] = try_parse_date) -> None:
        self._parse_date = parse_date

    def resolve(self, entities: Iterable[Entity]) -> BookingRequest:
        winners = self.pick_winners(entities)
        destination = winners.get(DESTINATION_CATEGORY)
        date_entity = winners.get(DATE_CATEGORY)
        travel_date = date_entity.text if date_entity else None

        return BookingRequest(
            destination=destination.text if destination else None,
            origin="",  # always asked interactively
            travel_date=travel_date,
            # text that does not parse is treated as several or partial dates
            multiple_dates=self._parse_date(travel_date) is None,
        )

    @staticmethod
    def pick_winners(entities: Iterable[Entity]) -> dict[str, Entity]:
        """Highest confidence per category; an equal score never replaces the incumbent."""
        winners: dict[str, Entity] = {}
        for entity in entities:
            incumbent = winners.get(entity.category)
            if incumbent is None or _confidence(entity) > _confidence(incumbent):
                winners[entity.category] = entity
        return winners


def _confidence(entity: Entity) -> float:
    try:
        return float(entity.confidence)
    except (TypeError, ValueError):
        return 0.0
