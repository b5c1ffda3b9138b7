"""
Tests for reducing recognizer entities to a booking draft.
"""

from __future__ import annotations

from datetime import date

from travel_skill.application.utils.entity_resolver import EntityResolver
from travel_skill.domain.entities.booking_request import BookingRequest
from travel_skill.domain.entities.recognition import Entity


def _destination(text: str, confidence: float) -> Entity:
    return Entity(category="Destination", text=text, confidence=confidence)


def test_highest_confidence_wins_in_either_order():
    """A 0.9 destination beats a 0.4 one regardless of their order."""
    resolver = EntityResolver()

    forward = resolver.resolve([_destination("Lisbon", 0.4), _destination("Berlin", 0.9)])
    backward = resolver.resolve([_destination("Berlin", 0.9), _destination("Lisbon", 0.4)])

    assert forward.destination == "Berlin"
    assert backward.destination == "Berlin"


def test_equal_confidence_keeps_first_entity():
    """On a tie the entity seen first stays the winner."""
    resolver = EntityResolver()

    draft = resolver.resolve([_destination("Lisbon", 0.7), _destination("Berlin", 0.7)])

    assert draft.destination == "Lisbon"


def test_empty_entities_give_empty_draft():
    """No entities: nothing filled, origin empty, the missing date counts as multiple dates."""
    resolver = EntityResolver()

    assert resolver.resolve([]) == BookingRequest(
        destination=None,
        origin="",
        travel_date=None,
        multiple_dates=True,
    )
    # same input, same draft
    assert resolver.resolve([]) == resolver.resolve([])


def test_missing_date_category_leaves_date_unset():
    draft = EntityResolver().resolve([_destination("Paris", 0.8)])

    assert draft.destination == "Paris"
    assert draft.travel_date is None
    assert draft.multiple_dates is True


def test_parseable_date_is_a_single_date():
    draft = EntityResolver().resolve(
        [_destination("Berlin", 0.9), Entity(category="Date", text="2024-09-01", confidence=0.9)]
    )

    assert draft.travel_date == "2024-09-01"
    assert draft.multiple_dates is False
    assert draft.to_dict() == {
        "destination": "Berlin",
        "origin": "",
        "travelDate": "2024-09-01",
        "multipleDates": False,
    }


def test_unparseable_date_is_multiple_dates():
    """Text the host parser rejects ("next week") is kept verbatim and flagged."""
    draft = EntityResolver().resolve([Entity(category="Date", text="next week", confidence=0.9)])

    assert draft.travel_date == "next week"
    assert draft.multiple_dates is True


def test_partial_date_text_is_multiple_dates():
    """A weekday or a bare month is no full calendar date, so it counts as several dates."""
    resolver = EntityResolver()

    for text in ("Friday", "March"):
        draft = resolver.resolve([Entity(category="Date", text=text, confidence=0.9)])

        assert draft.travel_date == text
        assert draft.multiple_dates is True


def test_date_parser_is_injectable():
    seen: list[str | None] = []

    def parse(text: str | None) -> date | None:
        seen.append(text)
        return date(2024, 1, 1)

    draft = EntityResolver(parse_date=parse).resolve([Entity(category="Date", text="whenever", confidence=0.5)])

    assert seen == ["whenever"]
    assert draft.multiple_dates is False


def test_unknown_categories_are_ignored():
    draft = EntityResolver().resolve([Entity(category="Airline", text="KLM", confidence=0.99)])

    assert draft.destination is None
    assert draft.travel_date is None
