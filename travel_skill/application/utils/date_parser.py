from __future__ import annotations

import re
from datetime import date, datetime, timedelta

from dateutil import parser as dtparser

from travel_skill.application.utils.timex import is_ambiguous, timex_types

WEEKDAYS = {
    "monday": 1,
    "tuesday": 2,
    "wednesday": 3,
    "thursday": 4,
    "friday": 5,
    "saturday": 6,
    "sunday": 7,
}

MONTHS = {
    "january": 1,
    "jan": 1,
    "february": 2,
    "feb": 2,
    "march": 3,
    "mar": 3,
    "april": 4,
    "apr": 4,
    "may": 5,
    "june": 6,
    "jun": 6,
    "july": 7,
    "jul": 7,
    "august": 8,
    "aug": 8,
    "september": 9,
    "sept": 9,
    "sep": 9,
    "october": 10,
    "oct": 10,
    "november": 11,
    "nov": 11,
    "december": 12,
    "dec": 12,
}

# Two far-apart defaults: a date that parses identically under both is fully specified.
_DEFAULT_A = datetime(2000, 1, 1)
_DEFAULT_B = datetime(2001, 2, 2)


def try_parse_date(text: str | None) -> date | None:
    """Locale-aware parse of a full calendar date. Partial text ("Friday", "March") is None."""
    if not text or not text.strip():
        return None
    full_date = _parse_full_date(text.strip())
    return date.fromisoformat(full_date) if full_date else None


def to_timex(text: str | None, reference_date: date | None = None) -> str | None:
    """
    Normalise a free-text date to a TIMEX expression.

    Relative expressions ("tomorrow", "next friday") become concrete ISO dates,
    partial ones keep their unknown parts as X ("XXXX-WXX-5", "XXXX-03-05").
    Returns None when nothing date-like is found.
    """
    if text is None:
        return None
    stripped = text.strip()
    if not stripped:
        return None
    if timex_types(stripped):
        return stripped

    full_date = _parse_full_date(stripped)
    if full_date:
        return full_date

    if reference_date is None:
        reference_date = date.today()

    normalized = stripped.lower().replace(",", " ")
    normalized = re.sub(r"\b(\d{1,2})(st|nd|rd|th)\b", r"\1", normalized)
    normalized = " ".join(normalized.split())

    if "day after tomorrow" in normalized:
        return (reference_date + timedelta(days=2)).isoformat()
    if re.search(r"\btomorrow\b", normalized):
        return (reference_date + timedelta(days=1)).isoformat()
    if re.search(r"\b(today|tonight)\b", normalized):
        return reference_date.isoformat()

    weekday = _find_word(normalized, WEEKDAYS)
    if weekday is not None:
        if re.search(r"\bnext\b", normalized):
            days_ahead = (weekday - reference_date.isoweekday()) % 7
            if days_ahead == 0:
                days_ahead = 7
            return (reference_date + timedelta(days=days_ahead)).isoformat()
        return f"XXXX-WXX-{weekday}"

    month = _find_word(normalized, MONTHS)
    if month is not None:
        numbers = [int(n) for n in re.findall(r"\b\d{1,4}\b", normalized)]
        year = next((n for n in numbers if n >= 1000), None)
        day = next((n for n in numbers if 1 <= n <= 31), None)
        if day is not None:
            if year is not None:
                return _iso_or_none(year, month, day)
            return _partial_or_none(month, day)
        if year is not None:
            return f"{year:04d}-{month:02d}"
        return f"XXXX-{month:02d}"

    iso_match = re.search(r"\b(\d{4})-(\d{2})-(\d{2})\b", normalized)
    if iso_match:
        return _iso_or_none(int(iso_match.group(1)), int(iso_match.group(2)), int(iso_match.group(3)))

    match = re.search(r"\b(\d{1,2})/(\d{1,2})(?:/(\d{2,4}))?\b", normalized)
    if match:
        month_num = int(match.group(1))
        day_num = int(match.group(2))
        if match.group(3):
            year = int(match.group(3))
            if year < 100:
                year += 2000
            return _iso_or_none(year, month_num, day_num)
        return _partial_or_none(month_num, day_num)

    return None


def is_ambiguous_date(text: str | None, reference_date: date | None = None) -> bool:
    """True unless the text resolves to exactly one calendar date."""
    return is_ambiguous(to_timex(text, reference_date))


def _find_word(text: str, table: dict[str, int]) -> int | None:
    for word, number in table.items():
        if re.search(rf"\b{word}\b", text):
            return number
    return None


def _iso_or_none(year: int, month: int, day: int) -> str | None:
    try:
        return date(year, month, day).isoformat()
    except ValueError:
        return None


def _partial_or_none(month: int, day: int) -> str | None:
    # 2000 is a leap year, so Feb 29 stays valid for an unknown year
    try:
        date(2000, month, day)
    except ValueError:
        return None
    return f"XXXX-{month:02d}-{day:02d}"


def _parse_full_date(text: str) -> str | None:
    try:
        first = dtparser.parse(text, default=_DEFAULT_A)
        second = dtparser.parse(text, default=_DEFAULT_B)
    except (ValueError, OverflowError):
        return None
    if first.date() != second.date():
        return None
    return first.date().isoformat()
