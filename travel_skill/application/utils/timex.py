from __future__ import annotations

import re
from datetime import date
from enum import Enum


class TimexType(str, Enum):
    PRESENT = "present"
    DEFINITE = "definite"
    DATE = "date"
    DATE_RANGE = "daterange"
    DURATION = "duration"
    TIME = "time"
    TIME_RANGE = "timerange"
    DATE_TIME = "datetime"
    DATE_TIME_RANGE = "datetimerange"


_DATE = re.compile(r"^(?P<year>\d{4}|XXXX)-(?P<month>\d{2}|XX)-(?P<day>\d{2}|XX)$")
_WEEKDAY = re.compile(r"^(?:\d{4}|XXXX)-W(?:\d{2}|XX)-[1-7]$")
_WEEK = re.compile(r"^(?:\d{4}|XXXX)-W(?:\d{2}|XX)(?:-WE)?$")
_MONTH = re.compile(r"^(?:\d{4}|XXXX)-(?P<month>\d{2})$")
_YEAR = re.compile(r"^\d{4}$")
_SEASON = re.compile(r"^(?:\d{4}|XXXX)-(?:SP|SU|FA|WI)$")
_TIME = re.compile(r"^T(?P<hour>\d{2})(?::(?P<minute>\d{2})(?::(?P<second>\d{2}))?)?$")
_PART_OF_DAY = re.compile(r"^T(?:MO|AF|EV|NI|DT)$")
_DURATION = re.compile(r"^P(?=.*\d)(?:\d+(?:\.\d+)?[YMWD])*(?:T(?:\d+(?:\.\d+)?[HMS])+)?$")
_RANGE = re.compile(r"^\((?P<start>[^,]+),(?P<end>[^,]+),(?P<duration>[^,)]+)\)$")

_NONE: frozenset[TimexType] = frozenset()


def timex_types(expression: str | None) -> frozenset[TimexType]:
    """
    Infer the type set of a TIMEX expression.

    Returns an empty set when the expression is not valid TIMEX, so callers can
    treat "not TIMEX at all" the same way as "not definite".
    """
    expr = (expression or "").strip()
    if not expr:
        return _NONE

    if expr == "PRESENT_REF":
        return frozenset({TimexType.PRESENT, TimexType.DATE, TimexType.TIME, TimexType.DATE_TIME})

    range_match = _RANGE.match(expr)
    if range_match:
        return _range_types(range_match["start"], range_match["end"], range_match["duration"])

    if _DURATION.match(expr):
        return frozenset({TimexType.DURATION})

    date_text, time_text = _split_date_time(expr)
    types: set[TimexType] = set()
    if date_text:
        date_types = _date_types(date_text)
        if not date_types:
            return _NONE
        types |= date_types
    if time_text:
        time_types = _time_types(time_text)
        if not time_types:
            return _NONE
        types |= time_types

    if TimexType.DATE in types and TimexType.TIME in types:
        types.add(TimexType.DATE_TIME)
    if TimexType.DATE in types and TimexType.TIME_RANGE in types:
        types.add(TimexType.DATE_TIME_RANGE)
    return frozenset(types)


def is_definite(expression: str | None) -> bool:
    return TimexType.DEFINITE in timex_types(expression)


def is_ambiguous(expression: str | None) -> bool:
    return not is_definite(expression)


def _split_date_time(expr: str) -> tuple[str, str]:
    if expr.startswith("T"):
        return "", expr
    index = expr.find("T")
    if index == -1:
        return expr, ""
    return expr[:index], expr[index:]


def _date_types(text: str) -> frozenset[TimexType]:
    match = _DATE.match(text)
    if match:
        year, month, day = match["year"], match["month"], match["day"]
        if not (month.isdigit() and day.isdigit()):
            return _NONE
        if not (1 <= int(month) <= 12 and 1 <= int(day) <= 31):
            return _NONE
        if not year.isdigit():
            return frozenset({TimexType.DATE})
        try:
            date(int(year), int(month), int(day))
        except ValueError:
            return _NONE
        return frozenset({TimexType.DATE, TimexType.DEFINITE})

    if _WEEKDAY.match(text):
        return frozenset({TimexType.DATE})

    month_match = _MONTH.match(text)
    if month_match:
        if not 1 <= int(month_match["month"]) <= 12:
            return _NONE
        return frozenset({TimexType.DATE_RANGE})

    if _WEEK.match(text) or _YEAR.match(text) or _SEASON.match(text):
        return frozenset({TimexType.DATE_RANGE})

    return _NONE


def _time_types(text: str) -> frozenset[TimexType]:
    if _PART_OF_DAY.match(text):
        return frozenset({TimexType.TIME_RANGE})
    match = _TIME.match(text)
    if not match:
        return _NONE
    if int(match["hour"]) > 24:
        return _NONE
    if match["minute"] and int(match["minute"]) > 59:
        return _NONE
    return frozenset({TimexType.TIME})


def _range_types(start: str, end: str, duration: str) -> frozenset[TimexType]:
    start_types = timex_types(start)
    end_types = timex_types(end)
    if not start_types or not end_types or not _DURATION.match(duration.strip()):
        return _NONE

    types: set[TimexType] = set()
    if TimexType.DATE in start_types and TimexType.TIME in start_types:
        types.add(TimexType.DATE_TIME_RANGE)
    elif TimexType.DATE in start_types:
        types.add(TimexType.DATE_RANGE)
    elif TimexType.TIME in start_types:
        types.add(TimexType.TIME_RANGE)
    # a range is definite only when both of its ends are
    if TimexType.DEFINITE in start_types and TimexType.DEFINITE in end_types:
        types.add(TimexType.DEFINITE)
    return frozenset(types)
