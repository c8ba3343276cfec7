"""Travel-date selection inside a flexible window."""
from __future__ import annotations

import math
from datetime import date, datetime, timedelta
from typing import Any

from trip_estimator.schemas import DateSelection

# date.weekday(): Monday == 0
TUESDAY, WEDNESDAY, FRIDAY, SUNDAY = 1, 2, 4, 6

_EPOCH = date(1970, 1, 1)
_MS_PER_DAY = 24 * 60 * 60 * 1000


def parse_date(value: Any) -> date | None:
    """Parse ``YYYY-MM-DD`` (or a ``date``/``datetime``) into a ``date``."""
    if not value:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return datetime.strptime(str(value).strip(), "%Y-%m-%d").date()
    except ValueError:
        return None


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, date):
        return value.isoformat()
    return str(value)


def _epoch_millis(day: date) -> int:
    return (day - _EPOCH).days * _MS_PER_DAY


def score_departure(depart: date, return_day: date) -> float:
    """Lower is better; midweek departures and non-Sunday returns are cheaper."""
    score = 100.0
    if depart.weekday() in (TUESDAY, WEDNESDAY):
        score -= 15
    if depart.weekday() == FRIDAY:
        score += 10
    if return_day.weekday() == SUNDAY:
        score += 8
    # Smooth out ties so the same weekday pattern does not always win.
    score += abs(math.sin(_epoch_millis(depart) / 4e8)) * 10
    return score


def pick_best_dates(earliest: Any, latest: Any, days: Any) -> DateSelection:
    """Choose the cheapest-looking depart/return pair for a ``days``-day trip.

    Anything that cannot be scheduled (missing values, unparsable dates, an
    inverted window or one too short for the trip) falls back to the window
    endpoints unchanged.
    """
    fallback = DateSelection(depart=_as_text(earliest), return_date=_as_text(latest))
    try:
        span = int(days or 0)
    except (TypeError, ValueError, OverflowError):
        return fallback
    if not earliest or not latest or span < 1:
        return fallback

    start, end = parse_date(earliest), parse_date(latest)
    if start is None or end is None or end <= start:
        return fallback

    window = (end - start).days
    if span - 1 > window:
        return fallback

    trip = timedelta(days=span - 1)
    best: tuple[float, date] | None = None
    # Offsets keep every candidate and its return day inside the window.
    for offset in range(window - (span - 1) + 1):
        cursor = start + timedelta(days=offset)
        score = score_departure(cursor, cursor + trip)
        if best is None or score < best[0]:
            best = (score, cursor)

    depart = best[1]
    return DateSelection(depart=depart.isoformat(), return_date=(depart + trip).isoformat())
