"""Synthetic nightly rates and flight fares."""
from __future__ import annotations

import math
import random
from typing import List, Optional, Protocol, Sequence

from trip_estimator.dates import SUNDAY, TUESDAY, WEDNESDAY, parse_date
from trip_estimator.schemas import FlightLeg

LOW_BUDGET_THRESHOLD = 400
LOW_BUDGET_RATES = (25, 60)
STANDARD_RATES = (60, 140)
HOSTEL_DISCOUNT = 0.85
HOSTEL_FLOOR = 18

FARE_BASE = (60, 220)
EXTRA_STOP_SURCHARGE = 15
MIDWEEK_DEPART_FACTOR = 0.9
SUNDAY_RETURN_FACTOR = 1.1


class RandomSource(Protocol):
    def next(self, low: int, high: int) -> int:
        """Return an integer in ``[low, high]``."""
        ...


class UniformSource:
    """Production sampler: uniform integers from a private ``random.Random``."""

    def __init__(self, seed: Optional[int] = None) -> None:
        self._random = random.Random(seed)

    def next(self, low: int, high: int) -> int:
        return self._random.randint(low, high)


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def estimate_nightly(budget: float, allow_hostels: bool, rng: RandomSource) -> int:
    """Draw a nightly accommodation rate for one city."""
    low, high = LOW_BUDGET_RATES if budget < LOW_BUDGET_THRESHOLD else STANDARD_RATES
    rate = rng.next(low, high)
    if allow_hostels:
        return max(HOSTEL_FLOOR, round_half_up(rate * HOSTEL_DISCOUNT))
    return rate


def stopover_factor(stopovers: int) -> float:
    """Non-stop costs a premium; every extra connection makes the fare cheaper."""
    if stopovers <= 0:
        return 1.15
    if stopovers == 1:
        return 1.0
    if stopovers == 2:
        return 0.93
    return 0.88


def build_legs(
    origin: str,
    route: Sequence[str],
    depart: str,
    return_date: str,
    stopovers: int,
    rng: RandomSource,
) -> List[FlightLeg]:
    """Price the outbound chain ``origin -> route[0] -> ... -> route[-1]`` and the flight home."""
    home = origin.strip()
    stop_factor = stopover_factor(stopovers)
    surcharge = max(0, len(route) - 1) * EXTRA_STOP_SURCHARGE

    depart_day = parse_date(depart)
    date_factor = 1.0
    if depart_day is not None and depart_day.weekday() in (TUESDAY, WEDNESDAY):
        date_factor = MIDWEEK_DEPART_FACTOR

    legs: List[FlightLeg] = []
    running_from = home
    for city in route:
        price = round_half_up((rng.next(*FARE_BASE) + surcharge) * date_factor * stop_factor)
        legs.append(FlightLeg(frm=running_from, to=city, price=price, date=depart))
        running_from = city

    return_day = parse_date(return_date)
    return_factor = SUNDAY_RETURN_FACTOR if return_day is not None and return_day.weekday() == SUNDAY else 1.0
    price = round_half_up(rng.next(*FARE_BASE) * return_factor * stop_factor)
    legs.append(FlightLeg(frm=running_from, to=home, price=price, date=return_date))
    return legs
