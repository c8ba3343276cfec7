# trip_estimator/estimator.py
from __future__ import annotations

import os
import logging
from typing import Any, Dict, Sequence

from trip_estimator.allocation import allocate_nights
from trip_estimator.dates import pick_best_dates
from trip_estimator.pricing import (
    RandomSource,
    UniformSource,
    build_legs,
    estimate_nightly,
    round_half_up,
)
from trip_estimator.reference import DEFAULT_REFERENCE, ReferenceData, city_name
from trip_estimator.schemas import (
    CityCostInfo,
    CityIdeas,
    CostSummary,
    IdeaItem,
    Plan,
    Stay,
    StayHotel,
    TripPrefs,
    TripRequest,
)

logger = logging.getLogger(__name__)
if not logger.handlers:
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("[%(levelname)s] %(name)s: %(message)s"))
    logger.addHandler(handler)
_level = os.getenv("TRIP_ESTIMATOR_LOG_LEVEL", "INFO").upper()
logger.setLevel(getattr(logging, _level, logging.INFO))
logger.propagate = False

LOW_FOOD_BUDGET_THRESHOLD = 500
FOOD_PER_DAY_LOW = 18
FOOD_PER_DAY = 28
ACTIVITIES_PER_DAY = 15
BOUTIQUE_PREMIUM = 25
HOSTEL_STAY_DISCOUNT = 0.9
HOSTEL_STAY_FLOOR = 18


def default_random_source() -> UniformSource:
    """Uniform sampler, seeded from TRIP_ESTIMATOR_RANDOM_SEED when set."""
    raw_seed = os.getenv("TRIP_ESTIMATOR_RANDOM_SEED")
    if raw_seed:
        try:
            return UniformSource(int(raw_seed))
        except ValueError:
            logger.warning("Ignoring non-integer TRIP_ESTIMATOR_RANDOM_SEED=%r", raw_seed)
    return UniformSource()


class TripEstimator:
    """Turns a TripRequest into a priced, budget-scaled Plan."""

    def __init__(
        self,
        reference: ReferenceData | None = None,
        rng: RandomSource | None = None,
    ) -> None:
        self.reference = reference or DEFAULT_REFERENCE
        self.rng = rng or default_random_source()

    def estimate(self, req: TripRequest) -> Plan:
        prefs = req.prefs
        days = req.days
        budget = req.budget
        logger.info(
            "Estimating trip from %s visiting %s within %s..%s for %s day(s), budget %.2f",
            req.origin,
            ", ".join(req.destinations) or "-",
            req.earliest_departure or "?",
            req.latest_return or "?",
            days,
            budget,
        )

        chosen = pick_best_dates(req.earliest_departure, req.latest_return, days)

        # Rates are drawn in request order, then sorted cheapest-first.
        # sorted() is stable, so equal rates keep the request order.
        cost_infos = [
            CityCostInfo(city=city, nightly_rate=estimate_nightly(budget, prefs.allow_hostels, self.rng))
            for city in req.destinations
        ]
        cost_infos = sorted(cost_infos, key=lambda info: info.nightly_rate)
        route = [info.city for info in cost_infos]
        logger.debug(
            "Nightly rates: %s",
            ", ".join(f"{info.city}={info.nightly_rate}" for info in cost_infos),
        )

        nights = allocate_nights(cost_infos, days)
        legs = build_legs(req.origin, route, chosen.depart, chosen.return_date, prefs.stopovers, self.rng)
        stays = [
            self._stay_for(info, n, prefs.allow_hostels)
            for info, n in zip(cost_infos, nights)
        ]

        raw = CostSummary(
            flights=sum(leg.price for leg in legs),
            accommodation=sum(stay.total for stay in stays),
            food=round_half_up(days * (FOOD_PER_DAY_LOW if budget < LOW_FOOD_BUDGET_THRESHOLD else FOOD_PER_DAY)),
            activities=round_half_up(days * ACTIVITIES_PER_DAY),
        )
        summary = scale_to_budget(raw, budget)
        total = summary.total
        logger.info(
            "Cost composition: flights %d, accommodation %d, food %d, activities %d (raw %d, scaled %d) against budget %.2f",
            raw.flights,
            raw.accommodation,
            raw.food,
            raw.activities,
            raw.total,
            total,
            budget,
        )

        return Plan(
            legs=legs,
            stays=stays,
            summary=summary,
            earliest_departure=req.earliest_departure,
            latest_return=req.latest_return,
            days=days,
            total=total,
            under_budget=total <= budget,
            savings=max(0, budget - total),
            ideas=[self._ideas_for(city) for city in route],
            chosen=chosen,
            prefs=prefs.model_copy(),
            route=route,
        )

    def _stay_for(self, info: CityCostInfo, nights: int, allow_hostels: bool) -> Stay:
        name = city_name(info.city)
        rate = info.nightly_rate
        if allow_hostels:
            first = StayHotel(
                name=f"{name} City Hostel",
                price_per_night=max(HOSTEL_STAY_FLOOR, round_half_up(rate * HOSTEL_STAY_DISCOUNT)),
            )
        else:
            first = StayHotel(name=f"{name} Boutique Hotel", price_per_night=rate + BOUTIQUE_PREMIUM)
        hotels = [first, StayHotel(name=f"{name} Central Inn", price_per_night=rate)]
        return Stay(city=info.city, nights=nights, price_per_night=rate, total=rate * nights, hotels=hotels)

    def _ideas_for(self, city: str) -> CityIdeas:
        items = [
            IdeaItem(when=when, title=title, price=price)
            for when, title, price in self.reference.ideas_for(city)
        ]
        return CityIdeas(city=city, tags=list(self.reference.tags), items=items)


def scale_to_budget(raw: CostSummary, budget: float) -> CostSummary:
    """Shrink every category by one factor so the total fits ``budget``.

    Each category is rounded on its own; callers sum the scaled values rather
    than scaling the raw total, so the parts always add up.
    """
    scale = min(1.0, budget / max(raw.total, 1)) if budget > 0 else 1.0
    if scale >= 1.0:
        return raw.model_copy()
    return CostSummary(
        flights=round_half_up(raw.flights * scale),
        accommodation=round_half_up(raw.accommodation * scale),
        food=round_half_up(raw.food * scale),
        activities=round_half_up(raw.activities * scale),
    )


def estimate_trip(
    origin: str,
    destinations: Sequence[str],
    latest_return: str,
    earliest_departure: str,
    days: int,
    budget: float,
    prefs: TripPrefs | Dict[str, Any] | None = None,
    *,
    rng: RandomSource | None = None,
    reference: ReferenceData | None = None,
) -> Plan:
    """Functional entry point mirroring the form's argument order."""
    if isinstance(prefs, TripPrefs):
        trip_prefs = prefs
    else:
        trip_prefs = TripPrefs.model_validate(prefs or {})
    req = TripRequest(
        origin=origin,
        destinations=list(destinations),
        earliest_departure=earliest_departure or "",
        latest_return=latest_return or "",
        days=days,
        budget=budget,
        prefs=trip_prefs,
    )
    return TripEstimator(reference=reference, rng=rng).estimate(req)

