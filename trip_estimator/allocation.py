"""Night allocation across destinations."""
from __future__ import annotations

import math
from typing import List, Sequence

from trip_estimator.schemas import CityCostInfo


def allocate_nights(cities: Sequence[CityCostInfo], total_days: int) -> List[int]:
    """Split ``total_days`` nights across ``cities``, favouring the cheap ones.

    Every city gets one night; the rest is apportioned by inverse nightly
    rate with the largest-remainder method, so the extra nights are never lost
    to rounding. Output is aligned with ``cities``.
    """
    if not cities:
        return []

    nights = [1] * len(cities)
    remaining = max(int(total_days) - len(cities), 0)
    if remaining == 0:
        return nights

    weights = [1.0 / max(1, info.nightly_rate) for info in cities]
    weight_sum = sum(weights)
    quotas = [w / weight_sum * remaining for w in weights]

    floors = [math.floor(q) for q in quotas]
    nights = [n + f for n, f in zip(nights, floors)]
    leftover = remaining - sum(floors)

    # Stable sort: equal remainders go to the earlier (cheaper) city.
    order = sorted(range(len(cities)), key=lambda i: quotas[i] - floors[i], reverse=True)
    for i in order:
        if leftover <= 0:
            break
        nights[i] += 1
        leftover -= 1
    return nights
