import pytest

from trip_estimator.pricing import (
    UniformSource,
    build_legs,
    estimate_nightly,
    round_half_up,
    stopover_factor,
)


def test_round_half_up():
    assert round_half_up(2.5) == 3
    assert round_half_up(3.5) == 4
    assert round_half_up(2.49) == 2
    assert round_half_up(0) == 0


def test_low_budget_uses_cheap_tier(scripted):
    rng = scripted([40])
    assert estimate_nightly(399, False, rng) == 40
    assert rng.calls == [(25, 60)]


def test_standard_tier_from_four_hundred(scripted):
    rng = scripted([100])
    assert estimate_nightly(400, False, rng) == 100
    assert rng.calls == [(60, 140)]


def test_hostels_discount(scripted):
    assert estimate_nightly(900, True, scripted([100])) == 85
    assert estimate_nightly(300, True, scripted([25])) == 21


def test_uniform_source_stays_in_range():
    rng = UniformSource(seed=7)
    for _ in range(200):
        assert 0 <= estimate_nightly(250, False, rng) - 25 <= 35


@pytest.mark.parametrize("stops, factor", [(0, 1.15), (1, 1.0), (2, 0.93), (3, 0.88), (5, 0.88)])
def test_stopover_factor(stops, factor):
    assert stopover_factor(stops) == factor


def test_non_stop_midweek_single_city(scripted):
    # Tue departure (x0.9), Sunday return (x1.1), non-stop premium (x1.15)
    legs = build_legs("Lisbon (LIS)", ["Paris (CDG)"], "2025-08-12", "2025-08-17", 0, scripted([120, 200]))

    assert [(leg.frm, leg.to, leg.price, leg.date) for leg in legs] == [
        ("Lisbon (LIS)", "Paris (CDG)", 124, "2025-08-12"),
        ("Paris (CDG)", "Lisbon (LIS)", 253, "2025-08-17"),
    ]


def test_extra_stops_add_surcharge(scripted):
    route = ["Berlin (BER)", "Rome (FCO)", "Paris (CDG)"]
    legs = build_legs("Lisbon (LIS)", route, "2025-08-14", "2025-08-20", 1, scripted([60, 60, 60, 60]))

    assert [leg.price for leg in legs] == [90, 90, 90, 60]
    assert [leg.date for leg in legs] == ["2025-08-14"] * 3 + ["2025-08-20"]


def test_leg_chain_starts_and_ends_at_trimmed_origin(scripted):
    route = ["Berlin (BER)", "Rome (FCO)"]
    legs = build_legs("  Lisbon (LIS) ", route, "", "", 2, scripted([100, 100, 100]))

    assert len(legs) == len(route) + 1
    assert legs[0].frm == "Lisbon (LIS)"
    assert legs[-1].to == "Lisbon (LIS)"
    for prev, nxt in zip(legs, legs[1:]):
        assert prev.to == nxt.frm


def test_unparsable_dates_use_neutral_factor(scripted):
    legs = build_legs("Lisbon (LIS)", ["Rome (FCO)"], "", "", 1, scripted([150, 150]))
    assert [leg.price for leg in legs] == [150, 150]
