import json
from types import SimpleNamespace

import pytest

from trip_estimator import llm
from trip_estimator.estimator import estimate_trip
from trip_estimator.llm import ItineraryError, build_itinerary_prompt, request_itinerary
from trip_estimator.schemas import PlanOutline


class _FakeCompletions:
    def __init__(self, content):
        self.content = content
        self.calls = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=self.content))])


def _fake_client(content):
    completions = _FakeCompletions(content)
    return SimpleNamespace(chat=SimpleNamespace(completions=completions)), completions


def _plan(scripted):
    return estimate_trip(
        "Lisbon (LIS)",
        ["Paris (CDG)", "Berlin (BER)", "Rome (FCO)"],
        "2025-08-20",
        "2025-08-10",
        7,
        700,
        {"stopovers": 2, "allowHostels": True},
        rng=scripted([120, 80, 100, 100, 150, 200, 120]),
    )


def test_prompt_condenses_window_route_and_nights(scripted):
    system, user = build_itinerary_prompt(_plan(scripted))

    assert '"days"' in system
    assert user.splitlines() == [
        "Window: 2025-08-13 → 2025-08-19",
        "Route: Berlin (BER) → Rome (FCO) → Paris (CDG)",
        "Nights per city: Berlin (BER):3, Rome (FCO):2, Paris (CDG):2",
    ]


def test_request_itinerary_parses_days(monkeypatch, scripted):
    content = json.dumps(
        {
            "days": [
                {
                    "date": "2025-08-13",
                    "city": "Berlin",
                    "area": "Mitte",
                    "morning": "Walk Museum Island before the crowds arrive",
                    "afternoon": "Cycle along the East Side Gallery murals",
                    "evening": "Street food crawl through Kreuzberg",
                    "transit": "Buy a 24h AB ticket",
                    "food": {"breakfast": "Bakery", "lunch": "Markthalle Neun", "dinner": "Doner stand"},
                }
            ]
        }
    )
    client, completions = _fake_client(content)
    monkeypatch.setattr(llm, "_client", client)

    itinerary = request_itinerary(_plan(scripted), model="test-model")

    assert [day.city for day in itinerary.days] == ["Berlin"]
    assert itinerary.days[0].food.lunch == "Markthalle Neun"
    call = completions.calls[0]
    assert call["model"] == "test-model"
    assert call["response_format"] == {"type": "json_object"}
    assert "Route: Berlin (BER)" in call["messages"][1]["content"]


@pytest.mark.parametrize("content", ["not json", json.dumps({"itinerary": []}), json.dumps({"days": [{"city": "x"}]})])
def test_request_itinerary_rejects_bad_payloads(monkeypatch, scripted, content):
    client, _ = _fake_client(content)
    monkeypatch.setattr(llm, "_client", client)

    with pytest.raises(ItineraryError):
        request_itinerary(_plan(scripted))


def test_request_itinerary_without_client(monkeypatch, scripted):
    monkeypatch.setattr(llm, "_client", None)

    with pytest.raises(ItineraryError, match="OPENAI_API_KEY"):
        request_itinerary(_plan(scripted))


def test_response_without_choices_raises_itinerary_error(monkeypatch):
    client = SimpleNamespace(
        chat=SimpleNamespace(completions=SimpleNamespace(create=lambda **kwargs: SimpleNamespace(choices=[])))
    )
    monkeypatch.setattr(llm, "_client", client)

    with pytest.raises(ItineraryError, match="no days"):
        llm.request_city_itinerary("Paris")


def test_prompt_from_trimmed_outline():
    outline = PlanOutline.model_validate(
        {
            "route": ["Rome (FCO)"],
            "stays": [{"city": "Rome (FCO)", "nights": 3}],
            "chosen": {"depart": "2025-08-13", "return": "2025-08-16"},
        }
    )
    _, user = build_itinerary_prompt(outline)
    assert user.splitlines() == [
        "Window: 2025-08-13 → 2025-08-16",
        "Route: Rome (FCO)",
        "Nights per city: Rome (FCO):3",
    ]
