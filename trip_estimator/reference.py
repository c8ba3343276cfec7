"""Static reference data: the known destination list and per-city ideas."""
from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Tuple

# (when, title, price) triples; prices are indicative per-person amounts.
IdeaRow = Tuple[str, str, int]

DESTINATIONS: Tuple[str, ...] = (
    "Barcelona (BCN)",
    "Paris (CDG)",
    "Lisbon (LIS)",
    "Berlin (BER)",
    "Rome (FCO)",
    "London (LHR)",
    "Madrid (MAD)",
    "Amsterdam (AMS)",
    "Milan (MXP)",
    "Vienna (VIE)",
    "Prague (PRG)",
    "Copenhagen (CPH)",
)

CITY_IDEAS: Mapping[str, Tuple[IdeaRow, ...]] = MappingProxyType(
    {
        "paris": (
            ("Morning", "Louvre Museum", 17),
            ("Afternoon", "Seine river walk & Île de la Cité", 0),
            ("Golden hour", "Eiffel Tower • Trocadéro viewpoint", 0),
            ("Evening", "Montmartre bistro crawl", 20),
        ),
        "barcelona": (
            ("Morning", "Sagrada Família (outside + park)", 0),
            ("Afternoon", "Gothic Quarter + La Boqueria tasting", 12),
            ("Golden hour", "Bunkers del Carmel viewpoint", 0),
            ("Evening", "Tapas in El Born", 18),
        ),
        "lisbon": (
            ("Morning", "Belém monuments & pastéis", 5),
            ("Afternoon", "Alfama tram + miradouros", 3),
            ("Golden hour", "Miradouro da Senhora do Monte", 0),
            ("Evening", "Time Out Market food tour", 20),
        ),
        "rome": (
            ("Morning", "Colosseum (outside) & Forum walk", 0),
            ("Afternoon", "Pantheon & Trevi Fountain", 0),
            ("Golden hour", "Trastevere riverside", 0),
            ("Evening", "Pizza al taglio tasting", 10),
        ),
        "berlin": (
            ("Morning", "Museum Island stroll", 0),
            ("Afternoon", "East Side Gallery walk", 0),
            ("Golden hour", "Tempelhofer Feld picnic", 0),
            ("Evening", "Kreuzberg street food", 15),
        ),
    }
)

FALLBACK_IDEAS: Tuple[IdeaRow, ...] = (
    ("Morning", "Historic center stroll", 0),
    ("Afternoon", "Local market tasting", 12),
    ("Golden hour", "Best viewpoint walk", 0),
    ("Evening", "Neighborhood food crawl", 18),
)

IDEA_TAGS: Tuple[str, ...] = ("views", "food", "culture")


def city_name(label: str) -> str:
    """Strip a trailing airport code: ``"Paris (CDG)"`` -> ``"Paris"``."""
    return label.split(" (")[0]


@dataclass(frozen=True)
class ReferenceData:
    """Read-only lookup tables shared by every estimation call."""

    destinations: Tuple[str, ...] = DESTINATIONS
    ideas: Mapping[str, Tuple[IdeaRow, ...]] = field(default_factory=lambda: CITY_IDEAS)
    fallback_ideas: Tuple[IdeaRow, ...] = FALLBACK_IDEAS
    tags: Tuple[str, ...] = IDEA_TAGS

    def ideas_for(self, label: str) -> Tuple[IdeaRow, ...]:
        key = city_name(label).lower()
        return self.ideas.get(key) or self.fallback_ideas


DEFAULT_REFERENCE = ReferenceData()
