"""Fuzzy destination lookup for free-text city input."""
from __future__ import annotations

from typing import Iterable, List, Sequence

MAX_SUBSTRING_MATCHES = 8
MAX_FUZZY_MATCHES = 6


def distance(a: str, b: str) -> int:
    """Case-insensitive Levenshtein distance between ``a`` and ``b``."""
    a = a.lower()
    b = b.lower()
    if not a:
        return len(b)
    if not b:
        return len(a)

    previous = list(range(len(b) + 1))
    for i, ca in enumerate(a, 1):
        current = [i] + [0] * len(b)
        for j, cb in enumerate(b, 1):
            cost = 0 if ca == cb else 1
            current[j] = min(
                previous[j] + 1,
                current[j - 1] + 1,
                previous[j - 1] + cost,
            )
        previous = current
    return previous[-1]


def resolve(
    query: str,
    candidates: Sequence[str],
    excluding: Iterable[str] = (),
) -> List[str]:
    """Suggest destinations for ``query``.

    Substring hits win outright and keep the candidate order. When nothing
    contains the query the whole list is ranked by edit distance instead, so a
    misspelling such as ``"Bracelona"`` still lands on Barcelona.
    """
    q = (query or "").strip()
    if not q:
        return []
    taken = set(excluding or ())
    needle = q.lower()

    hits = [c for c in candidates if needle in c.lower() and c not in taken]
    if hits:
        return hits[:MAX_SUBSTRING_MATCHES]

    # sorted() is stable, so equal distances keep their list order.
    ranked = sorted(candidates, key=lambda c: distance(q, c))
    return [c for c in ranked if c not in taken][:MAX_FUZZY_MATCHES]
