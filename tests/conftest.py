from typing import Iterable, List, Tuple

import pytest


class ScriptedSource:
    """RandomSource that replays fixed values and records the requested ranges."""

    def __init__(self, values: Iterable[int]):
        self.values: List[int] = list(values)
        self.calls: List[Tuple[int, int]] = []

    def next(self, low: int, high: int) -> int:
        self.calls.append((low, high))
        value = self.values.pop(0)
        assert low <= value <= high, f"scripted value {value} outside [{low}, {high}]"
        return value


@pytest.fixture
def scripted():
    return ScriptedSource
