import random

import pytest

from trip_ga.distances import DistanceTable


SCENARIO = {
    ("A", "B"): 10,
    ("B", "C"): 20,
    ("C", "D"): 5,
    ("A", "C"): 50,
    ("A", "D"): 100,
    ("B", "D"): 30,
}


def symmetric_records(pairs):
    for (a, b), d in pairs.items():
        yield a, b, d
        yield b, a, d


@pytest.fixture
def abcd_table() -> DistanceTable:
    return DistanceTable.from_records(symmetric_records(SCENARIO))


@pytest.fixture
def rng() -> random.Random:
    return random.Random(42)
