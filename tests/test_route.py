import itertools

import pytest

from trip_ga.distances import DistanceTable, MissingDistanceError
from trip_ga.route import Leg, Route


def test_scenario_distance(abcd_table):
    route = Route.build(["A", "B", "C", "D"], abcd_table)
    assert route.distance == 35
    assert route.stops == ("A", "B", "C", "D")
    assert route.legs == (Leg("A", "B", 10), Leg("B", "C", 20), Leg("C", "D", 5))


def test_distance_is_sum_of_lookups_for_every_permutation(abcd_table):
    for perm in itertools.permutations("ABCD"):
        expected = sum(abcd_table.lookup(a, b) for a, b in zip(perm, perm[1:]))
        assert Route.build(perm, abcd_table).distance == expected


@pytest.mark.parametrize("stops", [[], ["A"]])
def test_short_routes_have_no_legs(abcd_table, stops):
    route = Route.build(stops, abcd_table)
    assert route.distance == 0
    assert route.legs == ()


def test_missing_pair_aborts_construction():
    table = DistanceTable.from_records([("A", "B", 1)])
    with pytest.raises(MissingDistanceError):
        Route.build(["A", "B", "C"], table)


def test_build_does_not_keep_callers_list(abcd_table):
    stops = ["A", "B", "C", "D"]
    route = Route.build(stops, abcd_table)
    stops.reverse()
    assert route.stops == ("A", "B", "C", "D")


def test_describe_and_state(abcd_table):
    route = Route.build(["A", "B", "C"], abcd_table)
    text = route.describe()
    assert text.splitlines()[1:] == ["A --> B - 10", "B --> C - 20"]
    state = route.to_state()
    assert state["distance"] == 30
    assert state["stops"] == ["A", "B", "C"]
    assert state["legs"][0] == {"start": "A", "finish": "B", "distance": 10}
