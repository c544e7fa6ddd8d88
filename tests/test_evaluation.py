import pytest

from trip_ga.evaluation import distance_stats, rank
from trip_ga.route import Route


def test_rank_orders_by_distance_stably(abcd_table):
    a = Route.build(["A", "B", "C", "D"], abcd_table)  # 35
    b = Route.build(["C", "B", "A", "D"], abcd_table)  # 130
    c = Route.build(["D", "C", "B", "A"], abcd_table)  # 35
    assert rank([b, a, c]) == [a, c, b]
    assert rank([b, c, a])[0] is c


def test_distance_stats(abcd_table):
    a = Route.build(["A", "B", "C", "D"], abcd_table)
    b = Route.build(["C", "B", "A", "D"], abcd_table)
    stats = distance_stats([a, b])
    assert stats["min"] == 35
    assert stats["mean"] == pytest.approx(82.5)
    assert stats["std"] == pytest.approx(47.5)
    assert distance_stats([])["min"] == float("inf")
