from pathlib import Path

import pytest

from trip_ga.data import (
    DEFAULT_DESTINATIONS,
    load_destinations,
    load_distance_table,
    load_tsplib,
    random_euclidean_table,
    read_distance_records,
    write_distance_records,
)


TINY_TSP = """NAME: tiny
TYPE: TSP
COMMENT: four corners of a 3x4 rectangle
DIMENSION: 4
EDGE_WEIGHT_TYPE: EUC_2D
NODE_COORD_SECTION
1 0 0
2 3 0
3 3 4
4 0 4
EOF
"""


def test_load_destinations_skips_blank_lines(tmp_path: Path) -> None:
    path = tmp_path / "destinations.txt"
    path.write_text("Vienna, Austria\r\n\n  Prague, Czech Republic  \n", encoding="utf-8")
    assert load_destinations(path) == ["Vienna, Austria", "Prague, Czech Republic"]


def test_distance_file_round_trip(tmp_path: Path) -> None:
    path = tmp_path / "out" / "distances.txt"
    records = [("Rome, Italy", "Nice, France", 690000), ("Nice, France", "Rome, Italy", 688000)]
    assert write_distance_records(path, records) == 2
    assert path.read_text(encoding="utf-8").splitlines() == [
        "destinationA\tdestinationB\tdistance",
        "Rome, Italy\tNice, France\t690000",
        "Nice, France\tRome, Italy\t688000",
    ]
    table = load_distance_table(path)
    assert table.lookup("Nice, France", "Rome, Italy") == 688000


def test_header_only_file_is_empty(tmp_path: Path) -> None:
    path = tmp_path / "distances.txt"
    path.write_text("destinationA\tdestinationB\tdistance", encoding="utf-8")
    assert list(read_distance_records(path)) == []


def test_malformed_row_rejected(tmp_path: Path) -> None:
    path = tmp_path / "distances.txt"
    path.write_text("destinationA\tdestinationB\tdistance\nA\tB\n", encoding="utf-8")
    with pytest.raises(ValueError):
        list(read_distance_records(path))


def test_load_tsplib(tmp_path: Path) -> None:
    path = tmp_path / "tiny.tsp"
    path.write_text(TINY_TSP)
    nodes, table = load_tsplib(path)
    assert nodes == [1, 2, 3, 4]
    assert table.lookup(1, 2) == 3
    assert table.lookup(1, 3) == 5
    assert len(table) == 12


def test_random_euclidean_table_is_symmetric_and_complete() -> None:
    names, table = random_euclidean_table(6, seed=1)
    assert len(names) == 6
    assert table.missing_pairs(names) == []
    for a in names:
        for b in names:
            if a != b:
                assert table.lookup(a, b) == table.lookup(b, a)
                assert isinstance(table.lookup(a, b), int)


def test_default_destinations_are_unique() -> None:
    assert len(DEFAULT_DESTINATIONS) == 33
    assert len(set(DEFAULT_DESTINATIONS)) == 33
    assert "Santorini, Thira, Greece" in DEFAULT_DESTINATIONS
