import csv
from pathlib import Path
from typing import Iterable, Iterator, List, Tuple

import numpy as np
import tsplib95

from .distances import DistanceTable, Location, Record


DISTANCE_HEADER = ("destinationA", "destinationB", "distance")

DEFAULT_DESTINATIONS = [
    "Innsbruck, Austria",
    "Munich, Germany",
    "Pag, Croatia",
    "Venice, Italy",
    "Tuscany, Italy",
    "Florence, Italy",
    "Rome, Italy",
    "Vatican City",
    "Pompeii, Italy",
    "Gozo, Malta",
    "Dubrovnik, Croatia",
    "Santorini, Thira, Greece",
    "Vienna, Austria",
    "Prague, Czech Republic",
    "Krakow, Poland",
    "Berlin, Germany",
    "Amsterdam, Netherlands",
    "Keukenhof, Stationsweg, Lisse, Netherlands",
    "Glasgow, United Kingdom",
    "Edinburgh, United Kingdom",
    "Inverness, United Kingdom",
    "Stonehenge, Amesbury, United Kingdom",
    "London, United Kingdom",
    "Brussels, Belgium",
    "Paris, France",
    "Pamplona, Spain",
    "Lagos, Portugal",
    "Granada, Spain",
    "Barcelona, Spain",
    "Luberone, Bonnieux, France",
    "Nice, France",
    "Monte Carlo, Monaco",
    "Interlaken, Switzerland",
]


def load_destinations(path: Path) -> List[str]:
    with path.open("r", encoding="utf-8") as f:
        return [line.strip() for line in f if line.strip()]


def read_distance_records(path: Path) -> Iterator[Record]:
    with path.open("r", encoding="utf-8", newline="") as f:
        reader = csv.reader(f, delimiter="\t")
        next(reader, None)  # header
        for lineno, row in enumerate(reader, start=2):
            if not row or not any(cell.strip() for cell in row):
                continue
            if len(row) != 3:
                raise ValueError(f"{path}:{lineno}: expected 3 columns, got {len(row)}")
            origin, destination, distance = (cell.strip() for cell in row)
            yield origin, destination, int(distance)


def load_distance_table(path: Path) -> DistanceTable:
    return DistanceTable.from_records(read_distance_records(path))


def write_distance_records(path: Path, records: Iterable[Record]) -> int:
    path.parent.mkdir(parents=True, exist_ok=True)
    count = 0
    with path.open("w", encoding="utf-8", newline="") as f:
        writer = csv.writer(f, delimiter="\t", lineterminator="\n")
        writer.writerow(DISTANCE_HEADER)
        for origin, destination, distance in records:
            writer.writerow((origin, destination, distance))
            count += 1
    return count


def load_tsplib(path: Path) -> Tuple[List[Location], DistanceTable]:
    problem = tsplib95.load(path)
    nodes = list(problem.get_nodes())
    records = [(a, b, problem.get_weight(a, b)) for a in nodes for b in nodes if a != b]
    return nodes, DistanceTable.from_records(records)


def random_euclidean_table(n: int, seed: int = 0, scale: float = 1000.0) -> Tuple[List[str], DistanceTable]:
    """Random planar points with rounded Euclidean distances, for demos and tests."""
    rng = np.random.default_rng(seed)
    coords = rng.uniform(0.0, scale, size=(n, 2))
    diff = coords[:, None, :] - coords[None, :, :]
    matrix = np.rint(np.linalg.norm(diff, axis=-1)).astype(np.int64)
    names = [f"city{i}" for i in range(n)]
    return names, DistanceTable.from_matrix(names, matrix.tolist())
