from typing import Hashable, Iterable, Iterator, List, Sequence, Tuple

import networkx as nx


Location = Hashable
Record = Tuple[Location, Location, int]


class MissingDistanceError(KeyError):
    """No distance is known for an ordered pair of locations."""

    def __init__(self, origin: Location, destination: Location):
        super().__init__((origin, destination))
        self.origin = origin
        self.destination = destination

    def __str__(self) -> str:
        return f"no distance from {self.origin!r} to {self.destination!r}"


class DistanceTable:
    """Read-only distances between ordered pairs of distinct locations.

    Entries live on a directed graph, so A->B and B->A are independent.
    """

    def __init__(self, graph: nx.DiGraph = None):
        self.graph = graph if graph is not None else nx.DiGraph()

    @classmethod
    def from_records(cls, records: Iterable[Record]) -> "DistanceTable":
        graph = nx.DiGraph()
        for origin, destination, distance in records:
            if origin == destination:
                raise ValueError(f"distance record from {origin!r} to itself")
            if graph.has_edge(origin, destination):
                raise ValueError(f"duplicate distance record for {origin!r} -> {destination!r}")
            graph.add_edge(origin, destination, weight=_check_distance(distance))
        return cls(graph)

    @classmethod
    def from_matrix(cls, locations: Sequence[Location], matrix) -> "DistanceTable":
        records = []
        for i, a in enumerate(locations):
            for j, b in enumerate(locations):
                if i != j:
                    records.append((a, b, matrix[i][j]))
        return cls.from_records(records)

    def lookup(self, a: Location, b: Location) -> int:
        try:
            return self.graph[a][b]["weight"]
        except KeyError:
            raise MissingDistanceError(a, b) from None

    def missing_pairs(self, locations: Sequence[Location]) -> List[Tuple[Location, Location]]:
        return [
            (a, b)
            for a in locations
            for b in locations
            if a != b and not self.graph.has_edge(a, b)
        ]

    def require_complete(self, locations: Sequence[Location]) -> None:
        missing = self.missing_pairs(locations)
        if missing:
            raise MissingDistanceError(*missing[0])

    def records(self) -> Iterator[Record]:
        for a, b, distance in self.graph.edges(data="weight"):
            yield a, b, distance

    @property
    def locations(self) -> List[Location]:
        return list(self.graph.nodes())

    def __contains__(self, pair) -> bool:
        a, b = pair
        return self.graph.has_edge(a, b)

    def __len__(self) -> int:
        return self.graph.number_of_edges()


def _check_distance(value) -> int:
    if isinstance(value, bool):
        raise ValueError(f"invalid distance {value!r}")
    if isinstance(value, float):
        if not value.is_integer():
            raise ValueError(f"distance must be an integer, got {value!r}")
        value = int(value)
    try:
        distance = int(value)
    except (TypeError, ValueError):
        raise ValueError(f"invalid distance {value!r}") from None
    if distance < 0:
        raise ValueError(f"distance must be non-negative, got {distance}")
    return distance
