from dataclasses import dataclass, field
from typing import Dict, List, Sequence, Tuple

from .distances import DistanceTable, Location


@dataclass(frozen=True)
class Leg:
    start: Location
    finish: Location
    distance: int

    def __str__(self) -> str:
        return f"{self.start} --> {self.finish} - {self.distance}"


def path_legs(table: DistanceTable, stops: Sequence[Location]) -> List[Leg]:
    # Open path: no leg back from the last stop to the first.
    return [Leg(a, b, table.lookup(a, b)) for a, b in zip(stops, stops[1:])]


@dataclass(frozen=True)
class Route:
    stops: Tuple[Location, ...]
    legs: Tuple[Leg, ...]
    distance: int
    table: DistanceTable = field(repr=False, compare=False)

    @classmethod
    def build(cls, stops: Sequence[Location], table: DistanceTable) -> "Route":
        stops = tuple(stops)
        legs = tuple(path_legs(table, stops))
        return cls(stops=stops, legs=legs, distance=sum(leg.distance for leg in legs), table=table)

    def to_state(self) -> Dict:
        return {
            "distance": self.distance,
            "stops": list(self.stops),
            "legs": [
                {"start": leg.start, "finish": leg.finish, "distance": leg.distance}
                for leg in self.legs
            ],
        }

    def describe(self) -> str:
        lines = [f"Route is {self.distance / 1000:.1f}km long ({len(self.stops)} stops)"]
        lines.extend(str(leg) for leg in self.legs)
        return "\n".join(lines)
