import random
from typing import List, Sequence

from .distances import Location
from .route import Route


MUTATION_STRENGTHS = (1, 2, 3, 5, 10)


def shuffled(stops: Sequence[Location], rng: random.Random) -> List[Location]:
    # random.Random.shuffle is an unbiased Fisher-Yates pass; shuffle a private copy.
    order = list(stops)
    rng.shuffle(order)
    return order


def swap_positions(
    stops: Sequence[Location], rng: random.Random, k: int, anchor_last: bool = False
) -> List[Location]:
    """Return a copy of ``stops`` with ``k`` random pairs of positions swapped.

    Both endpoints of every swap are drawn independently and uniformly, so a
    swap may pick the same position twice. With ``anchor_last`` the final
    position is never drawn and the last stop stays in place.
    """
    if k < 0:
        raise ValueError(f"mutation count must be non-negative, got {k}")
    order = list(stops)
    span = len(order) - 1 if anchor_last else len(order)
    if span < 1:
        return order
    for _ in range(k):
        i = rng.randrange(span)
        j = rng.randrange(span)
        order[i], order[j] = order[j], order[i]
    return order


def mutate(route: Route, rng: random.Random, k: int, anchor_last: bool = False) -> Route:
    return Route.build(swap_positions(route.stops, rng, k, anchor_last=anchor_last), route.table)
