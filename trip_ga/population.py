import concurrent.futures
import random
from typing import List, Sequence

from .distances import DistanceTable, Location
from .operators import shuffled
from .route import Route


Population = List[Route]


def build_routes(
    sequences: Sequence[Sequence[Location]], table: DistanceTable, workers: int = 1
) -> Population:
    """Build one route per sequence, preserving input order.

    ``workers > 1`` runs the builds on a short-lived thread pool. Route
    construction is pure Python and holds the GIL, so this gives no speedup
    for the built-in table; it only pays off when ``table.lookup`` releases
    the GIL. Results are identical for any worker count.
    """
    if workers <= 1 or len(sequences) < 2:
        return [Route.build(seq, table) for seq in sequences]
    with concurrent.futures.ThreadPoolExecutor(max_workers=min(workers, len(sequences))) as ex:
        return list(ex.map(lambda seq: Route.build(seq, table), sequences))


def fill_with_shuffles(
    routes: Population,
    destinations: Sequence[Location],
    table: DistanceTable,
    rng: random.Random,
    size: int,
    workers: int = 1,
) -> Population:
    missing = size - len(routes)
    if missing <= 0:
        return list(routes)
    sequences = [shuffled(destinations, rng) for _ in range(missing)]
    return list(routes) + build_routes(sequences, table, workers=workers)


def initial_population(
    destinations: Sequence[Location],
    table: DistanceTable,
    rng: random.Random,
    size: int,
    workers: int = 1,
) -> Population:
    # The caller's ordering is kept as an unshuffled baseline.
    baseline = Route.build(destinations, table)
    return fill_with_shuffles([baseline], destinations, table, rng, size, workers=workers)
