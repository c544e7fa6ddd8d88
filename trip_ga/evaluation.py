from dataclasses import dataclass
from typing import List, Sequence

import numpy as np

from .route import Route


@dataclass
class GenerationReport:
    generation: int
    best_distance: int
    global_best_distance: int
    stale_generations: int
    mean_distance: float


def rank(routes: Sequence[Route]) -> List[Route]:
    # sorted() is stable, so ties keep their population order.
    return sorted(routes, key=lambda r: r.distance)


def distance_stats(routes: Sequence[Route]) -> dict:
    if not routes:
        return {"min": float("inf"), "mean": float("inf"), "std": 0.0}
    distances = np.fromiter((r.distance for r in routes), dtype=np.float64, count=len(routes))
    return {
        "min": float(distances.min()),
        "mean": float(distances.mean()),
        "std": float(distances.std()),
    }
