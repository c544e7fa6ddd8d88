"""
Generational search for a short visiting order over a table of pairwise distances.
"""

__all__ = [
    "data",
    "distances",
    "evaluation",
    "evolutionary",
    "fetch",
    "operators",
    "population",
    "route",
]
