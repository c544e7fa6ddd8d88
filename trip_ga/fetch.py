"""Driving distances from a distance-matrix web service.

Every ordered pair of destinations costs one request, so ``n`` destinations
need ``n * (n - 1)`` calls.
"""

import logging
from typing import Iterator, Sequence

import requests

from .distances import Record


logger = logging.getLogger(__name__)

DISTANCE_MATRIX_URL = "https://maps.googleapis.com/maps/api/distancematrix/json"


class DistanceLookupError(RuntimeError):
    def __init__(self, origin: str, destination: str, reason: str):
        super().__init__(f"{origin!r} -> {destination!r}: {reason}")
        self.origin = origin
        self.destination = destination
        self.reason = reason


class DistanceMatrixClient:
    def __init__(
        self,
        api_key: str,
        base_url: str = DISTANCE_MATRIX_URL,
        mode: str = "driving",
        timeout: float = 10.0,
        session: requests.Session = None,
    ):
        self.api_key = api_key
        self.base_url = base_url
        self.mode = mode
        self.timeout = timeout
        self.session = session or requests.Session()

    def distance(self, origin: str, destination: str) -> int:
        """Driving distance in meters from ``origin`` to ``destination``."""
        params = {
            "origins": origin,
            "destinations": destination,
            "key": self.api_key,
            "mode": self.mode,
            "units": "metric",
            "language": "en",
        }
        try:
            response = self.session.get(self.base_url, params=params, timeout=self.timeout)
            response.raise_for_status()
            payload = response.json()
        except (requests.RequestException, ValueError) as exc:
            raise DistanceLookupError(origin, destination, str(exc)) from exc
        return _parse_distance(payload, origin, destination)


def _parse_distance(payload, origin: str, destination: str) -> int:
    if not isinstance(payload, dict):
        raise DistanceLookupError(origin, destination, "response is not a JSON object")
    status = payload.get("status")
    if status != "OK":
        reason = payload.get("error_message") or f"status {status}"
        raise DistanceLookupError(origin, destination, reason)
    try:
        element = payload["rows"][0]["elements"][0]
    except (KeyError, IndexError, TypeError):
        raise DistanceLookupError(origin, destination, "no matrix element in response") from None
    if element.get("status") != "OK":
        raise DistanceLookupError(origin, destination, f"element status {element.get('status')}")
    value = (element.get("distance") or {}).get("value")
    if not isinstance(value, int) or isinstance(value, bool) or value < 0:
        raise DistanceLookupError(origin, destination, f"invalid distance {value!r}")
    return value


def fetch_distance_records(
    destinations: Sequence[str], client: DistanceMatrixClient
) -> Iterator[Record]:
    """Yield a record per ordered pair; pairs that fail are logged and skipped.

    Skipped pairs leave gaps that a route search later rejects.
    """
    for origin in destinations:
        for destination in destinations:
            if origin == destination:
                continue
            try:
                distance = client.distance(origin, destination)
            except DistanceLookupError as exc:
                logger.warning("Error when getting distance for %s and %s: %s", origin, destination, exc.reason)
                continue
            yield origin, destination, distance
