"""Proximity filtering and distance accumulation along a feature's path."""

import logging
import math
from collections.abc import Sequence

from geojson_gtfs.errors import InputFormatError
from geojson_gtfs.gtfs.models import Coordinate, RetainedPoint

logger = logging.getLogger(__name__)

EARTH_RADIUS_KM = 6371.0088


def distance_km(a: Coordinate, b: Coordinate) -> float:
    """Calculate haversine distance between two (lon, lat) points in kilometers."""
    lon1, lat1 = a[0], a[1]
    lon2, lat2 = b[0], b[1]

    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    delta_phi = math.radians(lat2 - lat1)
    delta_lambda = math.radians(lon2 - lon1)

    h = (
        math.sin(delta_phi / 2) ** 2
        + math.cos(phi1) * math.cos(phi2) * math.sin(delta_lambda / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))

    return EARTH_RADIUS_KM * c


def retain_points(coordinates: Sequence[Coordinate], threshold_km: float) -> list[RetainedPoint]:
    """
    Walk a path once, dropping points within ``threshold_km`` of the last kept point.

    Every candidate adds its distance from the last kept point to the running
    total, whether or not it is kept, so the cumulative distance never loses
    what dropped points contributed. A kept point's segment distance is
    measured from the previous kept point.
    """
    retained: list[RetainedPoint] = []
    previous: Coordinate | None = None
    total = 0.0

    for index, coords in enumerate(coordinates):
        _check_coordinate(coords, index)

        if previous is None:
            retained.append(RetainedPoint(coords, index, 0.0, total))
            previous = coords
            continue

        distance = distance_km(previous, coords)
        total += distance

        if distance <= threshold_km:
            logger.debug(
                f"Skipped stop {index} (distance to previous stop is less or equal "
                f"{threshold_km})"
            )
            continue

        retained.append(RetainedPoint(coords, index, distance, total))
        previous = coords

    return retained


def _check_coordinate(coords: Coordinate, index: int) -> None:
    if isinstance(coords, (str, bytes)) or not isinstance(coords, Sequence) or len(coords) < 2:
        raise InputFormatError(f"Coordinate {index} is not a coordinate pair: {coords!r}")
    for value in coords[:2]:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise InputFormatError(f"Coordinate {index} has a non-numeric value: {coords!r}")
