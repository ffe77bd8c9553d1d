"""Geospatial helper functions."""

from __future__ import annotations

import math
from typing import Iterable, Optional

from ..models.domain import Coordinate

EARTH_RADIUS_KM = 6371.0


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Compute distance between two coordinates using the Haversine formula."""

    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lon2 - lon1)

    a = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def distance_km(a: Coordinate, b: Coordinate) -> float:
    """Great-circle distance in kilometres between two coordinates."""

    return haversine_km(a.latitude, a.longitude, b.latitude, b.longitude)


def centroid(points: Iterable[Coordinate]) -> Optional[Coordinate]:
    """Return the arithmetic mean of the given points, or None when empty."""

    lat_total = 0.0
    lon_total = 0.0
    count = 0
    for point in points:
        lat_total += point.latitude
        lon_total += point.longitude
        count += 1
    if not count:
        return None
    return Coordinate(lat_total / count, lon_total / count)
