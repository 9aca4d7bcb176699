"""Geospatial helper functions."""

from __future__ import annotations

import math
from typing import Sequence

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
    """Great-circle distance between two coordinates in kilometres."""

    return haversine_km(a.latitude, a.longitude, b.latitude, b.longitude)


def path_distance_km(points: Sequence[Coordinate]) -> float:
    """Sum of leg distances along an ordered sequence of points."""

    return sum(distance_km(start, end) for start, end in zip(points, points[1:]))


def is_finite_coordinate(point: Coordinate) -> bool:
    return math.isfinite(point.latitude) and math.isfinite(point.longitude)
