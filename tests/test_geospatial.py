import math

import pytest

from src.fleetroute.models.domain import Coordinate
from src.fleetroute.services.geospatial import distance_km, haversine_km, path_distance_km


def test_distance_to_self_is_zero():
    point = Coordinate(28.70, 77.10)

    assert distance_km(point, point) == 0.0


def test_distance_is_symmetric():
    a = Coordinate(28.70, 77.10)
    b = Coordinate(28.55, 77.25)

    assert distance_km(a, b) == pytest.approx(distance_km(b, a))


def test_one_degree_of_latitude_matches_earth_radius():
    expected = 6371.0 * math.pi / 180

    assert haversine_km(0.0, 0.0, 1.0, 0.0) == pytest.approx(expected)


def test_path_distance_sums_legs():
    points = [Coordinate(0.0, 0.0), Coordinate(0.0, 0.1), Coordinate(0.0, 0.3)]

    assert path_distance_km(points) == pytest.approx(distance_km(points[0], points[2]))
    assert path_distance_km(points[:1]) == 0
