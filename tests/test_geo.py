import math

import pytest

from discovery.services.geo import (
    EARTH_RADIUS_KM, Point, haversine_km, km_to_miles, round_distance,
)

SF = Point(37.7749, -122.4194)
LA = Point(34.0522, -118.2437)


def test_same_point_is_zero():
    for p in (SF, LA, Point(0, 0), Point(-89.9, 179.9)):
        assert haversine_km(p, p) == 0


def test_symmetric():
    assert haversine_km(SF, LA) == pytest.approx(haversine_km(LA, SF), abs=1e-9)


def test_one_degree_of_latitude():
    assert haversine_km(Point(10, 20), Point(11, 20)) == pytest.approx(111.19, abs=0.5)


def test_antipodal_points():
    d = haversine_km(Point(0, 0), Point(0, 180))
    assert d == pytest.approx(math.pi * EARTH_RADIUS_KM, rel=1e-9)
    assert d == pytest.approx(20015, abs=1)


def test_sf_to_la():
    # ~559 km / ~347 mi
    assert km_to_miles(haversine_km(SF, LA)) == pytest.approx(347, abs=1)


def test_km_to_miles_constant():
    assert km_to_miles(100) == pytest.approx(62.1371, abs=1e-9)
    assert km_to_miles(0) == 0


class TestRoundDistance:
    def test_one_decimal(self):
        assert round_distance(0.354) == 0.4
        assert round_distance(12.04) == 12.0

    def test_exact_half_rounds_up(self):
        # builtin round(0.25, 1) gives 0.2
        assert round_distance(0.25) == 0.3
        assert round_distance(0.75) == 0.8
