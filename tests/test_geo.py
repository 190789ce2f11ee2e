"""Tests for haversine distance."""
import pytest

from peak_finder.models import Coordinate
from peak_finder.core.geo import distance_km

MADRID = Coordinate(lat=40.4168, lon=-3.7038)
BARCELONA = Coordinate(lat=41.3874, lon=2.1686)


def test_madrid_to_barcelona():
    assert distance_km(MADRID, BARCELONA) == pytest.approx(504.6, abs=1.0)


@pytest.mark.parametrize("a,b", [
    (MADRID, BARCELONA),
    (Coordinate(lat=-33.9, lon=18.4), Coordinate(lat=51.5, lon=-0.1)),
    (Coordinate(lat=89.9, lon=179.9), Coordinate(lat=-89.9, lon=-179.9)),
])
def test_distance_is_symmetric(a, b):
    assert distance_km(a, b) == distance_km(b, a)


def test_same_point_is_zero():
    assert distance_km(MADRID, MADRID) == 0


def test_result_rounded_to_two_decimals():
    d = distance_km(MADRID, BARCELONA)
    assert round(d, 2) == d


def test_across_antimeridian_is_short():
    a = Coordinate(lat=0.0, lon=179.5)
    b = Coordinate(lat=0.0, lon=-179.5)
    assert distance_km(a, b) == pytest.approx(111.19, abs=0.1)


@pytest.mark.parametrize("lat", [x / 2 for x in range(-180, 181)])
@pytest.mark.parametrize("lon", [0.0, 45.5, -120.0, 179.0])
def test_antipodal_points_do_not_raise(lat, lon):
    a = Coordinate(lat=lat, lon=lon)
    b = Coordinate(lat=-lat, lon=lon - 180 if lon > 0 else lon + 180)
    assert distance_km(a, b) == pytest.approx(20015.09, abs=0.1)


def test_near_antipodal_example():
    a = Coordinate(lat=-87.5, lon=0.0)
    b = Coordinate(lat=87.5, lon=180.0)
    assert distance_km(a, b) == distance_km(b, a)
    assert distance_km(a, b) == pytest.approx(20015.09, abs=0.1)
