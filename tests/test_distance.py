import pytest

from conftest import BRIGHTON, LONDON
from stock_locator.distance import EARTH_RADIUS_MILES, distance_miles, haversine
from stock_locator.models import GeoCoordinate


def test_same_point_is_zero():
    assert distance_miles(BRIGHTON, BRIGHTON) == 0.0


def test_symmetric():
    assert distance_miles(BRIGHTON, LONDON) == pytest.approx(distance_miles(LONDON, BRIGHTON))


def test_brighton_to_london():
    # Roughly 47 miles as the crow flies.
    assert distance_miles(BRIGHTON, LONDON) == pytest.approx(47.3, abs=0.5)


def test_one_degree_of_latitude():
    expected = EARTH_RADIUS_MILES * 3.141592653589793 / 180
    assert haversine(0.0, 0.0, 1.0, 0.0) == pytest.approx(expected)


def test_antipodes():
    assert haversine(0.0, 0.0, 0.0, 180.0) == pytest.approx(EARTH_RADIUS_MILES * 3.141592653589793)


@pytest.mark.parametrize("lat, lon", [(91.0, 0.0), (-90.5, 0.0), (0.0, 180.5), (0.0, -181.0)])
def test_coordinate_ranges_enforced(lat, lon):
    with pytest.raises(ValueError):
        GeoCoordinate(lat, lon)
