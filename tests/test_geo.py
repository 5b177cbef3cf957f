import pytest

from weather_rider.utils.geo import c_to_f, estimate_route, haversine, km_to_miles, ms_to_kmh


def test_haversine_london_paris():
    """London to Paris is roughly 344 km as the crow flies."""
    assert haversine(51.5074, -0.1278, 48.8566, 2.3522) == pytest.approx(343.5, abs=1.0)


def test_haversine_same_point_is_zero():
    assert haversine(10.0, 20.0, 10.0, 20.0) == 0.0


def test_haversine_is_symmetric():
    there = haversine(-1.2921, 36.8219, 35.6762, 139.6503)
    back = haversine(35.6762, 139.6503, -1.2921, 36.8219)
    assert there == pytest.approx(back)


def test_estimate_route_uses_average_speed():
    distance, minutes = estimate_route(51.5074, -0.1278, 48.8566, 2.3522, speed_kmh=50)
    assert distance == pytest.approx(343.5, abs=1.0)
    assert minutes == pytest.approx(distance / 50 * 60)


def test_estimate_route_zero_distance():
    assert estimate_route(1.0, 1.0, 1.0, 1.0) == (0.0, 0.0)


def test_estimate_route_rejects_non_positive_speed():
    with pytest.raises(ValueError):
        estimate_route(0, 0, 1, 1, speed_kmh=0)


def test_unit_conversions():
    assert c_to_f(0) == 32
    assert c_to_f(100) == 212
    assert ms_to_kmh(10) == pytest.approx(36.0)
    assert km_to_miles(100) == pytest.approx(62.1371)
