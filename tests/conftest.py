"""Pytest configuration.

The repository root is not automatically added to ``sys.path`` when
running tests from the ``tests`` directory.  Adding it here lets the test
modules import both :mod:`weather_rider` and the Flask ``app`` module.

HTTP is never touched: the ``fake_get`` fixture replaces ``requests.get``
with a lookup table keyed by URL fragment.
"""

import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest
import requests

repo_root = Path(__file__).resolve().parents[1]
if str(repo_root) not in sys.path:
    sys.path.insert(0, str(repo_root))

from weather_rider.models import CurrentWeather, ForecastPeriod, Location, Route  # noqa: E402
from weather_rider.services.provider import WeatherReport  # noqa: E402


class FakeResponse:
    def __init__(self, payload=None, status_code=200):
        self._payload = payload if payload is not None else {}
        self.status_code = status_code

    @property
    def ok(self):
        return self.status_code < 400

    def json(self):
        # an exception payload stands for a body that fails to decode
        if isinstance(self._payload, Exception):
            raise self._payload
        return self._payload


def not_json():
    return FakeResponse(ValueError("Expecting value: line 1 column 1 (char 0)"))


@pytest.fixture
def fake_get(monkeypatch):
    routes = {}
    calls = []

    def _get(url, params=None, headers=None, timeout=None):
        calls.append((url, params or {}))
        for fragment, response in routes.items():
            if fragment in url:
                if isinstance(response, Exception):
                    raise response
                return response
        raise AssertionError(f"unexpected GET {url}")

    _get.routes = routes
    _get.calls = calls
    monkeypatch.setattr(requests, "get", _get)
    return _get


# ----------------------------------------------------------------------
# Model builders
# ----------------------------------------------------------------------
LONDON = Location(name="London", country="GB", latitude=51.5074, longitude=-0.1278)
PARIS = Location(name="Paris", country="FR", latitude=48.8566, longitude=2.3522)


def make_current(temperature_c=15.0, wind_speed_ms=3.0, code=2, source="open-meteo", location=LONDON):
    return CurrentWeather(
        location=location,
        temperature_c=temperature_c,
        feels_like_c=temperature_c - 1,
        humidity=70,
        wind_speed_ms=wind_speed_ms,
        pressure_hpa=1012.0,
        description="Partly cloudy",
        condition_code=code,
        icon=None,
        observed_at=datetime(2026, 10, 19, 12, tzinfo=timezone.utc),
        source=source,
    )


def make_periods(count=6, start=None, temperature_c=15.0, rain=10.0, step_hours=1):
    start = start or datetime.now(timezone.utc).replace(minute=0, second=0, microsecond=0)
    return [
        ForecastPeriod(
            time=start + timedelta(hours=i * step_hours),
            temperature_c=temperature_c + i,
            feels_like_c=temperature_c + i - 1,
            description="Partly cloudy",
            precipitation_probability=rain,
            wind_speed_ms=3.0,
            condition_code=2,
        )
        for i in range(count)
    ]


def make_route(duration_min=60.0, distance_km=40.0, source="osrm"):
    return Route(
        start=LONDON,
        destination=PARIS,
        distance_km=distance_km,
        duration_min=duration_min,
        source=source,
    )


def make_report(**kwargs):
    periods = kwargs.pop("periods", None)
    return WeatherReport(current=make_current(**kwargs), periods=periods if periods is not None else make_periods())
