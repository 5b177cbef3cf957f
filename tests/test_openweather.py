from datetime import datetime, timezone

import pytest
import requests

from conftest import FakeResponse, make_periods, not_json
from weather_rider.errors import ApiKeyError, LocationNotFound, ServiceUnavailable
from weather_rider.services.openweather import OpenWeatherService, daily_from_periods, icon_url

CURRENT = {
    "name": "London",
    "coord": {"lat": 51.51, "lon": -0.13},
    "sys": {"country": "GB"},
    "dt": 1760875200,
    "main": {"temp": 14.6, "feels_like": 13.9, "humidity": 81, "pressure": 1009},
    "wind": {"speed": 4.1},
    "weather": [{"id": 500, "description": "light rain", "icon": "10d"}],
}

FORECAST = {
    "city": {"name": "Nairobi", "country": "KE", "coord": {"lat": -1.28, "lon": 36.82}, "timezone": 10800},
    "list": [
        {
            "dt": 1760875200 + i * 10800,
            "main": {"temp": 20 + i, "feels_like": 19 + i},
            "weather": [{"id": 801, "description": "few clouds"}],
            "wind": {"speed": 2.0},
            "pop": 0.45,
        }
        for i in range(8)
    ],
}


@pytest.fixture
def service():
    return OpenWeatherService(api_key="test-key", timeout=1)


def test_missing_key_is_rejected():
    with pytest.raises(ApiKeyError, match="Missing API key"):
        OpenWeatherService(api_key="")


def test_current_by_city_parses_payload(service, fake_get):
    fake_get.routes["data/2.5/weather"] = FakeResponse(CURRENT)

    current = service.current_by_city("London")

    assert current.location.label == "London, GB"
    assert current.temperature_c == 14.6
    assert current.feels_like_c == 13.9
    assert current.humidity == 81
    assert current.pressure_hpa == 1009
    assert current.description == "light rain"
    assert current.condition_code == 500
    assert current.source == "openweather"
    assert current.observed_at == datetime.fromtimestamp(1760875200, tz=timezone.utc)

    url, params = fake_get.calls[0]
    assert params["q"] == "London"
    assert params["appid"] == "test-key"
    assert params["units"] == "metric"


@pytest.mark.parametrize(
    "status, error, message",
    [
        (404, LocationNotFound, "City not found. Please try another city."),
        (401, ApiKeyError, "Invalid API key. Please check your OpenWeather API key."),
        (500, ServiceUnavailable, "Failed to fetch weather data. Please try again."),
    ],
)
def test_current_by_city_status_errors(service, fake_get, status, error, message):
    fake_get.routes["data/2.5/weather"] = FakeResponse({}, status_code=status)
    with pytest.raises(error) as excinfo:
        service.current_by_city("Atlantis")
    assert str(excinfo.value) == message


def test_current_by_coords(service, fake_get):
    fake_get.routes["data/2.5/weather"] = FakeResponse(CURRENT)
    current = service.current_by_coords(51.5, -0.1)
    assert current.location.name == "London"
    assert fake_get.calls[0][1]["lat"] == 51.5


def test_current_by_coords_failure(service, fake_get):
    fake_get.routes["data/2.5/weather"] = FakeResponse({}, status_code=503)
    with pytest.raises(ServiceUnavailable, match="Failed to fetch weather data."):
        service.current_by_coords(0, 0)


def test_network_error_becomes_service_unavailable(service, fake_get):
    fake_get.routes["data/2.5/weather"] = requests.ConnectionError("boom")
    with pytest.raises(ServiceUnavailable):
        service.current_by_city("London")


def test_forecast_parses_periods_in_local_time(service, fake_get):
    fake_get.routes["data/2.5/forecast"] = FakeResponse(FORECAST)

    forecast = service.forecast("Nairobi")

    assert forecast.location.label == "Nairobi, KE"
    assert len(forecast.periods) == 8
    first = forecast.periods[0]
    assert first.temperature_c == 20
    assert first.precipitation_probability == 45
    assert first.time.utcoffset().total_seconds() == 10800
    assert [p.temperature_c for p in forecast.periods[:5]] == [20, 21, 22, 23, 24]


def test_forecast_empty_list(service, fake_get):
    fake_get.routes["data/2.5/forecast"] = FakeResponse({"city": {"name": "Nowhere"}, "list": []})
    forecast = service.forecast("Nowhere")
    assert forecast.periods == []


def test_forecast_failure_message(service, fake_get):
    fake_get.routes["data/2.5/forecast"] = FakeResponse({}, status_code=404)
    with pytest.raises(ServiceUnavailable, match="Unable to fetch forecast. Try another location."):
        service.forecast("Atlantis")


def test_icon_url():
    assert icon_url("10d") == "https://openweathermap.org/img/wn/10d@4x.png"
    assert icon_url(None) is None


def test_daily_from_periods_rolls_up_by_day():
    start = datetime(2026, 10, 19, 0, tzinfo=timezone.utc)
    periods = make_periods(count=16, start=start, temperature_c=10, rain=20, step_hours=3)

    days = daily_from_periods(periods)

    assert len(days) == 2
    assert days[0].date.isoformat() == "2026-10-19"
    assert days[0].low_c == 10
    assert days[0].high_c == 17
    assert days[1].high_c == 25
    assert days[0].precipitation_probability == 20
    assert days[0].description == "Partly cloudy"


def test_daily_from_periods_empty():
    assert daily_from_periods([]) == []


@pytest.mark.parametrize(
    "endpoint, call, message",
    [
        ("data/2.5/weather", lambda s: s.current_by_city("London"), "Failed to fetch weather data. Please try again."),
        ("data/2.5/weather", lambda s: s.current_by_coords(51.5, -0.1), "Failed to fetch weather data."),
        ("data/2.5/forecast", lambda s: s.forecast("London"), "Unable to fetch forecast. Try another location."),
    ],
)
def test_body_that_is_not_json(service, fake_get, endpoint, call, message):
    fake_get.routes[endpoint] = not_json()
    with pytest.raises(ServiceUnavailable) as excinfo:
        call(service)
    assert str(excinfo.value) == message
