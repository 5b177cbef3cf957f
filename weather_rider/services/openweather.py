import logging
from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional

import pandas as pd
import requests

from ..config import USER_AGENT, settings
from ..errors import ApiKeyError, LocationNotFound, ServiceUnavailable
from ..models import CurrentWeather, DailyForecast, Forecast, ForecastPeriod, Location
from ..utils.formatting import round_half_up

logger = logging.getLogger(__name__)

ICON_URL = "https://openweathermap.org/img/wn/{icon}@4x.png"


def icon_url(icon: Optional[str]) -> Optional[str]:
    return ICON_URL.format(icon=icon) if icon else None


class OpenWeatherService:
    """Wraps the OpenWeather 2.5 REST API (current weather + 5 day forecast)."""

    BASE_URL = "https://api.openweathermap.org/data/2.5"

    def __init__(self, api_key: Optional[str] = None, timeout: Optional[float] = None):
        self.api_key = settings.openweather_api_key if api_key is None else api_key
        self.timeout = settings.timeout if timeout is None else timeout
        if not self.api_key:
            raise ApiKeyError("Missing API key. Add OPENWEATHER_API_KEY to run the app.")

    # ------------------------------------------------------------------
    # HTTP plumbing
    # ------------------------------------------------------------------
    def _get(self, endpoint: str, params: Dict) -> requests.Response:
        query = dict(params, appid=self.api_key, units="metric")
        try:
            return requests.get(
                f"{self.BASE_URL}/{endpoint}",
                params=query,
                headers=USER_AGENT,
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            logger.error("OpenWeather request to %s failed: %s", endpoint, exc)
            raise ServiceUnavailable("Failed to fetch weather data. Please try again.") from exc

    @staticmethod
    def _json(resp: requests.Response, message: str) -> dict:
        try:
            return resp.json()
        except ValueError as exc:
            logger.error("OpenWeather sent a body that is not JSON: %s", exc)
            raise ServiceUnavailable(message) from exc

    # ------------------------------------------------------------------
    # Payload → model
    # ------------------------------------------------------------------
    @staticmethod
    def _parse_current(data: dict) -> CurrentWeather:
        weather = (data.get("weather") or [{}])[0]
        coord = data.get("coord", {})
        location = Location(
            name=data.get("name", ""),
            country=data.get("sys", {}).get("country", ""),
            latitude=coord.get("lat", 0.0),
            longitude=coord.get("lon", 0.0),
        )
        main = data["main"]
        return CurrentWeather(
            location=location,
            temperature_c=main["temp"],
            feels_like_c=main.get("feels_like", main["temp"]),
            humidity=main.get("humidity", 0),
            wind_speed_ms=data.get("wind", {}).get("speed", 0.0),
            pressure_hpa=main.get("pressure"),
            description=weather.get("description", "-"),
            condition_code=weather.get("id"),
            icon=weather.get("icon"),
            observed_at=datetime.fromtimestamp(data.get("dt", 0), tz=timezone.utc)
            if data.get("dt")
            else datetime.now(timezone.utc),
            source="openweather",
        )

    @staticmethod
    def _parse_period(entry: dict, tz: timezone = timezone.utc) -> ForecastPeriod:
        weather = (entry.get("weather") or [{}])[0]
        pop = entry.get("pop")
        return ForecastPeriod(
            time=datetime.fromtimestamp(entry["dt"], tz=tz),
            temperature_c=entry["main"]["temp"],
            feels_like_c=entry["main"].get("feels_like"),
            description=weather.get("description", "-"),
            precipitation_probability=round_half_up(pop * 100) if pop is not None else None,
            wind_speed_ms=entry.get("wind", {}).get("speed"),
            condition_code=weather.get("id"),
        )

    # ------------------------------------------------------------------
    # Public façade
    # ------------------------------------------------------------------
    def current_by_city(self, city: str) -> CurrentWeather:
        resp = self._get("weather", {"q": city})
        if resp.status_code == 404:
            raise LocationNotFound("City not found. Please try another city.")
        if resp.status_code == 401:
            raise ApiKeyError("Invalid API key. Please check your OpenWeather API key.")
        if not resp.ok:
            logger.warning("OpenWeather /weather returned %s for %r", resp.status_code, city)
            raise ServiceUnavailable("Failed to fetch weather data. Please try again.")
        return self._parse_current(self._json(resp, "Failed to fetch weather data. Please try again."))

    def current_by_coords(self, lat: float, lon: float) -> CurrentWeather:
        resp = self._get("weather", {"lat": lat, "lon": lon})
        if not resp.ok:
            logger.warning("OpenWeather /weather returned %s for %s,%s", resp.status_code, lat, lon)
            raise ServiceUnavailable("Failed to fetch weather data.")
        return self._parse_current(self._json(resp, "Failed to fetch weather data."))

    def forecast(self, city: str) -> Forecast:
        """5 day / 3 hour forecast; an empty ``list`` gives a forecast with no periods."""
        return self._forecast({"q": city}, fallback_name=city)

    def forecast_by_coords(self, lat: float, lon: float) -> Forecast:
        return self._forecast({"lat": lat, "lon": lon}, fallback_name=f"{lat:.4f},{lon:.4f}")

    def _forecast(self, params: Dict, fallback_name: str) -> Forecast:
        resp = self._get("forecast", params)
        if not resp.ok:
            logger.warning("OpenWeather /forecast returned %s for %s", resp.status_code, params)
            raise ServiceUnavailable("Unable to fetch forecast. Try another location.")
        data = self._json(resp, "Unable to fetch forecast. Try another location.")
        city_meta = data.get("city") or {}
        coord = city_meta.get("coord", {})
        location = Location(
            name=city_meta.get("name", fallback_name),
            country=city_meta.get("country", ""),
            latitude=coord.get("lat", 0.0),
            longitude=coord.get("lon", 0.0),
        )
        # periods are shown in the city's local time
        tz = timezone(timedelta(seconds=city_meta.get("timezone", 0)))
        periods = [self._parse_period(entry, tz) for entry in data.get("list") or []]
        return Forecast(location=location, periods=periods)


def daily_from_periods(periods: List[ForecastPeriod]) -> List[DailyForecast]:
    """Roll 3‑hour periods up into one high/low summary per calendar day."""
    if not periods:
        return []
    df = pd.DataFrame(
        {
            "date": [p.time.date() for p in periods],
            "temp": [p.temperature_c for p in periods],
            "rain": [p.precipitation_probability for p in periods],
            "code": [p.condition_code for p in periods],
            "description": [p.description for p in periods],
        }
    )
    days = []
    for day, group in df.groupby("date", sort=True):
        # the most frequent condition stands for the day
        top = group["description"].mode().iloc[0]
        code = group.loc[group["description"] == top, "code"].iloc[0]
        rain = group["rain"].max()
        days.append(
            DailyForecast(
                date=day,
                high_c=float(group["temp"].max()),
                low_c=float(group["temp"].min()),
                description=top,
                precipitation_probability=None if pd.isna(rain) else float(rain),
                condition_code=None if pd.isna(code) else int(code),
            )
        )
    return days
