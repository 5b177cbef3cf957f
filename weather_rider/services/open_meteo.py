import logging
from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional

import pandas as pd
import requests

from ..config import USER_AGENT, settings
from ..errors import LocationNotFound, ServiceUnavailable
from ..models import CurrentWeather, DailyForecast, ForecastPeriod, Location
from ..utils.weather_codes import describe_wmo

logger = logging.getLogger(__name__)

HOURLY_FIELDS = (
    "temperature_2m",
    "apparent_temperature",
    "precipitation_probability",
    "weather_code",
    "wind_speed_10m",
)
CURRENT_FIELDS = (
    "temperature_2m",
    "relative_humidity_2m",
    "apparent_temperature",
    "weather_code",
    "wind_speed_10m",
    "surface_pressure",
)
DAILY_FIELDS = (
    "weather_code",
    "temperature_2m_max",
    "temperature_2m_min",
    "precipitation_probability_max",
)


def _optional(value) -> Optional[float]:
    if value is None or pd.isna(value):
        return None
    return float(value)


class OpenMeteoService:
    """Open‑Meteo geocoding and forecast endpoints (no API key needed)."""

    GEOCODING_URL = "https://geocoding-api.open-meteo.com/v1/search"
    FORECAST_URL = "https://api.open-meteo.com/v1/forecast"

    def __init__(self, timeout: Optional[float] = None):
        self.timeout = settings.timeout if timeout is None else timeout

    # ------------------------------------------------------------------
    # HTTP plumbing
    # ------------------------------------------------------------------
    def _get_json(self, url: str, params: Dict) -> dict:
        try:
            resp = requests.get(url, params=params, headers=USER_AGENT, timeout=self.timeout)
        except requests.RequestException as exc:
            logger.error("Open-Meteo request failed: %s", exc)
            raise ServiceUnavailable("Failed to fetch weather data. Please try again.") from exc
        if not resp.ok:
            logger.warning("Open-Meteo %s returned %s", url, resp.status_code)
            raise ServiceUnavailable("Failed to fetch weather data. Please try again.")
        try:
            return resp.json()
        except ValueError as exc:
            logger.error("Open-Meteo %s sent a body that is not JSON: %s", url, exc)
            raise ServiceUnavailable("Failed to fetch weather data. Please try again.") from exc

    def _forecast_payload(self, location: Location, **params) -> dict:
        query = {
            "latitude": location.latitude,
            "longitude": location.longitude,
            "timezone": "auto",
            "wind_speed_unit": "ms",
        }
        query.update(params)
        return self._get_json(self.FORECAST_URL, query)

    @staticmethod
    def _tz(payload: dict) -> timezone:
        return timezone(timedelta(seconds=payload.get("utc_offset_seconds", 0)))

    # ------------------------------------------------------------------
    # Public façade
    # ------------------------------------------------------------------
    def geocode(self, name: str) -> Location:
        data = self._get_json(
            self.GEOCODING_URL,
            {"name": name, "count": 1, "language": "en", "format": "json"},
        )
        results = data.get("results")
        if not results:
            raise LocationNotFound(f"No location found for '{name}'")
        first = results[0]
        return Location(
            name=first.get("name", name),
            country=first.get("country_code") or first.get("country", ""),
            latitude=first["latitude"],
            longitude=first["longitude"],
            timezone=first.get("timezone"),
        )

    def current(self, location: Location) -> CurrentWeather:
        payload = self._forecast_payload(location, current=",".join(CURRENT_FIELDS))
        current = payload.get("current")
        if not current:
            raise ServiceUnavailable("No current weather data returned.")
        code = current.get("weather_code")
        _, description = describe_wmo(code)
        return CurrentWeather(
            location=location,
            temperature_c=current["temperature_2m"],
            feels_like_c=current.get("apparent_temperature", current["temperature_2m"]),
            humidity=current.get("relative_humidity_2m", 0),
            wind_speed_ms=current.get("wind_speed_10m", 0.0),
            pressure_hpa=current.get("surface_pressure"),
            description=description,
            condition_code=code,
            icon=None,
            observed_at=datetime.fromisoformat(current["time"]).replace(tzinfo=self._tz(payload)),
            source="open-meteo",
        )

    def hourly(
        self, location: Location, hours: int = 12, now: Optional[datetime] = None
    ) -> List[ForecastPeriod]:
        """The next ``hours`` hourly periods, starting with the hour under way.

        Times arrive as Unix seconds and are converted to the location's own
        timezone, so hours on either side of a clock change keep their true
        offset.
        """
        if hours <= 0:
            return []
        payload = self._forecast_payload(
            location, hourly=",".join(HOURLY_FIELDS), forecast_days=3, timeformat="unixtime"
        )
        hourly = payload.get("hourly") or {}
        if not hourly.get("time"):
            return []

        tz = payload.get("timezone") or self._tz(payload)
        blank = [None] * len(hourly["time"])
        df = pd.DataFrame({key: hourly.get(key, blank) for key in ("time",) + HOURLY_FIELDS})
        df["time"] = pd.to_datetime(df["time"], unit="s", utc=True).dt.tz_convert(tz)

        start = pd.Timestamp(now) if now is not None else pd.Timestamp.now(tz="UTC")
        df = df[df["time"] + pd.Timedelta(hours=1) > start].head(hours)

        periods = []
        for row in df.itertuples(index=False):
            code = None if pd.isna(row.weather_code) else int(row.weather_code)
            periods.append(
                ForecastPeriod(
                    time=row.time.to_pydatetime(),
                    temperature_c=float(row.temperature_2m),
                    feels_like_c=_optional(row.apparent_temperature),
                    description=describe_wmo(code)[1],
                    precipitation_probability=_optional(row.precipitation_probability),
                    wind_speed_ms=_optional(row.wind_speed_10m),
                    condition_code=code,
                )
            )
        return periods

    def daily(self, location: Location, days: int = 5) -> List[DailyForecast]:
        if days <= 0:
            return []
        payload = self._forecast_payload(location, daily=",".join(DAILY_FIELDS), forecast_days=days)
        daily = payload.get("daily") or {}
        rain = daily.get("precipitation_probability_max") or [None] * len(daily.get("time", []))
        result = []
        for i, day in enumerate(daily.get("time", [])):
            code = daily["weather_code"][i]
            result.append(
                DailyForecast(
                    date=datetime.fromisoformat(day).date(),
                    high_c=daily["temperature_2m_max"][i],
                    low_c=daily["temperature_2m_min"][i],
                    description=describe_wmo(code)[1],
                    precipitation_probability=rain[i],
                    condition_code=code,
                )
            )
        return result
