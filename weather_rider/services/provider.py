"""
One entry point over both weather back ends.

``WeatherProvider("open-meteo")`` geocodes through Open‑Meteo and needs no
key; ``WeatherProvider("openweather")`` needs ``OPENWEATHER_API_KEY``.
Both return a ``WeatherReport``: the current reading plus the upcoming
forecast periods (hourly for Open‑Meteo, 3‑hourly for OpenWeather).
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from ..config import settings
from ..models import CurrentWeather, DailyForecast, ForecastPeriod, Location
from .open_meteo import OpenMeteoService
from .openweather import OpenWeatherService, daily_from_periods

logger = logging.getLogger(__name__)

# Open-Meteo hourly rows fetched per report; callers slice further
HOURLY_WINDOW = 48


@dataclass
class WeatherReport:
    current: CurrentWeather
    periods: List[ForecastPeriod] = field(default_factory=list)

    @property
    def location(self) -> Location:
        return self.current.location

    @property
    def source(self) -> str:
        return self.current.source


class WeatherProvider:
    def __init__(self, name: Optional[str] = None, api_key: Optional[str] = None):
        self.name = name or settings.provider
        if self.name == "openweather":
            self._openweather = OpenWeatherService(api_key=api_key)
            self._open_meteo = None
        elif self.name == "open-meteo":
            self._openweather = None
            self._open_meteo = OpenMeteoService()
        else:
            raise ValueError(f"Unknown weather provider '{self.name}'")

    def locate(self, city: str) -> Location:
        """Resolve a place name to coordinates."""
        if self._open_meteo is not None:
            return self._open_meteo.geocode(city)
        return self._openweather.current_by_city(city).location

    def report(self, city: str) -> WeatherReport:
        if self._open_meteo is not None:
            location = self._open_meteo.geocode(city)
            logger.info("Resolved %r to %s (%.4f, %.4f)", city, location.label, location.latitude, location.longitude)
            return self._open_meteo_report(location)

        current = self._openweather.current_by_city(city)
        forecast = self._openweather.forecast(city)
        return WeatherReport(current=current, periods=forecast.periods)

    def report_by_coords(self, lat: float, lon: float) -> WeatherReport:
        if self._open_meteo is not None:
            # Open-Meteo has no reverse geocoder; the place keeps its coordinates as a name
            location = Location(name=f"{lat:.4f},{lon:.4f}", country="", latitude=lat, longitude=lon)
            return self._open_meteo_report(location)

        current = self._openweather.current_by_coords(lat, lon)
        forecast = self._openweather.forecast_by_coords(lat, lon)
        return WeatherReport(current=current, periods=forecast.periods)

    def _open_meteo_report(self, location: Location) -> WeatherReport:
        current = self._open_meteo.current(location)
        periods = self._open_meteo.hourly(location, hours=HOURLY_WINDOW)
        return WeatherReport(current=current, periods=periods)

    def outlook(self, report: WeatherReport, days: int = 5) -> List[DailyForecast]:
        """Day-by-day highs and lows for the report's location."""
        if days <= 0:
            return []
        if self._open_meteo is not None:
            return self._open_meteo.daily(report.location, days)
        return daily_from_periods(report.periods)[:days]
