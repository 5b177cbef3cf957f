from dataclasses import dataclass, field
from datetime import date, datetime
from typing import List, Optional


@dataclass
class Location:
    name: str
    country: str
    latitude: float
    longitude: float
    timezone: Optional[str] = None

    @property
    def label(self) -> str:
        return f"{self.name}, {self.country}" if self.country else self.name


@dataclass
class CurrentWeather:
    """A single "right now" reading, whichever provider it came from."""

    location: Location
    temperature_c: float
    feels_like_c: float
    humidity: float
    wind_speed_ms: float
    pressure_hpa: Optional[float]
    description: str
    condition_code: Optional[int]
    icon: Optional[str]
    observed_at: datetime
    source: str


@dataclass
class ForecastPeriod:
    time: datetime
    temperature_c: float
    feels_like_c: Optional[float]
    description: str
    precipitation_probability: Optional[float] = None
    wind_speed_ms: Optional[float] = None
    condition_code: Optional[int] = None


@dataclass
class DailyForecast:
    date: date
    high_c: float
    low_c: float
    description: str
    precipitation_probability: Optional[float] = None
    condition_code: Optional[int] = None


@dataclass
class Forecast:
    location: Location
    periods: List[ForecastPeriod] = field(default_factory=list)


@dataclass
class Route:
    start: Location
    destination: Location
    distance_km: float
    duration_min: float
    source: str  # "osrm" or "estimate"

    @property
    def is_estimate(self) -> bool:
        return self.source == "estimate"
