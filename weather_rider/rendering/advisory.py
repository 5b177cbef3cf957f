"""
Rider-facing advice derived from a weather report.

All of it is simple threshold logic over the current reading and the
upcoming forecast periods.
"""

from dataclasses import dataclass
from typing import List, Optional, Sequence

from ..config import (
    HEAT_WARNING_C,
    ICE_WARNING_C,
    RAIN_WARNING_THRESHOLD,
    WIND_WARNING_KMH,
)
from ..models import CurrentWeather, ForecastPeriod, Route
from ..utils.geo import ms_to_kmh
from ..utils.weather_codes import is_wet, theme_for


@dataclass
class Advisory:
    level: str  # "warning" or "info"
    text: str


def _max_rain(periods: Sequence[ForecastPeriod]) -> float:
    probs = [p.precipitation_probability for p in periods if p.precipitation_probability is not None]
    return max(probs) if probs else 0.0


def gear_suggestions(
    temperature_c: float,
    wind_kmh: float = 0.0,
    rain_probability: float = 0.0,
) -> List[str]:
    if temperature_c < 0:
        gear = ["Insulated jacket", "Thermal base layer", "Winter gloves", "Balaclava"]
    elif temperature_c < 5:
        gear = ["Warm jacket", "Thermal gloves", "Neck gaiter"]
    elif temperature_c < 10:
        gear = ["Windproof jacket", "Full-finger gloves", "Long trousers"]
    elif temperature_c < 15:
        gear = ["Light jacket or fleece", "Long sleeves"]
    elif temperature_c < 22:
        gear = ["Light layers", "Long-sleeve jersey"]
    elif temperature_c < 28:
        gear = ["Short sleeves", "Sunglasses"]
    else:
        gear = ["Breathable light-coloured clothing", "Sunglasses", "Sun protection"]

    if wind_kmh > WIND_WARNING_KMH:
        gear.append("Wind-resistant outer layer")
    if rain_probability > RAIN_WARNING_THRESHOLD:
        gear.extend(["Waterproof rain shell", "Waterproof overshoes"])
    return gear


def gear_for(current: CurrentWeather, periods: Sequence[ForecastPeriod] = ()) -> List[str]:
    return gear_suggestions(
        current.temperature_c,
        ms_to_kmh(current.wind_speed_ms or 0.0),
        _max_rain(periods),
    )


def advisories(
    current: CurrentWeather,
    periods: Sequence[ForecastPeriod] = (),
    rain_threshold: float = RAIN_WARNING_THRESHOLD,
    wind_threshold_kmh: float = WIND_WARNING_KMH,
) -> List[Advisory]:
    found: List[Advisory] = []

    max_rain = _max_rain(periods)
    if max_rain > rain_threshold:
        found.append(
            Advisory(
                "warning",
                f"Wet surface warning: up to {round(max_rain)}% chance of rain. Allow extra braking distance.",
            )
        )
    elif is_wet(current.source, current.condition_code):
        found.append(
            Advisory("warning", f"Wet surface warning: {current.description.lower()} right now.")
        )

    wind_kmh = ms_to_kmh(current.wind_speed_ms or 0.0)
    if wind_kmh > wind_threshold_kmh:
        found.append(
            Advisory("warning", f"Strong wind ({wind_kmh:.0f} km/h): expect gusty crosswinds.")
        )

    temps = [current.temperature_c] + [p.temperature_c for p in periods]
    if min(temps) < ICE_WARNING_C:
        found.append(Advisory("warning", "Near-freezing temperatures: watch for ice on bridges and shaded roads."))
    if max(temps) > HEAT_WARNING_C:
        found.append(Advisory("warning", "High heat: carry extra water and take shaded breaks."))

    if not found:
        found.append(Advisory("info", "Good riding conditions."))
    return found


def packing_list(
    current: CurrentWeather,
    periods: Sequence[ForecastPeriod] = (),
    route: Optional[Route] = None,
) -> List[str]:
    items = ["Phone and charger", "ID and documents"]
    temps = [current.temperature_c] + [p.temperature_c for p in periods]

    if _max_rain(periods) > RAIN_WARNING_THRESHOLD or is_wet(current.source, current.condition_code):
        items.append("Rain jacket")
    if theme_for(current.source, current.condition_code) == "clear" and max(temps) > 20:
        items.append("Sunscreen")
    if max(temps) > 25:
        items.append("Extra water")
    if min(temps) < 10:
        items.append("Gloves")
    if route is not None:
        if route.duration_min > 90:
            items.append("Snacks")
        if route.duration_min > 120:
            items.append("Lights")
    return items
