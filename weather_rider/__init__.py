"""
weather_rider package – current weather, the next few hours and ride
advice for a place or a trip.

Public entry points
-------------------
* `weather_rider.main` – the command‑line driver (`python -m weather_rider.main`)
* Service classes:
    - `WeatherProvider` (picks Open‑Meteo or OpenWeather)
    - `OpenWeatherService`
    - `OpenMeteoService`
    - `OSRMRouteService`
* Utility helpers:
    - `haversine`
    - `estimate_route`
* Errors: `WeatherRiderError` and its subclasses

Having these symbols available at the package root keeps the import
experience ergonomic:

    >>> from weather_rider import WeatherProvider, haversine, Colours
"""

__all__ = [
    "VERSION",
    "Colours",
    "settings",
    # Services
    "WeatherProvider",
    "OpenWeatherService",
    "OpenMeteoService",
    "OSRMRouteService",
    # Errors
    "WeatherRiderError",
    "LocationNotFound",
    "ApiKeyError",
    "ServiceUnavailable",
    "RoutingError",
    # Utilities
    "haversine",
    "estimate_route",
]

VERSION = "0.2.0"


from .config import Colours, settings  # noqa: F401,E402
from .errors import (  # noqa: F401,E402
    ApiKeyError,
    LocationNotFound,
    RoutingError,
    ServiceUnavailable,
    WeatherRiderError,
)
from .services import (  # noqa: F401,E402
    OpenMeteoService,
    OpenWeatherService,
    OSRMRouteService,
    WeatherProvider,
)
from .utils import estimate_route, haversine  # noqa: F401,E402
