"""
services package – wrappers around external APIs.

Export the high‑level service classes so callers can do:

    from weather_rider.services import (
        OpenWeatherService,
        OpenMeteoService,
        OSRMRouteService,
    )
"""

# Re‑export the concrete service classes for a tidy public API
from .openweather import OpenWeatherService   # noqa: F401
from .open_meteo  import OpenMeteoService     # noqa: F401
from .osrm        import OSRMRouteService     # noqa: F401
from .provider    import WeatherProvider      # noqa: F401

# Define what gets imported when a user writes:
#   from weather_rider.services import *
__all__ = [
    "OpenWeatherService",
    "OpenMeteoService",
    "OSRMRouteService",
    "WeatherProvider",
]
