"""
utils package – small, pure‑function helpers.

Geometry and unit conversion, condition-code lookups and text formatting.
"""

# Re‑export the helpers for a clean import path
from .geo import haversine, estimate_route, c_to_f, ms_to_kmh, km_to_miles   # noqa: F401
from .weather_codes import (  # noqa: F401
    describe_wmo,
    background_gradient,
    wmo_to_gradient,
    theme_for,
    is_wet,
)
from .formatting import (  # noqa: F401
    format_temp,
    format_wind,
    format_distance,
    format_duration,
    format_date,
)

__all__ = [
    "haversine",
    "estimate_route",
    "c_to_f",
    "ms_to_kmh",
    "km_to_miles",
    "describe_wmo",
    "background_gradient",
    "wmo_to_gradient",
    "theme_for",
    "is_wet",
    "format_temp",
    "format_wind",
    "format_distance",
    "format_duration",
    "format_date",
]
