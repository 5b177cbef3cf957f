import math
from datetime import datetime

from .geo import c_to_f, km_to_miles, ms_to_kmh, ms_to_mph


def round_half_up(value: float) -> int:
    """Whole-number rounding with .5 going up (12.5 -> 13, -2.5 -> -2)."""
    return int(math.floor(value + 0.5))


def format_temp(celsius: float, units: str = "metric") -> str:
    if units == "imperial":
        return f"{round_half_up(c_to_f(celsius))}°F"
    return f"{round_half_up(celsius)}°C"


def format_wind(speed_ms: float, units: str = "metric") -> str:
    if units == "imperial":
        return f"{ms_to_mph(speed_ms):.1f} mph"
    return f"{ms_to_kmh(speed_ms):.1f} km/h"


def format_distance(km: float, units: str = "metric") -> str:
    if units == "imperial":
        return f"{km_to_miles(km):.1f} mi"
    return f"{km:.1f} km"


def format_duration(minutes: float) -> str:
    """``45 min`` below an hour, ``1 h 05 min`` above."""
    total = int(round(minutes))
    hours, mins = divmod(total, 60)
    if hours:
        return f"{hours} h {mins:02d} min"
    return f"{mins} min"


def format_date(dt: datetime) -> str:
    """e.g. ``Monday, January 5, 2026 at 09:30 AM``."""
    return f"{dt:%A}, {dt:%B} {dt.day}, {dt.year} at {dt:%I:%M %p}"
