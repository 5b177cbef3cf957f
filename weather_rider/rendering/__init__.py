"""
rendering package – turns weather reports into things a rider reads.

Advisories and gear lists, the hour-by-hour and ride timelines, and the
inline SVG charts shared by the CLI and the web front end.
"""

from .advisory import Advisory, advisories, gear_for, gear_suggestions, packing_list   # noqa: F401
from .timeline import (  # noqa: F401
    Checkpoint,
    RideFrame,
    next_hours,
    ride_timeline,
    simulate_ride,
)
from .charts import bar_chart, line_chart, temperature_chart, precipitation_chart   # noqa: F401

__all__ = [
    "Advisory",
    "advisories",
    "gear_for",
    "gear_suggestions",
    "packing_list",
    "Checkpoint",
    "RideFrame",
    "next_hours",
    "ride_timeline",
    "simulate_ride",
    "bar_chart",
    "line_chart",
    "temperature_chart",
    "precipitation_chart",
]
