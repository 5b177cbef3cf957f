import math
from typing import Tuple


def haversine(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great‑circle distance in kilometres between two lat/lon pairs."""
    R = 6371.0
    φ1, φ2 = map(math.radians, (lat1, lat2))
    Δφ = math.radians(lat2 - lat1)
    Δλ = math.radians(lon2 - lon1)

    a = math.sin(Δφ / 2) ** 2 + math.cos(φ1) * math.cos(φ2) * math.sin(Δλ / 2) ** 2
    return 2 * R * math.atan2(math.sqrt(a), math.sqrt(1 - a))


def estimate_route(
    lat1: float, lon1: float, lat2: float, lon2: float, speed_kmh: float = 50.0
) -> Tuple[float, float]:
    """
    Straight‑line stand‑in for a routed trip.

    Returns ``(distance_km, duration_min)`` assuming a constant average
    speed along the great circle.
    """
    if speed_kmh <= 0:
        raise ValueError("speed_kmh must be positive")
    distance_km = haversine(lat1, lon1, lat2, lon2)
    return distance_km, distance_km / speed_kmh * 60


def c_to_f(celsius: float) -> float:
    """Convert Celsius → Fahrenheit."""
    return celsius * 9 / 5 + 32


def ms_to_kmh(speed_ms: float) -> float:
    return speed_ms * 3.6


def ms_to_mph(speed_ms: float) -> float:
    return speed_ms * 2.236936


def km_to_miles(km: float) -> float:
    return km * 0.621371
