import logging
from typing import Optional

import requests

from ..config import FALLBACK_SPEED_KMH, USER_AGENT, settings
from ..errors import RoutingError
from ..models import Location, Route
from ..utils.geo import estimate_route

logger = logging.getLogger(__name__)


class OSRMRouteService:
    """
    Driving route between two places via the public OSRM ``/route`` service.

    ``route`` never fails: when OSRM cannot answer, the distance and
    duration come from the great‑circle estimate instead and the returned
    ``Route`` is marked ``source="estimate"``.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        fallback_speed_kmh: float = FALLBACK_SPEED_KMH,
        profile: str = "driving",
    ):
        self.base_url = (base_url or settings.osrm_base_url).rstrip("/")
        self.timeout = settings.timeout if timeout is None else timeout
        self.fallback_speed_kmh = fallback_speed_kmh
        self.profile = profile

    @staticmethod
    def format_coordinates(start: Location, destination: Location) -> str:
        """OSRM wants ``lon,lat;lon,lat``."""
        return ";".join(f"{p.longitude},{p.latitude}" for p in (start, destination))

    def route_strict(self, start: Location, destination: Location) -> Route:
        url = f"{self.base_url}/route/v1/{self.profile}/{self.format_coordinates(start, destination)}"
        try:
            resp = requests.get(
                url,
                params={"overview": "false"},
                headers=USER_AGENT,
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            raise RoutingError(f"OSRM request failed: {exc}") from exc

        if not resp.ok:
            raise RoutingError(f"OSRM returned HTTP {resp.status_code}")

        try:
            data = resp.json()
        except ValueError as exc:
            raise RoutingError("OSRM returned a body that is not JSON") from exc
        if data.get("code") != "Ok" or not data.get("routes"):
            raise RoutingError(f"OSRM error: {data.get('message', data.get('code', 'Unknown error'))}")

        best = data["routes"][0]
        try:
            distance_km = best["distance"] / 1000
            duration_min = best["duration"] / 60
        except (KeyError, TypeError) as exc:
            raise RoutingError(f"OSRM route is missing {exc}") from exc
        return Route(
            start=start,
            destination=destination,
            distance_km=distance_km,
            duration_min=duration_min,
            source="osrm",
        )

    def estimate(self, start: Location, destination: Location) -> Route:
        distance_km, duration_min = estimate_route(
            start.latitude,
            start.longitude,
            destination.latitude,
            destination.longitude,
            speed_kmh=self.fallback_speed_kmh,
        )
        return Route(
            start=start,
            destination=destination,
            distance_km=distance_km,
            duration_min=duration_min,
            source="estimate",
        )

    def route(self, start: Location, destination: Location) -> Route:
        try:
            return self.route_strict(start, destination)
        except RoutingError as exc:
            logger.warning("%s; falling back to straight-line estimate", exc)
            return self.estimate(start, destination)
