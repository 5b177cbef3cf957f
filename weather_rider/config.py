"""
Runtime settings for weather_rider.

Values come from the environment (optionally a ``.env`` file next to the
working directory).  Everything has a sensible default so the Open-Meteo
provider works out of the box; OpenWeather needs ``OPENWEATHER_API_KEY``.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)


class Colours:
    """ANSI escape sequences used by the command-line driver."""

    RED = "\033[91m"
    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    CYAN = "\033[96m"
    BOLD = "\033[1m"
    RESET = "\033[0m"


# ----------------------------------------------------------------------
# Advisory thresholds
# ----------------------------------------------------------------------
RAIN_WARNING_THRESHOLD = 30     # percent chance of precipitation
WIND_WARNING_KMH = 30
ICE_WARNING_C = 3
HEAT_WARNING_C = 32

# Average speed for the straight-line fallback when OSRM is unreachable
FALLBACK_SPEED_KMH = 50

NEXT_HOURS = 12
FORECAST_PERIODS = 5

PROVIDERS = ("open-meteo", "openweather")

USER_AGENT = {"User-Agent": "weather-rider/0.2"}


@dataclass
class Settings:
    openweather_api_key: str = ""
    provider: str = "open-meteo"
    osrm_base_url: str = "https://router.project-osrm.org"
    state_path: Path = Path.home() / ".weather_rider.json"
    default_city: str = "London"
    timeout: float = 10.0
    secret_key: str = ""

    @classmethod
    def from_env(cls) -> "Settings":
        provider = os.getenv("WEATHER_PROVIDER", cls.provider).strip().lower()
        if provider not in PROVIDERS:
            logger.warning(
                "Unknown WEATHER_PROVIDER '%s' (expected one of %s); using %s",
                provider,
                ", ".join(PROVIDERS),
                cls.provider,
            )
            provider = cls.provider
        timeout = os.getenv("HTTP_TIMEOUT", "")
        try:
            timeout = float(timeout) if timeout.strip() else cls.timeout
        except ValueError:
            logger.warning("HTTP_TIMEOUT '%s' is not a number; using %s", timeout, cls.timeout)
            timeout = cls.timeout
        if timeout <= 0:
            logger.warning("HTTP_TIMEOUT must be positive; using %s", cls.timeout)
            timeout = cls.timeout
        state = os.getenv("WEATHER_RIDER_STATE")
        return cls(
            openweather_api_key=os.getenv("OPENWEATHER_API_KEY", "").strip(),
            provider=provider,
            osrm_base_url=os.getenv("OSRM_BASE_URL", cls.osrm_base_url).rstrip("/"),
            state_path=Path(state).expanduser() if state else cls.state_path,
            default_city=os.getenv("DEFAULT_CITY", cls.default_city),
            timeout=timeout,
            secret_key=os.getenv("FLASK_SECRET_KEY", ""),
        )


settings = Settings.from_env()
