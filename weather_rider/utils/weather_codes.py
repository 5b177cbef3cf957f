"""
Condition-code lookups.

* ``describe_wmo`` turns an Open‑Meteo WMO code into an (emoji, text) pair.
* ``background_gradient`` picks the CSS backdrop for an OpenWeather
  condition id; ``wmo_to_gradient`` reuses the same palette for WMO codes.
"""

from typing import Optional, Tuple

GRADIENTS = {
    "thunderstorm": "linear-gradient(135deg, #232526 0%, #414345 100%)",
    "rain": "linear-gradient(135deg, #4b6cb7 0%, #182848 100%)",
    "snow": "linear-gradient(135deg, #83a4d4 0%, #b6fbff 100%)",
    "atmosphere": "linear-gradient(135deg, #3e5151 0%, #decba4 100%)",
    "clear": "linear-gradient(135deg, #2980b9 0%, #6dd5fa 100%, #ffffff 100%)",
    "clouds": "linear-gradient(135deg, #606c88 0%, #3f4c6b 100%)",
    "default": "linear-gradient(135deg, #667eea 0%, #764ba2 100%)",
}


def describe_wmo(code: Optional[int]) -> Tuple[str, str]:
    if code is None:
        return "❓", "Unknown"
    if code == 0:
        return "☀️", "Clear sky"
    if 1 <= code <= 3:
        return "⛅", "Partly cloudy"
    if 45 <= code <= 48:
        return "🌫️", "Fog"
    if 51 <= code <= 57:
        return "🌦️", "Drizzle"
    if 61 <= code <= 67:
        return "🌧️", "Rain"
    if 71 <= code <= 77:
        return "❄️", "Snow"
    if 80 <= code <= 82:
        return "🌧️", "Rain showers"
    if 85 <= code <= 86:
        return "🌨️", "Snow showers"
    if 95 <= code <= 99:
        return "⛈️", "Thunderstorm"
    return "❓", "Unknown"


def condition_theme(condition_id: Optional[int]) -> str:
    """Name of the backdrop theme for an OpenWeather condition id."""
    if condition_id is None:
        return "default"
    if 200 <= condition_id < 300:
        return "thunderstorm"
    if 300 <= condition_id < 600:
        return "rain"
    if 600 <= condition_id < 700:
        return "snow"
    if 700 <= condition_id < 800:
        return "atmosphere"
    if condition_id == 800:
        return "clear"
    if condition_id > 800:
        return "clouds"
    return "default"


def wmo_theme(code: Optional[int]) -> str:
    if code is None:
        return "default"
    if code == 0:
        return "clear"
    if 1 <= code <= 3:
        return "clouds"
    if 45 <= code <= 48:
        return "atmosphere"
    if 51 <= code <= 67 or 80 <= code <= 82:
        return "rain"
    if 71 <= code <= 77 or 85 <= code <= 86:
        return "snow"
    if 95 <= code <= 99:
        return "thunderstorm"
    return "default"


def background_gradient(condition_id: Optional[int]) -> str:
    return GRADIENTS[condition_theme(condition_id)]


def wmo_to_gradient(code: Optional[int]) -> str:
    return GRADIENTS[wmo_theme(code)]


def theme_for(source: str, code: Optional[int]) -> str:
    """Backdrop theme for a reading from either provider."""
    if source == "openweather":
        return condition_theme(code)
    return wmo_theme(code)


def is_wet(source: str, code: Optional[int]) -> bool:
    return theme_for(source, code) in ("rain", "snow", "thunderstorm")
