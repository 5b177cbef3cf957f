"""Exceptions raised by the service layer.

Every message is meant to be shown to the user unchanged.
"""


class WeatherRiderError(Exception):
    """Base class for all weather_rider errors."""


class LocationNotFound(WeatherRiderError):
    pass


class ApiKeyError(WeatherRiderError):
    pass


class ServiceUnavailable(WeatherRiderError):
    pass


class RoutingError(WeatherRiderError):
    pass
