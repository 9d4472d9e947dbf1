"""Custom exceptions for the absolute humidity checker.

The calculator itself never raises: unusable readings produce a sentinel
result. These exceptions belong to the location and weather layer, and are
turned into a tagged outcome by ``ahcheck.lib.weather.fetch_weather``.
"""


class AhCheckError(Exception):
    """Base exception for all application errors."""


class LocationError(AhCheckError):
    """Base exception for location lookup errors."""


class LocationDeniedError(LocationError):
    """Raised when access to the device location is refused."""

    def __init__(self, message: str = "Location access denied") -> None:
        super().__init__(message)


class LocationUnsupportedError(LocationError):
    """Raised when no location capability is available."""

    def __init__(self, message: str = "Location lookup not supported") -> None:
        super().__init__(message)


class WeatherError(AhCheckError):
    """Raised when current weather cannot be fetched or decoded."""
