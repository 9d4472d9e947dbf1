"""Current weather lookup for a device location.

A lookup is an explicit async task returning a tagged outcome rather than
raising: ``WeatherSuccess`` with the readings, ``WeatherFailure`` when the
weather API could not be reached or understood, and ``WeatherDenied`` when
no coordinates could be obtained. The presentation layer turns each outcome
into its own user notice.

The default source is the Open-Meteo forecast API, which needs no API key.
"""

import http.client
import json
import urllib.parse
import urllib.request
from dataclasses import dataclass
from typing import Any, Protocol

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ahcheck.lib.config import DenialReason, get_settings
from ahcheck.lib.exceptions import (
    LocationDeniedError,
    LocationError,
    LocationUnsupportedError,
    WeatherError,
)
from ahcheck.lib.retry import with_retry
from ahcheck.logging import get_logger

logger = get_logger("lib.weather")

CURRENT_FIELDS = ("temperature_2m", "relative_humidity_2m")

# Connection resets, timeouts and truncated or malformed HTTP responses
_TRANSPORT_ERRORS = (OSError, TimeoutError, http.client.HTTPException)


class Coordinates(BaseModel):
    """Validated geographic coordinates in decimal degrees."""

    model_config = ConfigDict(frozen=True)

    latitude: float = Field(ge=-90, le=90, allow_inf_nan=False)
    longitude: float = Field(ge=-180, le=180, allow_inf_nan=False)


@dataclass(frozen=True, slots=True)
class WeatherSuccess:
    temperature: float
    humidity: float | None
    coordinates: Coordinates


@dataclass(frozen=True, slots=True)
class WeatherFailure:
    reason: str


@dataclass(frozen=True, slots=True)
class WeatherDenied:
    reason: DenialReason


type WeatherOutcome = WeatherSuccess | WeatherFailure | WeatherDenied


class LocationProvider(Protocol):
    """Protocol for anything that can tell where the device is."""

    async def locate(self) -> Coordinates: ...


class WeatherSource(Protocol):
    """Protocol for current weather lookups."""

    async def current(self, coordinates: Coordinates) -> WeatherSuccess: ...


class StaticLocation:
    """Location provider returning fixed coordinates."""

    def __init__(self, coordinates: Coordinates) -> None:
        self._coordinates = coordinates

    async def locate(self) -> Coordinates:
        return self._coordinates


class DisabledLocation:
    """Location provider for when the user has switched location off."""

    async def locate(self) -> Coordinates:
        raise LocationDeniedError()


class UnavailableLocation:
    """Location provider for when no location capability exists."""

    async def locate(self) -> Coordinates:
        raise LocationUnsupportedError()


def create_location_provider(
    coordinates: Coordinates | None = None,
) -> LocationProvider:
    """Create a location provider.

    Explicit coordinates win, then configured LATITUDE/LONGITUDE. With
    location disabled the provider always denies access.
    """
    cfg = get_settings().location
    if not cfg.enabled:
        return DisabledLocation()
    if coordinates is not None:
        return StaticLocation(coordinates)
    if cfg.is_configured:
        return StaticLocation(
            Coordinates(latitude=cfg.latitude, longitude=cfg.longitude)
        )
    return UnavailableLocation()


class _CurrentConditions(BaseModel):
    temperature_2m: float
    relative_humidity_2m: float | None = None


class _ForecastResponse(BaseModel):
    current: _CurrentConditions


class OpenMeteoWeatherSource:
    """Weather source backed by the Open-Meteo forecast API."""

    def __init__(
        self,
        api_url: str | None = None,
        *,
        timeout_sec: float | None = None,
        max_retries: int | None = None,
        initial_backoff_sec: float | None = None,
    ) -> None:
        cfg = get_settings().weather
        self._api_url = api_url or cfg.api_url
        self._timeout_sec = timeout_sec or cfg.timeout_sec
        self._max_retries = max_retries or cfg.max_retries
        self._initial_backoff_sec = (
            cfg.initial_backoff_sec
            if initial_backoff_sec is None
            else initial_backoff_sec
        )

    def build_url(self, coordinates: Coordinates) -> str:
        """Build the forecast request URL for the given coordinates."""
        query = urllib.parse.urlencode(
            {
                "latitude": coordinates.latitude,
                "longitude": coordinates.longitude,
                "current": ",".join(CURRENT_FIELDS),
            }
        )
        return f"{self._api_url}?{query}"

    def _fetch_json(self, url: str) -> Any:
        """Blocking GET returning the decoded JSON body."""
        req = urllib.request.Request(
            url, headers={"Accept": "application/json"}, method="GET"
        )
        with urllib.request.urlopen(req, timeout=self._timeout_sec) as resp:
            if resp.status != 200:
                raise OSError(f"Weather API returned status {resp.status}")
            return json.loads(resp.read().decode("utf-8"))

    async def current(self, coordinates: Coordinates) -> WeatherSuccess:
        """Fetch current temperature and relative humidity.

        Raises:
            WeatherError: If the API is unreachable or its answer unusable.
        """
        url = self.build_url(coordinates)
        logger.debug("Requesting %s", url)

        try:
            payload = await with_retry(
                lambda: self._fetch_json(url),
                name="Weather API",
                logger=logger,
                max_retries=self._max_retries,
                initial_backoff_sec=self._initial_backoff_sec,
                retryable_exceptions=_TRANSPORT_ERRORS,
                run_in_thread=True,
            )
        except _TRANSPORT_ERRORS as e:
            raise WeatherError(f"Weather API unreachable: {e}") from e
        except ValueError as e:
            raise WeatherError(f"Weather API returned invalid JSON: {e}") from e

        try:
            forecast = _ForecastResponse.model_validate(payload)
        except ValidationError as e:
            raise WeatherError(
                f"Unexpected weather API response: {e.error_count()} error(s)"
            ) from e

        return WeatherSuccess(
            temperature=forecast.current.temperature_2m,
            humidity=forecast.current.relative_humidity_2m,
            coordinates=coordinates,
        )


def create_weather_source() -> WeatherSource:
    """Create the weather source based on configuration."""
    if get_settings().weather.mock:
        from ahcheck.lib.mock import MockWeatherSource

        logger.info("Using mock weather source")
        return MockWeatherSource()
    return OpenMeteoWeatherSource()


async def fetch_weather(
    locator: LocationProvider, source: WeatherSource
) -> WeatherOutcome:
    """Locate the device and fetch its current weather.

    Every path ends in one of the three outcomes; location and weather
    errors are never propagated.
    """
    try:
        coordinates = await locator.locate()
    except LocationDeniedError as e:
        logger.info("Location lookup denied: %s", e)
        return WeatherDenied(DenialReason.DENIED)
    except LocationUnsupportedError as e:
        logger.info("Location lookup unavailable: %s", e)
        return WeatherDenied(DenialReason.UNSUPPORTED)
    except LocationError as e:
        logger.warning("Location lookup failed: %s", e)
        return WeatherDenied(DenialReason.UNSUPPORTED)

    try:
        outcome = await source.current(coordinates)
    except WeatherError as e:
        logger.error("Weather lookup failed: %s", e)
        return WeatherFailure(str(e))

    logger.info(
        "Weather at %.4f,%.4f: temperature=%s humidity=%s",
        coordinates.latitude,
        coordinates.longitude,
        outcome.temperature,
        outcome.humidity,
    )
    return outcome
