"""Health check endpoint for monitoring service status."""

import asyncio
from datetime import UTC, datetime

from starlette.requests import Request
from starlette.responses import JSONResponse

from ahcheck.calculator import compute
from ahcheck.lib.config import get_settings
from ahcheck.lib.weather import (
    Coordinates,
    StaticLocation,
    OpenMeteoWeatherSource,
    WeatherSuccess,
    create_weather_source,
    fetch_weather,
)
from ahcheck.logging import get_logger

logger = get_logger("server.api.health")

# 22°C at 50% relative humidity
_REFERENCE_READING = (22.0, 50.0)
_REFERENCE_VALUE = 9.7


async def _check_calculator() -> tuple[bool, str]:
    """Check the calculator against a known reading."""
    result = compute(*_REFERENCE_READING)
    if result.value != _REFERENCE_VALUE:
        logger.error(
            "Calculator health check failed: expected %s, got %s",
            _REFERENCE_VALUE,
            result.value,
        )
        return False, f"expected {_REFERENCE_VALUE}, got {result.value}"
    return True, "ok"


async def _check_weather_api() -> tuple[bool, str]:
    """Check the weather API for the configured location, if any."""
    location = get_settings().location
    if not location.is_configured:
        return False, "no location configured"

    coordinates = Coordinates(
        latitude=location.latitude, longitude=location.longitude
    )
    if get_settings().weather.mock:
        source = create_weather_source()
    else:
        # A single attempt keeps /health responsive when the API is down
        source = OpenMeteoWeatherSource(max_retries=1)
    outcome = await fetch_weather(StaticLocation(coordinates), source)
    if isinstance(outcome, WeatherSuccess):
        return True, "ok"
    return False, str(getattr(outcome, "reason", "unavailable"))


async def health_check(request: Request) -> JSONResponse:
    """Return health status of the application and its dependencies."""
    (calc_ok, calc_status), (weather_ok, weather_status) = await asyncio.gather(
        _check_calculator(),
        _check_weather_api(),
    )

    # The weather API is optional: manual input keeps working without it
    is_healthy = calc_ok

    return JSONResponse(
        {
            "status": "healthy" if is_healthy else "unhealthy",
            "timestamp": datetime.now(UTC).isoformat(),
            "checks": {
                "calculator": {"ok": calc_ok, "status": calc_status},
                "weather_api": {"ok": weather_ok, "status": weather_status},
            },
        },
        status_code=200 if is_healthy else 503,
    )
