"""Weather-at-location endpoint."""

from starlette.requests import Request
from starlette.responses import JSONResponse

from ahcheck.calculator import compute
from ahcheck.lib.config import get_settings
from ahcheck.lib.weather import (
    WeatherDenied,
    WeatherFailure,
    WeatherSuccess,
    create_location_provider,
    create_weather_source,
    fetch_weather,
)
from ahcheck.logging import get_logger
from ahcheck.panel import notice_for
from ahcheck.server.validators import InvalidParameter, parse_coordinates

logger = get_logger("server.api.weather")


async def get_weather(request: Request) -> JSONResponse:
    """Fetch current weather for the requested or configured location."""
    try:
        coordinates = parse_coordinates(request.query_params)
    except InvalidParameter as err:
        return JSONResponse({"error": str(err)}, status_code=400)

    outcome = await fetch_weather(
        create_location_provider(coordinates), create_weather_source()
    )
    message = str(notice_for(outcome))

    match outcome:
        case WeatherSuccess():
            # Without a humidity reading the panel keeps its current input
            humidity = outcome.humidity
            if humidity is None:
                humidity = get_settings().panel.default_humidity
            result = compute(outcome.temperature, humidity)
            return JSONResponse(
                {
                    "outcome": "success",
                    "message": message,
                    "latitude": outcome.coordinates.latitude,
                    "longitude": outcome.coordinates.longitude,
                    "temperature": outcome.temperature,
                    "humidity": outcome.humidity,
                    "result": result.as_dict(),
                }
            )
        case WeatherDenied():
            return JSONResponse(
                {
                    "outcome": "denied",
                    "reason": str(outcome.reason),
                    "message": message,
                },
                status_code=403,
            )
        case WeatherFailure():
            return JSONResponse(
                {
                    "outcome": "failure",
                    "reason": outcome.reason,
                    "message": message,
                },
                status_code=502,
            )
