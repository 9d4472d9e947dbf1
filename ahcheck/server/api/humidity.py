"""Absolute humidity calculation endpoint."""

from starlette.requests import Request
from starlette.responses import JSONResponse

from ahcheck.calculator import compute
from ahcheck.lib.config import get_settings


async def get_humidity(request: Request) -> JSONResponse:
    """Return the absolute humidity for the given temperature and humidity.

    Unusable input is a normal outcome and yields the placeholder result.
    """
    defaults = get_settings().panel
    temperature = request.query_params.get(
        "temperature", defaults.default_temperature
    )
    humidity = request.query_params.get("humidity", defaults.default_humidity)
    result = compute(temperature, humidity)
    return JSONResponse(
        {"temperature": temperature, "humidity": humidity, **result.as_dict()}
    )
