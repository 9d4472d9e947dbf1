"""Application factory for the web server."""

from starlette.applications import Starlette
from starlette.routing import Route

from ahcheck.lib.config import get_settings
from ahcheck.logging import configure, get_logger

from .api.health import health_check
from .api.humidity import get_humidity
from .api.weather import get_weather

_logger = get_logger("server.entrypoint")


def create_app() -> Starlette:
    """Create and configure the Starlette application.

    Returns:
        Configured Starlette application instance.
    """
    configure(get_settings().log_level.upper())

    routes = [
        Route("/health", health_check),
        Route("/api/humidity", get_humidity),
        Route("/api/weather", get_weather),
    ]

    _logger.debug("Registered %d routes", len(routes))
    return Starlette(routes=routes)
