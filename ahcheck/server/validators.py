"""Shared validation utilities."""

from typing import Any

from pydantic import ValidationError

from ahcheck.lib.weather import Coordinates


class InvalidParameter(Exception):
    """Raised when a query parameter is invalid."""


def parse_coordinates(params: Any) -> Coordinates | None:
    """Parse and validate latitude/longitude query parameters.

    Args:
        params: Object with .get() method (Request.query_params or similar)

    Returns:
        Coordinates, or None when neither parameter was given.

    Raises:
        InvalidParameter: If only one is given, or either is out of range
            or not a number.
    """
    raw_lat = params.get("latitude")
    raw_lon = params.get("longitude")

    if raw_lat in (None, "") and raw_lon in (None, ""):
        return None
    if raw_lat in (None, "") or raw_lon in (None, ""):
        raise InvalidParameter("latitude and longitude must be given together")

    try:
        return Coordinates(latitude=raw_lat, longitude=raw_lon)
    except ValidationError:
        raise InvalidParameter(
            "latitude must be within [-90, 90] and longitude within [-180, 180]"
        ) from None
