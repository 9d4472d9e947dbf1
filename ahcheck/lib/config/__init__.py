"""Centralized configuration for the absolute humidity checker.

This package provides:
- Enums for units, comfort bands and location denial reasons
- Constants for the comfort band limits and colors
- Pydantic settings models for configuration
"""

from .constants import (
    COLOR_COMFORTABLE,
    COLOR_DRY,
    COLOR_HUMID,
    COLOR_UNKNOWN,
    DRY_BELOW,
    HUMID_ABOVE,
    OPEN_METEO_URL,
)
from .enums import ComfortStatus, DenialReason, Unit
from .settings import (
    LocationSettings,
    PanelSettings,
    Settings,
    WeatherSettings,
    get_settings,
)
from .testing import set_settings

__all__ = [
    # Enums
    "ComfortStatus",
    "DenialReason",
    "Unit",
    # Constants
    "COLOR_COMFORTABLE",
    "COLOR_DRY",
    "COLOR_HUMID",
    "COLOR_UNKNOWN",
    "DRY_BELOW",
    "HUMID_ABOVE",
    "OPEN_METEO_URL",
    # Settings models
    "LocationSettings",
    "PanelSettings",
    "Settings",
    "WeatherSettings",
    # Functions
    "get_settings",
    "set_settings",
]
