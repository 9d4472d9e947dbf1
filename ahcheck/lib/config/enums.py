"""Enumerations for the absolute humidity checker."""

from enum import StrEnum


class Unit(StrEnum):
    """Measurement units for readings and results."""

    CELSIUS = "°C"
    PERCENT = "%"
    GRAMS_PER_CUBIC_METRE = "g/m³"


class ComfortStatus(StrEnum):
    """Comfort band of an absolute humidity value."""

    DRY = "dry / insufficient"  # value < 7
    COMFORTABLE = "comfortable / adequate"  # 7 <= value <= 12
    HUMID = "humid / excessive"  # value > 12
    UNKNOWN = "-"  # reading could not be interpreted


class DenialReason(StrEnum):
    """Why a location lookup did not produce coordinates."""

    DENIED = "denied"
    UNSUPPORTED = "unsupported"
