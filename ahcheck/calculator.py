"""Absolute humidity calculation and comfort classification.

Absolute humidity is derived from temperature and relative humidity through
the Tetens saturation vapor pressure:

    ps = 6.1078 * 10 ** ((7.5 * T) / (T + 237.3))   [hPa]
    pa = ps * (RH / 100)                             [hPa]
    ah = 217 * (pa / (T + 273.15))                   [g/m³]

The value is rounded to one decimal and that rounded value is what gets
classified and displayed. Inputs that are not finite numbers produce a
sentinel result instead of an exception.
"""

import math
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from ahcheck.lib.config import (
    COLOR_COMFORTABLE,
    COLOR_DRY,
    COLOR_HUMID,
    COLOR_UNKNOWN,
    DRY_BELOW,
    HUMID_ABOVE,
    ComfortStatus,
)
from ahcheck.logging import get_logger

logger = get_logger("calculator")

_ONE_DECIMAL = Decimal("0.1")

_COLORS: dict[ComfortStatus, str] = {
    ComfortStatus.DRY: COLOR_DRY,
    ComfortStatus.COMFORTABLE: COLOR_COMFORTABLE,
    ComfortStatus.HUMID: COLOR_HUMID,
    ComfortStatus.UNKNOWN: COLOR_UNKNOWN,
}


@dataclass(frozen=True, slots=True)
class HumidityResult:
    value: float
    status: ComfortStatus
    color: str

    @property
    def is_valid(self) -> bool:
        return self.status is not ComfortStatus.UNKNOWN

    def as_dict(self) -> dict[str, Any]:
        return {
            "value": self.value,
            "status": str(self.status),
            "color": self.color,
            "valid": self.is_valid,
        }


INVALID_RESULT = HumidityResult(0.0, ComfortStatus.UNKNOWN, COLOR_UNKNOWN)


def parse_number(raw: Any) -> float | None:
    """Interpret a form value as a finite float, or None if it is not one."""
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, str):
        raw = raw.strip()
        if not raw:
            return None
    try:
        number = float(raw)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return number


def round_one_decimal(value: float) -> float:
    """Round half away from zero on the exact binary value of a float."""
    return float(Decimal(value).quantize(_ONE_DECIMAL, rounding=ROUND_HALF_UP))


def classify(value: float) -> tuple[ComfortStatus, str]:
    """Map a rounded absolute humidity to its comfort band and color."""
    if value < DRY_BELOW:
        status = ComfortStatus.DRY
    elif value <= HUMID_ABOVE:
        status = ComfortStatus.COMFORTABLE
    else:
        status = ComfortStatus.HUMID
    return status, _COLORS[status]


def absolute_humidity(temperature: float, humidity: float) -> float:
    """Unrounded absolute humidity in g/m³.

    Raises ZeroDivisionError or OverflowError where the formula has no
    finite value.
    """
    ps = 6.1078 * 10 ** ((7.5 * temperature) / (temperature + 237.3))
    pa = ps * (humidity / 100)
    return 217 * (pa / (temperature + 273.15))


def compute(temperature: Any, humidity: Any) -> HumidityResult:
    """Compute the absolute humidity result for a reading.

    Accepts numbers or numeric strings. Never raises: unparseable or
    non-finite readings return ``INVALID_RESULT``.
    """
    t = parse_number(temperature)
    rh = parse_number(humidity)
    if t is None or rh is None:
        logger.debug(
            "Invalid reading: temperature=%r humidity=%r", temperature, humidity
        )
        return INVALID_RESULT

    try:
        ah = absolute_humidity(t, rh)
    except (ZeroDivisionError, OverflowError) as e:
        logger.debug("No finite absolute humidity for T=%s RH=%s: %s", t, rh, e)
        return INVALID_RESULT

    if not math.isfinite(ah):
        logger.debug("No finite absolute humidity for T=%s RH=%s", t, rh)
        return INVALID_RESULT

    value = round_one_decimal(ah)
    status, color = classify(value)
    return HumidityResult(value, status, color)
