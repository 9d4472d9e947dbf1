"""Presentation state for the humidity checker.

The panel owns the two raw inputs, the loading flag and the latest result
in an explicit ``PanelState``. Inputs are recomputed synchronously on every
change; loading from the current location is an awaited task guarded by
the loading flag so that only one weather request is ever in flight.
"""

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any, Protocol

from ahcheck.calculator import HumidityResult, compute
from ahcheck.lib.config import DenialReason, get_settings
from ahcheck.lib.weather import (
    LocationProvider,
    WeatherDenied,
    WeatherFailure,
    WeatherOutcome,
    WeatherSource,
    WeatherSuccess,
    fetch_weather,
)
from ahcheck.logging import get_logger

logger = get_logger("panel")


class Notice(StrEnum):
    """User-facing messages for the end of a location load."""

    LOADED = "Loaded the weather for your current location."
    FAILED = "Failed to fetch weather data."
    DENIED = "Location access was denied."
    UNSUPPORTED = "Location lookup is not supported on this device."


def notice_for(outcome: WeatherOutcome) -> Notice:
    """Map a weather outcome to the notice shown to the user."""
    match outcome:
        case WeatherSuccess():
            return Notice.LOADED
        case WeatherFailure():
            return Notice.FAILED
        case WeatherDenied(reason=DenialReason.DENIED):
            return Notice.DENIED
        case WeatherDenied():
            return Notice.UNSUPPORTED
    raise TypeError(f"Unknown weather outcome: {outcome!r}")


class Notifier(Protocol):
    """Protocol for delivering notices to the user."""

    def notify(self, notice: Notice) -> None: ...


class LogNotifier:
    """Notifier writing notices to the application log."""

    def notify(self, notice: Notice) -> None:
        if notice is Notice.LOADED:
            logger.info("%s", notice)
        else:
            logger.warning("%s", notice)


def _default_temperature() -> float:
    return get_settings().panel.default_temperature


def _default_humidity() -> float:
    return get_settings().panel.default_humidity


@dataclass(slots=True)
class PanelState:
    temperature: Any = field(default_factory=_default_temperature)
    humidity: Any = field(default_factory=_default_humidity)
    loading: bool = False
    result: HumidityResult | None = None


class HumidityPanel:
    """Drives a ``PanelState`` from user input and location lookups."""

    def __init__(
        self,
        state: PanelState | None = None,
        notifier: Notifier | None = None,
    ) -> None:
        self.state = state if state is not None else PanelState()
        self._notifier = notifier or LogNotifier()
        self.recalculate()

    @property
    def result(self) -> HumidityResult:
        assert self.state.result is not None
        return self.state.result

    def recalculate(self) -> HumidityResult:
        """Recompute the result from the current inputs."""
        self.state.result = compute(self.state.temperature, self.state.humidity)
        return self.state.result

    def set_temperature(self, value: Any) -> HumidityResult:
        self.state.temperature = value
        return self.recalculate()

    def set_humidity(self, value: Any) -> HumidityResult:
        self.state.humidity = value
        return self.recalculate()

    async def load_from_location(
        self, locator: LocationProvider, source: WeatherSource
    ) -> WeatherOutcome | None:
        """Replace the inputs with the weather at the current location.

        Returns None without starting a request if one is already running.
        Otherwise exactly one notice is sent and the loading flag is always
        cleared, whatever the outcome.
        """
        if self.state.loading:
            logger.debug("Location load already in progress, ignoring")
            return None

        self.state.loading = True
        try:
            outcome = await fetch_weather(locator, source)
            if isinstance(outcome, WeatherSuccess):
                self.state.temperature = outcome.temperature
                if outcome.humidity is not None:
                    self.state.humidity = outcome.humidity
                self.recalculate()
            self._notifier.notify(notice_for(outcome))
            return outcome
        finally:
            self.state.loading = False
