"""Mock weather data for development.

Provides a weather source that generates realistic readings without
network access. Used when MOCK_WEATHER=1 is set.
"""

import random

from ahcheck.lib.weather import Coordinates, WeatherSuccess


def random_walk(
    current: float, drift: float, min_val: float, max_val: float
) -> float:
    """Generate next value using random walk with bounds."""
    change = random.gauss(0, drift)
    new_val = current + change
    return max(min_val, min(max_val, new_val))


class MockWeatherSource:
    """Mock weather source drifting slowly between calls.

    - Temperature: drift=0.15, bounds 15-30
    - Humidity: drift=0.3, bounds 30-70
    """

    def __init__(self) -> None:
        self._temperature = random.uniform(20.0, 23.0)
        self._humidity = random.uniform(45.0, 55.0)

    async def current(self, coordinates: Coordinates) -> WeatherSuccess:
        self._temperature = random_walk(
            self._temperature, drift=0.15, min_val=15.0, max_val=30.0
        )
        self._humidity = random_walk(
            self._humidity, drift=0.3, min_val=30.0, max_val=70.0
        )
        return WeatherSuccess(
            temperature=round(self._temperature, 1),
            humidity=round(self._humidity, 1),
            coordinates=coordinates,
        )
