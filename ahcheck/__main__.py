"""Command line absolute humidity checker.

Usage:
    python -m ahcheck -temperature 22 -humidity 50
    python -m ahcheck -locate [-latitude 35.68 -longitude 139.76]
"""

import argparse
import asyncio
import sys

from pydantic import ValidationError

from ahcheck.calculator import HumidityResult
from ahcheck.lib.config import Unit, get_settings
from ahcheck.lib.weather import (
    Coordinates,
    WeatherSuccess,
    create_location_provider,
    create_weather_source,
)
from ahcheck.logging import configure
from ahcheck.panel import HumidityPanel, Notice, PanelState


class PrintNotifier:
    """Notifier writing notices to stdout."""

    def notify(self, notice: Notice) -> None:
        print(notice)


def format_result(panel: HumidityPanel) -> str:
    """Render the panel inputs and result as a single line."""
    state = panel.state
    result: HumidityResult = panel.result
    return (
        f"{state.temperature}{Unit.CELSIUS} {state.humidity}{Unit.PERCENT} -> "
        f"{result.value} {Unit.GRAMS_PER_CUBIC_METRE} "
        f"[{result.status}] {result.color}"
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ahcheck",
        description="Compute absolute humidity and its comfort band",
    )
    parser.add_argument(
        "-temperature", help="Temperature in Celsius (default: from config)"
    )
    parser.add_argument(
        "-humidity", help="Relative humidity in percent (default: from config)"
    )
    parser.add_argument(
        "-locate",
        action="store_true",
        help="Load temperature and humidity from the weather at a location",
    )
    parser.add_argument("-latitude", type=float, help="Latitude for -locate")
    parser.add_argument("-longitude", type=float, help="Longitude for -locate")
    return parser


async def run(
    args: argparse.Namespace, coordinates: Coordinates | None = None
) -> int:
    """Run the checker for parsed arguments and return the exit code."""
    state = PanelState()
    if args.temperature is not None:
        state.temperature = args.temperature
    if args.humidity is not None:
        state.humidity = args.humidity
    panel = HumidityPanel(state, PrintNotifier())

    exit_code = 0
    if args.locate:
        outcome = await panel.load_from_location(
            create_location_provider(coordinates), create_weather_source()
        )
        if not isinstance(outcome, WeatherSuccess):
            exit_code = 1

    print(format_result(panel))
    return exit_code


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the command line checker."""
    args = build_parser().parse_args(argv)
    if (args.latitude is None) != (args.longitude is None):
        print("-latitude and -longitude must be given together", file=sys.stderr)
        return 2
    coordinates = None
    if args.latitude is not None:
        try:
            coordinates = Coordinates(
                latitude=args.latitude, longitude=args.longitude
            )
        except ValidationError:
            print("Coordinates out of range", file=sys.stderr)
            return 2
    configure(get_settings().log_level.upper())
    return asyncio.run(run(args, coordinates))


if __name__ == "__main__":
    sys.exit(main())
