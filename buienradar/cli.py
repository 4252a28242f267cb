"""Command line access to the Buienradar client."""
from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import fields, is_dataclass
from datetime import datetime
from enum import Enum
from typing import Any, List, Optional

from .exceptions import BuienradarError
from .rain import minutes_until_rain
from .services.client import BuienradarClient


class CommandError(Exception):
    """Raised for invalid command line usage."""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="buienradar", description="Fetch Buienradar rain and weather data")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    def add_command(name: str, help_text: str) -> argparse.ArgumentParser:
        command = subparsers.add_parser(name, help=help_text)
        command.add_argument("--lat", type=float, help="Latitude")
        command.add_argument("--lon", type=float, help="Longitude")
        return command

    add_command("rain", "Rain forecast for the next two hours")
    will_it_rain = add_command("will-it-rain", "Tell whether rain is expected soon")
    will_it_rain.add_argument("--minutes", type=int, default=30, help="Look ahead window in minutes")
    station = add_command("station", "Observation of the nearest weather station")
    station.add_argument(
        "--require",
        action="append",
        default=[],
        metavar="FIELD",
        help="Only consider stations reporting this field, may be repeated",
    )
    add_command("forecast", "Multi day forecast")
    add_command("today", "Forecast for today")
    return parser


def handle(options: argparse.Namespace, client: Optional[BuienradarClient] = None) -> str:
    if client is None:
        if options.lat is None or options.lon is None:
            raise CommandError("--lat and --lon are required")
        client = BuienradarClient(options.lat, options.lon)

    command = options.command
    if command == "rain":
        return json.dumps(to_payload(client.get_rain_data()))
    if command == "will-it-rain":
        samples = client.get_rain_data()
        minutes = minutes_until_rain(samples, now=client.now(), horizon_minutes=options.minutes)
        if minutes is None:
            return f"No rain expected within the next {options.minutes} min"
        return f"It's going to rain within the next {minutes} min"
    if command == "station":
        return json.dumps(to_payload(client.get_nearest_station_data(options.require or None)))
    if command == "forecast":
        return json.dumps(to_payload(client.get_weather_forecast()))
    if command == "today":
        return json.dumps(to_payload(client.get_current_weather()))
    raise CommandError(f"Unknown command {command}")


def to_payload(value: Any) -> Any:
    if is_dataclass(value) and not isinstance(value, type):
        return {
            item.name: to_payload(getattr(value, item.name))
            for item in fields(value)
            if item.name != "raw" and not item.name.startswith("_")
        }
    if isinstance(value, (list, tuple)):
        return [to_payload(item) for item in value]
    if isinstance(value, dict):
        return {key: to_payload(item) for key, item in value.items()}
    if isinstance(value, Enum):
        return value.name
    if isinstance(value, datetime):
        return value.isoformat()
    return value


def main(argv: Optional[List[str]] = None) -> int:
    options = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if options.verbose else logging.INFO)
    try:
        output = handle(options)
    except (CommandError, BuienradarError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    print(output)
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
