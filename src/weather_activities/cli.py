"""Command-line interface for weather activity rankings."""

from __future__ import annotations

import argparse
import asyncio
import json
import sys

from weather_activities import __version__
from weather_activities.config import configure_logging, get_settings
from weather_activities.models.location import City
from weather_activities.providers.base import UpstreamError
from weather_activities.services.container import ServiceContainer, build_services
from weather_activities.services.forecast import CityNotFoundError, MalformedForecastError


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with suggest, weather and activities subcommands."""
    parser = argparse.ArgumentParser(
        prog="weather-activities",
        description="Weather Activity Ranking - Score activities from a 7-day forecast",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print machine-readable JSON",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    suggest_parser = subparsers.add_parser("suggest", help="Suggest cities for a name prefix")
    suggest_parser.add_argument("query", help="City name prefix")

    weather_parser = subparsers.add_parser(
        "weather", help="Get the 7-day forecast for the best matching city"
    )
    weather_parser.add_argument("query", help="City name")

    activities_parser = subparsers.add_parser(
        "activities", help="Rank activities for the best matching city"
    )
    activities_parser.add_argument("query", help="City name")

    return parser


async def _resolve_city(services: ServiceContainer, query: str) -> City | None:
    cities = await services.cities.suggest_cities(query)
    services.registry.register_all(cities)
    return cities[0] if cities else None


async def run_command(args: argparse.Namespace, services: ServiceContainer) -> int:
    """Execute a parsed command and print its result."""
    if args.command == "suggest":
        cities = await services.cities.suggest_cities(args.query)
        if args.json:
            print(json.dumps([c.model_dump() for c in cities], ensure_ascii=False))
            return 0
        if not cities:
            print(f"No cities match '{args.query}'.")
        for city in cities:
            print(f"{city.id}\t{city.display_name()}")
        return 0

    city = await _resolve_city(services, args.query)
    if city is None:
        print(f"No cities match '{args.query}'.", file=sys.stderr)
        return 1

    if args.command == "weather":
        forecast = await services.forecasts.get_weather_forecast(city.key)
        if args.json:
            print(forecast.model_dump_json())
            return 0
        print(city.display_name())
        for day in forecast.daily:
            print(
                f"{day.date}  {day.temperature_min:5.1f} / {day.temperature_max:5.1f} °C"
                f"  rain {day.precipitation:4.1f} mm  wind {day.wind_speed:4.1f} km/h"
                f"  UV {day.uv_index:3.1f}  code {day.weather_code}"
            )
        return 0

    rankings = await services.activities.rank_activities(city.key)
    if args.json:
        print(json.dumps([r.model_dump(mode="json") for r in rankings]))
        return 0
    print(city.display_name())
    for ranking in sorted(rankings, key=lambda r: r.score, reverse=True):
        print(f"{ranking.score:>2}/10  {ranking.activity.value:<20} {ranking.reason}")
    return 0


async def _main(args: argparse.Namespace) -> int:
    services = build_services(get_settings())
    try:
        return await run_command(args, services)
    finally:
        await services.aclose()


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    configure_logging(get_settings().log_level)
    try:
        return asyncio.run(_main(args))
    except (UpstreamError, CityNotFoundError, MalformedForecastError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
