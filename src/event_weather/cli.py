"""Command-line interface for event weather planning."""

from __future__ import annotations

import argparse
import asyncio
import datetime as dt
import json
import logging
import sys
from typing import Any

from pydantic import BaseModel

from event_weather.config import get_settings
from event_weather.errors import WeatherServiceError
from event_weather.models.event import Event, EventCategory
from event_weather.services.weather import WeatherService, create_weather_service

logger = logging.getLogger(__name__)


def configure_logging(level: str | None = None) -> None:
    """Configure root logging from settings (or an explicit level)."""
    logging.basicConfig(
        level=level or get_settings().log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _parse_date(value: str) -> dt.date:
    try:
        return dt.date.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid date {value!r}, expected YYYY-MM-DD")


def _category(value: str) -> str:
    # Unknown categories are allowed; they are scored as outdoor sports
    return value.strip().lower()


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    settings = get_settings()
    known = ", ".join(c.value for c in EventCategory)

    parser = argparse.ArgumentParser(
        description="Event Weather Planner - Score planned events against the forecast"
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {settings.app_version}",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Override LOG_LEVEL",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Current weather command
    current_parser = subparsers.add_parser(
        "current", help="Get current weather for a location"
    )
    current_parser.add_argument("location", help="Location name, e.g. 'London'")

    # Forecast command
    forecast_parser = subparsers.add_parser(
        "forecast", help="Get the 5 day forecast for a location"
    )
    forecast_parser.add_argument("location", help="Location name, e.g. 'London'")

    # Weather-for-date command
    weather_parser = subparsers.add_parser(
        "weather", help="Get the weather for a location on a date"
    )
    weather_parser.add_argument("location", help="Location name, e.g. 'London'")
    weather_parser.add_argument("date", type=_parse_date, help="Date (YYYY-MM-DD)")

    # Suitability command
    suitability_parser = subparsers.add_parser(
        "suitability", help="Score an event's weather suitability"
    )
    suitability_parser.add_argument("location", help="Location name, e.g. 'London'")
    suitability_parser.add_argument("date", type=_parse_date, help="Date (YYYY-MM-DD)")
    suitability_parser.add_argument(
        "--type",
        dest="event_type",
        type=_category,
        default=EventCategory.OUTDOOR_SPORTS.value,
        help=f"Event type ({known})",
    )

    # Alternatives command
    alternatives_parser = subparsers.add_parser(
        "alternatives", help="Suggest better dates after a planned event"
    )
    alternatives_parser.add_argument("location", help="Location name, e.g. 'London'")
    alternatives_parser.add_argument("date", type=_parse_date, help="Date (YYYY-MM-DD)")
    alternatives_parser.add_argument(
        "--type",
        dest="event_type",
        type=_category,
        default=EventCategory.OUTDOOR_SPORTS.value,
        help=f"Event type ({known})",
    )
    alternatives_parser.add_argument(
        "--days",
        type=int,
        default=settings.default_alternative_days,
        help=f"Days to search after the event (max {settings.max_alternative_days})",
    )

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument("--host", default=settings.host)
    serve_parser.add_argument("--port", type=int, default=settings.port)

    return parser


def _adhoc_event(args: argparse.Namespace) -> Event:
    return Event(
        name=f"{args.event_type} in {args.location}",
        location=args.location,
        date=args.date,
        event_type=args.event_type,
    )


async def _run_command(service: WeatherService, args: argparse.Namespace) -> BaseModel:
    if args.command == "current":
        return await service.get_current_weather(args.location)
    if args.command == "forecast":
        return await service.get_forecast(args.location)
    if args.command == "weather":
        return await service.get_weather_for_location_and_date(args.location, args.date)
    if args.command == "suitability":
        return await service.analyze_event_weather(_adhoc_event(args))
    if args.command == "alternatives":
        return await service.get_alternative_dates(_adhoc_event(args), args.days)
    raise ValueError(f"Unknown command: {args.command}")


async def run(args: argparse.Namespace, service: WeatherService | None = None) -> dict[str, Any]:
    """Run a weather command and return its JSON-ready result."""
    service = service or create_weather_service()
    try:
        result = await _run_command(service, args)
    finally:
        await service.aclose()
    return result.model_dump(mode="json")


def serve(host: str, port: int) -> None:
    """Run the HTTP API with uvicorn."""
    import uvicorn

    from event_weather.api import create_app

    uvicorn.run(create_app(), host=host, port=port)


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    configure_logging(args.log_level)

    if args.command == "serve":
        serve(args.host, args.port)
        return 0

    if args.command == "alternatives":
        max_days = get_settings().max_alternative_days
        if not 1 <= args.days <= max_days:
            parser.error(f"--days must be between 1 and {max_days}")

    try:
        result = asyncio.run(run(args))
    except WeatherServiceError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(json.dumps(result, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
