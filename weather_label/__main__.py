# ABOUTME: Command-line entry point that polls a station and prints the rendered weather.
# ABOUTME: Flags override the WEATHER_* environment configuration.

import argparse
import asyncio
import logging
import os

from dotenv import load_dotenv

from weather_label.config import load_config
from weather_label.models import WeatherConfig
from weather_label.polling import ConsoleDisplay, weather_new
from weather_label.weather_service import create_http_client, get_current_weather


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="weather-label", description="Show current weather for a station.")
    parser.add_argument("--station", help="Station code, e.g. KMSN (WEATHER_STATION)")
    parser.add_argument("--template", help="Template such as '$tempC$ C @ $humidity$' (WEATHER_TEMPLATE)")
    parser.add_argument("--source", choices=["report", "api"], help="Decoded NOAA report or JSON API (WEATHER_SOURCE)")
    parser.add_argument("--api-url", help="Conditions API endpoint (WEATHER_API_URL)")
    parser.add_argument("--minutes", type=float, help="Polling period in minutes (WEATHER_POLL_MINUTES)")
    parser.add_argument("--once", action="store_true", help="Fetch once, print the result and exit")
    parser.add_argument("--log-level", help="Logging level (WEATHER_LOG_LEVEL, default INFO)")
    return parser


def _environment(args: argparse.Namespace) -> dict[str, str]:
    """os.environ with any command-line overrides applied."""
    load_dotenv()
    env = dict(os.environ)
    overrides = {
        "WEATHER_STATION": args.station,
        "WEATHER_TEMPLATE": args.template,
        "WEATHER_SOURCE": args.source,
        "WEATHER_API_URL": args.api_url,
        "WEATHER_POLL_MINUTES": None if args.minutes is None else str(args.minutes),
    }
    env.update({key: value for key, value in overrides.items() if value is not None})
    return env


async def _print_once(config: WeatherConfig) -> None:
    async with create_http_client() as client:
        print(await get_current_weather(client, config.url, config))


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    env = _environment(args)
    logging.basicConfig(
        level=(args.log_level or env.get("WEATHER_LOG_LEVEL", "INFO")).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        config, minutes = load_config(env)
    except ValueError as e:
        build_parser().error(str(e))

    if args.once:
        asyncio.run(_print_once(config))
        return 0
    try:
        asyncio.run(weather_new(config, minutes, ConsoleDisplay()))
    except KeyboardInterrupt:
        pass
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
