# ABOUTME: Loads the weather label configuration from the environment and an optional .env file.
# ABOUTME: Produces an immutable WeatherConfig plus the polling period in minutes.

import os
from collections.abc import Mapping

from dotenv import load_dotenv

from weather_label.models import DEFAULT_TEMPLATE, NOAA_DECODED_URL, Template, WeatherConfig

DEFAULT_POLL_MINUTES = 10.0
SOURCES = ("report", "api")


def load_config(environ: Mapping[str, str] | None = None) -> tuple[WeatherConfig, float]:
    """Build a WeatherConfig and poll period from WEATHER_* variables.

    When no mapping is given, a .env file is loaded into os.environ first.
    """
    if environ is None:
        load_dotenv()
        environ = os.environ

    station = environ.get("WEATHER_STATION", "").strip()
    if not station:
        raise ValueError("WEATHER_STATION must be set to a station code such as KMSN")

    source = environ.get("WEATHER_SOURCE", "report")
    if source not in SOURCES:
        raise ValueError(f"WEATHER_SOURCE must be one of {', '.join(SOURCES)}, got {source!r}")

    api_url = environ.get("WEATHER_API_URL", "")
    if source == "api" and not api_url:
        raise ValueError("WEATHER_API_URL is required when WEATHER_SOURCE is 'api'")

    raw_minutes = environ.get("WEATHER_POLL_MINUTES", str(DEFAULT_POLL_MINUTES))
    try:
        minutes = float(raw_minutes)
    except ValueError as e:
        raise ValueError(f"WEATHER_POLL_MINUTES must be a number, got {raw_minutes!r}") from e
    if minutes <= 0:
        raise ValueError(f"WEATHER_POLL_MINUTES must be positive, got {raw_minutes!r}")

    config = WeatherConfig(
        station=station,
        formatter=Template(environ.get("WEATHER_TEMPLATE", DEFAULT_TEMPLATE)),
        source=source,
        report_base_url=environ.get("WEATHER_REPORT_BASE_URL", NOAA_DECODED_URL).rstrip("/"),
        api_url=api_url,
    )
    return config, minutes
