# ABOUTME: Pydantic models for weather records, API payloads and widget configuration.
# ABOUTME: Defines the canonical WeatherRecord every source is converted into.

from collections.abc import Callable
from dataclasses import dataclass
from typing import Literal

from pydantic import BaseModel, ConfigDict

NOAA_DECODED_URL = "https://tgftp.nws.noaa.gov/data/observations/metar/decoded"
DEFAULT_TEMPLATE = "$tempF$ °F"


class WeatherRecord(BaseModel):
    """One observation, normalised from either a decoded report or an API payload."""

    model_config = ConfigDict(frozen=True)

    station_place: str
    station_state: str
    year: str
    month: str
    day: str
    hour: str
    wind: str
    visibility: str
    sky_condition: str
    temp_c: int
    temp_f: int
    dew_point: str
    humidity: int
    pressure: int


class DisplayLocation(BaseModel):
    """City and state the API observation is reported for."""

    model_config = ConfigDict(strict=True, frozen=True)

    city: str
    state: str


class CurrentObservation(BaseModel):
    """The current_observation object of a conditions payload.

    Field types follow the upstream API as-is: some numeric quantities arrive as
    strings and are kept that way.
    """

    model_config = ConfigDict(strict=True, frozen=True, allow_inf_nan=False)

    display_location: DisplayLocation
    observation_time: str
    temp_f: float
    temp_c: float
    weather: str
    relative_humidity: str
    wind_dir: str
    wind_degrees: int
    wind_mph: float
    wind_gust_mph: int
    wind_kph: float
    wind_gust_kph: int
    dewpoint_string: str
    pressure_mb: str
    pressure_in: str
    visibility_mi: str
    visibility_km: str


class RawApiPayload(BaseModel):
    """Top-level conditions payload."""

    model_config = ConfigDict(strict=True, frozen=True)

    current_observation: CurrentObservation


@dataclass(frozen=True)
class Template:
    """Render with $name$ substitution."""

    text: str = DEFAULT_TEMPLATE


@dataclass(frozen=True)
class CustomFormatter:
    """Render with a caller-supplied function, bypassing templates entirely."""

    fn: Callable[[WeatherRecord], str]


WeatherFormatter = Template | CustomFormatter


class WeatherConfig(BaseModel):
    """Which station to poll, where its data comes from, and how to render it."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    station: str
    formatter: WeatherFormatter = Template()
    source: Literal["report", "api"] = "report"
    report_base_url: str = NOAA_DECODED_URL
    api_url: str = ""

    @property
    def url(self) -> str:
        """The document URL polled for this configuration."""
        if self.source == "api":
            return self.api_url
        return f"{self.report_base_url}/{self.station.upper()}.TXT"


def default_weather_config(station: str) -> WeatherConfig:
    """A configuration that renders the Fahrenheit temperature from the NOAA report."""
    return WeatherConfig(station=station)
