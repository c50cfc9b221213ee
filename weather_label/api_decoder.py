# ABOUTME: Strict decoder for the JSON conditions API and conversion to WeatherRecord.
# ABOUTME: Any missing or mistyped key fails the whole decode; there is no partial record.

import math
import re

from pydantic import ValidationError

from weather_label.errors import DecodeError
from weather_label.models import RawApiPayload, WeatherRecord

MONTHS = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)

# "Last Updated on June 27, 5:53 PM EDT"
OBSERVATION_TIME = re.compile(r"(?P<month>[A-Z][a-z]+) (?P<day>\d{1,2}), (?P<hour>\d{1,2}):(?P<minute>\d{2}) (?P<half>[AP]M)")

YEAR_NOT_FOUND = "<year not found!>"


def decode_payload(data: bytes | str) -> RawApiPayload:
    """Decode a conditions JSON document, requiring every key with its exact type."""
    try:
        return RawApiPayload.model_validate_json(data)
    except ValidationError as e:
        first = e.errors()[0]
        key = ".".join(str(part) for part in first["loc"]) or "<document>"
        raise DecodeError(key, first["msg"]) from e


def _observation_time(value: str) -> tuple[str, str, str]:
    """Split an observation_time string into zero-padded month, day and 24-hour HH:MM."""
    match = OBSERVATION_TIME.search(value)
    if match is None or match["month"] not in MONTHS:
        raise DecodeError("current_observation.observation_time", f"unrecognised timestamp {value!r}")
    hour = int(match["hour"]) % 12
    if match["half"] == "PM":
        hour += 12
    month = MONTHS.index(match["month"]) + 1
    return f"{month:02d}", f"{int(match['day']):02d}", f"{hour:02d}:{match['minute']}"


def _leading_int(key: str, value: str) -> int:
    digits = re.match(r"\s*(-?\d+)", value)
    if digits is None:
        raise DecodeError(f"current_observation.{key}", f"expected a number, got {value!r}")
    return int(digits.group(1))


def payload_to_record(payload: RawApiPayload) -> WeatherRecord:
    """Map a decoded payload onto the canonical record.

    The API carries no observation year, so the year is a not-found placeholder.
    """
    obs = payload.current_observation
    month, day, hour = _observation_time(obs.observation_time)
    return WeatherRecord(
        station_place=obs.display_location.city,
        station_state=obs.display_location.state,
        year=YEAR_NOT_FOUND,
        month=month,
        day=day,
        hour=hour,
        wind=f"from the {obs.wind_dir} ({obs.wind_degrees} degrees) at {obs.wind_mph:g} MPH ({obs.wind_kph:g} KPH)",
        visibility=f"{obs.visibility_mi} mile(s)",
        sky_condition=obs.weather,
        temp_c=math.floor(obs.temp_c),
        temp_f=math.floor(obs.temp_f),
        dew_point=obs.dewpoint_string,
        humidity=_leading_int("relative_humidity", obs.relative_humidity),
        pressure=_leading_int("pressure_mb", obs.pressure_mb),
    )


def decode_record(data: bytes | str) -> WeatherRecord:
    """Decode a conditions JSON document straight into a WeatherRecord."""
    return payload_to_record(decode_payload(data))
