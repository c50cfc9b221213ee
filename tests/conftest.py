# ABOUTME: Shared test fixtures for the weather label test suite.
# ABOUTME: Provides a sample decoded report, a sample conditions payload and a mock HTTP client factory.

import copy
import json
from unittest.mock import AsyncMock

import httpx
import pytest

from weather_label.models import WeatherRecord

SAMPLE_REPORT = """\
MADISON DANE CO REGIONAL AIRPORT, WI, United States (KMSN) 43-08N 089-20W 264M
Jun 27, 2024 - 05:53 PM EDT / 2024.06.27 2153 UTC
Wind: from the SSW (200 degrees) at 9 MPH (8 KT):0
Visibility: 10 mile(s):0
Sky conditions: partly cloudy
Temperature: 82.0 F (27.8 C)
Dew Point: 64.9 F (18.3 C)
Relative Humidity: 56%
Pressure (altimeter): 29.89 in. Hg (1012 hPa)
ob: KMSN 272153Z 20009KT 10SM FEW050 SCT250 28/18 A2989 RMK AO2 SLP119 T02780183
cycle: 22
"""

SAMPLE_PAYLOAD = {
    "response": {"version": "0.1"},
    "current_observation": {
        "display_location": {"city": "Philadelphia", "state": "PA", "zip": "19101"},
        "observation_time": "Last Updated on June 27, 5:53 PM EDT",
        "temp_f": 82.4,
        "temp_c": 28.0,
        "weather": "Partly Cloudy",
        "relative_humidity": "65%",
        "wind_dir": "SSW",
        "wind_degrees": 200,
        "wind_mph": 9.0,
        "wind_gust_mph": 0,
        "wind_kph": 14.5,
        "wind_gust_kph": 0,
        "dewpoint_string": "66 F (19 C)",
        "pressure_mb": "1015",
        "pressure_in": "29.97",
        "visibility_mi": "10.0",
        "visibility_km": "16.1",
    },
}


def payload(**overrides) -> dict:
    """A deep copy of SAMPLE_PAYLOAD with current_observation fields overridden."""
    data = copy.deepcopy(SAMPLE_PAYLOAD)
    data["current_observation"].update(overrides)
    return data


def payload_bytes(data: dict | None = None) -> bytes:
    return json.dumps(SAMPLE_PAYLOAD if data is None else data).encode()


def mock_client(text: str = "", status_code: int = 200, error: Exception | None = None) -> httpx.AsyncClient:
    """Create a mock httpx.AsyncClient whose get returns the given body or raises the given error."""
    mock = AsyncMock(spec=httpx.AsyncClient)
    if error is not None:
        mock.get.side_effect = error
    else:
        mock.get.return_value = httpx.Response(
            status_code=status_code, text=text, request=httpx.Request("GET", "https://test")
        )
    return mock


@pytest.fixture
def record() -> WeatherRecord:
    return WeatherRecord(
        station_place="MADISON DANE CO REGIONAL AIRPORT",
        station_state="WI, United States ",
        year="2024",
        month="06",
        day="27",
        hour="21:53",
        wind="from the SSW (200 degrees) at 9 MPH (8 KT):0",
        visibility="10 mile(s):0",
        sky_condition="partly cloudy",
        temp_c=5,
        temp_f=41,
        dew_point="64.9 F (18.3 C)",
        humidity=60,
        pressure=1012,
    )
