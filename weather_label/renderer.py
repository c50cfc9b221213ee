# ABOUTME: Renders a WeatherRecord into display text via $name$ templates or a custom function.
# ABOUTME: Rendering is total: unknown names and stray dollar signs pass through unchanged.

import re

from weather_label.models import CustomFormatter, Template, WeatherFormatter, WeatherRecord

# Template variable name -> WeatherRecord field.
VARIABLES = {
    "stationPlace": "station_place",
    "stationState": "station_state",
    "year": "year",
    "month": "month",
    "day": "day",
    "hour": "hour",
    "wind": "wind",
    "visibility": "visibility",
    "skyCondition": "sky_condition",
    "tempC": "temp_c",
    "tempF": "temp_f",
    "dewPoint": "dew_point",
    "humidity": "humidity",
    "pressure": "pressure",
}

# Only known names match, so "$bogus$tempC$" leaves "$bogus" and still substitutes tempC.
_PLACEHOLDER = re.compile(r"\$(" + "|".join(VARIABLES) + r")\$")


def record_variables(record: WeatherRecord) -> dict[str, str]:
    """The substitution table for a record, keyed by template variable name."""
    return {name: str(getattr(record, field)) for name, field in VARIABLES.items()}


def render(template: str, record: WeatherRecord) -> str:
    """Substitute every known $name$ in the template with the record's value."""
    values = record_variables(record)
    return _PLACEHOLDER.sub(lambda m: values[m.group(1)], template)


def format_weather(formatter: WeatherFormatter, record: WeatherRecord) -> str:
    """Render a record with whichever strategy the configuration selected."""
    if isinstance(formatter, CustomFormatter):
        return formatter.fn(record)
    if isinstance(formatter, Template):
        return render(formatter.text, record)
    raise TypeError(f"Unsupported weather formatter: {formatter!r}")
