# ABOUTME: Tolerant parser for NOAA decoded METAR text reports.
# ABOUTME: Descriptive sections degrade to placeholders; numeric sections are mandatory.

import math

from weather_label.errors import ParseError
from weather_label.models import WeatherRecord

WIND_LABEL = "Wind: "
VISIBILITY_LABEL = "Visibility: "
SKY_LABEL = "Sky conditions: "
TEMPERATURE_LABEL = "Temperature: "
DEW_POINT_LABEL = "Dew Point: "
HUMIDITY_LABEL = "Relative Humidity: "
PRESSURE_LABEL = "Pressure (altimeter): "

DIGITS = "0123456789"
NUMBER_CHARS = DIGITS + "-."


def not_found(label: str) -> str:
    """Placeholder text for a descriptive section missing from the report."""
    return f"<{label} not found!>"


class _Cursor:
    """A read position over the report text.

    Every read either advances past what it consumed or raises ParseError at the
    offending position. Line ends are "\\n"; the end of input also ends a line.
    """

    def __init__(self, text: str, source: str) -> None:
        self.text = text
        self.source = source
        self.pos = 0

    def fail(self, expected: str, pos: int | None = None) -> ParseError:
        if pos is None:
            pos = self.pos
        line = self.text.count("\n", 0, pos) + 1
        column = pos - (self.text.rfind("\n", 0, pos) + 1) + 1
        return ParseError(self.source, line, column, expected)

    def peek(self) -> str:
        return self.text[self.pos] if self.pos < len(self.text) else ""

    def char(self, expected: str) -> None:
        if self.peek() != expected:
            raise self.fail(repr(expected))
        self.pos += 1

    def space(self) -> None:
        if not self.peek().isspace():
            raise self.fail("space")
        self.pos += 1

    def skip_spaces(self) -> None:
        while self.peek().isspace():
            self.pos += 1

    def upto(self, stop: str) -> str:
        """Everything before the next `stop` character, consuming the stop."""
        end = self.text.find(stop, self.pos)
        if end < 0:
            raise self.fail(repr(stop), len(self.text))
        value = self.text[self.pos : end]
        self.pos = end + 1
        return value

    def run(self, allowed: str, terminators: str, expected: str) -> str:
        """A run of `allowed` characters ended by one of `terminators`, consuming the terminator."""
        start = self.pos
        while self.peek() and self.peek() in allowed:
            self.pos += 1
        if not self.peek() or self.peek() not in terminators:
            raise self.fail(expected)
        value = self.text[start : self.pos]
        self.pos += 1
        return value

    def digits(self) -> str:
        self.skip_spaces()
        start = self.pos
        while self.peek() and self.peek() in DIGITS:
            self.pos += 1
        if self.pos == start:
            raise self.fail("digit")
        return self.text[start : self.pos]

    def rest_of_line(self) -> str:
        end = self.text.find("\n", self.pos)
        if end < 0:
            end = len(self.text)
        value = self.text[self.pos : end]
        self.pos = min(end + 1, len(self.text))
        return value.removesuffix("\r")

    def find_label(self, label: str) -> int | None:
        """Offset just past `label`, tried here and then at each following line start."""
        pos = self.pos
        while True:
            if self.text.startswith(label, pos):
                return pos + len(label)
            newline = self.text.find("\n", pos)
            if newline < 0:
                return None
            pos = newline + 1

    def after_label(self, label: str) -> str | None:
        found = self.find_label(label)
        if found is None:
            return None
        self.pos = found
        return self.rest_of_line()

    def skip_to_label(self, label: str) -> None:
        found = self.find_label(label)
        if found is None:
            raise self.fail(repr(label), len(self.text))
        self.pos = found


def _floor(cursor: _Cursor, token: str, start: int) -> int:
    try:
        return math.floor(float(token))
    except ValueError as e:
        raise cursor.fail(f"a number, got {token!r}", start) from e


def _integer(cursor: _Cursor, token: str, start: int) -> int:
    try:
        return int(token)
    except ValueError as e:
        raise cursor.fail(f"an integer, got {token!r}", start) from e


def _parse_time(cursor: _Cursor) -> tuple[str, str, str, str]:
    """Year, month and day as written, and the observation time as HH:MM.

    The clock is a run of at least three digits split after the second one; longer
    runs are not truncated, so "21530" becomes "21:530".
    """
    year = cursor.digits()
    cursor.char(".")
    month = cursor.digits()
    cursor.char(".")
    day = cursor.digits()
    cursor.char(" ")
    start = cursor.pos
    clock = cursor.digits()
    if len(clock) < 3:
        raise cursor.fail("an HHMM observation time", start)
    cursor.char(" ")
    return year, month, day, f"{clock[:2]}:{clock[2:]}"


def _parse_temperature(cursor: _Cursor) -> tuple[int, int]:
    """Returns (celsius, fahrenheit) from a "F (C)" temperature line."""
    start = cursor.pos
    fahrenheit = cursor.run(NUMBER_CHARS, " ", "a Fahrenheit temperature")
    temp_f = _floor(cursor, fahrenheit, start)
    cursor.upto("(")
    start = cursor.pos
    celsius = cursor.run(NUMBER_CHARS, " ", "a Celsius temperature")
    temp_c = _floor(cursor, celsius, start)
    cursor.rest_of_line()
    return temp_c, temp_f


def _parse_humidity(cursor: _Cursor) -> int:
    start = cursor.pos
    return _integer(cursor, cursor.run(DIGITS, "%.", "a relative humidity percentage"), start)


def _parse_pressure(cursor: _Cursor) -> int:
    cursor.upto("(")
    start = cursor.pos
    pressure = _integer(cursor, cursor.run(DIGITS, " ", "a pressure reading"), start)
    cursor.rest_of_line()
    return pressure


def parse_report(text: str, source: str = "report") -> WeatherRecord:
    """Parse a decoded METAR report into a WeatherRecord.

    Wind, visibility, sky conditions and dew point are optional and fall back to
    a "<Label:  not found!>" placeholder. The header, timestamp, temperature,
    humidity and pressure are mandatory; any problem with them raises ParseError
    and no record is produced. Anything after the pressure line is ignored.

    Args:
        text: Raw report body.
        source: Name used in error positions, usually the report URL.
    """
    cursor = _Cursor(text, source)

    station_place = cursor.upto(",")
    cursor.space()
    station_state = cursor.upto("(")
    cursor.rest_of_line()
    cursor.upto("/")

    year, month, day, hour = _parse_time(cursor)

    wind = cursor.after_label(WIND_LABEL)
    visibility = cursor.after_label(VISIBILITY_LABEL)
    sky_condition = cursor.after_label(SKY_LABEL)

    cursor.skip_to_label(TEMPERATURE_LABEL)
    temp_c, temp_f = _parse_temperature(cursor)

    dew_point = cursor.after_label(DEW_POINT_LABEL)

    cursor.skip_to_label(HUMIDITY_LABEL)
    humidity = _parse_humidity(cursor)

    cursor.skip_to_label(PRESSURE_LABEL)
    pressure = _parse_pressure(cursor)

    return WeatherRecord(
        station_place=station_place,
        station_state=station_state,
        year=year,
        month=month,
        day=day,
        hour=hour,
        wind=wind if wind is not None else not_found(WIND_LABEL),
        visibility=visibility if visibility is not None else not_found(VISIBILITY_LABEL),
        sky_condition=sky_condition if sky_condition is not None else not_found(SKY_LABEL),
        temp_c=temp_c,
        temp_f=temp_f,
        dew_point=dew_point if dew_point is not None else not_found(DEW_POINT_LABEL),
        humidity=humidity,
        pressure=pressure,
    )
