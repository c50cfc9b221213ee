# ABOUTME: Exception hierarchy for the weather acquisition pipeline.
# ABOUTME: Fetch, report-parse and JSON-decode failures all derive from WeatherError.


class WeatherError(RuntimeError):
    """Base error for a failed acquisition cycle."""


class FetchError(WeatherError):
    """Raised when the weather document could not be downloaded."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"Error fetching {url}: {reason}")
        self.url = url
        self.reason = reason


class ParseError(WeatherError):
    """Raised when a decoded report is missing a mandatory section.

    Positions are 1-based, counted in lines and columns of the raw report text.
    """

    def __init__(self, source: str, line: int, column: int, expected: str) -> None:
        super().__init__(f'"{source}" (line {line}, column {column}): expected {expected}')
        self.source = source
        self.line = line
        self.column = column
        self.expected = expected


class DecodeError(WeatherError):
    """Raised when a JSON payload is missing a key or has a mistyped value."""

    def __init__(self, key: str, message: str) -> None:
        super().__init__(f"Decoding JSON failed at '{key}': {message}")
        self.key = key
        self.message = message
