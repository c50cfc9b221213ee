# ABOUTME: Service layer that downloads weather documents and turns them into display text.
# ABOUTME: Every failure in a cycle is logged once and replaced by the "N/A" fallback.

import logging
from typing import Literal

import httpx

from weather_label.api_decoder import decode_record
from weather_label.errors import FetchError, WeatherError
from weather_label.models import WeatherConfig, WeatherRecord
from weather_label.renderer import format_weather
from weather_label.report_parser import parse_report

logger = logging.getLogger(__name__)

FALLBACK_TEXT = "N/A"


def create_http_client(timeout: float = 10.0) -> httpx.AsyncClient:
    """Create an httpx client that follows redirects and bounds each request.

    No retry transport is installed: the next poll is the retry.
    """
    return httpx.AsyncClient(follow_redirects=True, timeout=timeout)


async def download_url(client: httpx.AsyncClient, url: str) -> str:
    """Download the document at a URL, following redirects, and return its body text."""
    try:
        resp = await client.get(url)
        resp.raise_for_status()
    except httpx.HTTPStatusError as e:
        raise FetchError(url, f"HTTP {e.response.status_code}") from e
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        raise FetchError(url, f"{type(e).__name__}: {e}") from e
    return resp.text


async def get_weather(
    client: httpx.AsyncClient,
    url: str,
    source: Literal["report", "api"] = "report",
) -> WeatherRecord:
    """Fetch a document and parse it with the decoder matching its source."""
    body = await download_url(client, url)
    if source == "api":
        return decode_record(body)
    return parse_report(body, source=url)


async def get_current_weather(client: httpx.AsyncClient, url: str, config: WeatherConfig) -> str:
    """Run one acquisition cycle and return the text to display.

    Args:
        client: HTTP client used for the single fetch.
        url: Document URL, normally config.url.
        config: Source and formatter selection.
    """
    try:
        record = await get_weather(client, url, config.source)
    except WeatherError as e:
        logger.error("Weather update from %s failed: %s", url, e)
        return FALLBACK_TEXT
    logger.debug("Weather update from %s: %s", url, record)
    try:
        return format_weather(config.formatter, record)
    except Exception:
        # If a custom formatter fails, show the fallback rather than stopping the poll loop
        logger.exception("Formatting weather from %s failed", url)
        return FALLBACK_TEXT
