# ABOUTME: Periodic polling of the weather service and delivery to a display surface.
# ABOUTME: Cycles run strictly one after another; a new fetch starts only after the last display.

import asyncio
import logging
import sys
from collections.abc import Awaitable, Callable
from typing import Protocol, TextIO

import httpx

from weather_label.models import WeatherConfig
from weather_label.weather_service import FALLBACK_TEXT, create_http_client, get_current_weather

logger = logging.getLogger(__name__)


class Display(Protocol):
    """A surface that shows the most recent weather text."""

    def show(self, text: str) -> None: ...


class LatestValue:
    """Keeps only the last string it was shown."""

    def __init__(self) -> None:
        self.text: str | None = None

    def show(self, text: str) -> None:
        self.text = text


class ConsoleDisplay:
    """Writes each value to a stream, skipping repeats of the current value."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self.stream = stream or sys.stdout
        self.text: str | None = None

    def show(self, text: str) -> None:
        if text == self.text:
            return
        self.text = text
        print(text, file=self.stream, flush=True)


async def polling_label(
    display: Display,
    initial: str,
    period_seconds: float,
    producer: Callable[[], Awaitable[str]],
    cycles: int | None = None,
) -> None:
    """Show `initial`, then refresh the display from `producer` every `period_seconds`.

    The period is measured from the end of one cycle to the start of the next,
    so a slow producer delays the following tick instead of overlapping it.

    Args:
        display: Surface receiving each produced string.
        initial: Text shown before the first cycle completes.
        period_seconds: Pause between cycles.
        producer: Coroutine function returning the next text to show.
        cycles: Stop after this many cycles; run forever when None.
    """
    display.show(initial)
    completed = 0
    while True:
        display.show(await producer())
        completed += 1
        if cycles is not None and completed >= cycles:
            break
        await asyncio.sleep(period_seconds)


async def weather_new(
    config: WeatherConfig,
    delay_minutes: float,
    display: Display,
    client: httpx.AsyncClient | None = None,
    cycles: int | None = None,
) -> None:
    """Poll the configured station every `delay_minutes` and show the result on `display`."""
    url = config.url
    logger.info("Polling %s every %s minute(s)", url, delay_minutes)

    async def run(http_client: httpx.AsyncClient) -> None:
        await polling_label(
            display,
            FALLBACK_TEXT,
            delay_minutes * 60,
            lambda: get_current_weather(http_client, url, config),
            cycles=cycles,
        )

    if client is not None:
        await run(client)
        return
    async with create_http_client() as http_client:
        await run(http_client)
