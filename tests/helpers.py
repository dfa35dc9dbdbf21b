"""
Test doubles and sample data shared across the suite.

  - News / weather / economic samples used by pipeline tests.
  - ``FakeSources``: async stand-in for the three acquisition clients.
"""

from __future__ import annotations

import asyncio
from typing import Optional

from diplo_risk.errors import AcquisitionFailure
from diplo_risk.models.signals import EconomicObservation, NewsItem, WeatherObservation


def news(*titles: str) -> list[NewsItem]:
    """One ``NewsItem`` per title, empty descriptions."""
    return [NewsItem(title=t, description="") for t in titles]


NEGATIVE_NEWS = news("War erupts near border", "Coup attempt deepens crisis")
POSITIVE_NEWS = news("Peace agreement signed", "Growth and stability return")

SEVERE_WEATHER = WeatherObservation(
    temperature_kelvin=320.0, humidity_percent=95.0, condition_main="Thunderstorm"
)
CALM_WEATHER = WeatherObservation(
    temperature_kelvin=298.0, humidity_percent=40.0, condition_main="Clear"
)

DECLINING_GDP = [
    EconomicObservation(date=2023, value=100.0),
    EconomicObservation(date=2024, value=90.0),
]
GROWING_GDP = [
    EconomicObservation(date=2023, value=90.0),
    EconomicObservation(date=2024, value=100.0),
]


class FakeSources:
    """Async news / economic / weather sources backed by dicts.

    A value that is an ``Exception`` instance is raised instead of returned.
    Every call sleeps ``latency`` seconds; calls listed in ``slow`` sleep
    ``delay`` seconds instead (used to trigger the orchestrator timeout).
    Calls are recorded in ``calls``; ``peak_in_flight`` is the largest number
    of calls that were awaiting at the same moment.
    """

    def __init__(
        self,
        news_by_country: Optional[dict] = None,
        econ_by_country: Optional[dict] = None,
        weather_by_country: Optional[dict] = None,
        slow: Optional[set[tuple[str, str]]] = None,
        delay: float = 5.0,
        latency: float = 0.0,
    ) -> None:
        self.news_by_country = news_by_country or {}
        self.econ_by_country = econ_by_country or {}
        self.weather_by_country = weather_by_country or {}
        self.slow = slow or set()
        self.delay = delay
        self.latency = latency
        self.calls: list[tuple[str, str]] = []
        self.in_flight = 0
        self.peak_in_flight = 0

    async def _resolve(self, source: str, country_key: str, table: dict, default):
        self.calls.append((source, country_key))
        self.in_flight += 1
        self.peak_in_flight = max(self.peak_in_flight, self.in_flight)
        try:
            pause = self.delay if (source, country_key) in self.slow else self.latency
            if pause:
                await asyncio.sleep(pause)
        finally:
            self.in_flight -= 1
        value = table.get(country_key, default)
        if isinstance(value, Exception):
            raise value
        return value

    async def fetch_country_news(self, country_key: str) -> list[NewsItem]:
        return await self._resolve("news", country_key, self.news_by_country, [])

    async def fetch_gdp_series(self, country_key: str) -> list[EconomicObservation]:
        return await self._resolve("economy", country_key, self.econ_by_country, [])

    async def fetch_current(self, country_key: str) -> Optional[WeatherObservation]:
        return await self._resolve("weather", country_key, self.weather_by_country, None)


def news_failure(country_key: str) -> AcquisitionFailure:
    return AcquisitionFailure("News fetch failed", source="news", country_key=country_key)
