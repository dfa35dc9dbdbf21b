"""
Risk pipeline orchestration.

The ``RiskOrchestrator`` runs one full dashboard refresh:

  Step 1 — Acquire:  For every country, fire the news, economic and weather
                     fetches at once (3 × N concurrent calls on one event loop).
  Step 2 — Score:    Per country, once its three results are in:
                     sentiment → weather risk → economic trend → risk score
                     → synthetic series.
  Step 3 — Present:  Hand the snapshot to the presentation sink (optional).

Failure isolation
-----------------
Every acquisition call is bounded by ``acquisition.timeout_seconds``.  A call
that raises or times out resolves to its fallback and the source is recorded
in ``CountryResult.fallbacks``:

  news     → no articles        (sentiment contribution: all neutral)
  economy  → empty series       (trend: synthetic ±0.1 draw)
  weather  → no observation     (weather risk: 0)

No acquisition error propagates out of ``run()``; one country's failures never
touch another country's result.  There are no retries.

Randomness
----------
The fallback trend and the series wobble draw from one ``random.Random``.
Draws happen in country order after all acquisitions complete, so a seeded
RNG gives the same snapshot for the same inputs regardless of network timing.
"""

from __future__ import annotations

import asyncio
import logging
import random
from collections.abc import Awaitable
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Any, Optional, Protocol, TypeVar
from uuid import uuid4

import httpx

from diplo_risk.config import AppConfig
from diplo_risk.ingestion.news_client import NewsApiClient
from diplo_risk.ingestion.weather_client import OpenWeatherClient
from diplo_risk.ingestion.worldbank_client import WorldBankClient
from diplo_risk.models.risk import CountryResult, DashboardSnapshot
from diplo_risk.models.signals import EconomicObservation, NewsItem, WeatherObservation
from diplo_risk.pipeline.presenter import present
from diplo_risk.reporting.sinks import PresentationSink
from diplo_risk.scoring.composer import build_record
from diplo_risk.scoring.economy import derive_trend
from diplo_risk.scoring.sentiment import classify
from diplo_risk.scoring.series import build_series, checkpoint_labels
from diplo_risk.scoring.weather import weather_risk
from diplo_risk.settings.store import DashboardSettings
from diplo_risk.taxonomy.regions import countries_for_region, region_for_countries
from diplo_risk.utils.logging import bind_run

logger = logging.getLogger(__name__)

T = TypeVar("T")


# ── Source protocols ──────────────────────────────────────────────────────────

class NewsSource(Protocol):
    async def fetch_country_news(self, country_key: str) -> list[NewsItem]: ...


class EconomicSource(Protocol):
    async def fetch_gdp_series(self, country_key: str) -> list[EconomicObservation]: ...


class WeatherSource(Protocol):
    async def fetch_current(self, country_key: str) -> Optional[WeatherObservation]: ...


# ── Acquisition result ────────────────────────────────────────────────────────

@dataclass
class CountryAcquisition:
    """Raw inputs for one country after fallbacks have been applied.

    Attributes:
        country_key: Country slug.
        articles:    News items, or ``[]`` on fallback.
        economy:     GDP observations, or ``[]`` on fallback.
        weather:     Current observation, or ``None`` on fallback / no key.
        fallbacks:   Sources whose call failed or timed out.
    """

    country_key: str
    articles:    list[NewsItem]
    economy:     list[EconomicObservation]
    weather:     Optional[WeatherObservation]
    fallbacks:   list[str]


# ── Orchestrator ──────────────────────────────────────────────────────────────

class RiskOrchestrator:
    """Coordinates acquisition, scoring and presentation for one region.

    Sources default to the real HTTP clients built around one shared
    ``httpx.AsyncClient`` per run.  Pass ``transport`` to route that client
    through e.g. ``httpx.MockTransport``, or pass source objects directly.

    Args:
        config:          AppConfig for this run.
        settings:        Resolved credentials and region.
        rng:             Random source for fallback trends and series wobble.
                         Defaults to ``random.Random(config.series.random_seed)``.
        sink:            Optional presentation sink; ``run()`` presents when set.
        news_source:     Override for the news client.
        economic_source: Override for the World Bank client.
        weather_source:  Override for the weather client.
        transport:       httpx transport for the default clients.
        today:           Date of the last chart checkpoint (defaults to today).
    """

    def __init__(
        self,
        config: AppConfig,
        settings: DashboardSettings,
        rng: Optional[random.Random] = None,
        sink: Optional[PresentationSink] = None,
        news_source: Optional[NewsSource] = None,
        economic_source: Optional[EconomicSource] = None,
        weather_source: Optional[WeatherSource] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        today: Optional[date] = None,
    ) -> None:
        self.config = config
        self.settings = settings
        self.rng = rng if rng is not None else random.Random(config.series.random_seed)
        self.sink = sink
        self.news_source = news_source
        self.economic_source = economic_source
        self.weather_source = weather_source
        self.transport = transport
        self.today = today

    # ── Public API ────────────────────────────────────────────────────────────

    def run(self, countries: Optional[list[str]] = None) -> DashboardSnapshot:
        """Run the full pipeline synchronously (wraps ``run_async``)."""
        return asyncio.run(self.run_async(countries))

    async def run_async(self, countries: Optional[list[str]] = None) -> DashboardSnapshot:
        """Acquire, score and (optionally) present.

        Args:
            countries: Country keys to process.  Defaults to the countries of
                ``settings.region``.  An explicit list is labelled with the
                region that contains all of it, else ``"Custom"``.

        Returns:
            ``DashboardSnapshot`` with one ``CountryResult`` per country, in
            input order.
        """
        if countries is None:
            region = self.settings.region
            keys = countries_for_region(region)
        else:
            keys = list(countries)
            region = region_for_countries(keys, self.settings.region)
        run_slug = str(uuid4())
        with bind_run(run_slug):
            return await self._run(run_slug, region, keys)

    async def _run(self, run_slug: str, region: str, keys: list[str]) -> DashboardSnapshot:
        logger.info("RiskOrchestrator start | region=%s | countries=%s", region, keys)

        # ── Step 1: Acquire (all countries, all sources, concurrently) ────────
        async with httpx.AsyncClient(transport=self.transport) as http:
            news, economic, weather = self._resolve_sources(http)
            acquisitions = await asyncio.gather(
                *(self._acquire_country(key, news, economic, weather) for key in keys)
            )

        # ── Step 2: Score ─────────────────────────────────────────────────────
        results = [self._score_country(acq) for acq in acquisitions]
        all_articles = [a for acq in acquisitions for a in acq.articles]

        snapshot = DashboardSnapshot(
            run_slug=run_slug,
            region=region,
            generated_at=datetime.now(tz=timezone.utc),
            labels=checkpoint_labels(
                self.config.series.point_count,
                self.config.series.checkpoint_interval_days,
                self.today,
            ),
            overall_sentiment=classify(all_articles),
            countries=results,
        )

        degraded = [r.country_key for r in results if r.fallbacks]
        logger.info(
            "RiskOrchestrator done | countries=%d | with_fallbacks=%s",
            len(results), degraded or "none",
        )

        # ── Step 3: Present ───────────────────────────────────────────────────
        if self.sink is not None:
            snapshot = present(snapshot, self.sink)
        return snapshot

    # ── Acquisition ───────────────────────────────────────────────────────────

    def _resolve_sources(
        self, http: httpx.AsyncClient
    ) -> tuple[NewsSource, EconomicSource, WeatherSource]:
        acq = self.config.acquisition
        news = self.news_source or NewsApiClient(http, acq, self.settings.newsapi_key)
        economic = self.economic_source or WorldBankClient(http, acq)
        weather = self.weather_source or OpenWeatherClient(
            http, acq, self.settings.openweather_key
        )
        return news, economic, weather

    async def _acquire_country(
        self,
        country_key: str,
        news: NewsSource,
        economic: EconomicSource,
        weather: WeatherSource,
    ) -> CountryAcquisition:
        (articles, news_failed), (series, econ_failed), (obs, weather_failed) = (
            await asyncio.gather(
                self._guarded("news", country_key, self._fetch_news(news, country_key), []),
                self._guarded("economy", country_key, economic.fetch_gdp_series(country_key), []),
                self._guarded("weather", country_key, weather.fetch_current(country_key), None),
            )
        )
        fallbacks = [
            source
            for source, failed in (
                ("news", news_failed), ("economy", econ_failed), ("weather", weather_failed),
            )
            if failed
        ]
        return CountryAcquisition(
            country_key=country_key,
            articles=list(articles or []),
            economy=list(series or []),
            weather=obs,
            fallbacks=fallbacks,
        )

    async def _fetch_news(self, news: NewsSource, country_key: str) -> list[NewsItem]:
        if (
            self.config.acquisition.demo_news
            and not self.settings.newsapi_key
            and isinstance(news, NewsApiClient)
        ):
            return news.get_fixture_response(country_key)
        return await news.fetch_country_news(country_key)

    async def _guarded(
        self,
        source: str,
        country_key: str,
        call: Awaitable[T],
        fallback: Any,
    ) -> tuple[Any, bool]:
        """Await ``call`` with the configured timeout.

        Returns:
            ``(value, False)`` on success, ``(fallback, True)`` on any error.
        """
        timeout = self.config.acquisition.timeout_seconds
        try:
            return await asyncio.wait_for(call, timeout=timeout), False
        except asyncio.TimeoutError:
            logger.warning(
                "%s fetch timed out after %.1fs for %s; using fallback",
                source, timeout, country_key,
            )
        except Exception as exc:
            logger.warning(
                "%s fetch failed for %s; using fallback: %s", source, country_key, exc
            )
        return fallback, True

    # ── Scoring ───────────────────────────────────────────────────────────────

    def _score_country(self, acq: CountryAcquisition) -> CountryResult:
        sentiment = classify(acq.articles)
        w_risk = weather_risk(acq.weather)
        trend = derive_trend(acq.economy, self.rng)
        record = build_record(acq.country_key, sentiment, w_risk, trend.value)
        series = build_series(
            acq.country_key,
            record.score,
            self.rng,
            point_count=self.config.series.point_count,
            wobble_amplitude=self.config.series.wobble_amplitude,
        )
        logger.debug(
            "Scored %s | score=%.1f | sentiment=%s | weather=%d | trend=%s",
            acq.country_key, record.score, sentiment.model_dump(), w_risk, trend.value,
        )
        return CountryResult(
            country_key=acq.country_key,
            articles=acq.articles,
            sentiment=sentiment,
            econ_trend=trend.value,
            econ_trend_synthetic=trend.synthetic,
            weather_risk=w_risk,
            record=record,
            series=series,
            fallbacks=acq.fallbacks,
        )
