"""
Risk output models.

``CountryRiskRecord`` is the composed 1–10 score for one country in one run.
``RiskSeries`` is the chart-ready series derived from it.  Only the last
point of a ``RiskSeries`` reflects the current run; earlier points are
synthetic perturbations, flagged by ``synthetic=True``.

``CountryResult`` bundles every intermediate value for one country and
``DashboardSnapshot`` is the full run output handed to presentation sinks
and written by the JSON export.

Nothing here is persisted across runs; each run recomputes all records.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from diplo_risk.models.signals import NewsItem, SentimentDistribution

RISK_MIN = 1.0
RISK_MAX = 10.0

VALID_SOURCES = frozenset({"news", "economy", "weather"})


class CountryRiskRecord(BaseModel):
    """Composed risk score for one country (one decimal, 1.0–10.0)."""

    model_config = ConfigDict(frozen=True)

    country_key: str
    score: float = Field(ge=RISK_MIN, le=RISK_MAX)


class RiskSeries(BaseModel):
    """Chart series for one country.

    Attributes:
        country_key: Country the series belongs to.
        points:      Ordered scores, oldest first; the last one is "now".
        synthetic:   Always ``True``: the points are random perturbations of
                     the current score, not historical data.
    """

    model_config = ConfigDict(frozen=True)

    country_key: str
    points: list[float]
    synthetic: bool = True

    @field_validator("points")
    @classmethod
    def validate_points(cls, v: list[float]) -> list[float]:
        if not v:
            raise ValueError("RiskSeries needs at least one point.")
        for p in v:
            if not RISK_MIN <= p <= RISK_MAX:
                raise ValueError(f"Series point {p} outside [{RISK_MIN}, {RISK_MAX}].")
        return v


class CountryResult(BaseModel):
    """All intermediate and final values for one country.

    Attributes:
        country_key:  Country slug.
        articles:     News items used for sentiment (possibly empty).
        sentiment:    Per-country sentiment distribution.
        econ_trend:   Signed GDP delta, or the synthetic fallback value.
        econ_trend_synthetic: ``True`` when ``econ_trend`` is the fallback draw.
        weather_risk: 0–5 weather contribution.
        record:       Composed risk record.
        series:       Synthetic chart series.
        fallbacks:    Sources that failed or timed out and were substituted.
    """

    model_config = ConfigDict(frozen=True)

    country_key: str
    articles: list[NewsItem] = []
    sentiment: SentimentDistribution
    econ_trend: float
    econ_trend_synthetic: bool = False
    weather_risk: int = Field(ge=0, le=5)
    record: CountryRiskRecord
    series: RiskSeries
    fallbacks: list[str] = []

    @field_validator("fallbacks")
    @classmethod
    def validate_fallbacks(cls, v: list[str]) -> list[str]:
        unknown = set(v) - VALID_SOURCES
        if unknown:
            raise ValueError(
                f"Unknown fallback source(s) {sorted(unknown)}. "
                f"Must be in {sorted(VALID_SOURCES)}."
            )
        return v


class DashboardSnapshot(BaseModel):
    """Complete output of one orchestrator run.

    ``countries`` preserves the region's country order.  ``labels`` are the
    chart checkpoint dates (ISO ``YYYY-MM-DD``), one per series point.
    """

    model_config = ConfigDict(frozen=True)

    run_slug: str
    region: str
    generated_at: datetime
    labels: list[str]
    overall_sentiment: SentimentDistribution
    countries: list[CountryResult]
    chart_error: Optional[str] = None

    def result_for(self, country_key: str) -> Optional[CountryResult]:
        for result in self.countries:
            if result.country_key == country_key:
                return result
        return None

    @property
    def records(self) -> list[CountryRiskRecord]:
        return [c.record for c in self.countries]

    @property
    def series(self) -> list[RiskSeries]:
        return [c.series for c in self.countries]

    @property
    def econ_trends(self) -> dict[str, float]:
        return {c.country_key: c.econ_trend for c in self.countries}
