"""
Input signal models: news items, weather observations, economic observations,
and the derived sentiment distribution.

All models are frozen.  They are produced by the ingestion clients (or by
the sentiment classifier) and consumed once by the scoring functions.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class NewsItem(BaseModel):
    """A single news article about a country.

    Only ``title`` and ``description`` feed the sentiment classifier; the
    remaining fields are carried through for the news feed.

    Attributes:
        title:        Headline (may be empty).
        description:  Article summary (may be empty).
        url:          Link to the article; ``"#"`` for demo items.
        published_at: Publication timestamp, when the source provides one.
        source_name:  Publisher name, e.g. ``"Reuters"``.
    """

    model_config = ConfigDict(frozen=True)

    title: str = ""
    description: str = ""
    url: str = ""
    published_at: Optional[datetime] = None
    source_name: str = ""

    @field_validator("title", "description", "url", "source_name", mode="before")
    @classmethod
    def none_to_empty(cls, v: object) -> object:
        # NewsAPI sends explicit nulls for missing text fields.
        return "" if v is None else v


class SentimentDistribution(BaseModel):
    """Percentage split of classified items.

    Each bucket is rounded independently, so the three values can sum to
    99–101.  That is accepted, not corrected.
    """

    model_config = ConfigDict(frozen=True)

    positive: int = Field(default=0, ge=0, le=100)
    neutral: int = Field(default=100, ge=0, le=100)
    negative: int = Field(default=0, ge=0, le=100)


class WeatherObservation(BaseModel):
    """Current weather at a country's capital.

    Attributes:
        temperature_kelvin: Air temperature in Kelvin (OpenWeather default unit).
        humidity_percent:   Relative humidity, 0–100.
        condition_main:     OpenWeather ``weather[0].main``, e.g. ``"Thunderstorm"``.
    """

    model_config = ConfigDict(frozen=True)

    temperature_kelvin: Optional[float] = None
    humidity_percent: Optional[float] = None
    condition_main: str = ""


class EconomicObservation(BaseModel):
    """One yearly data point of an economic indicator (GDP, current USD).

    ``value`` is ``None`` when the World Bank has no figure for that year yet.
    """

    model_config = ConfigDict(frozen=True)

    date: int
    value: Optional[float] = None
