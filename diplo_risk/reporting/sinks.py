"""
Presentation sinks.

A sink receives the finished pipeline output piece by piece.  The pipeline
never draws anything itself; swapping the sink swaps the UI.

``render_chart`` may raise ``PresentationUnavailable``.  The caller then
invokes ``chart_unavailable(reason)`` and carries on: news, sentiment and
economics output must not depend on the chart.
"""

from __future__ import annotations

import codecs
import logging
import sys
from collections.abc import Callable, Mapping, Sequence
from typing import Optional, Protocol

import typer

from diplo_risk.errors import PresentationUnavailable
from diplo_risk.models.risk import CountryResult, RiskSeries
from diplo_risk.models.signals import NewsItem, SentimentDistribution
from diplo_risk.reporting.formatters import (
    format_economics_line,
    format_news_feed,
    format_risk_table,
    format_sentiment_line,
    format_sparkline,
)
from diplo_risk.taxonomy.regions import display_name

logger = logging.getLogger(__name__)

SPARK_BLOCKS = "▁▂▃▄▅▆▇█"


class PresentationSink(Protocol):
    def render_news(self, news: Mapping[str, Sequence[NewsItem]]) -> None: ...

    def render_sentiment(self, sentiment: SentimentDistribution) -> None: ...

    def render_economics(self, trends: Mapping[str, float]) -> None: ...

    def render_chart(
        self,
        labels: Sequence[str],
        series: Sequence[RiskSeries],
        results: Sequence[CountryResult] = (),
    ) -> None: ...

    def chart_unavailable(self, reason: str) -> None: ...


class ConsoleSink:
    """Writes the dashboard to the terminal via ``typer.echo``.

    The chart is a table of checkpoints followed by one sparkline per
    country.  Sparklines need block glyphs; when the output encoding cannot
    represent them the chart is reported unavailable instead of printing
    mojibake.

    Args:
        echo:     Output function (``typer.echo`` by default).
        encoding: Output encoding; defaults to ``sys.stdout.encoding``.
    """

    def __init__(
        self,
        echo: Callable[[str], None] = typer.echo,
        encoding: Optional[str] = None,
    ) -> None:
        self.echo = echo
        self.encoding = encoding or getattr(sys.stdout, "encoding", None) or "utf-8"

    def render_news(self, news: Mapping[str, Sequence[NewsItem]]) -> None:
        self.echo(format_news_feed(news))
        self.echo("")

    def render_sentiment(self, sentiment: SentimentDistribution) -> None:
        self.echo("=== Sentiment ===")
        self.echo(f"  {format_sentiment_line(sentiment)}")
        self.echo("")

    def render_economics(self, trends: Mapping[str, float]) -> None:
        self.echo("=== Economic Trend (GDP) ===")
        self.echo(f"  {format_economics_line(trends)}")
        self.echo("")

    def render_chart(
        self,
        labels: Sequence[str],
        series: Sequence[RiskSeries],
        results: Sequence[CountryResult] = (),
    ) -> None:
        try:
            SPARK_BLOCKS.encode(codecs.lookup(self.encoding).name)
        except (LookupError, UnicodeEncodeError) as exc:
            raise PresentationUnavailable(
                f"output encoding '{self.encoding}' cannot draw the chart"
            ) from exc

        self.echo(format_risk_table(labels, series, results))
        for s in series:
            self.echo(f"  {display_name(s.country_key):<12}  {format_sparkline(s.points, SPARK_BLOCKS)}")
        self.echo("")

    def chart_unavailable(self, reason: str) -> None:
        self.echo(f"[WARN] Chart disabled: {reason}")
