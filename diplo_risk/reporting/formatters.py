"""
Terminal formatters for the console presentation sink.

All formatters accept plain model objects and return multi-line strings
suitable for ``typer.echo()``.  They never print.

Layout mirrors the dashboard panels:

  News feed   — up to three headlines per country
  Sentiment   — ``Positive: 40% • Neutral: 40% • Negative: 20%``
  Economics   — ``Nigeria: ↑  |  Ghana: ↓  |  Mali: →``
  Risk trends — one row per country with the synthetic checkpoints
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from diplo_risk.models.risk import CountryResult, RiskSeries
from diplo_risk.models.signals import NewsItem, SentimentDistribution
from diplo_risk.scoring.economy import trend_direction
from diplo_risk.taxonomy.regions import display_name

NEWS_ITEMS_PER_COUNTRY = 3
SYNTHETIC_NOTICE = (
    "Note: only the last checkpoint is the current score; "
    "earlier points are synthetic, not historical data."
)


def format_news_feed(
    news: Mapping[str, Sequence[NewsItem]],
    limit: int = NEWS_ITEMS_PER_COUNTRY,
) -> str:
    """Headlines grouped by country, in mapping order."""
    lines: list[str] = ["=== News Feed ==="]
    for country_key, articles in news.items():
        lines.append(f"  {display_name(country_key)}")
        if not articles:
            lines.append("    - No live data (demo mode).")
            continue
        for article in list(articles)[:limit]:
            title = article.title or "Untitled"
            source = f" ({article.source_name})" if article.source_name else ""
            lines.append(f"    - {title}{source}")
    return "\n".join(lines)


def format_sentiment_line(sentiment: SentimentDistribution) -> str:
    return (
        f"Positive: {sentiment.positive}% • "
        f"Neutral: {sentiment.neutral}% • "
        f"Negative: {sentiment.negative}%"
    )


def format_economics_line(trends: Mapping[str, float]) -> str:
    return "  |  ".join(
        f"{display_name(country)}: {trend_direction(trend)}"
        for country, trend in trends.items()
    )


def format_risk_table(
    labels: Sequence[str],
    series: Sequence[RiskSeries],
    results: Sequence[CountryResult] = (),
) -> str:
    """ASCII table of the synthetic checkpoints plus the current score.

    ``results`` is optional; when given, a ``Fallbacks`` column lists the
    sources that were substituted for each country.
    """
    fallbacks = {r.country_key: r.fallbacks for r in results}
    show_fallbacks = bool(results)

    header = f"  {'Country':<12}" + "".join(f"  {label:>10}" for label in labels)
    header += f"  {'Now':>5}"
    if show_fallbacks:
        header += "  Fallbacks"

    lines = ["=== Risk Trends (1-10) ===", header, "  " + "-" * (len(header) - 2)]
    for s in series:
        row = f"  {display_name(s.country_key):<12}"
        row += "".join(f"  {p:>10.1f}" for p in s.points)
        row += f"  {s.points[-1]:>5.1f}"
        if show_fallbacks:
            row += "  " + (", ".join(fallbacks.get(s.country_key, [])) or "-")
        lines.append(row)
    lines.append(f"  {SYNTHETIC_NOTICE}")
    return "\n".join(lines)


def format_sparkline(points: Sequence[float], blocks: str) -> str:
    """Map 1–10 scores onto ``blocks`` (lowest to highest glyph)."""
    top = len(blocks) - 1
    out = []
    for p in points:
        idx = int(round((min(max(p, 1.0), 10.0) - 1.0) / 9.0 * top))
        out.append(blocks[idx])
    return "".join(out)
