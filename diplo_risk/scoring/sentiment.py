"""
Keyword sentiment classification for news items.

Per item, ``title + " " + description`` is lowercased and tested for any
positive and any negative term by plain substring containment:

    positive only  → positive
    negative only  → negative
    both / neither → neutral

Substring matching is intentional and must stay: "war" also matches "warm"
and "award", "coup" matches "coupon".  Changing it shifts every downstream
risk score.

Percentages are computed per bucket as ``count / max(n, 1) * 100`` and
rounded half-up independently, so totals of 99 or 101 are possible.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Literal

from diplo_risk.models.signals import NewsItem, SentimentDistribution
from diplo_risk.utils.numeric import round_half_up

SentimentLabel = Literal["positive", "neutral", "negative"]

POSITIVE_TERMS: tuple[str, ...] = (
    "peace", "agreement", "cooperation", "growth", "stability", "progress", "ceasefire",
)
NEGATIVE_TERMS: tuple[str, ...] = (
    "conflict", "crisis", "war", "violence", "instability", "tension", "coup",
    "protest", "sanction",
)


def classify_text(text: str) -> SentimentLabel:
    """Classify one piece of text.  Matching is case-insensitive."""
    lowered = text.lower()
    has_positive = any(term in lowered for term in POSITIVE_TERMS)
    has_negative = any(term in lowered for term in NEGATIVE_TERMS)
    if has_positive and not has_negative:
        return "positive"
    if has_negative and not has_positive:
        return "negative"
    return "neutral"


def classify_item(item: NewsItem) -> SentimentLabel:
    return classify_text(f"{item.title or ''} {item.description or ''}")


def classify(items: Iterable[NewsItem]) -> SentimentDistribution:
    """Map a collection of news items to a positive/neutral/negative split.

    Args:
        items: News items to classify.  Empty input is valid.

    Returns:
        ``SentimentDistribution``; ``{0, 100, 0}`` (all neutral) for no items.
    """
    counts = {"positive": 0, "neutral": 0, "negative": 0}
    n = 0
    for item in items:
        counts[classify_item(item)] += 1
        n += 1

    if n == 0:
        return SentimentDistribution(positive=0, neutral=100, negative=0)

    total = max(n, 1)
    return SentimentDistribution(
        positive=int(round_half_up(counts["positive"] / total * 100)),
        neutral=int(round_half_up(counts["neutral"] / total * 100)),
        negative=int(round_half_up(counts["negative"] / total * 100)),
    )
