"""
Tests for diplo_risk/scoring/sentiment.py.

What we test
------------
classify():
  - Empty input is all neutral.
  - Positive-only, negative-only, and mixed headlines.
  - Description text counts as well as the title.
  - Matching is case-insensitive substring containment ("war" in "warm").
  - Per-bucket half-up rounding; totals of 99-101 are left alone.
  - Every bucket stays within [0, 100].
"""

from __future__ import annotations

import pytest

from diplo_risk.models.signals import NewsItem
from diplo_risk.scoring.sentiment import (
    NEGATIVE_TERMS,
    POSITIVE_TERMS,
    classify,
    classify_item,
    classify_text,
)


def _items(*titles: str) -> list[NewsItem]:
    return [NewsItem(title=t, description="") for t in titles]


class TestClassifyBasics:
    def test_empty_input_is_all_neutral(self):
        s = classify([])
        assert (s.positive, s.neutral, s.negative) == (0, 100, 0)

    def test_positive_only(self):
        s = classify(_items("peace agreement"))
        assert (s.positive, s.neutral, s.negative) == (100, 0, 0)

    def test_negative_only(self):
        s = classify(_items("war crisis"))
        assert (s.positive, s.neutral, s.negative) == (0, 0, 100)

    def test_both_matched_is_neutral(self):
        s = classify(_items("peace war"))
        assert (s.positive, s.neutral, s.negative) == (0, 100, 0)

    def test_no_terms_is_neutral(self):
        assert classify_text("Minister visits trade fair") == "neutral"

    def test_accepts_generator(self):
        s = classify(item for item in _items("ceasefire holds"))
        assert s.positive == 100


class TestClassifyText:
    def test_description_is_considered(self):
        item = NewsItem(title="Weekly roundup", description="Protest in the capital")
        assert classify_item(item) == "negative"

    def test_case_insensitive(self):
        assert classify_text("CEASEFIRE Announced") == "positive"

    def test_substring_matching_is_preserved(self):
        # "war" inside "warm" still counts as a negative term
        assert classify_text("Warm weather expected") == "negative"
        # "coup" inside "coupon"
        assert classify_text("Coupon scheme launched") == "negative"

    def test_title_and_description_joined_with_space(self):
        # "peace" + "war" split across fields: both match → neutral
        item = NewsItem(title="peace", description="war")
        assert classify_item(item) == "neutral"

    @pytest.mark.parametrize("term", POSITIVE_TERMS)
    def test_every_positive_term(self, term):
        assert classify_text(f"news about {term}") == "positive"

    @pytest.mark.parametrize("term", [t for t in NEGATIVE_TERMS if t != "instability"])
    def test_every_negative_term(self, term):
        assert classify_text(f"news about {term}") == "negative"

    def test_instability_also_contains_stability(self):
        # both lists match, so the item is neutral
        assert classify_text("Regional instability") == "neutral"


class TestClassifyPercentages:
    def test_rounding_is_per_bucket_half_up(self):
        # 1 pos, 1 neg, 6 neutral of 8 → 12.5 / 75 / 12.5 → 13 / 75 / 13
        items = _items("peace", "war") + _items(*["plain headline"] * 6)
        s = classify(items)
        assert (s.positive, s.neutral, s.negative) == (13, 75, 13)
        assert s.positive + s.neutral + s.negative == 101

    def test_thirds_sum_to_99(self):
        s = classify(_items("peace", "war", "plain"))
        assert (s.positive, s.neutral, s.negative) == (33, 33, 33)

    def test_buckets_within_bounds(self):
        items = _items("peace", "growth", "crisis", "", "stability and war")
        s = classify(items)
        for value in (s.positive, s.neutral, s.negative):
            assert 0 <= value <= 100
