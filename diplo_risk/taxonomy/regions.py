"""
Supported regions and per-country metadata.

Each region maps to a fixed, ordered list of country keys.  Country keys are
lowercase slugs (``"car"`` is the Central African Republic).  The order of
countries within a region is the order used in every output (news feed,
economics line, chart datasets).

Lookups:
  ``ISO3``      — World Bank country codes for the GDP series.
  ``CAPITALS``  — city name sent to OpenWeather for the current conditions.

This module has NO imports from any other ``diplo_risk`` package.
"""

from __future__ import annotations

from typing import Iterable, Optional

DEFAULT_REGION = "West Africa"

# Snapshot label for an explicit country list that spans regions.
CUSTOM_REGION = "Custom"

REGIONS: dict[str, tuple[str, ...]] = {
    "West Africa":    ("nigeria", "ghana", "senegal", "mali", "niger"),
    "East Africa":    ("kenya", "ethiopia", "uganda", "tanzania", "rwanda"),
    "Central Africa": ("cameroon", "chad", "car", "congo", "gabon"),
}

SUPPORTED_REGIONS: frozenset[str] = frozenset(REGIONS)

ISO3: dict[str, str] = {
    "nigeria": "NGA", "ghana": "GHA", "senegal": "SEN", "mali": "MLI", "niger": "NER",
    "kenya": "KEN", "ethiopia": "ETH", "uganda": "UGA", "tanzania": "TZA", "rwanda": "RWA",
    "cameroon": "CMR", "chad": "TCD", "car": "CAF", "congo": "COG", "gabon": "GAB",
}

CAPITALS: dict[str, str] = {
    "nigeria": "Abuja", "ghana": "Accra", "senegal": "Dakar",
    "mali": "Bamako", "niger": "Niamey",
    "kenya": "Nairobi", "ethiopia": "Addis Ababa", "uganda": "Kampala",
    "tanzania": "Dodoma", "rwanda": "Kigali",
    "cameroon": "Yaoundé", "chad": "N'Djamena", "car": "Bangui",
    "congo": "Brazzaville", "gabon": "Libreville",
}


def is_supported_region(region: str) -> bool:
    return region in SUPPORTED_REGIONS


def countries_for_region(region: Optional[str]) -> list[str]:
    """Return the ordered country keys for ``region``.

    Unknown or empty regions fall back to ``DEFAULT_REGION`` rather than
    raising; region validity is enforced when settings are written.
    """
    if region and region in REGIONS:
        return list(REGIONS[region])
    return list(REGIONS[DEFAULT_REGION])


def region_for_countries(country_keys: Iterable[str], default: str = DEFAULT_REGION) -> str:
    """Name the region an explicit country list belongs to.

    The first region containing every key wins.  An empty list gives
    ``default``; a list spanning regions (or with unknown keys) gives
    ``CUSTOM_REGION``.
    """
    keys = list(country_keys)
    if not keys:
        return default
    for name, members in REGIONS.items():
        if all(key in members for key in keys):
            return name
    return CUSTOM_REGION


def display_name(country_key: str) -> str:
    """``"nigeria"`` -> ``"Nigeria"``.  Only the first letter is changed."""
    if not country_key:
        return country_key
    return country_key[0].upper() + country_key[1:]
