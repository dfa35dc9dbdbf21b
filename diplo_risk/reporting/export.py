"""
Export helpers for the dashboard snapshot.

``export_snapshot()`` writes the full run output as pretty-printed JSON:

    data/outputs/dashboard_{region-slug}_{YYYYMMDDTHHMMSS}.json

The Streamlit dashboard reads the newest of these files.  ``export_to_csv``
writes the flat per-country table (one row per country) for spreadsheets.
"""

from __future__ import annotations

import csv
import json
from pathlib import Path

from diplo_risk.models.risk import DashboardSnapshot


def region_slug(region: str) -> str:
    """``"West Africa"`` -> ``"west-africa"``."""
    return "-".join(region.lower().split())


def export_to_json(data: dict | list, path: Path) -> Path:
    """Write ``data`` to a pretty-printed JSON file (parent dirs created)."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2, default=str, ensure_ascii=False), encoding="utf-8")
    return path


def export_to_csv(
    records: list[dict],
    path: Path,
    fieldnames: list[str] | None = None,
) -> Path:
    """Write ``records`` to a UTF-8 CSV file.

    Args:
        records:    List of row dicts.
        path:       Destination file path (parent dirs created if missing).
        fieldnames: Column order.  If None, uses the keys of the first record.

    Returns:
        ``path`` as written.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    if not records:
        path.write_text("", encoding="utf-8")
        return path
    cols = fieldnames or list(records[0].keys())
    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=cols, extrasaction="ignore")
        writer.writeheader()
        writer.writerows(records)
    return path


def snapshot_filename(snapshot: DashboardSnapshot, suffix: str = "json") -> str:
    stamp = snapshot.generated_at.strftime("%Y%m%dT%H%M%S")
    return f"dashboard_{region_slug(snapshot.region)}_{stamp}.{suffix}"


def export_snapshot(snapshot: DashboardSnapshot, output_dir: Path) -> Path:
    """Write ``snapshot`` as JSON into ``output_dir`` and return the path."""
    payload = snapshot.model_dump(mode="json")
    return export_to_json(payload, Path(output_dir) / snapshot_filename(snapshot))


def flatten_snapshot(snapshot: DashboardSnapshot) -> list[dict]:
    """One flat row per country: score, components, and fallbacks."""
    rows: list[dict] = []
    for c in snapshot.countries:
        rows.append(
            {
                "region": snapshot.region,
                "generated_at": snapshot.generated_at.isoformat(),
                "country_key": c.country_key,
                "score": c.record.score,
                "sentiment_positive": c.sentiment.positive,
                "sentiment_neutral": c.sentiment.neutral,
                "sentiment_negative": c.sentiment.negative,
                "weather_risk": c.weather_risk,
                "econ_trend": c.econ_trend,
                "econ_trend_synthetic": c.econ_trend_synthetic,
                "article_count": len(c.articles),
                "fallbacks": ";".join(c.fallbacks),
            }
        )
    return rows
