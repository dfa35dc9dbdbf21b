"""
Dashboard data loader.

Reads the snapshot JSON files written by ``diplo-risk run --export``.
Loaders are wrapped in ``@st.cache_data`` so Streamlit only re-reads files
when the TTL expires.

Functions return ``None`` (rather than raising) when no files are found so
every view can show a graceful "no data yet" message.
"""

from __future__ import annotations

import json
import time
from pathlib import Path

import streamlit as st

from diplo_risk.reporting.export import region_slug
from diplo_risk.taxonomy.regions import display_name


def _find_latest(directory: Path, pattern: str) -> Path | None:
    """Return the most-recently-modified file matching ``pattern``."""
    if not directory.exists():
        return None
    matches = list(directory.glob(pattern))
    return max(matches, key=lambda p: p.stat().st_mtime) if matches else None


def _snapshot_pattern(region: str) -> str:
    return f"dashboard_{region_slug(region)}_*.json"


def _load_json(path: Path) -> dict | None:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return None
    return data if isinstance(data, dict) else None


@st.cache_data(ttl=300)
def load_snapshot(region: str, output_dir: str) -> dict | None:
    """Load the newest dashboard snapshot for *region*."""
    path = _find_latest(Path(output_dir), _snapshot_pattern(region))
    return _load_json(path) if path else None


def snapshot_age_hours(region: str, output_dir: str) -> float | None:
    """Hours since the newest snapshot for *region* was written (None = none)."""
    path = _find_latest(Path(output_dir), _snapshot_pattern(region))
    if path is None:
        return None
    return (time.time() - path.stat().st_mtime) / 3600.0


def chart_rows(snapshot: dict) -> list[dict]:
    """Long-form rows ``{checkpoint, country, score}`` for the risk chart.

    Series shorter than the label list are truncated to the shared length.
    """
    labels = snapshot.get("labels") or []
    rows: list[dict] = []
    for country in snapshot.get("countries") or []:
        name = display_name(country.get("country_key", ""))
        points = (country.get("series") or {}).get("points") or []
        for label, score in zip(labels, points):
            rows.append({"checkpoint": label, "country": name, "score": score})
    return rows
