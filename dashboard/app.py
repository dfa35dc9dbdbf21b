"""
Diplomatic Risk Dashboard — Streamlit UI
========================================

Optional local UI.  Reads the newest snapshot from ``data/outputs/`` only;
it does NOT fetch news, economic or weather data itself.

Panels
------
  1. News Feed      — up to three headlines per country.
  2. Sentiment      — overall positive / neutral / negative split.
  3. Economics      — GDP trend direction per country.
  4. Risk Trends    — line chart of the five checkpoints per country.

The first four checkpoints of every series are synthetic perturbations of
the current score; only the last one is the current run.  The chart caption
says so.  If the chart cannot be drawn the page shows "Chart disabled" and
the other panels keep working.

Usage
-----
    pip install -e ".[dashboard]"
    diplo-risk run --export
    streamlit run dashboard/app.py
"""

from __future__ import annotations

import sys
from pathlib import Path

_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import streamlit as st

# ── Must be the first Streamlit call ─────────────────────────────────────────
st.set_page_config(
    page_title="Diplomatic Risk Dashboard",
    layout="wide",
    initial_sidebar_state="expanded",
)

import pandas as pd

from dashboard.data_loader import chart_rows, load_snapshot, snapshot_age_hours
from diplo_risk.reporting.formatters import NEWS_ITEMS_PER_COUNTRY, SYNTHETIC_NOTICE
from diplo_risk.scoring.economy import trend_direction
from diplo_risk.taxonomy.regions import DEFAULT_REGION, REGIONS, display_name

_REGIONS = list(REGIONS)
_OUTPUT_DIR = str(_ROOT / "data" / "outputs")
_FRESHNESS_HOURS = 6.0


# ── Sidebar ───────────────────────────────────────────────────────────────────

with st.sidebar:
    st.title("Diplomatic Risk")
    st.caption("Reads data/outputs/ only")
    st.divider()

    region = st.selectbox("Region", options=_REGIONS, index=_REGIONS.index(DEFAULT_REGION))

    if st.button("Clear cache", help="Force re-read of the snapshot files."):
        st.cache_data.clear()
        st.rerun()

    st.divider()
    st.caption("Refresh data:")
    st.code(f'diplo-risk run --region "{region}" --export')


snapshot = load_snapshot(region, _OUTPUT_DIR)
age = snapshot_age_hours(region, _OUTPUT_DIR)

if snapshot is None:
    st.info(
        f"No snapshot for **{region}** yet. "
        f'Run `diplo-risk run --region "{region}" --export` first.'
    )
    st.stop()

if age is not None and age > _FRESHNESS_HOURS:
    st.warning(f"Snapshot is {age:.1f}h old and may not reflect current events.")
else:
    st.caption(f"Generated at {snapshot.get('generated_at', '?')}")

countries = snapshot.get("countries") or []

col_news, col_side = st.columns([3, 2])

# ── News feed ─────────────────────────────────────────────────────────────────

with col_news:
    st.header("News Feed")
    for country in countries:
        st.subheader(display_name(country.get("country_key", "")))
        articles = country.get("articles") or []
        if not articles:
            st.write("No live data (demo mode).")
            continue
        for article in articles[:NEWS_ITEMS_PER_COUNTRY]:
            title = article.get("title") or "Untitled"
            url = article.get("url") or "#"
            st.markdown(f"- [{title}]({url})")

# ── Sentiment + economics ─────────────────────────────────────────────────────

with col_side:
    st.header("Sentiment")
    overall = snapshot.get("overall_sentiment") or {}
    c1, c2, c3 = st.columns(3)
    c1.metric("Positive", f"{overall.get('positive', 0)}%")
    c2.metric("Neutral", f"{overall.get('neutral', 0)}%")
    c3.metric("Negative", f"{overall.get('negative', 0)}%")

    st.header("Economics")
    st.write(
        "  |  ".join(
            f"{display_name(c.get('country_key', ''))}: {trend_direction(c.get('econ_trend', 0.0))}"
            for c in countries
        )
    )

    st.header("Current Risk")
    st.dataframe(
        pd.DataFrame(
            [
                {
                    "Country": display_name(c.get("country_key", "")),
                    "Risk (1-10)": (c.get("record") or {}).get("score"),
                    "Weather": c.get("weather_risk"),
                    "Fallbacks": ", ".join(c.get("fallbacks") or []) or "-",
                }
                for c in countries
            ]
        ),
        use_container_width=True,
        hide_index=True,
    )

# ── Risk chart ────────────────────────────────────────────────────────────────

st.header("Risk Trends")
st.caption(SYNTHETIC_NOTICE)
try:
    df_chart = pd.DataFrame(chart_rows(snapshot))
    if df_chart.empty:
        st.info("No series to chart.")
    else:
        pivot = df_chart.pivot(index="checkpoint", columns="country", values="score")
        st.line_chart(pivot, y_label="Risk (1-10)", x_label="Time")
except Exception as exc:
    st.warning(f"Chart disabled: {exc}")
