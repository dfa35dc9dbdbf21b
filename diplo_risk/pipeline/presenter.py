"""
Hands a finished ``DashboardSnapshot`` to a presentation sink.

Order: news feed, overall sentiment, economics, chart.  A chart failure
(``PresentationUnavailable``) is downgraded to ``sink.chart_unavailable``
and recorded on the returned snapshot as ``chart_error``; everything
rendered before it stays rendered.
"""

from __future__ import annotations

import logging

from diplo_risk.errors import PresentationUnavailable
from diplo_risk.models.risk import DashboardSnapshot
from diplo_risk.reporting.sinks import PresentationSink

logger = logging.getLogger(__name__)


def present(snapshot: DashboardSnapshot, sink: PresentationSink) -> DashboardSnapshot:
    sink.render_news({c.country_key: c.articles for c in snapshot.countries})
    sink.render_sentiment(snapshot.overall_sentiment)
    sink.render_economics(snapshot.econ_trends)
    try:
        sink.render_chart(snapshot.labels, snapshot.series, snapshot.countries)
    except PresentationUnavailable as exc:
        logger.warning("Chart disabled: %s", exc)
        sink.chart_unavailable(str(exc))
        return snapshot.model_copy(update={"chart_error": str(exc)})
    return snapshot
