"""
diplo_risk.reporting — presentation of a finished pipeline run.

Modules:
  formatters — terminal text for the news feed, sentiment, economics and risk table.
  sinks      — ``PresentationSink`` protocol and the ``ConsoleSink`` implementation.
  export     — JSON / CSV snapshot export read by the Streamlit dashboard.
"""
