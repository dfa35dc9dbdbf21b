"""Diplomatic risk dashboard: news, economic and weather signals to a 1-10 risk score."""

__version__ = "0.1.0"
