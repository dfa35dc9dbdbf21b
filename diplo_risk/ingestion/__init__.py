"""
Ingestion layer — async HTTP clients for the three external signal sources.

Submodules:
  news_client       — NewsAPI headlines per country (key optional, demo fixtures)
  worldbank_client  — World Bank GDP series per country (no key)
  weather_client    — OpenWeather current conditions at the capital (key optional)

Every client raises ``AcquisitionFailure`` on transport, status or parse
errors.  The orchestrator catches these and substitutes a fallback; clients
never decide on fallbacks themselves.
"""
