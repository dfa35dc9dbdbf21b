"""
World Bank Indicators API client — yearly GDP (current USD) per country.

API:   https://api.worldbank.org/v2/country/{iso3}/indicator/{indicator}
Docs:  https://datahelpdesk.worldbank.org/knowledgebase/articles/889392

No API key required.

The response is a two-element JSON array ``[meta, rows]``; each row carries
``date`` (year as a string) and ``value`` (number or null).  When a country
has no data at all the API returns ``[meta]`` or ``[meta, null]``, which
parses to an empty series.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from diplo_risk.config import AcquisitionConfig
from diplo_risk.errors import AcquisitionFailure
from diplo_risk.models.signals import EconomicObservation
from diplo_risk.taxonomy.regions import ISO3

logger = logging.getLogger(__name__)


class WorldBankClient:
    """Async client for one World Bank indicator over a fixed date range."""

    def __init__(self, http: httpx.AsyncClient, config: AcquisitionConfig) -> None:
        self.http = http
        self.config = config

    async def fetch_gdp_series(self, country_key: str) -> list[EconomicObservation]:
        """Fetch the configured indicator series for ``country_key``.

        Countries without an ISO3 mapping return an empty series.

        Raises:
            AcquisitionFailure: On transport error, non-2xx status or an
                unparseable payload.
        """
        iso3 = ISO3.get(country_key)
        if iso3 is None:
            logger.debug("WorldBankClient: no ISO3 code for %s", country_key)
            return []

        url = (
            f"{self.config.worldbank_base_url}/country/{iso3}"
            f"/indicator/{self.config.worldbank_indicator}"
        )
        params = {
            "format": "json",
            "date": self.config.worldbank_date_range,
            "per_page": self.config.worldbank_per_page,
        }
        try:
            resp = await self.http.get(url, params=params, timeout=self.config.timeout_seconds)
            resp.raise_for_status()
            data = resp.json()
        except httpx.HTTPStatusError as exc:
            raise AcquisitionFailure(
                f"World Bank fetch failed with HTTP {exc.response.status_code}",
                source="economy",
                country_key=country_key,
            ) from exc
        except (httpx.HTTPError, ValueError) as exc:
            raise AcquisitionFailure(
                f"World Bank fetch failed: {exc}", source="economy", country_key=country_key
            ) from exc

        return parse_indicator_rows(data)


def parse_indicator_rows(data: Any) -> list[EconomicObservation]:
    """Parse a ``[meta, rows]`` payload; rows with an unusable year are skipped."""
    if not isinstance(data, list) or len(data) < 2 or not isinstance(data[1], list):
        return []

    observations: list[EconomicObservation] = []
    for row in data[1]:
        if not isinstance(row, dict):
            continue
        try:
            year = int(row.get("date"))
        except (TypeError, ValueError):
            continue
        value = row.get("value")
        if not isinstance(value, (int, float)) or isinstance(value, bool):
            value = None
        observations.append(EconomicObservation(date=year, value=value))
    return observations
