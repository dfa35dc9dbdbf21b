"""
OpenWeather client — current conditions at each country's capital.

API:   https://api.openweathermap.org/data/2.5/weather?q={city}&appid={key}
Docs:  https://openweathermap.org/current

Credential setup:
  diplo-risk set-key openweather <key>  (persisted settings store)
  OPENWEATHER_API_KEY=<key>             (.env fallback)

Weather is optional.  No key or no capital mapping means no observation,
which the weather risk mapper treats as zero risk.  Temperatures are
requested in the API default unit (Kelvin).
"""

from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

from diplo_risk.config import AcquisitionConfig
from diplo_risk.errors import AcquisitionFailure
from diplo_risk.models.signals import WeatherObservation
from diplo_risk.taxonomy.regions import CAPITALS

logger = logging.getLogger(__name__)


class OpenWeatherClient:
    """Async client for the OpenWeather current-weather endpoint."""

    def __init__(
        self,
        http: httpx.AsyncClient,
        config: AcquisitionConfig,
        api_key: Optional[str] = None,
    ) -> None:
        self.http = http
        self.config = config
        self.api_key = api_key

    async def fetch_current(self, country_key: str) -> Optional[WeatherObservation]:
        """Fetch the current observation for the capital of ``country_key``.

        Returns:
            ``WeatherObservation``, or ``None`` when no key is configured or
            the country has no known capital.

        Raises:
            AcquisitionFailure: On transport error or non-2xx status.
        """
        if not self.api_key:
            return None
        city = CAPITALS.get(country_key)
        if city is None:
            logger.debug("OpenWeatherClient: no capital for %s", country_key)
            return None

        try:
            resp = await self.http.get(
                self.config.weather_base_url,
                params={"q": city, "appid": self.api_key},
                timeout=self.config.timeout_seconds,
            )
            resp.raise_for_status()
            data = resp.json()
        except httpx.HTTPStatusError as exc:
            raise AcquisitionFailure(
                f"Weather fetch failed with HTTP {exc.response.status_code}",
                source="weather",
                country_key=country_key,
            ) from exc
        except (httpx.HTTPError, ValueError) as exc:
            raise AcquisitionFailure(
                f"Weather fetch failed: {exc}", source="weather", country_key=country_key
            ) from exc

        return parse_weather_payload(data)


def parse_weather_payload(data: Any) -> Optional[WeatherObservation]:
    """Map an OpenWeather ``/weather`` payload to an observation.

    A payload without ``main`` or ``weather`` blocks yields ``None``.
    Non-numeric temperature or humidity values are dropped individually.
    """
    if not isinstance(data, dict):
        return None
    main = data.get("main")
    weather = data.get("weather")
    if not isinstance(main, dict) or not isinstance(weather, list):
        return None

    condition = ""
    if weather and isinstance(weather[0], dict):
        condition = str(weather[0].get("main") or "")

    return WeatherObservation(
        temperature_kelvin=_number_or_none(main.get("temp")),
        humidity_percent=_number_or_none(main.get("humidity")),
        condition_main=condition,
    )


def _number_or_none(value: Any) -> Optional[float]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return float(value)
