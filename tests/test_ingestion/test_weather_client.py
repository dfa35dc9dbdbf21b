"""
Tests for diplo_risk/ingestion/weather_client.py.

What we test
------------
OpenWeatherClient.fetch_current():
  - No key or no capital → None without a request.
  - Capital city and key sent as ``q`` / ``appid``.
  - HTTP / transport errors → AcquisitionFailure(source="weather").
parse_weather_payload():
  - Normal payload → observation in Kelvin.
  - Missing ``main`` / ``weather`` → None.
  - Non-numeric values dropped individually.
"""

from __future__ import annotations

import asyncio

import httpx
import pytest

from diplo_risk.config import AcquisitionConfig
from diplo_risk.errors import AcquisitionFailure
from diplo_risk.ingestion.weather_client import OpenWeatherClient, parse_weather_payload

_PAYLOAD = {
    "weather": [{"id": 211, "main": "Thunderstorm", "description": "thunderstorm"}],
    "main": {"temp": 305.4, "humidity": 93},
    "name": "Accra",
}


def _fetch(handler, country="ghana", api_key="w-key"):
    async def go():
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as http:
            client = OpenWeatherClient(http, AcquisitionConfig(), api_key=api_key)
            return await client.fetch_current(country)

    return asyncio.run(go())


class TestFetchCurrent:
    def test_request_uses_capital(self):
        seen = {}

        def handler(request):
            seen.update(dict(request.url.params))
            return httpx.Response(200, json=_PAYLOAD)

        _fetch(handler, country="ethiopia")
        assert seen == {"q": "Addis Ababa", "appid": "w-key"}

    def test_parses_observation(self):
        obs = _fetch(lambda r: httpx.Response(200, json=_PAYLOAD))
        assert obs is not None
        assert obs.temperature_kelvin == pytest.approx(305.4)
        assert obs.humidity_percent == 93.0
        assert obs.condition_main == "Thunderstorm"

    def test_no_key_returns_none(self):
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(200, json=_PAYLOAD)

        assert _fetch(handler, api_key=None) is None
        assert calls == []

    def test_unknown_country_returns_none(self):
        assert _fetch(lambda r: httpx.Response(200, json=_PAYLOAD), country="atlantis") is None

    def test_http_error(self):
        with pytest.raises(AcquisitionFailure) as exc_info:
            _fetch(lambda r: httpx.Response(404, json={"cod": "404"}))
        assert exc_info.value.source == "weather"
        assert exc_info.value.country_key == "ghana"

    def test_transport_error(self):
        def handler(request):
            raise httpx.ConnectError("down", request=request)

        with pytest.raises(AcquisitionFailure):
            _fetch(handler)


class TestParseWeatherPayload:
    @pytest.mark.parametrize(
        "payload",
        [None, [], {"main": {"temp": 300}}, {"weather": []}, {"main": "x", "weather": []}],
    )
    def test_incomplete_payload_is_none(self, payload):
        assert parse_weather_payload(payload) is None

    def test_empty_weather_list_gives_blank_condition(self):
        obs = parse_weather_payload({"main": {"temp": 280.0, "humidity": 50}, "weather": []})
        assert obs is not None
        assert obs.condition_main == ""

    def test_non_numeric_values_dropped(self):
        obs = parse_weather_payload(
            {"main": {"temp": "hot", "humidity": 95}, "weather": [{"main": "Rain"}]}
        )
        assert obs.temperature_kelvin is None
        assert obs.humidity_percent == 95.0
