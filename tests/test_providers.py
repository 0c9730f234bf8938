"""Tests for the OpenWeatherMap provider.

Upstream HTTP is served by httpx.MockTransport; nothing leaves the process.
"""

import json
from datetime import datetime, timezone
from typing import Callable

import httpx
import pytest

from event_weather.providers.base import (
    AuthenticationError,
    LocationNotFound,
    ProviderError,
    RateLimitError,
    UpstreamUnavailable,
)
from event_weather.providers.openweathermap import OpenWeatherMapProvider


def make_provider(
    handler: Callable[[httpx.Request], httpx.Response],
    api_key: str | None = "test-key",
    **kwargs,
) -> OpenWeatherMapProvider:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return OpenWeatherMapProvider(api_key=api_key, client=client, **kwargs)


def respond_with(status_code: int = 200, payload=None, **kwargs):
    requests: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(status_code, json=payload, **kwargs)

    handler.requests = requests
    return handler


class TestCurrentWeather:
    """Tests for fetch_current."""

    @pytest.mark.asyncio
    async def test_translates_to_canonical_units(self, owm_current_payload: dict):
        """Test field mapping and unit conversion."""
        provider = make_provider(respond_with(payload=owm_current_payload))

        snapshot = await provider.fetch_current("London")

        assert snapshot.location == "London"
        assert snapshot.country == "GB"
        assert snapshot.temperature == 19  # 18.5 rounds half up
        assert snapshot.feels_like == 18
        assert snapshot.humidity == 72
        assert snapshot.pressure == 1012
        assert snapshot.wind_speed == 16  # 4.5 m/s = 16.2 km/h
        assert snapshot.wind_direction == 230
        assert snapshot.condition == "Rain"
        assert snapshot.description == "light rain"
        assert snapshot.precipitation == 0.6
        assert snapshot.visibility == 9.0
        assert snapshot.timestamp == datetime(2024, 6, 15, 9, 0, tzinfo=timezone.utc)

    @pytest.mark.asyncio
    async def test_request_parameters(self, owm_current_payload: dict):
        """Test the location is passed through verbatim with metric units."""
        handler = respond_with(payload=owm_current_payload)
        provider = make_provider(handler)

        await provider.fetch_current("São Paulo, BR")

        request = handler.requests[0]
        assert request.url.path == "/data/2.5/weather"
        assert request.url.params["q"] == "São Paulo, BR"
        assert request.url.params["appid"] == "test-key"
        assert request.url.params["units"] == "metric"
        assert request.headers["Accept"] == "application/json"

    @pytest.mark.asyncio
    async def test_missing_rain_is_zero(self, owm_current_payload: dict):
        """Test absent precipitation defaults to 0 mm."""
        del owm_current_payload["rain"]
        provider = make_provider(respond_with(payload=owm_current_payload))

        snapshot = await provider.fetch_current("London")

        assert snapshot.precipitation == 0

    @pytest.mark.asyncio
    async def test_custom_base_url(self, owm_current_payload: dict):
        """Test the base URL can be overridden."""
        handler = respond_with(payload=owm_current_payload)
        provider = make_provider(handler, base_url="http://owm.test/api/")

        await provider.fetch_current("London")

        assert str(handler.requests[0].url).startswith("http://owm.test/api/weather?")


class TestForecast:
    """Tests for fetch_forecast."""

    @pytest.mark.asyncio
    async def test_slots_sorted_and_translated(self, owm_forecast_payload: dict):
        """Test forecast slots come back in ascending time order."""
        handler = respond_with(payload=owm_forecast_payload)
        provider = make_provider(handler)

        window = await provider.fetch_forecast("London")

        assert handler.requests[0].url.path == "/data/2.5/forecast"
        assert window.location == "London"
        assert window.country == "GB"
        assert [s.timestamp.hour for s in window.slots] == [9, 12, 12]

        first, second, third = window.slots
        assert first.temperature == 16
        assert first.precipitation == 1.25
        assert first.condition == "Clouds"
        assert second.temperature == 21
        assert second.precipitation == 0
        assert second.wind_speed == 11  # 3.0 m/s = 10.8 km/h
        assert third.precipitation == 0  # empty rain object
        assert third.wind_speed == 22
        assert third.visibility is None

    @pytest.mark.asyncio
    async def test_slot_for_day(self, owm_forecast_payload: dict):
        """Test the earliest slot of a day is picked after sorting."""
        provider = make_provider(respond_with(payload=owm_forecast_payload))

        window = await provider.fetch_forecast("London")
        slot = window.slot_for(datetime(2024, 6, 16).date())

        assert slot.timestamp.hour == 9


class TestErrors:
    """Tests for upstream error translation."""

    @pytest.mark.asyncio
    async def test_not_found_status(self):
        """Test HTTP 404 becomes LocationNotFound."""
        provider = make_provider(
            respond_with(404, {"cod": "404", "message": "city not found"})
        )

        with pytest.raises(LocationNotFound) as exc_info:
            await provider.fetch_current("Atlantis")

        assert exc_info.value.location == "Atlantis"
        assert exc_info.value.status_code == 404
        assert not isinstance(exc_info.value, UpstreamUnavailable)

    @pytest.mark.asyncio
    async def test_not_found_in_body(self):
        """Test a 200 response carrying cod 404 is still LocationNotFound."""
        provider = make_provider(respond_with(200, {"cod": "404", "message": "city not found"}))

        with pytest.raises(LocationNotFound):
            await provider.fetch_forecast("Atlantis")

    @pytest.mark.asyncio
    async def test_unauthorized(self):
        """Test HTTP 401 becomes AuthenticationError."""
        provider = make_provider(respond_with(401, {"cod": 401, "message": "Invalid API key"}))

        with pytest.raises(AuthenticationError):
            await provider.fetch_current("London")

    @pytest.mark.asyncio
    async def test_missing_api_key(self):
        """Test no request is made without an API key."""
        handler = respond_with(payload={})
        provider = make_provider(handler, api_key=None)

        with pytest.raises(AuthenticationError):
            await provider.fetch_current("London")

        assert handler.requests == []

    @pytest.mark.asyncio
    async def test_rate_limited(self):
        """Test HTTP 429 becomes RateLimitError with Retry-After."""
        provider = make_provider(
            respond_with(429, {"cod": 429}, headers={"Retry-After": "30"})
        )

        with pytest.raises(RateLimitError) as exc_info:
            await provider.fetch_current("London")

        assert exc_info.value.retry_after == 30
        assert isinstance(exc_info.value, UpstreamUnavailable)

    @pytest.mark.asyncio
    async def test_server_error(self):
        """Test 5xx becomes UpstreamUnavailable with the status kept."""
        provider = make_provider(respond_with(502, {"message": "bad gateway"}))

        with pytest.raises(UpstreamUnavailable) as exc_info:
            await provider.fetch_forecast("London")

        assert exc_info.value.status_code == 502
        assert exc_info.value.provider == "openweathermap"

    @pytest.mark.asyncio
    async def test_invalid_json(self):
        """Test a non-JSON body becomes UpstreamUnavailable."""

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, content=b"<html>oops</html>")

        provider = make_provider(handler)

        with pytest.raises(UpstreamUnavailable, match="parse"):
            await provider.fetch_current("London")

    @pytest.mark.asyncio
    async def test_malformed_payload(self, owm_current_payload: dict):
        """Test a payload missing required fields becomes UpstreamUnavailable."""
        del owm_current_payload["main"]
        provider = make_provider(respond_with(payload=owm_current_payload))

        with pytest.raises(UpstreamUnavailable, match="Malformed"):
            await provider.fetch_current("London")

    @pytest.mark.asyncio
    async def test_network_error_not_retried_by_default(self):
        """Test a transport failure is raised after a single attempt."""
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            raise httpx.ConnectError("connection refused", request=request)

        provider = make_provider(handler)

        with pytest.raises(UpstreamUnavailable) as exc_info:
            await provider.fetch_current("London")

        assert len(calls) == 1
        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)

    @pytest.mark.asyncio
    async def test_network_error_retried_when_enabled(self, owm_current_payload: dict):
        """Test transport failures are retried up to max_attempts."""
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            if len(calls) < 3:
                raise httpx.ConnectError("connection refused", request=request)
            return httpx.Response(200, content=json.dumps(owm_current_payload))

        provider = make_provider(handler, max_attempts=3, backoff_seconds=0)

        snapshot = await provider.fetch_current("London")

        assert len(calls) == 3
        assert snapshot.location == "London"

    @pytest.mark.asyncio
    async def test_error_statuses_are_not_retried(self):
        """Test HTTP error responses are never retried."""
        handler = respond_with(503, {"message": "unavailable"})
        provider = make_provider(handler, max_attempts=3, backoff_seconds=0)

        with pytest.raises(UpstreamUnavailable):
            await provider.fetch_current("London")

        assert len(handler.requests) == 1

    def test_error_hierarchy(self):
        """Test every provider error shares the ProviderError base."""
        for error_type in (
            UpstreamUnavailable,
            RateLimitError,
            AuthenticationError,
            LocationNotFound,
        ):
            assert issubclass(error_type, ProviderError)


class TestLifecycle:
    """Tests for client ownership."""

    @pytest.mark.asyncio
    async def test_injected_client_left_open(self):
        """Test aclose does not close a client the provider did not create."""
        client = httpx.AsyncClient(transport=httpx.MockTransport(respond_with()))
        provider = OpenWeatherMapProvider(api_key="k", client=client)

        await provider.aclose()

        assert client.is_closed is False
        await client.aclose()

    @pytest.mark.asyncio
    async def test_context_manager_closes_own_client(self):
        """Test a provider closes the client it created."""
        async with OpenWeatherMapProvider(api_key="k") as provider:
            client = provider._get_client()
            assert client.is_closed is False

        assert client.is_closed is True
