"""Upstream weather sources and their failure types.

A provider turns one upstream API into `WeatherSnapshot` and `ForecastWindow`
values (see `event_weather.models.weather`). Whatever the upstream reports in,
the models carry:

- temperatures in whole degrees Celsius
- wind speed in whole km/h
- pressure in hPa
- precipitation in mm and visibility in km
- UTC-aware timestamps

## Errors
Providers never return partial data on failure. Every failure is raised as a
`ProviderError` subclass:
- `LocationNotFound`: the upstream has no match for the location name
- `UpstreamUnavailable`: network failure or unexpected HTTP status
  - `RateLimitError`: HTTP 429
  - `AuthenticationError`: HTTP 401 (missing or invalid API key)

## Caching and Retries
Providers issue exactly one logical upstream request per call and never cache;
caching is layered above them by `event_weather.cache`. Transport errors can be
retried with `max_attempts > 1`, but the default is a single attempt.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any

import httpx
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from event_weather.errors import WeatherServiceError
from event_weather.models.weather import ForecastWindow, WeatherSnapshot

logger = logging.getLogger(__name__)


class ProviderError(WeatherServiceError):
    """Any failure talking to an upstream weather source."""

    def __init__(
        self,
        message: str,
        provider: str,
        status_code: int | None = None,
        response_body: str | None = None,
    ):
        super().__init__(message)
        self.provider = provider
        self.status_code = status_code
        self.response_body = response_body


class UpstreamUnavailable(ProviderError):
    """Raised when the provider cannot be reached or answers with an error."""


class RateLimitError(UpstreamUnavailable):
    """The upstream refused the request with HTTP 429."""

    def __init__(
        self,
        provider: str,
        retry_after: int | None = None,
        status_code: int | None = 429,
    ):
        super().__init__(
            f"Rate limit exceeded for {provider}",
            provider=provider,
            status_code=status_code,
        )
        self.retry_after = retry_after


class AuthenticationError(UpstreamUnavailable):
    """The API key was missing or rejected."""


class LocationNotFound(ProviderError):
    """Raised when the provider has no match for a location name."""

    def __init__(self, location: str, provider: str, status_code: int | None = 404):
        super().__init__(
            f"Location not found: {location}",
            provider=provider,
            status_code=status_code,
        )
        self.location = location


class WeatherProvider(ABC):
    """Common HTTP plumbing for weather sources.

    Subclasses set `name` and `base_url`, and `requires_api_key` when requests
    cannot succeed without a key, then implement the two fetch methods.

    Example:
        ```python
        async with OpenWeatherMapProvider(api_key="...") as provider:
            snapshot = await provider.fetch_current("Lisbon")
        ```
    """

    name: str
    base_url: str
    requires_api_key: bool = False

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        user_agent: str | None = None,
        timeout: float = 10.0,
        max_attempts: int = 1,
        backoff_seconds: float = 1.0,
        client: httpx.AsyncClient | None = None,
    ):
        """Configure credentials and HTTP transport.

        Args:
            api_key: Credential sent with each request, where the upstream needs one
            base_url: Replaces the class-level base URL
            user_agent: Sent as the User-Agent header
            timeout: Per-request timeout in seconds
            max_attempts: Attempts per request for transport errors (1 = no retry)
            backoff_seconds: Exponential backoff multiplier between attempts
            client: Pre-built HTTP client (the provider will not close it)
        """
        self.api_key = api_key
        if base_url:
            self.base_url = base_url.rstrip("/")
        self.user_agent = user_agent or "event-weather-planner/0.1.0"
        self.timeout = timeout
        self.max_attempts = max_attempts
        self.backoff_seconds = backoff_seconds
        self._client = client
        self._owns_client = client is None

    async def __aenter__(self) -> WeatherProvider:
        self._get_client()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the HTTP client if this provider created it."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    def _get_client(self) -> httpx.AsyncClient:
        """Return the HTTP client, creating one on first use."""
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout)
            self._owns_client = True
        return self._client

    def _get_default_headers(self) -> dict[str, str]:
        """Headers sent with every upstream request."""
        return {
            "User-Agent": self.user_agent,
            "Accept": "application/json",
        }

    async def _fetch(
        self,
        url: str,
        location: str,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        """GET `url`, retrying transport failures up to `max_attempts` times.

        Args:
            url: Absolute request URL
            location: Location name, used in LocationNotFound and log lines
            params: Query string parameters
            headers: Merged over the default headers

        Returns:
            A response with a status below 400

        Raises:
            UpstreamUnavailable: If the request fails or returns an error status
            LocationNotFound: If the provider reports no match for the location
        """
        client = self._get_client()
        request_headers = self._get_default_headers()
        if headers:
            request_headers.update(headers)

        try:
            async for attempt in AsyncRetrying(
                stop=stop_after_attempt(self.max_attempts),
                wait=wait_exponential(multiplier=self.backoff_seconds, max=10),
                retry=retry_if_exception_type(
                    (httpx.TimeoutException, httpx.NetworkError)
                ),
                reraise=True,
            ):
                with attempt:
                    response = await client.get(
                        url, params=params, headers=request_headers
                    )
        except httpx.HTTPError as e:
            logger.warning(f"{self.name} request for {location} failed: {e!r}")
            raise UpstreamUnavailable(
                f"Unable to reach {self.name}: {e}",
                provider=self.name,
            ) from e

        self._raise_for_status(response, location)
        return response

    def _raise_for_status(self, response: httpx.Response, location: str) -> None:
        """Translate error responses into typed provider errors."""
        if response.status_code < 400:
            return

        if response.status_code == 404:
            raise LocationNotFound(location, provider=self.name)

        if response.status_code == 401:
            raise AuthenticationError(
                "Invalid or missing API key",
                provider=self.name,
                status_code=401,
            )

        if response.status_code == 429:
            retry_after = response.headers.get("Retry-After")
            raise RateLimitError(
                self.name,
                retry_after=int(retry_after) if retry_after and retry_after.isdigit() else None,
            )

        raise UpstreamUnavailable(
            f"API request failed: {response.status_code}",
            provider=self.name,
            status_code=response.status_code,
            response_body=response.text,
        )

    def _parse_json(self, response: httpx.Response) -> dict[str, Any]:
        """Decode a JSON object body or raise UpstreamUnavailable."""
        try:
            data = response.json()
        except ValueError as e:
            raise UpstreamUnavailable(
                f"Failed to parse response: {e}",
                provider=self.name,
                status_code=response.status_code,
                response_body=response.text,
            ) from e
        if not isinstance(data, dict):
            raise UpstreamUnavailable(
                "Unexpected response shape",
                provider=self.name,
                status_code=response.status_code,
                response_body=response.text,
            )
        return data

    @abstractmethod
    async def fetch_current(self, location: str) -> WeatherSnapshot:
        """Get current weather for a location name.

        Raises:
            UpstreamUnavailable: If weather cannot be retrieved
            LocationNotFound: If the location is unknown to the provider
        """

    @abstractmethod
    async def fetch_forecast(self, location: str) -> ForecastWindow:
        """Get the multi-day forecast for a location name.

        Raises:
            UpstreamUnavailable: If the forecast cannot be retrieved
            LocationNotFound: If the location is unknown to the provider
        """

    def get_max_forecast_days(self) -> int:
        """Number of days ahead, counting from today, the forecast covers."""
        return 5
