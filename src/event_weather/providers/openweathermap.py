"""OpenWeatherMap provider.

## API Documentation Summary
Source: https://openweathermap.org/current
Source: https://openweathermap.org/forecast5

## Endpoints
- Current weather: {base_url}/weather?q={location}&appid={key}&units=metric
- 5 day / 3 hour forecast: {base_url}/forecast?q={location}&appid={key}&units=metric
- Base URL: https://api.openweathermap.org/data/2.5

## Authentication
- API key passed as the `appid` query parameter
- Missing or invalid key answers HTTP 401

## Errors
- Unknown location answers HTTP 404 with `{"cod": "404", "message": "city not found"}`
- Rate limiting answers HTTP 429

## Response Format (current)
```json
{
  "weather": [{"main": "Clear", "description": "clear sky"}],
  "main": {"temp": 22.4, "feels_like": 21.9, "pressure": 1015, "humidity": 40},
  "visibility": 10000,
  "wind": {"speed": 2.78, "deg": 200},
  "rain": {"1h": 0.5},
  "dt": 1718445600,
  "sys": {"country": "PT"},
  "name": "Lisbon"
}
```

## Response Format (forecast)
```json
{
  "list": [{"dt": 1718452800, "main": {...}, "weather": [...], "wind": {...},
            "rain": {"3h": 1.2}, "visibility": 10000}],
  "city": {"name": "Lisbon", "country": "PT"}
}
```

## Variable Translation (metric units -> Canonical)
| OpenWeatherMap Field | Canonical Field | Notes |
|----------------------|-----------------|-------|
| name / city.name | location | Direct mapping |
| sys.country / city.country | country | Direct mapping |
| main.temp | temperature | Rounded to whole °C |
| main.feels_like | feels_like | Rounded to whole °C |
| main.humidity | humidity | % |
| main.pressure | pressure | hPa |
| wind.speed | wind_speed | m/s x 3.6, rounded |
| wind.deg | wind_direction | degrees |
| weather[0].main | condition | e.g. "Clear", "Rain" |
| weather[0].description | description | e.g. "light rain" |
| rain.1h (current), rain.3h (forecast) | precipitation | mm, 0 when absent |
| visibility | visibility | m / 1000 -> km |
| dt | timestamp | Unix seconds -> UTC datetime |
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

import httpx

from event_weather.models.weather import ForecastWindow, WeatherSnapshot, round_half_up
from event_weather.providers.base import (
    AuthenticationError,
    LocationNotFound,
    UpstreamUnavailable,
    WeatherProvider,
)

logger = logging.getLogger(__name__)

MS_TO_KMH = 3.6


def _unix_to_datetime(timestamp: int | float | None) -> datetime | None:
    """Convert Unix timestamp to datetime."""
    if timestamp is None:
        return None
    return datetime.fromtimestamp(timestamp, tz=timezone.utc)


def _round_or_none(value: float | None) -> int | None:
    return round_half_up(value) if value is not None else None


class OpenWeatherMapProvider(WeatherProvider):
    """OpenWeatherMap API provider (free 2.5 endpoints).

    Example:
        ```python
        async with OpenWeatherMapProvider(api_key="your-api-key") as provider:
            window = await provider.fetch_forecast("Lisbon")
        ```
    """

    name = "openweathermap"
    base_url = "https://api.openweathermap.org/data/2.5"
    requires_api_key = True

    def __init__(
        self,
        api_key: str | None,
        base_url: str | None = None,
        user_agent: str | None = None,
        timeout: float = 10.0,
        max_attempts: int = 1,
        backoff_seconds: float = 1.0,
        client: httpx.AsyncClient | None = None,
    ):
        super().__init__(
            api_key=api_key,
            base_url=base_url,
            user_agent=user_agent,
            timeout=timeout,
            max_attempts=max_attempts,
            backoff_seconds=backoff_seconds,
            client=client,
        )

    def _params(self, location: str) -> dict[str, Any]:
        if not self.api_key:
            raise AuthenticationError(
                "API key required for OpenWeatherMap",
                provider=self.name,
            )
        return {"q": location, "appid": self.api_key, "units": "metric"}

    async def fetch_current(self, location: str) -> WeatherSnapshot:
        """Get current weather from OpenWeatherMap.

        Args:
            location: Free-text location name, passed through verbatim

        Returns:
            WeatherSnapshot in canonical units

        Raises:
            LocationNotFound: If the location is unknown
            UpstreamUnavailable: If the request fails
        """
        response = await self._fetch(
            f"{self.base_url}/weather", location, params=self._params(location)
        )
        data = self._parse_json(response)
        self._check_cod(data, location)

        logger.info(f"Fetched current weather for: {location}")
        return self._translate(self._translate_current, data)

    async def fetch_forecast(self, location: str) -> ForecastWindow:
        """Get the 5 day / 3 hour forecast from OpenWeatherMap.

        Args:
            location: Free-text location name, passed through verbatim

        Returns:
            ForecastWindow with slots in ascending time order

        Raises:
            LocationNotFound: If the location is unknown
            UpstreamUnavailable: If the request fails
        """
        response = await self._fetch(
            f"{self.base_url}/forecast", location, params=self._params(location)
        )
        data = self._parse_json(response)
        self._check_cod(data, location)

        logger.info(f"Fetched forecast for: {location}")
        return self._translate(self._translate_forecast, data)

    def _check_cod(self, data: dict[str, Any], location: str) -> None:
        """OpenWeatherMap repeats the status code in the body as `cod`."""
        if str(data.get("cod", "200")) == "404":
            raise LocationNotFound(location, provider=self.name)

    def _translate(self, translate: Any, data: dict[str, Any]) -> Any:
        try:
            return translate(data)
        except (KeyError, IndexError, TypeError, ValueError) as e:
            raise UpstreamUnavailable(
                f"Malformed response from {self.name}: {e!r}",
                provider=self.name,
            ) from e

    def _translate_current(self, data: dict[str, Any]) -> WeatherSnapshot:
        """Translate a /weather response to a WeatherSnapshot.

        See module docstring for detailed field mapping.
        """
        return self._translate_item(
            data,
            location=data["name"],
            country=data.get("sys", {}).get("country"),
            rain_window="1h",
        )

    def _translate_forecast(self, data: dict[str, Any]) -> ForecastWindow:
        """Translate a /forecast response to a ForecastWindow.

        See module docstring for detailed field mapping.
        """
        city = data["city"]
        slots = [
            self._translate_item(
                item,
                location=city["name"],
                country=city.get("country"),
                rain_window="3h",
            )
            for item in data.get("list", [])
        ]
        slots.sort(key=lambda slot: slot.timestamp)

        return ForecastWindow(
            location=city["name"],
            country=city.get("country"),
            fetched_at=datetime.now(timezone.utc),
            slots=tuple(slots),
        )

    def _translate_item(
        self,
        item: dict[str, Any],
        location: str,
        country: str | None,
        rain_window: str,
    ) -> WeatherSnapshot:
        main = item["main"]
        wind = item.get("wind") or {}
        weather = item["weather"][0]
        rain = item.get("rain") or {}

        visibility_m = item.get("visibility")
        wind_speed_ms = wind.get("speed") or 0

        return WeatherSnapshot(
            location=location,
            country=country,
            temperature=round_half_up(main["temp"]),
            feels_like=_round_or_none(main.get("feels_like")),
            humidity=main.get("humidity"),
            pressure=main.get("pressure"),
            wind_speed=round_half_up(wind_speed_ms * MS_TO_KMH),
            wind_direction=wind.get("deg"),
            condition=weather["main"],
            description=weather.get("description", ""),
            precipitation=rain.get(rain_window) or 0,
            visibility=visibility_m / 1000 if visibility_m is not None else None,
            timestamp=_unix_to_datetime(item["dt"]),
        )
