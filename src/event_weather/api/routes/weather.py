"""Weather routes.

Cache routes are declared before `/{location}/{target_date}` so that
`/cache/status` is not read as a location and a date.
"""

from __future__ import annotations

import datetime as dt

from fastapi import APIRouter, Depends

from event_weather.api.dependencies import get_weather_service
from event_weather.cache import CacheStats
from event_weather.models.weather import ForecastWindow, WeatherSnapshot
from event_weather.services.weather import WeatherService

router = APIRouter()


@router.get("/cache/status", response_model=CacheStats)
async def get_cache_status(
    service: WeatherService = Depends(get_weather_service),
) -> CacheStats:
    """Get cache hit/miss counters and live keys."""
    return service.get_cache_stats()


@router.delete("/cache/clear")
async def clear_cache(
    service: WeatherService = Depends(get_weather_service),
) -> dict:
    """Flush the weather cache and reset its counters."""
    service.clear_cache()
    return {"status": "cleared"}


@router.get("/{location}/current", response_model=WeatherSnapshot)
async def get_current_weather(
    location: str,
    service: WeatherService = Depends(get_weather_service),
) -> WeatherSnapshot:
    """Get current weather for a location."""
    return await service.get_current_weather(location)


@router.get("/{location}/forecast", response_model=ForecastWindow)
async def get_forecast(
    location: str,
    service: WeatherService = Depends(get_weather_service),
) -> ForecastWindow:
    """Get the 5 day / 3 hour forecast for a location."""
    return await service.get_forecast(location)


@router.get("/{location}/{target_date}", response_model=WeatherSnapshot)
async def get_weather_for_date(
    location: str,
    target_date: dt.date,
    service: WeatherService = Depends(get_weather_service),
) -> WeatherSnapshot:
    """Get the weather for a location on a calendar day (YYYY-MM-DD)."""
    return await service.get_weather_for_location_and_date(location, target_date)
