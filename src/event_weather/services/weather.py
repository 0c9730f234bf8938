"""Weather service facade.

Ties the provider, the temporal cache, the date resolver, the suitability
scorer and the alternative date ranker together behind the operations the
HTTP API and CLI use.

## Flow

1. Cached lookups: `get_current_weather` / `get_forecast` check the cache,
   call the provider on a miss and store the result
2. `get_weather_for_location_and_date` resolves a calendar day to a snapshot
3. `analyze_event_weather` scores that snapshot for the event's category
4. `get_alternative_dates` ranks the following days of the forecast

Dependencies are injected so tests can substitute a fake provider, cache
clock and "now".
"""

from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Callable

from event_weather.cache import CacheStats, TemporalCache, cache_key
from event_weather.config import Settings, get_settings
from event_weather.models.event import Event
from event_weather.models.suitability import (
    AlternativeDates,
    SuitabilityResult,
    WeatherAnalysis,
)
from event_weather.models.weather import ForecastWindow, WeatherSnapshot
from event_weather.providers.base import WeatherProvider
from event_weather.providers.openweathermap import OpenWeatherMapProvider
from event_weather.recommendations.alternatives import AlternativeDateRanker
from event_weather.recommendations.suitability import SuitabilityScorer
from event_weather.services.resolver import DateResolver, utc_now

logger = logging.getLogger(__name__)


class WeatherService:
    """Cached weather lookups and event suitability analysis."""

    def __init__(
        self,
        provider: WeatherProvider,
        cache: TemporalCache | None = None,
        scorer: SuitabilityScorer | None = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        """Initialize the service.

        Args:
            provider: Upstream weather provider
            cache: Cache for snapshots and forecast windows
            scorer: Suitability scorer
            clock: Source of "now" for date resolution and timestamps
        """
        self.provider = provider
        self.cache = cache if cache is not None else TemporalCache()
        self.scorer = scorer if scorer is not None else SuitabilityScorer()
        self.clock = clock
        self.resolver = DateResolver(self, horizon_days=provider.get_max_forecast_days())
        self.ranker = AlternativeDateRanker(self, scorer=self.scorer)

    async def aclose(self) -> None:
        """Release the provider's HTTP resources."""
        await self.provider.aclose()

    async def get_current_weather(self, location: str) -> WeatherSnapshot:
        """Get current weather, served from cache when fresh."""
        key = cache_key("current", location)
        cached = self.cache.get(key)
        if cached is not None:
            return cached

        snapshot = await self.provider.fetch_current(location)
        self.cache.put(key, snapshot)
        return snapshot

    async def get_forecast(self, location: str) -> ForecastWindow:
        """Get the forecast window, served from cache when fresh."""
        key = cache_key("forecast", location)
        cached = self.cache.get(key)
        if cached is not None:
            return cached

        window = await self.provider.fetch_forecast(location)
        self.cache.put(key, window)
        return window

    async def get_weather_for_location_and_date(
        self, location: str, target_date: date
    ) -> WeatherSnapshot:
        """Get the weather that applies to a location on a calendar day.

        Raises:
            PastDateRejected, DateOutOfRange, ForecastUnavailable: date errors
            UpstreamUnavailable, LocationNotFound: provider failures
        """
        return await self.resolver.resolve(location, target_date, self.clock())

    async def analyze_event_weather(self, event: Event) -> WeatherAnalysis:
        """Fetch the weather for an event's day and score it."""
        try:
            weather = await self.get_weather_for_location_and_date(
                event.location, event.date
            )
        except Exception as e:
            logger.error(f"Error analyzing weather for event {event.id}: {e}")
            raise

        suitability = self.scorer.score(weather, event.event_type)
        return WeatherAnalysis(
            event_id=event.id,
            weather=weather,
            suitability=suitability,
            analyzed_at=self.clock(),
        )

    async def get_event_suitability(self, event: Event) -> SuitabilityResult:
        """Get only the suitability part of an event analysis."""
        analysis = await self.analyze_event_weather(event)
        return analysis.suitability

    async def get_alternative_dates(
        self, event: Event, days_range: int = 7
    ) -> AlternativeDates:
        """Rank the days after an event by forecast suitability."""
        try:
            return await self.ranker.rank(event, days_range)
        except Exception as e:
            logger.error(f"Error getting alternative dates for event {event.id}: {e}")
            raise

    def get_cache_stats(self) -> CacheStats:
        """Get cache counters and live keys."""
        return self.cache.stats()

    def clear_cache(self) -> None:
        """Flush the cache and reset its counters."""
        self.cache.clear()


def create_weather_service(settings: Settings | None = None) -> WeatherService:
    """Build a service backed by OpenWeatherMap from application settings."""
    settings = settings or get_settings()
    provider = OpenWeatherMapProvider(
        api_key=settings.openweather_api_key,
        base_url=settings.openweather_base_url,
        timeout=settings.provider_timeout_seconds,
        max_attempts=settings.provider_max_attempts,
    )
    if provider.requires_api_key and not provider.api_key:
        logger.warning("OPENWEATHER_API_KEY is not set; weather lookups will fail")

    return WeatherService(provider=provider, cache=TemporalCache())
