"""Resolution of a (location, calendar day) request to a single snapshot.

| Days from today | Result |
|-----------------|--------|
| < 0 | `PastDateRejected` |
| 0 | current weather |
| 1 to 5 | first forecast slot on that day, or `ForecastUnavailable` |
| > 5 | `DateOutOfRange` |

Day differences are taken between UTC calendar days, so 23:59 today and 00:01
today are both "today". The caller supplies `now`; nothing here reads the
system clock.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, timezone
from typing import Protocol

from event_weather.errors import DateOutOfRange, ForecastUnavailable, PastDateRejected
from event_weather.models.weather import ForecastWindow, WeatherSnapshot

logger = logging.getLogger(__name__)

# Fixed by the upstream 5 day / 3 hour forecast product.
FORECAST_HORIZON_DAYS = 5


class WeatherSource(Protocol):
    """Anything that can supply current weather and forecasts by location."""

    async def get_current_weather(self, location: str) -> WeatherSnapshot: ...

    async def get_forecast(self, location: str) -> ForecastWindow: ...


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def utc_day(moment: datetime) -> date:
    """UTC calendar day of a datetime (naive values are taken as UTC)."""
    if moment.tzinfo is None:
        return moment.date()
    return moment.astimezone(timezone.utc).date()


def days_ahead(target_date: date, now: datetime) -> int:
    """Whole days from today (UTC) to target_date; negative for the past."""
    return (target_date - utc_day(now)).days


class DateResolver:
    """Picks current weather or a forecast slot for a target day."""

    def __init__(self, source: WeatherSource, horizon_days: int = FORECAST_HORIZON_DAYS):
        """Initialize the resolver.

        Args:
            source: Cached weather lookups
            horizon_days: Furthest day the forecast can serve
        """
        self.source = source
        self.horizon_days = horizon_days

    async def resolve(
        self, location: str, target_date: date, now: datetime
    ) -> WeatherSnapshot:
        """Get the snapshot that best represents a location on a day.

        Args:
            location: Free-text location name
            target_date: Calendar day of interest
            now: Reference time used to decide what "today" is

        Returns:
            Current weather for today, or the matching forecast slot

        Raises:
            PastDateRejected: target_date is before today
            DateOutOfRange: target_date is beyond the forecast horizon
            ForecastUnavailable: no forecast slot falls on target_date
            UpstreamUnavailable, LocationNotFound: provider failures
        """
        if isinstance(target_date, datetime):
            target_date = utc_day(target_date)

        delta = days_ahead(target_date, now)

        if delta < 0:
            raise PastDateRejected(target_date, delta)

        if delta == 0:
            return await self.source.get_current_weather(location)

        if delta > self.horizon_days:
            raise DateOutOfRange(target_date, delta, self.horizon_days)

        window = await self.source.get_forecast(location)
        slot = window.slot_for(target_date)
        if slot is None:
            logger.warning(
                f"Forecast for {location} has no slot on {target_date.isoformat()}"
            )
            raise ForecastUnavailable(location, target_date, delta)
        return slot
