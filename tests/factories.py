"""Shared test data builders and fakes."""

from datetime import date, datetime, timezone

from event_weather.models.weather import ForecastWindow, WeatherSnapshot
from event_weather.providers.base import WeatherProvider

# Saturday 15 June 2024, 09:00 UTC
NOW = datetime(2024, 6, 15, 9, 0, tzinfo=timezone.utc)
TODAY = NOW.date()


# =============================================================================
# Fakes
# =============================================================================


class FakeProvider(WeatherProvider):
    """In-memory provider returning canned data and counting calls."""

    name = "fake"
    base_url = "http://weather.invalid"

    def __init__(
        self,
        current: WeatherSnapshot | None = None,
        forecast: ForecastWindow | None = None,
        error: Exception | None = None,
    ):
        super().__init__()
        self.current = current
        self.forecast = forecast
        self.error = error
        self.current_calls: list[str] = []
        self.forecast_calls: list[str] = []
        self.closed = False

    async def fetch_current(self, location: str) -> WeatherSnapshot:
        self.current_calls.append(location)
        if self.error:
            raise self.error
        return self.current

    async def fetch_forecast(self, location: str) -> ForecastWindow:
        self.forecast_calls.append(location)
        if self.error:
            raise self.error
        return self.forecast

    async def aclose(self) -> None:
        self.closed = True
        await super().aclose()


class FakeMonotonic:
    """Manually advanced monotonic clock for cache expiry tests."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def make_snapshot(
    temperature: float = 22,
    condition: str = "Clear",
    precipitation: float = 0,
    wind_speed: float = 5,
    timestamp: datetime = NOW,
    location: str = "London",
) -> WeatherSnapshot:
    """Build a snapshot with mild defaults."""
    return WeatherSnapshot(
        location=location,
        country="GB",
        temperature=temperature,
        feels_like=temperature,
        humidity=50,
        pressure=1015,
        wind_speed=wind_speed,
        wind_direction=180,
        condition=condition,
        description=condition.lower(),
        precipitation=precipitation,
        visibility=10,
        timestamp=timestamp,
    )


def at_noon(day: date, hour: int = 12) -> datetime:
    return datetime(day.year, day.month, day.day, hour, 0, tzinfo=timezone.utc)

