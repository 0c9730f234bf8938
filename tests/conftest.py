"""Pytest fixtures for event weather planner tests.

This module provides test fixtures that ensure:
1. No external API calls are made (the weather provider is faked)
2. No on-disk database is touched (the event store is in-memory SQLite)
3. "Now" is pinned, so date resolution is deterministic
"""

import os
from datetime import timedelta

import pytest

# Set test environment BEFORE importing application modules
os.environ.setdefault("OPENWEATHER_API_KEY", "test-api-key")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")

from event_weather.cache import TemporalCache
from event_weather.models.event import Event
from event_weather.models.weather import ForecastWindow, WeatherSnapshot
from event_weather.services.weather import WeatherService

from tests.factories import (
    NOW,
    TODAY,
    FakeMonotonic,
    FakeProvider,
    at_noon,
    make_snapshot,
)


# =============================================================================
# Test Isolation Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_settings_cache():
    """Reset settings cache before each test to ensure clean state."""
    from event_weather.config import get_settings
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def fixed_clock():
    """Clock pinned to NOW."""
    return lambda: NOW


@pytest.fixture
def monotonic() -> FakeMonotonic:
    """Manually advanced monotonic clock."""
    return FakeMonotonic()


# =============================================================================
# Weather Data Fixtures
# =============================================================================


@pytest.fixture
def current_snapshot() -> WeatherSnapshot:
    """Current weather in London: 22°C, clear, calm, dry."""
    return make_snapshot()


@pytest.fixture
def forecast_window() -> ForecastWindow:
    """Five day forecast for London starting tomorrow.

    Scored for a wedding, the first slot of each day gives:
    - 16 Jun: 22°C clear, calm -> 100
    - 17 Jun: 10°C clear -> 79
    - 18 Jun: 10°C clear -> 79
    - 19 Jun: 22°C rain 25 mm, 20 km/h -> 52
    - 20 Jun: 5°C thunderstorm 25 mm, 30 km/h -> 21
    """
    d = lambda offset: TODAY + timedelta(days=offset)
    slots = [
        make_snapshot(timestamp=at_noon(d(0), 15)),
        make_snapshot(timestamp=at_noon(d(1))),
        # Later slot on the same day must not be picked
        make_snapshot(
            temperature=2,
            condition="Snow",
            precipitation=40,
            wind_speed=60,
            timestamp=at_noon(d(1), 18),
        ),
        make_snapshot(temperature=10, timestamp=at_noon(d(2))),
        make_snapshot(temperature=10, timestamp=at_noon(d(3))),
        make_snapshot(
            condition="Rain", precipitation=25, wind_speed=20, timestamp=at_noon(d(4))
        ),
        make_snapshot(
            temperature=5,
            condition="Thunderstorm",
            precipitation=25,
            wind_speed=30,
            timestamp=at_noon(d(5)),
        ),
    ]
    return ForecastWindow(
        location="London", country="GB", fetched_at=NOW, slots=tuple(slots)
    )


@pytest.fixture
def wedding_event() -> Event:
    """Wedding in London planned for today."""
    return Event(
        id="evt-1",
        name="Garden Wedding",
        location="London",
        date=TODAY,
        event_type="wedding",
    )


# =============================================================================
# Service Fixtures
# =============================================================================


@pytest.fixture
def fake_provider(current_snapshot, forecast_window) -> FakeProvider:
    """Provider serving the sample current weather and forecast."""
    return FakeProvider(current=current_snapshot, forecast=forecast_window)


@pytest.fixture
def weather_service(fake_provider, monotonic, fixed_clock) -> WeatherService:
    """Service over the fake provider, with pinned clocks."""
    return WeatherService(
        provider=fake_provider,
        cache=TemporalCache(clock=monotonic),
        clock=fixed_clock,
    )


# =============================================================================
# OpenWeatherMap Payload Fixtures
# =============================================================================


@pytest.fixture
def owm_current_payload() -> dict:
    """OpenWeatherMap /weather response for London."""
    return {
        "coord": {"lon": -0.1257, "lat": 51.5085},
        "weather": [{"id": 500, "main": "Rain", "description": "light rain"}],
        "main": {
            "temp": 18.5,
            "feels_like": 17.6,
            "pressure": 1012,
            "humidity": 72,
        },
        "visibility": 9000,
        "wind": {"speed": 4.5, "deg": 230},
        "rain": {"1h": 0.6},
        "dt": 1718442000,  # 2024-06-15 09:00 UTC
        "sys": {"country": "GB"},
        "name": "London",
        "cod": 200,
    }


@pytest.fixture
def owm_forecast_payload() -> dict:
    """OpenWeatherMap /forecast response for London, deliberately unsorted."""
    return {
        "cod": "200",
        "cnt": 3,
        "list": [
            {
                "dt": 1718539200,  # 2024-06-16 12:00 UTC
                "main": {"temp": 21.2, "feels_like": 20.9, "pressure": 1014, "humidity": 55},
                "weather": [{"id": 800, "main": "Clear", "description": "clear sky"}],
                "wind": {"speed": 3.0, "deg": 200},
                "visibility": 10000,
            },
            {
                "dt": 1718528400,  # 2024-06-16 09:00 UTC
                "main": {"temp": 16.4, "feels_like": 16.0, "pressure": 1013, "humidity": 70},
                "weather": [{"id": 803, "main": "Clouds", "description": "broken clouds"}],
                "wind": {"speed": 2.0, "deg": 190},
                "rain": {"3h": 1.25},
                "visibility": 10000,
            },
            {
                "dt": 1718625600,  # 2024-06-17 12:00 UTC
                "main": {"temp": 19.0, "feels_like": 18.7, "pressure": 1010, "humidity": 60},
                "weather": [{"id": 500, "main": "Rain", "description": "light rain"}],
                "wind": {"speed": 6.1, "deg": 250},
                "rain": {},
            },
        ],
        "city": {"id": 2643743, "name": "London", "country": "GB"},
    }
