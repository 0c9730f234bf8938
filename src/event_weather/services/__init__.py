"""Weather services: date resolution and the service facade."""

from event_weather.services.resolver import (
    FORECAST_HORIZON_DAYS,
    DateResolver,
    days_ahead,
    utc_day,
    utc_now,
)
from event_weather.services.weather import WeatherService, create_weather_service

__all__ = [
    "FORECAST_HORIZON_DAYS",
    "DateResolver",
    "days_ahead",
    "utc_day",
    "utc_now",
    "WeatherService",
    "create_weather_service",
]
