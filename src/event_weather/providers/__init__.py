"""Weather data providers."""

from event_weather.providers.base import (
    AuthenticationError,
    LocationNotFound,
    ProviderError,
    RateLimitError,
    UpstreamUnavailable,
    WeatherProvider,
)
from event_weather.providers.openweathermap import OpenWeatherMapProvider

__all__ = [
    "WeatherProvider",
    "ProviderError",
    "UpstreamUnavailable",
    "RateLimitError",
    "AuthenticationError",
    "LocationNotFound",
    "OpenWeatherMapProvider",
]
