"""Exception hierarchy for weather lookups.

Upstream failures live in `event_weather.providers.base` and share the
`WeatherServiceError` root with the date resolution errors defined here, so
the HTTP adapter can translate every recoverable failure in one place.
"""

from __future__ import annotations

from datetime import date


class WeatherServiceError(Exception):
    """Base exception for recoverable weather service failures."""


class DateResolutionError(WeatherServiceError):
    """Raised when a target date cannot be mapped to weather data."""

    def __init__(self, message: str, target_date: date, days_ahead: int):
        super().__init__(message)
        self.target_date = target_date
        self.days_ahead = days_ahead


class PastDateRejected(DateResolutionError):
    """Raised when weather is requested for a date before today."""

    def __init__(self, target_date: date, days_ahead: int):
        super().__init__(
            f"Cannot get weather data for past date {target_date.isoformat()}",
            target_date=target_date,
            days_ahead=days_ahead,
        )


class DateOutOfRange(DateResolutionError):
    """Raised when a date lies beyond the provider's forecast horizon."""

    def __init__(self, target_date: date, days_ahead: int, horizon_days: int):
        super().__init__(
            f"Weather data for {target_date.isoformat()} is {days_ahead} days out; "
            f"forecasts only cover the next {horizon_days} days",
            target_date=target_date,
            days_ahead=days_ahead,
        )
        self.horizon_days = horizon_days


class ForecastUnavailable(DateResolutionError):
    """Raised when the forecast window has no slot on the target day."""

    def __init__(self, location: str, target_date: date, days_ahead: int):
        super().__init__(
            f"No forecast slot for {location} on {target_date.isoformat()}",
            target_date=target_date,
            days_ahead=days_ahead,
        )
        self.location = location
