"""Translation of weather service errors into HTTP responses.

| Error | Status |
|-------|--------|
| LocationNotFound | 404 |
| ForecastUnavailable | 404 |
| RateLimitError | 429 |
| UpstreamUnavailable / ProviderError | 503 |
| PastDateRejected | 400 |
| DateOutOfRange | 422 |
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from event_weather.errors import (
    DateOutOfRange,
    ForecastUnavailable,
    PastDateRejected,
    WeatherServiceError,
)
from event_weather.providers.base import (
    LocationNotFound,
    ProviderError,
    RateLimitError,
)

logger = logging.getLogger(__name__)

# Most specific first
ERROR_STATUS: list[tuple[type[WeatherServiceError], int]] = [
    (LocationNotFound, status.HTTP_404_NOT_FOUND),
    (RateLimitError, status.HTTP_429_TOO_MANY_REQUESTS),
    (ProviderError, status.HTTP_503_SERVICE_UNAVAILABLE),
    (PastDateRejected, status.HTTP_400_BAD_REQUEST),
    (DateOutOfRange, 422),
    (ForecastUnavailable, status.HTTP_404_NOT_FOUND),
]


def status_for(exc: WeatherServiceError) -> int:
    """HTTP status for a weather service error."""
    for error_type, status_code in ERROR_STATUS:
        if isinstance(exc, error_type):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


async def weather_error_handler(request: Request, exc: WeatherServiceError) -> JSONResponse:
    """Render a weather service error as a JSON response."""
    status_code = status_for(exc)
    if status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc}")
    else:
        logger.info(f"{request.method} {request.url.path} rejected: {exc}")

    headers = None
    if isinstance(exc, RateLimitError) and exc.retry_after:
        headers = {"Retry-After": str(exc.retry_after)}

    return JSONResponse(
        status_code=status_code,
        content={"detail": str(exc), "error": type(exc).__name__},
        headers=headers,
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Install the weather error handler on an application."""
    app.add_exception_handler(WeatherServiceError, weather_error_handler)
