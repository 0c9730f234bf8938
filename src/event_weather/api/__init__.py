"""FastAPI application and routes.

This module provides the REST API for the event weather planner.

## API Structure

- /health - Liveness check
- /api/events - Event CRUD, weather checks, suitability and alternative dates
- /api/weather - Current weather, forecasts, per-date lookups and cache control

## Errors

Weather failures are returned as JSON `{"detail": ..., "error": ...}` with a
status derived from the error type (see `event_weather.api.errors`).
"""

from event_weather.api.app import create_app

__all__ = ["create_app"]
