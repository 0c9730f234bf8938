"""HTTP surface of the planner.

`create_app` wires the event and weather routers, CORS and error handlers
around one shared `WeatherService`.

## Usage

```python
from event_weather.api import create_app

app = create_app()

uvicorn.run(app, host="127.0.0.1", port=8000)
```

## Configuration

Settings come from the environment (see `event_weather.config`).
`event-weather serve` starts the same app from the command line.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from event_weather.api.errors import register_exception_handlers
from event_weather.config import get_settings
from event_weather.database.connection import close_db, create_tables, init_db
from event_weather.services.weather import WeatherService, create_weather_service

logger = logging.getLogger(__name__)


def create_app(weather_service: WeatherService | None = None) -> FastAPI:
    """Build the application.

    Args:
        weather_service: Pre-built service (tests inject one with a fake
            provider); built from settings when omitted

    Returns:
        The FastAPI app; its lifespan owns the database and weather service
    """
    settings = get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Open the event store and weather service, and release both on exit."""
        logger.info(f"Starting {settings.app_name} v{settings.app_version}")

        await init_db()
        await create_tables()

        if app.state.weather_service is None:
            app.state.weather_service = create_weather_service(settings)

        yield

        logger.info("Shutting down")
        await app.state.weather_service.aclose()
        await close_db()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Weather suitability and alternative dates for planned events",
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        openapi_url="/openapi.json" if settings.debug else None,
        lifespan=lifespan,
    )
    app.state.weather_service = weather_service

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # Include routers
    from event_weather.api.routes import events, weather

    app.include_router(events.router, prefix="/api/events", tags=["Events"])
    app.include_router(weather.router, prefix="/api/weather", tags=["Weather"])

    @app.get("/health", tags=["Health"])
    async def health_check():
        """Liveness probe."""
        return {"status": "healthy", "version": settings.app_version}

    return app
