"""FastAPI dependencies shared by the routers."""

from __future__ import annotations

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from event_weather.database.connection import get_db_session
from event_weather.database.repository import EventRepository
from event_weather.models.event import Event
from event_weather.services.weather import WeatherService


def get_weather_service(request: Request) -> WeatherService:
    """Get the application's weather service."""
    service: WeatherService | None = getattr(request.app.state, "weather_service", None)
    if service is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Weather service not initialized",
        )
    return service


def get_event_repository(
    db: AsyncSession = Depends(get_db_session),
) -> EventRepository:
    """Get an event repository bound to the request's session."""
    return EventRepository(db)


async def get_event_or_404(
    event_id: str,
    events: EventRepository = Depends(get_event_repository),
) -> Event:
    """Load the event named in the path or answer 404."""
    event = await events.get(event_id)
    if event is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Event not found",
        )
    return event
