"""Event routes.

Handles event CRUD plus weather analysis, suitability and alternative dates
for stored events.
"""

from __future__ import annotations

import datetime as dt
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel, Field, field_validator

from event_weather.api.dependencies import (
    get_event_or_404,
    get_event_repository,
    get_weather_service,
)
from event_weather.config import get_settings
from event_weather.database.repository import EventRepository
from event_weather.errors import WeatherServiceError
from event_weather.models.event import Event, EventCategory, EventPage
from event_weather.models.suitability import (
    AlternativeDates,
    SuitabilityResult,
    WeatherAnalysis,
)
from event_weather.services.resolver import utc_day
from event_weather.services.weather import WeatherService

router = APIRouter()


class EventCreate(BaseModel):
    """Create event request."""

    name: str = Field(..., min_length=3, max_length=100)
    location: str = Field(..., min_length=2, max_length=100)
    date: dt.date
    event_type: EventCategory
    description: str = ""
    duration_hours: int = Field(default=4, ge=1, le=24)
    participants: int = Field(default=1, ge=1)
    requirements: dict[str, Any] = Field(default_factory=dict)


class EventUpdate(BaseModel):
    """Update event request."""

    name: str | None = Field(default=None, min_length=3, max_length=100)
    location: str | None = Field(default=None, min_length=2, max_length=100)
    date: dt.date | None = None
    event_type: EventCategory | None = None
    description: str | None = None
    duration_hours: int | None = Field(default=None, ge=1, le=24)
    participants: int | None = Field(default=None, ge=1)
    requirements: dict[str, Any] | None = None

    @field_validator("*", mode="before")
    @classmethod
    def reject_null(cls, v: Any) -> Any:
        """Fields may be omitted but not cleared."""
        if v is None:
            raise ValueError("Field cannot be null")
        return v


class EventCreatedResponse(BaseModel):
    """A newly created event and its initial weather analysis."""

    event: Event
    weather_analysis: WeatherAnalysis | None = None
    weather_error: str | None = None


def _reject_past_date(date: dt.date, service: WeatherService) -> None:
    if date < utc_day(service.clock()):
        raise HTTPException(
            status_code=422,
            detail="Event date cannot be in the past",
        )


def _to_record_fields(payload: BaseModel, exclude_unset: bool = False) -> dict[str, Any]:
    data = payload.model_dump(exclude_unset=exclude_unset)
    if isinstance(data.get("event_type"), EventCategory):
        data["event_type"] = data["event_type"].value
    return data


@router.post("/", response_model=EventCreatedResponse, status_code=status.HTTP_201_CREATED)
async def create_event(
    payload: EventCreate,
    events: EventRepository = Depends(get_event_repository),
    service: WeatherService = Depends(get_weather_service),
) -> EventCreatedResponse:
    """Create an event and analyze its weather.

    The event is stored even when the weather lookup fails; the failure is
    reported in `weather_error`.
    """
    _reject_past_date(payload.date, service)
    event = await events.create(_to_record_fields(payload))

    try:
        analysis = await service.analyze_event_weather(event)
    except WeatherServiceError as e:
        return EventCreatedResponse(event=event, weather_error=str(e))

    return EventCreatedResponse(event=event, weather_analysis=analysis)


@router.get("/", response_model=EventPage)
async def list_events(
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=100),
    event_type: str | None = None,
    location: str | None = None,
    events: EventRepository = Depends(get_event_repository),
) -> EventPage:
    """List events, filtered by type and location substrings."""
    return await events.list(
        event_type=event_type, location=location, page=page, limit=limit
    )


@router.get("/{event_id}", response_model=Event)
async def get_event(event: Event = Depends(get_event_or_404)) -> Event:
    """Get an event by id."""
    return event


@router.put("/{event_id}", response_model=Event)
async def update_event(
    event_id: str,
    payload: EventUpdate,
    events: EventRepository = Depends(get_event_repository),
    service: WeatherService = Depends(get_weather_service),
) -> Event:
    """Update an event's fields."""
    if payload.date is not None:
        _reject_past_date(payload.date, service)

    updated = await events.update(event_id, _to_record_fields(payload, exclude_unset=True))
    if updated is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Event not found",
        )
    return updated


@router.delete("/{event_id}")
async def delete_event(
    event_id: str,
    events: EventRepository = Depends(get_event_repository),
) -> dict:
    """Delete an event."""
    if not await events.delete(event_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Event not found",
        )
    return {"status": "deleted"}


@router.post("/{event_id}/weather-check", response_model=WeatherAnalysis)
async def check_event_weather(
    event: Event = Depends(get_event_or_404),
    service: WeatherService = Depends(get_weather_service),
) -> WeatherAnalysis:
    """Analyze the weather for a stored event."""
    return await service.analyze_event_weather(event)


@router.get("/{event_id}/suitability", response_model=SuitabilityResult)
async def get_event_suitability(
    event: Event = Depends(get_event_or_404),
    service: WeatherService = Depends(get_weather_service),
) -> SuitabilityResult:
    """Get the weather suitability score for a stored event."""
    return await service.get_event_suitability(event)


@router.get("/{event_id}/alternatives", response_model=AlternativeDates)
async def get_alternative_dates(
    days: int | None = Query(default=None, ge=1),
    event: Event = Depends(get_event_or_404),
    service: WeatherService = Depends(get_weather_service),
) -> AlternativeDates:
    """Suggest dates after the event with better forecast suitability."""
    settings = get_settings()
    days_range = days or settings.default_alternative_days
    if days_range > settings.max_alternative_days:
        raise HTTPException(
            status_code=422,
            detail=f"days must be at most {settings.max_alternative_days}",
        )
    return await service.get_alternative_dates(event, days_range=days_range)
