"""Planned event models."""

from __future__ import annotations

import datetime as dt
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class EventCategory(str, Enum):
    """Event categories accepted when planning an event.

    Only some categories have a dedicated weather profile; the rest are scored
    with the outdoor sports profile.
    """

    OUTDOOR_SPORTS = "outdoor sports"
    WEDDING = "wedding"
    HIKING = "hiking"
    CORPORATE = "corporate"
    FESTIVAL = "festival"
    PICNIC = "picnic"
    CONCERT = "concert"


class Event(BaseModel):
    """A planned event at a named location on a calendar day."""

    model_config = ConfigDict(from_attributes=True)

    id: str | None = Field(default=None, description="Unique event identifier")
    name: str = Field(..., description="Event name")
    location: str = Field(..., description="Free-text location name")
    date: dt.date = Field(..., description="Planned calendar day")
    event_type: str = Field(..., description="Event category, e.g. 'wedding'")
    description: str = Field(default="", description="Event description")
    duration_hours: int = Field(default=4, ge=1, le=24, description="Duration in hours")
    participants: int = Field(default=1, ge=1, description="Expected participants")
    requirements: dict[str, Any] = Field(
        default_factory=dict, description="Free-form organizer requirements"
    )
    created_at: dt.datetime | None = None
    updated_at: dt.datetime | None = None


class Pagination(BaseModel):
    """Paging metadata for event listings."""

    current_page: int
    total_pages: int
    total_events: int
    has_next: bool
    has_prev: bool


class EventPage(BaseModel):
    """One page of events plus paging metadata."""

    events: list[Event]
    pagination: Pagination
