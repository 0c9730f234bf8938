"""Event repository.

A flat record store keyed by event id: create, read, filtered and paged
listing, update and delete. Rows are returned as `Event` models so callers
never hold ORM objects outside the session.
"""

from __future__ import annotations

import logging
import math
import uuid
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from event_weather.database.models import EventRecord
from event_weather.models.event import Event, EventPage, Pagination

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 10

UPDATABLE_FIELDS = frozenset(
    {
        "name",
        "location",
        "date",
        "event_type",
        "description",
        "duration_hours",
        "participants",
        "requirements",
    }
)


def _parse_id(event_id: uuid.UUID | str) -> uuid.UUID | None:
    if isinstance(event_id, uuid.UUID):
        return event_id
    try:
        return uuid.UUID(event_id)
    except ValueError:
        return None


def to_event(record: EventRecord) -> Event:
    """Convert a database row into an Event model."""
    return Event(
        id=str(record.id),
        name=record.name,
        location=record.location,
        date=record.date,
        event_type=record.event_type,
        description=record.description or "",
        duration_hours=record.duration_hours,
        participants=record.participants,
        requirements=record.requirements or {},
        created_at=record.created_at,
        updated_at=record.updated_at,
    )


class EventRepository:
    """CRUD access to stored events."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, data: dict[str, Any]) -> Event:
        """Store a new event.

        Args:
            data: Event fields (name, location, date and event_type required)

        Returns:
            The stored event with its generated id and timestamps
        """
        record = EventRecord(
            name=data["name"],
            location=data["location"],
            date=data["date"],
            event_type=data["event_type"],
            description=data.get("description") or "",
            duration_hours=data.get("duration_hours") or 4,
            participants=data.get("participants") or 1,
            requirements=data.get("requirements") or {},
        )
        self.session.add(record)
        await self.session.commit()
        await self.session.refresh(record)

        logger.info(f"Created event {record.id} ({record.name})")
        return to_event(record)

    async def _get_record(self, event_id: uuid.UUID | str) -> EventRecord | None:
        parsed = _parse_id(event_id)
        if parsed is None:
            return None
        return await self.session.get(EventRecord, parsed)

    async def get(self, event_id: uuid.UUID | str) -> Event | None:
        """Get an event by id, or None if it does not exist."""
        record = await self._get_record(event_id)
        return to_event(record) if record else None

    async def list(
        self,
        event_type: str | None = None,
        location: str | None = None,
        page: int = 1,
        limit: int = DEFAULT_PAGE_SIZE,
    ) -> EventPage:
        """List events, optionally filtered, one page at a time.

        Filters are case-insensitive substring matches.

        Args:
            event_type: Filter on event type
            location: Filter on location
            page: 1-based page number
            limit: Page size

        Returns:
            EventPage with the events and paging metadata
        """
        page = page if page >= 1 else 1
        limit = limit if limit >= 1 else DEFAULT_PAGE_SIZE

        stmt = select(EventRecord)
        if event_type:
            stmt = stmt.where(
                func.lower(EventRecord.event_type).contains(
                    event_type.lower(), autoescape=True
                )
            )
        if location:
            stmt = stmt.where(
                func.lower(EventRecord.location).contains(
                    location.lower(), autoescape=True
                )
            )

        total = await self.session.scalar(
            select(func.count()).select_from(stmt.subquery())
        ) or 0

        start = (page - 1) * limit
        result = await self.session.execute(
            stmt.order_by(EventRecord.created_at, EventRecord.id)
            .offset(start)
            .limit(limit)
        )
        events = [to_event(record) for record in result.scalars().all()]

        return EventPage(
            events=events,
            pagination=Pagination(
                current_page=page,
                total_pages=math.ceil(total / limit),
                total_events=total,
                has_next=start + limit < total,
                has_prev=start > 0,
            ),
        )

    async def update(
        self, event_id: uuid.UUID | str, changes: dict[str, Any]
    ) -> Event | None:
        """Apply changes to an event.

        Unknown keys are ignored. Returns None if the event does not exist.
        """
        record = await self._get_record(event_id)
        if record is None:
            return None

        for key, value in changes.items():
            if key in UPDATABLE_FIELDS:
                setattr(record, key, value)

        await self.session.commit()
        await self.session.refresh(record)

        logger.info(f"Updated event {record.id}")
        return to_event(record)

    async def delete(self, event_id: uuid.UUID | str) -> bool:
        """Delete an event. Returns False if it does not exist."""
        record = await self._get_record(event_id)
        if record is None:
            return False

        await self.session.delete(record)
        await self.session.commit()

        logger.info(f"Deleted event {event_id}")
        return True
