"""Database models for the event store.

## Schema Overview

```
events
  id, name, location, date, event_type, description,
  duration_hours, participants, requirements (JSON),
  created_at, updated_at
```

Suitability results are computed on demand and never stored.
"""

from __future__ import annotations

import datetime as dt
import uuid
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import JSON, Date, DateTime, Index, Integer, String, Text, Uuid
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """Base class for all database models."""

    type_annotation_map = {
        dict[str, Any]: JSON,
    }


class EventRecord(Base):
    """A planned event.

    Locations are stored as entered; they are passed verbatim to the weather
    provider when the event is analyzed.
    """

    __tablename__ = "events"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    location: Mapped[str] = mapped_column(String(100), nullable=False)
    date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    event_type: Mapped[str] = mapped_column(String(50), nullable=False)
    description: Mapped[str] = mapped_column(Text, default="")
    duration_hours: Mapped[int] = mapped_column(Integer, default=4)
    participants: Mapped[int] = mapped_column(Integer, default=1)
    requirements: Mapped[dict[str, Any]] = mapped_column(default=dict)

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, onupdate=_utcnow
    )

    __table_args__ = (
        Index("ix_events_event_type", "event_type"),
        Index("ix_events_date", "date"),
    )

    def __repr__(self) -> str:
        return f"<EventRecord {self.name} @ {self.location} on {self.date}>"
