"""Database module for the event store.

This module provides:
- SQLAlchemy async database connection
- The events table model
- A repository for event CRUD and paged listing
"""

from event_weather.database.connection import (
    close_db,
    create_tables,
    drop_tables,
    get_db,
    get_db_session,
    init_db,
)
from event_weather.database.models import Base, EventRecord
from event_weather.database.repository import EventRepository

__all__ = [
    # Connection
    "get_db",
    "get_db_session",
    "init_db",
    "close_db",
    "create_tables",
    "drop_tables",
    # Models
    "Base",
    "EventRecord",
    # Repository
    "EventRepository",
]
