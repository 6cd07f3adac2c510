"""Domain models representing persisted state.

These are pure domain objects with no API input rules.
MongoDB document mapping lives in events/models.py (persistence layer).
"""

from dataclasses import dataclass
from datetime import datetime

from events.domain.value_objects import BookingId, Email, EventId, EventMode, Slug


@dataclass(frozen=True)
class NewEvent:
    """Normalized event fields, ready to be written."""

    title: str
    slug: Slug
    description: str
    overview: str
    image: str
    venue: str
    location: str
    date: str
    time: str
    mode: EventMode
    audience: str
    agenda: tuple[str, ...]
    organizer: str
    tags: tuple[str, ...]


@dataclass(frozen=True)
class Event(NewEvent):
    """Domain representation of a persisted Event."""

    id: EventId
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class NewBooking:
    """Validated booking fields, ready to be written."""

    event_id: EventId
    email: Email


@dataclass(frozen=True)
class Booking(NewBooking):
    """Domain representation of a persisted Booking."""

    id: BookingId
    created_at: datetime
    updated_at: datetime
