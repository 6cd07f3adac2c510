"""MongoDB collection definitions (persistence layer).

These describe how documents are stored and indexed. Domain logic lives in
domain/models.py and domain/rules.py.
"""

from datetime import datetime, timezone
from typing import Any

from bson import ObjectId
from pymongo import ASCENDING, DESCENDING
from pymongo.database import Database

from events.domain import (
    Booking,
    BookingId,
    Email,
    Event,
    EventId,
    EventMode,
    NewBooking,
    NewEvent,
    Slug,
)

EVENTS = "events"
BOOKINGS = "bookings"


def _utc(value: datetime) -> datetime:
    # the driver hands back naive UTC datetimes unless the client is tz_aware
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def ensure_indexes(db: Database) -> Database:
    """Create the indexes both collections rely on. Safe to run repeatedly."""
    events = db[EVENTS]
    events.create_index([("slug", ASCENDING)], unique=True, name="slug_unique")
    events.create_index([("date", ASCENDING)], name="date")
    events.create_index([("tags", ASCENDING)], name="tags")

    bookings = db[BOOKINGS]
    bookings.create_index([("eventId", ASCENDING)], name="event_id")
    bookings.create_index(
        [("eventId", ASCENDING), ("email", ASCENDING)], name="event_id_email"
    )
    bookings.create_index([("createdAt", DESCENDING)], name="created_at_desc")
    return db


# --- Events ---


def event_document(event: NewEvent) -> dict[str, Any]:
    return {
        "title": event.title,
        "slug": event.slug.value,
        "description": event.description,
        "overview": event.overview,
        "image": event.image,
        "venue": event.venue,
        "location": event.location,
        "date": event.date,
        "time": event.time,
        "mode": event.mode.value,
        "audience": event.audience,
        "agenda": list(event.agenda),
        "organizer": event.organizer,
        "tags": list(event.tags),
    }


def event_from_document(doc: dict[str, Any]) -> Event:
    return Event(
        id=EventId(str(doc["_id"])),
        title=doc["title"],
        slug=Slug(doc["slug"]),
        description=doc["description"],
        overview=doc["overview"],
        image=doc["image"],
        venue=doc["venue"],
        location=doc["location"],
        date=doc["date"],
        time=doc["time"],
        mode=EventMode(doc["mode"]),
        audience=doc["audience"],
        agenda=tuple(doc["agenda"]),
        organizer=doc["organizer"],
        tags=tuple(doc["tags"]),
        created_at=_utc(doc["createdAt"]),
        updated_at=_utc(doc["updatedAt"]),
    )


# --- Bookings ---


def booking_document(booking: NewBooking, now: datetime) -> dict[str, Any]:
    return {
        "eventId": ObjectId(booking.event_id.value),
        "email": booking.email.value,
        "createdAt": now,
        "updatedAt": now,
    }


def booking_from_document(doc: dict[str, Any]) -> Booking:
    return Booking(
        id=BookingId(str(doc["_id"])),
        event_id=EventId(str(doc["eventId"])),
        email=Email(doc["email"]),
        created_at=_utc(doc["createdAt"]),
        updated_at=_utc(doc["updatedAt"]),
    )
