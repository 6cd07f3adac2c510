"""MongoDB implementation of the EventStore and BookingStore."""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime, timezone

from bson import ObjectId
from pymongo import DESCENDING, ReturnDocument
from pymongo.collection import Collection
from pymongo.errors import DuplicateKeyError, PyMongoError

from events.domain import Booking, Event, EventId, NewBooking, NewEvent, Slug
from events.domain.errors import DuplicateSlugError, StoreUnavailableError
from events.models import (
    BOOKINGS,
    EVENTS,
    booking_document,
    booking_from_document,
    event_document,
    event_from_document,
)
from events.stores.connection import ConnectionCache
from events.stores.interfaces import BookingStore, EventStore

logger = logging.getLogger(__name__)


def _now() -> datetime:
    # BSON dates carry millisecond precision
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=now.microsecond // 1000 * 1000)


@contextmanager
def _store_errors(action: str) -> Iterator[None]:
    try:
        yield
    except PyMongoError as exc:
        logger.error("MongoDB %s failed: %s", action, exc)
        raise StoreUnavailableError(f"Failed to {action}: {exc}") from exc


class MongoEventStore(EventStore):
    """Events collection, reached through the shared connection cache."""

    def __init__(self, connection: ConnectionCache) -> None:
        self._connection = connection

    def _events(self) -> Collection:
        return self._connection.get_connection()[EVENTS]

    def list_events(self) -> list[Event]:
        with _store_errors("list events"):
            cursor = self._events().find().sort([("createdAt", DESCENDING), ("_id", DESCENDING)])
            return [event_from_document(doc) for doc in cursor]

    def get_event_by_slug(self, slug: Slug) -> Event | None:
        with _store_errors("fetch event"):
            doc = self._events().find_one({"slug": slug.value})
        return event_from_document(doc) if doc else None

    def event_exists(self, event_id: EventId) -> bool:
        with _store_errors("validate event"):
            doc = self._events().find_one({"_id": ObjectId(event_id.value)}, {"_id": 1})
        return doc is not None

    def create_event(self, event: NewEvent) -> Event:
        now = _now()
        doc = {**event_document(event), "createdAt": now, "updatedAt": now}
        with _store_errors("create event"):
            try:
                result = self._events().insert_one(doc)
            except DuplicateKeyError as exc:
                raise DuplicateSlugError(event.slug.value) from exc
        doc["_id"] = result.inserted_id
        return event_from_document(doc)

    def update_event(self, event_id: EventId, event: NewEvent) -> Event:
        changes = {**event_document(event), "updatedAt": _now()}
        with _store_errors("update event"):
            try:
                doc = self._events().find_one_and_update(
                    {"_id": ObjectId(event_id.value)},
                    {"$set": changes},
                    return_document=ReturnDocument.AFTER,
                )
            except DuplicateKeyError as exc:
                raise DuplicateSlugError(event.slug.value) from exc
        if doc is None:
            raise StoreUnavailableError(f"Event {event_id} disappeared during update")
        return event_from_document(doc)


class MongoBookingStore(BookingStore):
    """Bookings collection, reached through the shared connection cache."""

    def __init__(self, connection: ConnectionCache) -> None:
        self._connection = connection

    def _bookings(self) -> Collection:
        return self._connection.get_connection()[BOOKINGS]

    def create_booking(self, booking: NewBooking) -> Booking:
        doc = booking_document(booking, _now())
        with _store_errors("create booking"):
            result = self._bookings().insert_one(doc)
        doc["_id"] = result.inserted_id
        return booking_from_document(doc)

    def list_bookings_for_event(self, event_id: EventId) -> list[Booking]:
        with _store_errors("list bookings"):
            cursor = self._bookings().find({"eventId": ObjectId(event_id.value)}).sort(
                [("createdAt", DESCENDING), ("_id", DESCENDING)]
            )
            return [booking_from_document(doc) for doc in cursor]
