"""Tests for the MongoDB stores, run against mongomock.

Run with: pytest tests/test_mongo_store.py -v
"""

from datetime import timedelta

import pytest
from bson import ObjectId
from pymongo.errors import ServerSelectionTimeoutError

from events.domain import EventId
from events.domain.errors import DuplicateSlugError, StoreUnavailableError
from events.domain.rules import prepare_booking, prepare_event
from events.models import BOOKINGS, EVENTS
from events.stores import ConnectionCache, MongoBookingStore, MongoEventStore


@pytest.fixture
def store(connection) -> MongoEventStore:
    return MongoEventStore(connection)


@pytest.fixture
def bookings(connection) -> MongoBookingStore:
    return MongoBookingStore(connection)


@pytest.fixture
def new_event(event_fields):
    def build(**overrides):
        return prepare_event(
            {**event_fields, "image": "https://example.com/a.png", **overrides}
        )

    return build


class TestIndexes:
    def test_slug_index_is_unique(self, mongo_db):
        info = mongo_db[EVENTS].index_information()
        assert info["slug_unique"]["unique"] is True
        assert "date" in info and "tags" in info

    def test_booking_indexes_exist(self, mongo_db):
        info = mongo_db[BOOKINGS].index_information()
        assert {"event_id_email", "created_at_desc"} <= set(info)


class TestMongoEventStore:
    def test_create_then_fetch_by_slug(self, store, new_event):
        created = store.create_event(new_event())

        fetched = store.get_event_by_slug(created.slug)

        assert fetched == created
        assert fetched.created_at.utcoffset() == timedelta(0)
        assert fetched.tags == ("react", "frontend", "javascript")

    def test_missing_slug_returns_none(self, store, new_event):
        store.create_event(new_event())
        assert store.get_event_by_slug(new_event(title="Other").slug) is None

    def test_duplicate_slug_is_rejected_and_first_survives(self, store, new_event):
        first = store.create_event(new_event(title="React Summit 2025"))

        with pytest.raises(DuplicateSlugError):
            store.create_event(new_event(title="react summit 2025!"))

        assert store.get_event_by_slug(first.slug) == first
        assert len(store.list_events()) == 1

    def test_list_is_newest_first(self, store, new_event, mongo_db):
        older = store.create_event(new_event(title="First"))
        newer = store.create_event(new_event(title="Second"))
        mongo_db[EVENTS].update_one(
            {"_id": ObjectId(older.id.value)},
            {"$set": {"createdAt": older.created_at.replace(year=2020)}},
        )

        assert [e.slug.value for e in store.list_events()] == [newer.slug.value, "first"]

    def test_event_exists(self, store, new_event):
        created = store.create_event(new_event())
        assert store.event_exists(created.id) is True
        assert store.event_exists(EventId(str(ObjectId()))) is False

    def test_update_replaces_fields(self, store, new_event):
        created = store.create_event(new_event())

        updated = store.update_event(created.id, new_event(venue="RAI Amsterdam"))

        assert updated.venue == "RAI Amsterdam"
        assert updated.created_at == created.created_at
        assert store.get_event_by_slug(created.slug).venue == "RAI Amsterdam"

    def test_unreachable_store_raises_store_unavailable(self, new_event):
        def refuse():
            raise ServerSelectionTimeoutError("connection refused")

        store = MongoEventStore(ConnectionCache(refuse))
        with pytest.raises(StoreUnavailableError, match="connection refused"):
            store.list_events()


class TestMongoBookingStore:
    def test_create_stores_normalized_email(self, store, bookings, new_event, mongo_db):
        event = store.create_event(new_event())

        booking = bookings.create_booking(
            prepare_booking({"eventId": event.id.value, "email": "Foo@Bar.com "})
        )

        assert booking.email.value == "foo@bar.com"
        doc = mongo_db[BOOKINGS].find_one({"_id": ObjectId(booking.id.value)})
        assert doc["email"] == "foo@bar.com"
        assert doc["eventId"] == ObjectId(event.id.value)

    def test_list_for_event_filters_by_event(self, store, bookings, new_event):
        event = store.create_event(new_event())
        other = store.create_event(new_event(title="Other"))
        for email in ("a@example.com", "b@example.com"):
            bookings.create_booking(prepare_booking({"eventId": event.id.value, "email": email}))
        bookings.create_booking(prepare_booking({"eventId": other.id.value, "email": "c@example.com"}))

        listed = bookings.list_bookings_for_event(event.id)

        assert sorted(b.email.value for b in listed) == ["a@example.com", "b@example.com"]
