"""Pytest configuration and shared fixtures."""

import mongomock
import pytest
from django.apps import apps
from rest_framework.test import APIClient

from events.models import ensure_indexes
from events.stores import ConnectionCache
from tests.fakes import FakeAssetStore, InMemoryBookingStore, InMemoryEventStore


@pytest.fixture
def api_client() -> APIClient:
    return APIClient()


@pytest.fixture
def mongo_db():
    client = mongomock.MongoClient()
    yield ensure_indexes(client["eventhub-test"])
    client.close()


@pytest.fixture
def connection(mongo_db) -> ConnectionCache:
    return ConnectionCache(lambda: mongo_db)


@pytest.fixture
def asset_store() -> FakeAssetStore:
    return FakeAssetStore()


@pytest.fixture
def event_store() -> InMemoryEventStore:
    return InMemoryEventStore()


@pytest.fixture
def booking_store() -> InMemoryBookingStore:
    return InMemoryBookingStore()


@pytest.fixture
def events_app(monkeypatch, connection, asset_store):
    """Point the events app at an in-memory MongoDB and a fake image host."""
    config = apps.get_app_config("events")
    monkeypatch.setattr(config, "connection_cache", connection)
    monkeypatch.setattr(config, "asset_store", asset_store)
    return config


@pytest.fixture
def event_fields() -> dict:
    return {
        "title": "React Summit 2025",
        "description": "The biggest React conference in the world.",
        "overview": "Two days of talks, workshops and networking.",
        "venue": "Beurs van Berlage",
        "location": "Amsterdam, Netherlands",
        "date": "June 13, 2025",
        "time": "9:00 am",
        "mode": "hybrid",
        "audience": "Frontend developers",
        "agenda": ["Keynote", "Server components deep dive", "Closing panel"],
        "organizer": "GitNation",
        "tags": ["react", "frontend", "javascript"],
    }
