"""Service wiring for the handlers.

The connection cache and asset store are built once by ``EventsConfig.ready``;
services and stores are cheap and built per request around them.
"""

from django.apps import apps

from events.services import BookingService, EventService
from events.stores import MongoBookingStore, MongoEventStore


def get_event_service() -> EventService:
    config = apps.get_app_config("events")
    return EventService(MongoEventStore(config.connection_cache), config.asset_store)


def get_booking_service() -> BookingService:
    config = apps.get_app_config("events")
    return BookingService(
        MongoEventStore(config.connection_cache),
        MongoBookingStore(config.connection_cache),
    )
