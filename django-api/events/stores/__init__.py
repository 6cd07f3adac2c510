from events.stores.cloudinary_store import CloudinaryAssetStore
from events.stores.connection import ConnectionCache
from events.stores.interfaces import AssetStore, BookingStore, EventStore
from events.stores.mongo_store import MongoBookingStore, MongoEventStore

__all__ = [
    "EventStore",
    "BookingStore",
    "AssetStore",
    "ConnectionCache",
    "MongoEventStore",
    "MongoBookingStore",
    "CloudinaryAssetStore",
]
