from django.apps import AppConfig
from django.conf import settings


class EventsConfig(AppConfig):
    name = "events"

    def ready(self) -> None:
        from events.stores import CloudinaryAssetStore, ConnectionCache

        # Nothing connects here; the first request that needs the store does.
        self.connection_cache = ConnectionCache.for_uri(
            settings.MONGODB_URI,
            settings.MONGODB_DB_NAME,
            **settings.MONGODB_OPTIONS,
        )
        self.asset_store = CloudinaryAssetStore(settings.CLOUDINARY)
