"""Event service - all business logic lives here.

Services:
- Depend only on interfaces (stores)
- Validate domain invariants
- Perform orchestration and error mapping
- Return domain models or domain errors
"""

import logging
from collections.abc import Mapping
from typing import Any

from events.domain import Event, Slug
from events.domain.errors import (
    EventNotFoundError,
    InvalidSlugError,
    MissingImageError,
    MissingSlugError,
)
from events.domain.rules import prepare_event
from events.stores.interfaces import AssetStore, EventStore

logger = logging.getLogger(__name__)

EVENT_IMAGE_FOLDER = "events"


def parse_slug(slug: str | None) -> Slug:
    """Check a slug taken from a URL before it reaches the store.

    Raises:
        MissingSlugError: If the slug is empty.
        InvalidSlugError: If the slug is not lowercase alphanumerics and hyphens.
    """
    if not slug:
        raise MissingSlugError()
    try:
        return Slug(slug)
    except ValueError:
        raise InvalidSlugError(slug) from None


class EventService:
    """Service for event catalog operations."""

    def __init__(self, store: EventStore, assets: AssetStore | None = None) -> None:
        self._store = store
        self._assets = assets

    def list_events(self) -> list[Event]:
        """Return all events, newest first."""
        return self._store.list_events()

    def get_event_by_slug(self, slug: str | None) -> Event:
        """Return an event by slug.

        Raises:
            MissingSlugError: If no slug was given.
            InvalidSlugError: If the slug is malformed.
            EventNotFoundError: If the event does not exist.
        """
        value = parse_slug(slug)
        event = self._store.get_event_by_slug(value)
        if event is None:
            raise EventNotFoundError(value.value)
        return event

    def create_event(self, fields: Mapping[str, Any], image: bytes | None) -> Event:
        """Upload the image, then validate, normalize and store the event.

        Raises:
            MissingImageError: If no image was supplied.
            AssetUploadError: If the image host fails.
            ValidationError: If a field rule or normalization fails.
            DuplicateSlugError: If the derived slug is already taken.
        """
        if image is None:
            raise MissingImageError()
        if self._assets is None:
            raise RuntimeError("EventService was built without an asset store")

        image_url = self._assets.upload(image, folder=EVENT_IMAGE_FOLDER)
        new_event = prepare_event({**fields, "image": image_url})
        event = self._store.create_event(new_event)
        logger.info("Created event %s (%s)", event.slug, event.id)
        return event

    def update_event(self, slug: str | None, changes: Mapping[str, Any]) -> Event:
        """Apply changes to a stored event, re-deriving only what changed.

        Raises:
            MissingSlugError, InvalidSlugError, EventNotFoundError: As get_event_by_slug.
            ValidationError: If a field rule or normalization fails.
            DuplicateSlugError: If a new title collides with another event's slug.
        """
        current = self.get_event_by_slug(slug)
        updated = prepare_event(changes, previous=current)
        event = self._store.update_event(current.id, updated)
        logger.info("Updated event %s (%s)", event.slug, event.id)
        return event
