"""Booking service: validation plus the referential check against events."""

import logging
from collections.abc import Mapping
from typing import Any

from events.domain import Booking
from events.domain.errors import ReferencedEventNotFoundError, StoreUnavailableError
from events.domain.rules import prepare_booking
from events.services.event_service import EventService
from events.stores.interfaces import BookingStore, EventStore

logger = logging.getLogger(__name__)


class BookingService:
    """Service for booking operations."""

    def __init__(self, events: EventStore, bookings: BookingStore) -> None:
        self._events = events
        self._bookings = bookings

    def create_booking(self, fields: Mapping[str, Any]) -> Booking:
        """Validate a booking and write it if its event exists.

        The event is looked up fresh on every call. Nothing is written when the
        lookup fails or finds nothing.

        Raises:
            ValidationError: If the event ID or email is missing or malformed.
            ReferencedEventNotFoundError: If no event has the given ID.
            StoreUnavailableError: If the event lookup or the write fails.
        """
        booking = prepare_booking(fields)
        try:
            exists = self._events.event_exists(booking.event_id)
        except StoreUnavailableError as exc:
            raise StoreUnavailableError(f"Failed to validate event: {exc.message}") from exc
        if not exists:
            logger.warning("Rejected booking for unknown event %s", booking.event_id)
            raise ReferencedEventNotFoundError(booking.event_id.value)

        created = self._bookings.create_booking(booking)
        logger.info("Created booking %s for event %s", created.id, created.event_id)
        return created

    def list_bookings_for_event(self, slug: str | None) -> list[Booking]:
        """Return bookings for the event at slug, newest first.

        Raises:
            MissingSlugError, InvalidSlugError, EventNotFoundError: As
                EventService.get_event_by_slug.
        """
        event = EventService(self._events).get_event_by_slug(slug)
        return self._bookings.list_bookings_for_event(event.id)
