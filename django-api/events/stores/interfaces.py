"""Store interfaces (repository pattern).

Stores must be swappable and return domain models.
"""

from abc import ABC, abstractmethod

from events.domain import Booking, Event, EventId, NewBooking, NewEvent, Slug


class EventStore(ABC):
    """Interface for event persistence operations."""

    @abstractmethod
    def list_events(self) -> list[Event]:
        """Return all events ordered by created_at descending."""
        ...

    @abstractmethod
    def get_event_by_slug(self, slug: Slug) -> Event | None:
        """Return an event by slug, or None if not found."""
        ...

    @abstractmethod
    def event_exists(self, event_id: EventId) -> bool:
        """Check if an event exists."""
        ...

    @abstractmethod
    def create_event(self, event: NewEvent) -> Event:
        """Persist a new event.

        Raises:
            DuplicateSlugError: If another event already has the slug.
        """
        ...

    @abstractmethod
    def update_event(self, event_id: EventId, event: NewEvent) -> Event:
        """Replace the stored fields of an existing event.

        Raises:
            DuplicateSlugError: If another event already has the slug.
        """
        ...


class BookingStore(ABC):
    """Interface for booking persistence operations."""

    @abstractmethod
    def create_booking(self, booking: NewBooking) -> Booking:
        """Persist a new booking. Does not check the referenced event."""
        ...

    @abstractmethod
    def list_bookings_for_event(self, event_id: EventId) -> list[Booking]:
        """Return bookings for an event, newest first."""
        ...


class AssetStore(ABC):
    """Interface for the external image host."""

    @abstractmethod
    def upload(self, data: bytes, folder: str) -> str:
        """Store the bytes under folder and return their public HTTPS URL.

        Raises:
            AssetUploadError: If the host rejects or fails the upload.
        """
        ...
