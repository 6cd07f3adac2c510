from events.domain.models import Booking, Event, NewBooking, NewEvent
from events.domain.value_objects import BookingId, Email, EventId, EventMode, Slug

__all__ = [
    "Event",
    "NewEvent",
    "Booking",
    "NewBooking",
    "EventId",
    "BookingId",
    "Slug",
    "Email",
    "EventMode",
]
