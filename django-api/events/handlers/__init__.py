from events.handlers.views import (
    BookingCreateView,
    BookingListView,
    EventDetailView,
    EventListView,
)

__all__ = [
    "EventListView",
    "EventDetailView",
    "BookingListView",
    "BookingCreateView",
]
