"""HTTP handlers (views) - handle HTTP concerns only.

Handlers:
- Parse requests and validate input format
- Call services for business logic
- Map domain errors to HTTP responses
- Never contain business logic

Failure bodies carry the domain error message under ``error`` so clients can
see why a write was rejected.
"""

import logging
from collections.abc import Mapping
from typing import Any

from rest_framework import status
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from events.domain.errors import (
    DomainError,
    EventNotFoundError,
    InvalidSlugError,
    MissingImageError,
    MissingSlugError,
    ReferencedEventNotFoundError,
    ValidationError,
)
from events.handlers import dependencies
from events.handlers.serializers import BookingSerializer, EventSerializer

logger = logging.getLogger(__name__)

_SLUG_ERRORS = (MissingSlugError, InvalidSlugError)


def _failure(message: str, error: DomainError, status_code: int) -> Response:
    return Response({"message": message, "error": error.message}, status=status_code)


def _form_fields(data: Any) -> dict[str, Any]:
    """Flatten a QueryDict, keeping repeated keys as lists.

    Raises:
        ValidationError: If a JSON body is not an object.
    """
    if not hasattr(data, "getlist"):
        if not isinstance(data, Mapping):
            raise ValidationError.single("body", "Request body must be a JSON object")
        return dict(data)
    fields = {}
    for key in data.keys():
        values = data.getlist(key)
        fields[key] = values if len(values) > 1 else values[0]
    return fields


class EventListView(APIView):
    """Handler for GET and POST /api/events"""

    parser_classes = [MultiPartParser, FormParser, JSONParser]

    def get(self, request: Request) -> Response:
        try:
            events = dependencies.get_event_service().list_events()
        except DomainError as exc:
            logger.exception("Failed to list events")
            return _failure("Failed to get events", exc, status.HTTP_500_INTERNAL_SERVER_ERROR)
        return Response(
            {
                "message": "Events fetched successfully",
                "events": EventSerializer(events, many=True).data,
            },
            status=status.HTTP_200_OK,
        )

    def post(self, request: Request) -> Response:
        image = request.FILES.get("image")
        try:
            fields = _form_fields(request.data)
        except ValidationError as exc:
            return _failure("Invalid request body", exc, status.HTTP_400_BAD_REQUEST)
        fields.pop("image", None)
        try:
            event = dependencies.get_event_service().create_event(
                fields, image.read() if image is not None else None
            )
        except MissingImageError as exc:
            logger.warning("Rejected event without image")
            return Response({"message": exc.message}, status=status.HTTP_400_BAD_REQUEST)
        except DomainError as exc:
            logger.exception("Failed to create event")
            return _failure("Failed to create event", exc, status.HTTP_500_INTERNAL_SERVER_ERROR)
        return Response(
            {
                "message": "Event created successfully",
                "event": EventSerializer(event).data,
            },
            status=status.HTTP_201_CREATED,
        )


class EventDetailView(APIView):
    """Handler for GET /api/events/{slug}"""

    def get(self, request: Request, slug: str) -> Response:
        try:
            event = dependencies.get_event_service().get_event_by_slug(slug)
        except _SLUG_ERRORS as exc:
            logger.warning("Rejected slug %r: %s", slug, exc)
            return Response({"message": exc.message}, status=status.HTTP_400_BAD_REQUEST)
        except EventNotFoundError as exc:
            return Response({"message": exc.message}, status=status.HTTP_404_NOT_FOUND)
        except DomainError as exc:
            logger.exception("Error fetching event by slug %r", slug)
            return _failure("Failed to fetch event", exc, status.HTTP_500_INTERNAL_SERVER_ERROR)
        return Response(
            {
                "message": "Event fetched successfully",
                "event": EventSerializer(event).data,
            },
            status=status.HTTP_200_OK,
        )


class BookingListView(APIView):
    """Handler for GET /api/events/{slug}/bookings"""

    def get(self, request: Request, slug: str) -> Response:
        try:
            bookings = dependencies.get_booking_service().list_bookings_for_event(slug)
        except _SLUG_ERRORS as exc:
            return Response({"message": exc.message}, status=status.HTTP_400_BAD_REQUEST)
        except EventNotFoundError as exc:
            return Response({"message": exc.message}, status=status.HTTP_404_NOT_FOUND)
        except DomainError as exc:
            logger.exception("Failed to list bookings for %r", slug)
            return _failure("Failed to get bookings", exc, status.HTTP_500_INTERNAL_SERVER_ERROR)
        return Response(
            {
                "message": "Bookings fetched successfully",
                "bookings": BookingSerializer(bookings, many=True).data,
            },
            status=status.HTTP_200_OK,
        )


class BookingCreateView(APIView):
    """Handler for POST /api/bookings"""

    parser_classes = [JSONParser, FormParser, MultiPartParser]

    def post(self, request: Request) -> Response:
        try:
            booking = dependencies.get_booking_service().create_booking(
                _form_fields(request.data)
            )
        except ValidationError as exc:
            logger.warning("Rejected booking: %s", exc.message)
            return _failure("Invalid booking", exc, status.HTTP_400_BAD_REQUEST)
        except ReferencedEventNotFoundError as exc:
            return _failure("Event not found", exc, status.HTTP_404_NOT_FOUND)
        except DomainError as exc:
            logger.exception("Failed to create booking")
            return _failure("Failed to create booking", exc, status.HTTP_500_INTERNAL_SERVER_ERROR)
        return Response(
            {
                "message": "Booking created successfully",
                "booking": BookingSerializer(booking).data,
            },
            status=status.HTTP_201_CREATED,
        )
