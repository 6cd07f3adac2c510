"""Serializers for transforming domain models to API responses.

Payload keys follow the stored document names (``_id``, ``createdAt``, ...).
"""

from rest_framework import serializers


class EventSerializer(serializers.Serializer):
    """Serializer for Event domain model."""

    _id = serializers.CharField(source="id.value")
    title = serializers.CharField()
    slug = serializers.CharField(source="slug.value")
    description = serializers.CharField()
    overview = serializers.CharField()
    image = serializers.CharField()
    venue = serializers.CharField()
    location = serializers.CharField()
    date = serializers.CharField()
    time = serializers.CharField()
    mode = serializers.CharField(source="mode.value")
    audience = serializers.CharField()
    agenda = serializers.ListField(child=serializers.CharField())
    organizer = serializers.CharField()
    tags = serializers.ListField(child=serializers.CharField())
    createdAt = serializers.DateTimeField(source="created_at")
    updatedAt = serializers.DateTimeField(source="updated_at")


class BookingSerializer(serializers.Serializer):
    """Serializer for Booking domain model."""

    _id = serializers.CharField(source="id.value")
    eventId = serializers.CharField(source="event_id.value")
    email = serializers.CharField(source="email.value")
    createdAt = serializers.DateTimeField(source="created_at")
    updatedAt = serializers.DateTimeField(source="updated_at")
