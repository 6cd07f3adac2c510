"""Validation and normalization rules applied before anything is written.

Every rule here is a pure function of its input. Services call
``prepare_event`` / ``prepare_booking`` and hand the result to a store; the
store never sees un-normalized data.

Field rules are small named validators. Each one inspects a mapping of
cleaned fields and returns a ``FieldError`` or ``None``; ``validate`` runs a
sequence of them in order and collects every failure.
"""

import json
import re
from collections.abc import Callable, Iterable, Mapping
from datetime import datetime
from typing import Any

from dateutil import parser as dateparser

from events.domain.errors import FieldError, ValidationError
from events.domain.models import Event, NewBooking, NewEvent
from events.domain.value_objects import (
    EMAIL_PATTERN,
    Email,
    EventId,
    EventMode,
    Slug,
)

Validator = Callable[[Mapping[str, Any]], FieldError | None]

TIME_PATTERN = re.compile(r"(0?[1-9]|1[0-2]):[0-5][0-9]\s?(AM|PM)", re.IGNORECASE)
OBJECT_ID_PATTERN = re.compile(r"[0-9a-fA-F]{24}")

_DATE_DEFAULTS = (datetime(2000, 1, 1), datetime(2001, 2, 2))

_UNSAFE_SLUG_CHARS = re.compile(r"[^\w\s-]", re.ASCII)
_SLUG_SEPARATORS = re.compile(r"[\s_]+", re.ASCII)
_REPEATED_HYPHENS = re.compile(r"-+")

TEXT_FIELDS = (
    "title",
    "description",
    "overview",
    "image",
    "venue",
    "location",
    "date",
    "time",
    "mode",
    "audience",
    "organizer",
)
LIST_FIELDS = ("agenda", "tags")


# --- Validators ---


def required_text(field: str, message: str) -> Validator:
    def validate(fields: Mapping[str, Any]) -> FieldError | None:
        if not fields.get(field):
            return FieldError(field=field, message=message)
        return None

    validate.__name__ = f"required_{field}"
    return validate


def one_of(field: str, choices: Iterable[str], message: str) -> Validator:
    allowed = frozenset(choices)

    def validate(fields: Mapping[str, Any]) -> FieldError | None:
        value = fields.get(field)
        if value and value not in allowed:
            return FieldError(field=field, message=message)
        return None

    validate.__name__ = f"{field}_one_of"
    return validate


def matches(field: str, pattern: re.Pattern, message: str) -> Validator:
    def validate(fields: Mapping[str, Any]) -> FieldError | None:
        value = fields.get(field)
        if value and not pattern.fullmatch(value):
            return FieldError(field=field, message=message)
        return None

    validate.__name__ = f"{field}_matches"
    return validate


def non_empty_list(field: str, message: str) -> Validator:
    def validate(fields: Mapping[str, Any]) -> FieldError | None:
        if not fields.get(field):
            return FieldError(field=field, message=message)
        return None

    validate.__name__ = f"non_empty_{field}"
    return validate


def validate(rules: Iterable[Validator], fields: Mapping[str, Any]) -> list[FieldError]:
    """Run every rule in order and return the failures, in that same order."""
    failures = []
    for rule in rules:
        failure = rule(fields)
        if failure is not None:
            failures.append(failure)
    return failures


EVENT_RULES: tuple[Validator, ...] = (
    required_text("title", "Title is required"),
    required_text("description", "Description is required"),
    required_text("overview", "Overview is required"),
    required_text("image", "Image is required"),
    required_text("venue", "Venue is required"),
    required_text("location", "Location is required"),
    required_text("date", "Date is required"),
    required_text("time", "Time is required"),
    required_text("mode", "Mode is required"),
    one_of("mode", EventMode.values(), "Mode must be online, offline, or hybrid"),
    required_text("audience", "Audience is required"),
    non_empty_list("agenda", "Agenda must contain at least one item"),
    required_text("organizer", "Organizer is required"),
    non_empty_list("tags", "Tags must contain at least one item"),
)

BOOKING_RULES: tuple[Validator, ...] = (
    required_text("eventId", "Event ID is required"),
    matches("eventId", OBJECT_ID_PATTERN, "Invalid event ID format"),
    required_text("email", "Email is required"),
    matches("email", EMAIL_PATTERN, "Please provide a valid email address"),
)


# --- Normalizers ---


def clean_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def coerce_list(value: Any) -> list[str]:
    """Turn a form or JSON value into a list of non-blank strings.

    Accepts a real list, a JSON array encoded as a string, or a single string
    (kept as a one-item list).
    """
    if value is None:
        return []
    if isinstance(value, str):
        items: Iterable[Any] = [value]
        text = value.strip()
        if text.startswith("["):
            try:
                decoded = json.loads(text)
            except json.JSONDecodeError:
                decoded = None
            if isinstance(decoded, list):
                items = decoded
    else:
        items = value
    cleaned = (clean_text(item) for item in items)
    return [item for item in cleaned if item]


def derive_slug(title: str) -> str:
    """Lowercase the title and reduce it to hyphen-joined ASCII alphanumerics."""
    slug = _UNSAFE_SLUG_CHARS.sub("", title.lower().strip())
    slug = _SLUG_SEPARATORS.sub("-", slug)
    slug = _REPEATED_HYPHENS.sub("-", slug)
    return slug.strip("-")


def normalize_date(raw: str) -> str:
    """Parse a calendar date in any common notation and return it as YYYY-MM-DD.

    dateutil fills missing parts from its default, so parsing against two
    defaults that differ in year, month and day exposes input without a
    complete date (``"12:00"``, ``"June 2025"``).
    """
    try:
        parsed = [
            dateparser.parse(raw, default=default).date() for default in _DATE_DEFAULTS
        ]
    except (ValueError, OverflowError) as exc:
        raise ValidationError.single("date", "Invalid date format") from exc
    if parsed[0] != parsed[1]:
        raise ValidationError.single("date", "Invalid date format")
    return parsed[0].isoformat()


def normalize_time(raw: str) -> str:
    """Check an ``H:MM AM/PM`` time and upper-case its suffix."""
    value = raw.strip()
    if not TIME_PATTERN.fullmatch(value):
        raise ValidationError.single(
            "time", "Time must be in format HH:MM AM/PM (e.g., 9:00 AM)"
        )
    return value[:-2] + value[-2:].upper()


def _slug_for(title: str) -> Slug:
    slug = derive_slug(title)
    if not slug:
        raise ValidationError.single(
            "title", "Title must contain at least one letter or digit"
        )
    return Slug(slug)


def _fields_of(event: Event) -> dict[str, Any]:
    return {
        "title": event.title,
        "description": event.description,
        "overview": event.overview,
        "image": event.image,
        "venue": event.venue,
        "location": event.location,
        "date": event.date,
        "time": event.time,
        "mode": event.mode.value,
        "audience": event.audience,
        "agenda": list(event.agenda),
        "organizer": event.organizer,
        "tags": list(event.tags),
    }


# --- Entry points ---


def prepare_event(fields: Mapping[str, Any], previous: Event | None = None) -> NewEvent:
    """Validate and normalize event fields.

    With ``previous`` the fields are applied as changes on top of the stored
    event, and the slug, date and time are only re-derived when their source
    value changed.

    Raises:
        ValidationError: If any field rule or normalization fails.
    """
    merged = _fields_of(previous) if previous is not None else {}
    merged.update({k: v for k, v in fields.items() if k in TEXT_FIELDS or k in LIST_FIELDS})

    cleaned: dict[str, Any] = {name: clean_text(merged.get(name)) for name in TEXT_FIELDS}
    cleaned.update({name: coerce_list(merged.get(name)) for name in LIST_FIELDS})

    failures = validate(EVENT_RULES, cleaned)
    if failures:
        raise ValidationError(failures)

    if previous is not None and cleaned["title"] == previous.title:
        slug = previous.slug
    else:
        slug = _slug_for(cleaned["title"])

    if previous is not None and cleaned["date"] == previous.date:
        date = previous.date
    else:
        date = normalize_date(cleaned["date"])

    if previous is not None and cleaned["time"] == previous.time:
        time = previous.time
    else:
        time = normalize_time(cleaned["time"])

    return NewEvent(
        title=cleaned["title"],
        slug=slug,
        description=cleaned["description"],
        overview=cleaned["overview"],
        image=cleaned["image"],
        venue=cleaned["venue"],
        location=cleaned["location"],
        date=date,
        time=time,
        mode=EventMode(cleaned["mode"]),
        audience=cleaned["audience"],
        agenda=tuple(cleaned["agenda"]),
        organizer=cleaned["organizer"],
        tags=tuple(cleaned["tags"]),
    )


def prepare_booking(fields: Mapping[str, Any]) -> NewBooking:
    """Validate booking fields; the email is trimmed and lowercased first.

    Raises:
        ValidationError: If the event ID or email is missing or malformed.
    """
    cleaned = {
        "eventId": clean_text(fields.get("eventId")),
        "email": clean_text(fields.get("email")).lower(),
    }
    failures = validate(BOOKING_RULES, cleaned)
    if failures:
        raise ValidationError(failures)
    return NewBooking(
        event_id=EventId.from_string(cleaned["eventId"]),
        email=Email.parse(cleaned["email"]),
    )
