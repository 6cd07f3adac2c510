"""Domain primitives that enforce validity at creation time."""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Self

from bson import ObjectId

SLUG_PATTERN = re.compile(r"[a-z0-9]+(?:-[a-z0-9]+)*")

EMAIL_PATTERN = re.compile(
    r"[a-zA-Z0-9.!#$%&'*+/=?^_`{|}~-]+@[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?"
    r"(?:\.[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?)*"
)


@dataclass(frozen=True)
class EventId:
    """Unique identifier for an Event."""

    value: str

    def __post_init__(self) -> None:
        if not ObjectId.is_valid(self.value):
            raise ValueError(f"Invalid event ID: {self.value!r}")

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=value.strip())

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class BookingId:
    """Unique identifier for a Booking."""

    value: str

    def __post_init__(self) -> None:
        if not ObjectId.is_valid(self.value):
            raise ValueError(f"Invalid booking ID: {self.value!r}")

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Slug:
    """URL-safe event identifier: lowercase alphanumerics joined by single hyphens."""

    value: str

    def __post_init__(self) -> None:
        if not SLUG_PATTERN.fullmatch(self.value):
            raise ValueError(f"Invalid slug: {self.value!r}")

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Email:
    """Lowercased, trimmed email address."""

    value: str

    def __post_init__(self) -> None:
        if not EMAIL_PATTERN.fullmatch(self.value):
            raise ValueError("Please provide a valid email address")

    @classmethod
    def parse(cls, raw: str) -> Self:
        return cls(value=raw.strip().lower())

    def __str__(self) -> str:
        return self.value


class EventMode(Enum):
    """How attendees take part in an event."""

    ONLINE = "online"
    OFFLINE = "offline"
    HYBRID = "hybrid"

    @classmethod
    def values(cls) -> tuple[str, ...]:
        return tuple(mode.value for mode in cls)
