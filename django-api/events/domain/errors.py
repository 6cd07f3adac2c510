"""Domain error codes for the events module."""

from dataclasses import dataclass
from enum import Enum


class ErrorCode(Enum):
    """Domain error codes."""

    EVENT_NOT_FOUND = "EVENT_NOT_FOUND"
    REFERENCED_EVENT_NOT_FOUND = "REFERENCED_EVENT_NOT_FOUND"
    MISSING_SLUG = "MISSING_SLUG"
    INVALID_SLUG = "INVALID_SLUG"
    MISSING_IMAGE = "MISSING_IMAGE"
    VALIDATION_FAILED = "VALIDATION_FAILED"
    DUPLICATE_SLUG = "DUPLICATE_SLUG"
    STORE_UNAVAILABLE = "STORE_UNAVAILABLE"
    ASSET_UPLOAD_FAILED = "ASSET_UPLOAD_FAILED"


@dataclass(eq=False)
class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode
    message: str

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


@dataclass(frozen=True)
class FieldError:
    """A single failed field rule."""

    field: str
    message: str


class ValidationError(DomainError):
    """Raised when one or more field rules fail.

    ``failures`` keeps the order in which the rules were evaluated.
    """

    def __init__(self, failures: list[FieldError] | tuple[FieldError, ...]) -> None:
        failures = tuple(failures)
        super().__init__(
            code=ErrorCode.VALIDATION_FAILED,
            message="; ".join(failure.message for failure in failures),
        )
        self.failures = failures

    @classmethod
    def single(cls, field: str, message: str) -> "ValidationError":
        return cls([FieldError(field=field, message=message)])


class EventNotFoundError(DomainError):
    """Raised when no event exists for a slug."""

    def __init__(self, slug: str) -> None:
        super().__init__(
            code=ErrorCode.EVENT_NOT_FOUND,
            message=f"Event with slug '{slug}' not found",
        )
        self.slug = slug


class ReferencedEventNotFoundError(DomainError):
    """Raised when a booking points at an event that does not exist."""

    def __init__(self, event_id: str) -> None:
        super().__init__(
            code=ErrorCode.REFERENCED_EVENT_NOT_FOUND,
            message=f"Event with ID {event_id} does not exist. Cannot create booking.",
        )
        self.event_id = event_id


class MissingSlugError(DomainError):
    """Raised when a slug lookup is attempted without a slug."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.MISSING_SLUG,
            message="Slug parameter is required",
        )


class InvalidSlugError(DomainError):
    """Raised when a slug is not lowercase alphanumerics joined by hyphens."""

    def __init__(self, slug: str) -> None:
        super().__init__(
            code=ErrorCode.INVALID_SLUG,
            message=(
                "Invalid slug format. Slug must contain only lowercase letters, "
                "numbers, and hyphens"
            ),
        )
        self.slug = slug


class MissingImageError(DomainError):
    """Raised when an event is submitted without an image file."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.MISSING_IMAGE,
            message="Image is required",
        )


class DuplicateSlugError(DomainError):
    """Raised when the store rejects an event because its slug is taken."""

    def __init__(self, slug: str) -> None:
        super().__init__(
            code=ErrorCode.DUPLICATE_SLUG,
            message=f"An event with slug '{slug}' already exists",
        )
        self.slug = slug


class StoreUnavailableError(DomainError):
    """Raised when the document store cannot be reached or a query fails."""

    def __init__(self, detail: str) -> None:
        super().__init__(
            code=ErrorCode.STORE_UNAVAILABLE,
            message=detail,
        )


class AssetUploadError(DomainError):
    """Raised when the asset host rejects or fails an upload."""

    def __init__(self, detail: str) -> None:
        super().__init__(
            code=ErrorCode.ASSET_UPLOAD_FAILED,
            message=detail,
        )
