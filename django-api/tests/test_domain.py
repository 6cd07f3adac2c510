"""Unit tests for domain primitives.

These test invariants that must hold at construction time.
Run with: pytest tests/test_domain.py -v
"""

import pytest

from events.domain import Email, EventId, EventMode, Slug
from events.domain.errors import ErrorCode, FieldError, ValidationError


class TestEventId:
    """Tests for EventId value object."""

    def test_from_string_valid_object_id(self):
        """EventId.from_string accepts a 24-hex ObjectId and trims it."""
        event_id = EventId.from_string(" 65a1f0c2e4b0a1b2c3d4e5f6 ")
        assert event_id.value == "65a1f0c2e4b0a1b2c3d4e5f6"
        assert str(event_id) == "65a1f0c2e4b0a1b2c3d4e5f6"

    def test_from_string_invalid_object_id(self):
        """EventId.from_string raises ValueError for anything else."""
        with pytest.raises(ValueError):
            EventId.from_string("not-an-id")


class TestSlug:
    """Tests for Slug value object."""

    @pytest.mark.parametrize("value", ["react-summit-2025", "a", "2025", "a-b-c"])
    def test_accepts_url_safe_values(self, value):
        assert Slug(value).value == value

    @pytest.mark.parametrize(
        "value",
        [
            "",
            "My-Slug!",
            "double--hyphen",
            "-leading",
            "trailing-",
            "under_score",
            "react-summit\n",
        ],
    )
    def test_rejects_malformed_values(self, value):
        with pytest.raises(ValueError):
            Slug(value)


class TestEmail:
    """Tests for Email value object."""

    def test_parse_trims_and_lowercases(self):
        assert Email.parse("  Foo@Bar.com ").value == "foo@bar.com"

    @pytest.mark.parametrize("value", ["plainaddress", "@bar.com", "foo@", "foo@-bar.com"])
    def test_rejects_malformed_addresses(self, value):
        with pytest.raises(ValueError, match="valid email"):
            Email.parse(value)

    def test_rejects_trailing_newline(self):
        with pytest.raises(ValueError, match="valid email"):
            Email("foo@bar.com\n")


class TestEventMode:
    def test_values_lists_every_mode(self):
        assert EventMode.values() == ("online", "offline", "hybrid")


class TestValidationError:
    def test_keeps_failure_order_and_joins_messages(self):
        error = ValidationError(
            [FieldError("title", "Title is required"), FieldError("tags", "Tags missing")]
        )
        assert error.code is ErrorCode.VALIDATION_FAILED
        assert [f.field for f in error.failures] == ["title", "tags"]
        assert error.message == "Title is required; Tags missing"
        assert str(error) == "VALIDATION_FAILED: Title is required; Tags missing"
