"""Unit tests for resource input validation."""

import pytest

from threatlocker_api.fetch.models import ErrorKind
from threatlocker_api.resources.validation import (
    clamp_days,
    clamp_pagination,
    validate_date_range,
    validate_guid,
)


class TestClampPagination:
    """Tests for page parameter normalization."""

    def test_defaults(self) -> None:
        """Test defaults when nothing is given."""
        assert clamp_pagination() == (1, 25)

    @pytest.mark.parametrize(
        ("page", "size", "expected"),
        [
            (3, 50, (3, 50)),
            (0, 25, (1, 25)),
            (-4, 25, (1, 25)),
            (1, 0, (1, 1)),
            (1, 10_000, (1, 500)),
            (2.0, 30.0, (2, 30)),
            ("abc", None, (1, 25)),
        ],
    )
    def test_clamps(
        self, page: float, size: float, expected: tuple[int, int]
    ) -> None:
        """Test clamping to page >= 1 and size in 1..500."""
        assert clamp_pagination(page, size) == expected


class TestClampDays:
    """Tests for look-back window normalization."""

    @pytest.mark.parametrize(
        ("days", "expected"),
        [(None, 7), (1, 1), (0, 1), (365, 365), (366, 365), (2.7, 2), ("x", 7)],
    )
    def test_clamps(self, days: object, expected: int) -> None:
        """Test clamping to 1..365 with a fallback for missing input."""
        assert clamp_days(days, 7) == expected  # type: ignore[arg-type]


class TestValidateGuid:
    """Tests for GUID validation."""

    @pytest.mark.parametrize(
        "value",
        [
            "12345678-1234-1234-1234-123456789abc",
            "12345678-1234-1234-1234-123456789ABC",
        ],
    )
    def test_valid(self, value: str) -> None:
        """Test that GUIDs in either case pass."""
        assert validate_guid(value, "testField") is None

    @pytest.mark.parametrize(
        "value", ["not-a-guid", "", "12345678123412341234123456789abc"]
    )
    def test_invalid(self, value: str) -> None:
        """Test the error returned for non-GUIDs."""
        result = validate_guid(value, "myId")

        assert result is not None
        assert result.error.kind == ErrorKind.BAD_REQUEST
        assert result.error.message == "myId must be a valid GUID"


class TestValidateDateRange:
    """Tests for date range validation."""

    def test_valid_range(self) -> None:
        """Test an ordered range."""
        assert validate_date_range(
            "2025-01-01T00:00:00Z", "2025-01-31T23:59:59Z"
        ) is None

    def test_equal_bounds(self) -> None:
        """Test that equal bounds are allowed."""
        assert validate_date_range(
            "2025-01-01T00:00:00Z", "2025-01-01T00:00:00Z"
        ) is None

    def test_invalid_start(self) -> None:
        """Test an unparseable start date."""
        result = validate_date_range("not-a-date", "2025-01-31T23:59:59Z")

        assert result is not None
        assert result.error.kind == ErrorKind.BAD_REQUEST
        assert "startDate" in result.error.message

    def test_invalid_end(self) -> None:
        """Test an unparseable end date."""
        result = validate_date_range("2025-01-01T00:00:00Z", "not-a-date")

        assert result is not None
        assert "endDate" in result.error.message

    def test_start_after_end(self) -> None:
        """Test an inverted range."""
        result = validate_date_range("2025-02-01T00:00:00Z", "2025-01-01T00:00:00Z")

        assert result is not None
        assert "startDate must not be after endDate" in result.error.message

    def test_mixed_naive_and_aware(self) -> None:
        """Test that naive timestamps compare as UTC."""
        assert validate_date_range(
            "2025-01-01T00:00:00", "2025-01-01T00:00:00Z"
        ) is None
