"""Unit tests for strict ISO 8601 timestamp validation."""

import pytest

from gitlog_export.errors import InvalidTimestampError, RecordParseError
from gitlog_export.timestamps import Timestamp, is_valid_timestamp


class TestAcceptedTimestamps:
    """Timestamps in the extended profile with an explicit offset."""

    @pytest.mark.parametrize(
        "text",
        [
            "2024-02-29T10:00:00Z",
            "2024-01-01T10:00:00+05:30",
            "2021-05-01T12:00:00+00:00",
            "1999-12-31T23:59:59-08:00",
            "2000-02-29T00:00:00Z",
            "1600-02-29T00:00:00Z",
            "2023-04-30T00:00:00Z",
            "2023-01-31T00:00:00Z",
        ],
    )
    def test_valid_timestamp_is_accepted(self, text):
        assert is_valid_timestamp(text)
        assert Timestamp.parse(text).value == text

    def test_str_returns_exact_input(self):
        """No normalization: the original offset survives."""
        ts = Timestamp.parse("2024-01-01T10:00:00+05:30")
        assert str(ts) == "2024-01-01T10:00:00+05:30"

    def test_timestamps_compare_by_text(self):
        assert Timestamp.parse("2024-01-01T10:00:00Z") == Timestamp(
            "2024-01-01T10:00:00Z"
        )
        assert Timestamp.parse("2024-01-01T10:00:00Z") != Timestamp.parse(
            "2024-01-01T10:00:00+00:00"
        )


class TestRejectedTimestamps:
    """Near misses are rejected, never coerced."""

    @pytest.mark.parametrize(
        "text",
        [
            "2023-02-29T10:00:00Z",  # not a leap year
            "1900-02-29T10:00:00Z",  # divisible by 100, not by 400
            "2024-01-01T10:00:00",  # no offset
            "2024-01-01T10:00:00.123Z",  # fractional seconds
            "2024-04-31T10:00:00Z",  # April has 30 days
            "2024-13-01T10:00:00Z",
            "2024-00-10T10:00:00Z",
            "2024-01-00T10:00:00Z",
            "2024-01-01T24:00:00Z",
            "2024-01-01T10:60:00Z",
            "2024-01-01T10:00:60Z",
            "2024-01-01 10:00:00Z",  # space separator
            "2024-01-01T10:00:00+0530",  # basic offset
            "2024-01-01T10:00:00+05",
            "0999-01-01T10:00:00Z",
            "24-01-01T10:00:00Z",
            "2024-01-01T10:00:00Z\n",
            "２０２４-01-01T10:00:00Z",  # non-ASCII digits
            "",
        ],
    )
    def test_invalid_timestamp_is_rejected(self, text):
        assert not is_valid_timestamp(text)
        with pytest.raises(InvalidTimestampError):
            Timestamp.parse(text)

    def test_error_carries_offending_text(self):
        with pytest.raises(InvalidTimestampError) as exc_info:
            Timestamp.parse("2023-02-29T10:00:00Z")

        assert exc_info.value.value == "2023-02-29T10:00:00Z"
        assert "2023-02-29T10:00:00Z" in str(exc_info.value)

    def test_error_is_a_record_parse_error(self):
        with pytest.raises(RecordParseError):
            Timestamp.parse("yesterday")
