"""
tests/test_dates.py
Unit tests for ASCII date parsing and the validity window.
"""
from datetime import datetime, timezone

import pytest
from zero_reveal_id.dates import (
    SECONDS_PER_DAY,
    current_date_bytes,
    format_ascii_date,
    is_current_date_valid,
    is_date_valid,
    parse_ascii_date,
)
from zero_reveal_id.errors import InvalidDateError


def ts(year, month, day):
    return int(datetime(year, month, day, tzinfo=timezone.utc).timestamp())


def date_inputs(raw):
    """Public inputs holding a current date in slots 1..8."""
    return [0] + list(raw) + [0] * 18


class TestParseAsciiDate:
    """Tests for the YYYYMMDD parser."""

    def test_valid_date(self):
        assert parse_ascii_date(b"20240115") == ts(2024, 1, 15)

    def test_unbounded_zero_dates(self):
        """All ASCII zeros or NUL bytes mean no bound."""
        assert parse_ascii_date(b"00000000") == 0
        assert parse_ascii_date(b"\x00" * 8) == 0

    def test_wrong_length(self):
        with pytest.raises(InvalidDateError):
            parse_ascii_date(b"2024011")

    def test_non_digits(self):
        with pytest.raises(InvalidDateError):
            parse_ascii_date(b"2024-1-1")

    def test_impossible_date(self):
        with pytest.raises(InvalidDateError):
            parse_ascii_date(b"20240231")

    def test_format_round_trip(self):
        assert format_ascii_date(datetime(2025, 6, 1)) == b"20250601"


class TestValidityWindow:
    """Tests for the freshness window."""

    def test_same_day(self):
        now = ts(2025, 6, 1) + 3600
        assert is_date_valid(ts(2025, 6, 1), 1, now) is True

    def test_future_rejected(self):
        assert is_date_valid(ts(2025, 6, 2), 7, ts(2025, 6, 1)) is False

    def test_window_edge(self):
        """Exactly validity days old is still valid, one second more is not."""
        date = ts(2025, 6, 1)
        assert is_date_valid(date, 7, date + 7 * SECONDS_PER_DAY) is True
        assert is_date_valid(date, 7, date + 7 * SECONDS_PER_DAY + 1) is False


class TestCurrentDateFromPublicInputs:
    """Tests for the embedded current date check."""

    def test_reconstructs_bytes(self):
        assert current_date_bytes(date_inputs(b"20250601")) == b"20250601"

    def test_valid(self):
        now = ts(2025, 6, 3)
        assert is_current_date_valid(date_inputs(b"20250601"), 7, now) is True

    def test_stale(self):
        now = ts(2025, 7, 1)
        assert is_current_date_valid(date_inputs(b"20250601"), 7, now) is False

    def test_malformed_is_false(self):
        """Garbage dates yield False rather than raising."""
        assert is_current_date_valid(date_inputs(b"2025XX01"), 7, ts(2025, 6, 1)) is False

    def test_slot_over_one_byte_is_false(self):
        inputs = date_inputs(b"20250601")
        inputs[3] = 0x1234
        assert is_current_date_valid(inputs, 7, ts(2025, 6, 1)) is False

    def test_unbounded_date_is_false(self):
        assert is_current_date_valid(date_inputs(b"00000000"), 7, ts(2025, 6, 1)) is False

    def test_too_short_is_false(self):
        assert is_current_date_valid([0, 1, 2], 7, ts(2025, 6, 1)) is False
