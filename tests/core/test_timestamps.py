import struct
from datetime import datetime, timedelta, timezone

from core.timestamps import (
    FILETIME_EPOCH,
    datetime_to_filetime,
    filetime_to_datetime,
    format_datetime,
    format_duration,
    webkit_to_datetime,
)


class TestFiletimeConversion:
    """Tests for Windows FILETIME to datetime conversion."""

    def test_filetime_int_to_datetime(self):
        """Known FILETIME: 2024-07-29 22:09:26 UTC."""
        result = filetime_to_datetime(133667645663557812)

        assert result is not None
        assert (result.year, result.month, result.day) == (2024, 7, 29)
        assert (result.hour, result.minute, result.second) == (22, 9, 26)
        assert result.tzinfo == timezone.utc

    def test_filetime_bytes_to_datetime(self):
        """Little-endian bytes decode the same as the integer."""
        raw = struct.pack("<Q", 133667645663557812)
        assert filetime_to_datetime(raw) == filetime_to_datetime(133667645663557812)

    def test_filetime_zero_is_epoch(self):
        """Zero maps to 1601-01-01; callers decide whether that means 'never'."""
        assert filetime_to_datetime(0) == FILETIME_EPOCH

    def test_negative_filetime_returns_none(self):
        assert filetime_to_datetime(-1) is None

    def test_invalid_bytes_length_returns_none(self):
        assert filetime_to_datetime(b"\x00\x00\x00\x00") is None

    def test_out_of_range_returns_none(self):
        assert filetime_to_datetime(0x7FFFFFFFFFFFFFFF) is None

    def test_datetime_to_filetime_inverse(self):
        dt = datetime(2023, 4, 25, 16, 46, 38, tzinfo=timezone.utc)
        assert filetime_to_datetime(datetime_to_filetime(dt)) == dt

    def test_naive_datetime_treated_as_utc(self):
        naive = datetime(2020, 1, 1, 12, 0, 0)
        aware = naive.replace(tzinfo=timezone.utc)
        assert datetime_to_filetime(naive) == datetime_to_filetime(aware)


class TestWebkitConversion:
    """Tests for WebKit (Chromium) timestamps."""

    def test_webkit_to_datetime(self):
        dt = datetime(2022, 6, 1, 8, 30, tzinfo=timezone.utc)
        microseconds = datetime_to_filetime(dt) // 10

        assert webkit_to_datetime(microseconds) == dt

    def test_webkit_zero_returns_none(self):
        assert webkit_to_datetime(0) is None

    def test_webkit_negative_returns_none(self):
        assert webkit_to_datetime(-100) is None


class TestFormatting:
    """Tests for display helpers."""

    def test_format_datetime(self):
        dt = datetime(2024, 7, 29, 22, 9, 26, tzinfo=timezone.utc)
        assert format_datetime(dt) == "2024-07-29 22:09:26"
        assert format_datetime(dt, "%Y") == "2024"

    def test_format_datetime_none(self):
        assert format_datetime(None) == ""

    def test_format_duration_seconds(self):
        assert format_duration(90061) == "1d 1h 1m 1s"

    def test_format_duration_timedelta(self):
        assert format_duration(timedelta(minutes=2, seconds=5)) == "2m 5s"

    def test_format_duration_zero_and_negative(self):
        assert format_duration(0) == "0s"
        assert format_duration(-3) == "0s"

    def test_sub_second_duration_rounds_down(self):
        assert format_duration(timedelta(milliseconds=1500)) == "1s"
