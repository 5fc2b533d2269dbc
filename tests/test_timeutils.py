"""Tests for date and time helpers."""

from datetime import datetime, timezone

import pytest

from tripline.services.timeutils import (
    MS_PER_DAY,
    MS_PER_HOUR,
    clock_time,
    dates_between,
    day_begin_timestamp,
    format_as_ymd,
    format_duration,
    format_human_datetime,
    format_iso_with_tz,
    format_tz,
    local_hour,
    local_to_timestamp,
)


def utc_ms(*args) -> int:
    return int(datetime(*args, tzinfo=timezone.utc).timestamp()) * 1000


class TestFormatTz:
    """Tests for format_tz."""

    @pytest.mark.parametrize("offset, expected", [(0, "Z"), (3, "+03:00"), (-10, "-10:00"), (12, "+12:00")])
    def test_format(self, offset, expected):
        assert format_tz(offset) == expected


class TestLocalCalendar:
    """Tests for local date bucketing."""

    def test_same_instant_different_dates(self):
        """15:30 UTC is still June 1 in Paris but already June 2 in Tokyo."""
        ts = utc_ms(2024, 6, 1, 15, 30)
        assert format_as_ymd(ts, 1) == "2024-06-01"
        assert format_as_ymd(ts, 9) == "2024-06-02"
        assert format_as_ymd(ts, -10) == "2024-06-01"

    def test_local_hour(self):
        ts = utc_ms(2024, 6, 1, 8)
        assert local_hour(ts, 1) == 9
        assert local_hour(ts, -10) == 22

    def test_format_iso_with_tz(self):
        assert format_iso_with_tz(utc_ms(2024, 6, 1, 20), 9) == "2024-06-02T05:00"

    def test_day_begin_from_string(self):
        assert day_begin_timestamp("2024-06-01", 9) == utc_ms(2024, 6, 1) - 9 * MS_PER_HOUR
        assert day_begin_timestamp("2024-06-01", -5) == utc_ms(2024, 6, 1, 5)

    def test_day_begin_from_timestamp(self):
        """A timestamp is snapped to local midnight of its local date."""
        ts = utc_ms(2024, 6, 1, 20)
        assert day_begin_timestamp(ts, 9) == utc_ms(2024, 6, 1, 15)
        assert day_begin_timestamp(ts, 0) == utc_ms(2024, 6, 1)

    def test_dates_between_inclusive(self):
        begin = utc_ms(2024, 5, 30, 23)
        end = utc_ms(2024, 6, 2, 14, 59)
        assert dates_between(begin, end, 1) == ["2024-05-31", "2024-06-01", "2024-06-02"]

    def test_dates_between_single_day(self):
        ts = utc_ms(2024, 6, 1, 12)
        assert dates_between(ts, ts, 0) == ["2024-06-01"]


class TestParsing:
    """Tests for ISO string conversion."""

    def test_naive_string_uses_offset(self):
        assert local_to_timestamp("2024-06-01T09:00", 1) == utc_ms(2024, 6, 1, 8)
        assert local_to_timestamp("2024-06-02T05:00:00.000", 9) == utc_ms(2024, 6, 1, 20)

    def test_explicit_offset_wins(self):
        assert local_to_timestamp("2024-06-01T09:00Z", 5) == utc_ms(2024, 6, 1, 9)
        assert local_to_timestamp("2024-06-01T09:00+02:00", 5) == utc_ms(2024, 6, 1, 7)

    def test_bare_date(self):
        assert local_to_timestamp("2024-06-01", 0) == utc_ms(2024, 6, 1)

    def test_invalid(self):
        with pytest.raises(ValueError):
            local_to_timestamp("next tuesday", 0)

    def test_clock_time(self):
        assert clock_time("2024-06-01T09:05:00") == "09:05"
        assert clock_time("2024-06-01 18:30") == "18:30"
        assert clock_time("2024-06-01") == "00:00"

    def test_format_human_datetime(self):
        assert format_human_datetime("2025-01-31T20:52") == "31.01.2025 20:52"
        assert format_human_datetime("") == ""


class TestFormatDuration:
    """Tests for format_duration."""

    def test_hours_and_minutes(self):
        assert format_duration(0, 5 * MS_PER_HOUR + 30 * 60_000) == "5h 30m"

    def test_whole_hours(self):
        assert format_duration(0, 12 * MS_PER_HOUR) == "12h"

    def test_minutes_only(self):
        assert format_duration(0, 45 * 60_000) == "45m"

    def test_zero(self):
        assert format_duration(1000, 1000) == "0m"

    def test_multiple_days(self):
        assert format_duration(0, 2 * MS_PER_DAY + MS_PER_HOUR) == "49h"
