"""Unit tests for time-of-day parsing and calendar helpers."""

from datetime import date, datetime, time

import pytest

from slot_engine.errors import InvalidTimeFormat
from slot_engine.timeutils import (
    duration_minutes,
    format_time_short,
    from_sunday_based,
    is_date_within_range,
    parse_time,
    parse_time_of_day,
    to_sunday_based,
    weekday_index,
)


def test_parse_time_of_day_anchors_on_reference_date():
    """HH:MM is placed on the given date."""
    assert parse_time_of_day("09:30", date(2025, 2, 3)) == datetime(2025, 2, 3, 9, 30)


def test_parse_time_of_day_with_seconds():
    assert parse_time_of_day("17:45:15", date(2025, 2, 3)) == datetime(2025, 2, 3, 17, 45, 15)


def test_parse_time_accepts_time_objects():
    assert parse_time(time(8, 15)) == time(8, 15)


@pytest.mark.parametrize("value", ["9:00", "24:00", "12:60", "12:00:61", "noon", "", "09-00", None])
def test_parse_time_rejects_malformed_input(value):
    """Malformed times raise instead of producing a bogus value."""
    with pytest.raises(InvalidTimeFormat):
        parse_time(value)


def test_invalid_time_format_is_a_value_error():
    with pytest.raises(ValueError):
        parse_time_of_day("25:00", date(2025, 2, 3))


def test_duration_minutes():
    assert duration_minutes("09:00", "10:15") == 75
    assert duration_minutes("09:00:30", "09:01") == 0.5


def test_duration_minutes_negative_when_end_before_start():
    assert duration_minutes("10:00", "09:00") == -60


def test_duration_minutes_none_when_unparseable():
    """Unparseable input means 'cannot compute', not zero."""
    assert duration_minutes("bad", "10:00") is None
    assert duration_minutes("09:00", "99:99") is None


def test_is_date_within_range_inclusive_boundaries():
    start, end = date(2025, 2, 3), date(2025, 2, 7)
    assert is_date_within_range(date(2025, 2, 3), start, end)
    assert is_date_within_range(date(2025, 2, 5), start, end)
    assert is_date_within_range(date(2025, 2, 7), start, end)
    assert not is_date_within_range(date(2025, 2, 2), start, end)
    assert not is_date_within_range(date(2025, 2, 8), start, end)


def test_is_date_within_range_uses_calendar_days_for_datetimes():
    """A datetime late on the end date is still inside the range."""
    assert is_date_within_range(
        datetime(2025, 2, 7, 23, 59), date(2025, 2, 3), datetime(2025, 2, 7, 0, 0)
    )


def test_is_date_within_range_single_day():
    day = date(2025, 2, 3)
    assert is_date_within_range(day, day, day)


def test_sunday_based_conversion():
    """0=Sunday becomes 6, 1=Monday becomes 0."""
    assert from_sunday_based(0) == 6
    assert from_sunday_based(1) == 0
    assert from_sunday_based(6) == 5
    assert [to_sunday_based(from_sunday_based(d)) for d in range(7)] == list(range(7))


def test_sunday_based_conversion_rejects_out_of_range():
    with pytest.raises(ValueError):
        from_sunday_based(7)
    with pytest.raises(ValueError):
        to_sunday_based(-1)


def test_weekday_index_is_monday_based():
    assert weekday_index(date(2025, 2, 3)) == 0  # Monday
    assert weekday_index(date(2025, 2, 9)) == 6  # Sunday


def test_format_time_short():
    assert format_time_short("09:00:00") == "09:00"
    assert format_time_short(time(17, 5)) == "17:05"
