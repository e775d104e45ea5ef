"""Time-of-day parsing and calendar helpers. All functions are pure."""

import re
from datetime import date, datetime, time
from typing import Optional, Union

from slot_engine.errors import InvalidTimeFormat

TimeValue = Union[str, time]

_TIME_RE = re.compile(r"^(\d{2}):(\d{2})(?::(\d{2}))?$")

# Any fixed day works for durations between two times of day.
_DURATION_ANCHOR = date(2000, 1, 3)


def parse_time(value: TimeValue) -> time:
    """Parse HH:MM or HH:MM:SS to a time."""
    if isinstance(value, time):
        return value
    if not isinstance(value, str):
        raise InvalidTimeFormat(value)
    match = _TIME_RE.match(value.strip())
    if not match:
        raise InvalidTimeFormat(value)
    hour, minute = int(match.group(1)), int(match.group(2))
    second = int(match.group(3) or 0)
    if hour > 23 or minute > 59 or second > 59:
        raise InvalidTimeFormat(value)
    return time(hour, minute, second)


def parse_time_of_day(value: TimeValue, reference_date: date) -> datetime:
    """Anchor a time of day onto reference_date."""
    return datetime.combine(_as_date(reference_date), parse_time(value))


def duration_minutes(start: TimeValue, end: TimeValue) -> Optional[float]:
    """
    Minutes from start to end, or None when either side does not parse.
    Negative when end is before start.
    """
    try:
        start_dt = parse_time_of_day(start, _DURATION_ANCHOR)
        end_dt = parse_time_of_day(end, _DURATION_ANCHOR)
    except InvalidTimeFormat:
        return None
    return (end_dt - start_dt).total_seconds() / 60


def _as_date(value: Union[date, datetime]) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def is_date_within_range(
    day: Union[date, datetime],
    start: Union[date, datetime],
    end: Union[date, datetime],
) -> bool:
    """True if day falls on or between start and end (calendar days, inclusive)."""
    day, start, end = _as_date(day), _as_date(start), _as_date(end)
    return (start < day < end) or day == start or day == end


def from_sunday_based(day_of_week: int) -> int:
    """Convert a 0=Sunday weekday index to 0=Monday."""
    _check_day_index(day_of_week)
    return (day_of_week + 6) % 7


def to_sunday_based(day_of_week: int) -> int:
    """Convert a 0=Monday weekday index to 0=Sunday."""
    _check_day_index(day_of_week)
    return (day_of_week + 1) % 7


def _check_day_index(day_of_week: int) -> None:
    if not 0 <= day_of_week <= 6:
        raise ValueError(f"Day of week must be in 0..6, got {day_of_week}")


def weekday_index(day: Union[date, datetime]) -> int:
    """Weekday of day with 0=Monday, 6=Sunday."""
    # Python: Monday=0, Sunday=6
    return _as_date(day).weekday()


def format_time_short(value: TimeValue) -> str:
    """Format a time of day as HH:MM."""
    return parse_time(value).strftime("%H:%M")
