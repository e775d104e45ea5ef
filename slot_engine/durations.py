"""Session slot counts and per-token durations."""

import math
from datetime import date
from typing import Optional

from slot_engine.errors import InvalidSlotSize, InvalidTokenCount
from slot_engine.timeutils import TimeValue, duration_minutes, parse_time_of_day

# Both ends of a span are anchored on the same day.
_SPAN_ANCHOR = date(2000, 1, 3)


def slots_per_session(
    start_time: TimeValue,
    end_time: TimeValue,
    slot_size_minutes: Optional[int],
) -> Optional[int]:
    """Number of whole slots between two times, or None if it cannot be computed."""
    if slot_size_minutes is None or slot_size_minutes <= 0:
        raise InvalidSlotSize(slot_size_minutes)
    duration = duration_minutes(start_time, end_time)
    if duration is None:
        return None
    count = math.floor(duration / slot_size_minutes)
    if count < 0:
        return None
    return count


def token_duration(slot_size_minutes: float, tokens_per_slot: int) -> float:
    """Minutes per token when a slot is shared by tokens_per_slot bookings. Not rounded."""
    if slot_size_minutes <= 0:
        raise InvalidSlotSize(slot_size_minutes)
    if tokens_per_slot < 1:
        raise InvalidTokenCount(tokens_per_slot)
    return slot_size_minutes / tokens_per_slot


def slot_span_minutes(
    start_time: TimeValue,
    end_time: TimeValue,
    num_slots: int = 1,
) -> float:
    """
    Minutes between two times divided by num_slots, rounded to 2 decimals.
    For display only; compute with unrounded values.
    """
    if num_slots < 1:
        raise ValueError(f"num_slots must be at least 1, got {num_slots}")
    start = parse_time_of_day(start_time, _SPAN_ANCHOR)
    end = parse_time_of_day(end_time, _SPAN_ANCHOR)
    minutes = (end - start).total_seconds() / 60
    return round(minutes / num_slots, 2)
