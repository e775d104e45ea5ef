"""Walk appointment availabilities in fixed-size steps to build candidate slots."""

import logging
from datetime import date, timedelta
from typing import Optional, Sequence

from slot_engine.conflicts import DropConflictingSlots, ExceptionResolutionStrategy
from slot_engine.durations import token_duration
from slot_engine.errors import InvalidSlotSize, InvalidTokenCount
from slot_engine.schema import (
    AvailabilitySlotType,
    AvailabilityWindow,
    ScheduleAvailability,
    ScheduleException,
    VirtualSlot,
)
from slot_engine.timeutils import parse_time_of_day, weekday_index

logger = logging.getLogger(__name__)

MINUTES_PER_DAY = 24 * 60


def _windows_for_day(
    availability: ScheduleAvailability,
    reference_date: date,
) -> list[AvailabilityWindow]:
    """Windows on the reference date's weekday, else the first window."""
    weekday = weekday_index(reference_date)
    matching = [w for w in availability.availability if w.day_of_week == weekday]
    return matching or availability.availability[:1]


def _checked_slot_size(availability: ScheduleAvailability) -> int:
    size = availability.slot_size_in_minutes
    if size is None or size <= 0:
        raise InvalidSlotSize(size)
    return size


def _checked_tokens(availability: ScheduleAvailability) -> int:
    tokens = availability.tokens_per_slot
    if tokens is None:
        return 1
    if tokens < 1:
        raise InvalidTokenCount(tokens)
    return tokens


def generate_appointment_slots(
    availability: ScheduleAvailability,
    exceptions: Sequence[ScheduleException],
    reference_date: date,
    strategy: Optional[ExceptionResolutionStrategy] = None,
    include_unavailable: bool = False,
) -> list[VirtualSlot]:
    """
    Split an appointment availability into slot_size_in_minutes slots on reference_date.

    Slots are [t, t + size) from the window start while they fit inside the window.
    Each slot is passed through the resolution strategy (whole-slot drop by default);
    slots it marks unavailable are left out unless include_unavailable is set.
    Session kinds (open/closed) produce no slots. An empty or inverted window
    produces no slots, as does a slot size longer than a day; a non-positive
    slot size raises InvalidSlotSize.
    """
    if availability.slot_type != AvailabilitySlotType.APPOINTMENT:
        return []

    size_minutes = _checked_slot_size(availability)
    tokens = _checked_tokens(availability)
    if size_minutes > MINUTES_PER_DAY:
        # Windows never span midnight, so the slot cannot fit.
        return []
    slot_size = timedelta(minutes=size_minutes)
    minutes_per_token = token_duration(size_minutes, tokens)
    strategy = strategy or DropConflictingSlots()

    slots: list[VirtualSlot] = []
    for window in _windows_for_day(availability, reference_date):
        window_start = parse_time_of_day(window.start_time, reference_date)
        window_end = parse_time_of_day(window.end_time, reference_date)

        slot_start = window_start
        while window_end - slot_start >= slot_size:
            slot_end = slot_start + slot_size
            candidate = VirtualSlot(
                slot_date=reference_date,
                start_time=slot_start.time(),
                end_time=slot_end.time(),
                availability_name=availability.name,
                tokens_per_slot=tokens,
                token_minutes=minutes_per_token,
            )
            resolved = strategy.resolve(candidate, exceptions, reference_date)
            if resolved.is_available or include_unavailable:
                slots.append(resolved)
            slot_start = slot_end

    slots.sort(key=lambda s: s.start_time)
    logger.debug(
        "Generated %d slots for availability %r on %s",
        len(slots),
        availability.name,
        reference_date.isoformat(),
    )
    return slots
