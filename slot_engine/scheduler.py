"""Availability engine: bookable slots for a resource on a given day."""

import logging
from datetime import date, datetime, timedelta
from typing import Iterable, Optional

from slot_engine.conflicts import ExceptionResolutionStrategy, exceptions_active_on
from slot_engine.durations import slot_span_minutes, slots_per_session, token_duration
from slot_engine.recurrence import (
    active_templates,
    distinct_days_of_week,
    select_applicable_availabilities,
)
from slot_engine.schema import (
    AvailabilitySlotType,
    AvailabilitySummary,
    HeatmapDay,
    ResourceSchedule,
    ScheduleAvailability,
    SlotGroup,
    VirtualSlot,
)
from slot_engine.slots import generate_appointment_slots
from slot_engine.timeutils import format_time_short, parse_time

logger = logging.getLogger(__name__)

MAX_HEATMAP_DAYS = 366


def _merge_slots(slots: list[VirtualSlot]) -> list[VirtualSlot]:
    """Sort by start time and drop available slots overlapping one already kept."""
    slots.sort(key=lambda s: (s.start_time, s.end_time))
    merged: list[VirtualSlot] = []
    last_end = None
    for slot in slots:
        if not slot.is_available:
            merged.append(slot)
            continue
        if last_end is not None and slot.start_time < last_end:
            logger.debug(
                "Skipping slot %s-%s of %r: overlaps an earlier slot",
                slot.start_time,
                slot.end_time,
                slot.availability_name,
            )
            continue
        merged.append(slot)
        last_end = slot.end_time
    return merged


def get_bookable_slots(
    resource: ResourceSchedule,
    on: date,
    strategy: Optional[ExceptionResolutionStrategy] = None,
    include_unavailable: bool = False,
) -> list[VirtualSlot]:
    """
    Compute bookable slots for a resource on one date.

    Only templates valid on the date contribute, and only their appointment
    availabilities with a window on the date's weekday. Exceptions whose date
    range covers the date remove every slot they overlap. The result is ordered
    by start time and never contains two overlapping available slots.
    Malformed input raises SchedulingError; an empty list means nothing is bookable.
    """
    availabilities = [
        availability
        for template in active_templates(resource.templates, on)
        for availability in template.availabilities
    ]
    applicable = select_applicable_availabilities(availabilities, on)
    exceptions = exceptions_active_on(resource.exceptions, on)

    candidates: list[VirtualSlot] = []
    for availability in applicable:
        if availability.slot_type != AvailabilitySlotType.APPOINTMENT:
            continue
        candidates.extend(
            generate_appointment_slots(
                availability,
                exceptions,
                on,
                strategy=strategy,
                include_unavailable=include_unavailable,
            )
        )

    slots = _merge_slots(candidates)
    logger.debug(
        "Resource %s/%s on %s: %d availabilities, %d exceptions, %d slots",
        resource.resource_type.value,
        resource.resource_id,
        on.isoformat(),
        len(applicable),
        len(exceptions),
        len(slots),
    )
    return slots


def describe_availability_window(availability: ScheduleAvailability) -> str:
    """Short summary of the first window, e.g. '09:00 - 17:00'."""
    window = availability.availability[0]
    return f"{format_time_short(window.start_time)} - {format_time_short(window.end_time)}"


def summarize_availability(availability: ScheduleAvailability) -> AvailabilitySummary:
    """
    Window, weekdays and slot sizing of an availability, as shown next to a schedule.
    Slot counts use the first window.
    """
    window = describe_availability_window(availability)
    summary = AvailabilitySummary(
        availability_name=availability.name,
        slot_type=availability.slot_type,
        days_of_week=sorted(distinct_days_of_week([availability])),
        window=window,
    )
    if availability.slot_type != AvailabilitySlotType.APPOINTMENT:
        return summary

    first = availability.availability[0]
    size = availability.slot_size_in_minutes
    tokens = 1 if availability.tokens_per_slot is None else availability.tokens_per_slot
    count = slots_per_session(first.start_time, first.end_time, size)
    # Validates tokens even when no slot fits.
    token_duration(size, tokens)
    token_minutes = None
    if count:
        slot_start = datetime.combine(date.min, parse_time(first.start_time))
        slot_end = slot_start + timedelta(minutes=size)
        token_minutes = slot_span_minutes(slot_start.time(), slot_end.time(), tokens)
    return summary.model_copy(
        update={
            "slot_size_in_minutes": size,
            "tokens_per_slot": tokens,
            "slots_per_session": count,
            "token_minutes": token_minutes,
        }
    )


def summarize_schedule(
    resource: ResourceSchedule,
    on: Optional[date] = None,
) -> list[AvailabilitySummary]:
    """Summaries of every availability, limited to templates valid on `on` when given."""
    templates = active_templates(resource.templates, on) if on else resource.templates
    return [
        summarize_availability(availability)
        for template in templates
        for availability in template.availabilities
    ]


def group_slots_by_availability(slots: Iterable[VirtualSlot]) -> list[SlotGroup]:
    """Group slots by availability name, in order of first appearance."""
    groups: dict[str, list[VirtualSlot]] = {}
    for slot in slots:
        groups.setdefault(slot.availability_name, []).append(slot)
    return [SlotGroup(availability_name=name, slots=items) for name, items in groups.items()]


def availability_heatmap(
    resource: ResourceSchedule,
    from_date: date,
    to_date: date,
) -> dict[str, HeatmapDay]:
    """
    Bookable slot and token counts per date between from_date and to_date inclusive.
    Returns dict keyed by YYYY-MM-DD.
    """
    if from_date > to_date:
        raise ValueError(f"from_date {from_date} is after to_date {to_date}")
    if (to_date - from_date).days + 1 > MAX_HEATMAP_DAYS:
        raise ValueError(f"Heatmap range is limited to {MAX_HEATMAP_DAYS} days")

    result: dict[str, HeatmapDay] = {}
    current = from_date
    while current <= to_date:
        slots = get_bookable_slots(resource, current)
        result[current.isoformat()] = HeatmapDay(
            total_slots=len(slots),
            total_tokens=sum(s.tokens_per_slot for s in slots),
        )
        current += timedelta(days=1)
    return result
