"""Conflict detection between candidate slots and schedule exceptions."""

from datetime import date, datetime
from typing import Iterable, Protocol, Sequence

from slot_engine.schema import ScheduleException, VirtualSlot
from slot_engine.timeutils import is_date_within_range, parse_time_of_day


def conflicts(
    slot_start: datetime,
    slot_end: datetime,
    exception: ScheduleException,
    reference_date: date,
) -> bool:
    """
    Check if a slot overlaps an exception anchored on reference_date.
    Touching boundaries do not count as overlap.
    """
    exc_start = parse_time_of_day(exception.start_time, reference_date)
    exc_end = parse_time_of_day(exception.end_time, reference_date)
    return exc_start < slot_end and exc_end > slot_start


def exceptions_active_on(
    exceptions: Iterable[ScheduleException],
    on: date,
) -> list[ScheduleException]:
    """Exceptions whose date range contains `on`."""
    return [
        exc for exc in exceptions if is_date_within_range(on, exc.valid_from, exc.valid_to)
    ]


class ExceptionResolutionStrategy(Protocol):
    """Decides what happens to a candidate slot given the day's exceptions."""

    def resolve(
        self,
        slot: VirtualSlot,
        exceptions: Sequence[ScheduleException],
        reference_date: date,
    ) -> VirtualSlot:
        ...


class DropConflictingSlots:
    """
    Default strategy: any overlap makes the whole slot unavailable.
    The slot is never trimmed to the part outside the exception.
    """

    def resolve(
        self,
        slot: VirtualSlot,
        exceptions: Sequence[ScheduleException],
        reference_date: date,
    ) -> VirtualSlot:
        conflicting = [
            exc
            for exc in exceptions
            if conflicts(slot.start_datetime, slot.end_datetime, exc, reference_date)
        ]
        if not conflicting:
            return slot
        return slot.model_copy(
            update={"is_available": False, "conflicting_exceptions": conflicting}
        )
