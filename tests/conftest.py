"""Pytest configuration and fixtures."""

from datetime import date

import pytest

from slot_engine.schema import (
    AvailabilitySlotType,
    AvailabilityWindow,
    ResourceSchedule,
    ScheduleAvailability,
    ScheduleException,
    ScheduleTemplate,
)


@pytest.fixture
def make_availability():
    """Factory for appointment availabilities (defaults: Mondays 09:00-10:00, 30 min)."""

    def _make(
        start: str = "09:00",
        end: str = "10:00",
        days: tuple[int, ...] = (0,),
        slot_size: int | None = 30,
        tokens: int | None = 1,
        name: str = "Morning OP",
        slot_type: AvailabilitySlotType = AvailabilitySlotType.APPOINTMENT,
    ) -> ScheduleAvailability:
        return ScheduleAvailability(
            name=name,
            availability=[
                AvailabilityWindow(day_of_week=d, start_time=start, end_time=end) for d in days
            ],
            slot_type=slot_type,
            slot_size_in_minutes=slot_size,
            tokens_per_slot=tokens,
        )

    return _make


@pytest.fixture
def make_exception():
    """Factory for exceptions, valid only on Monday 2025-02-03 by default."""

    def _make(
        start: str,
        end: str,
        valid_from: date = date(2025, 2, 3),
        valid_to: date = date(2025, 2, 3),
        reason: str = "Staff meeting",
    ) -> ScheduleException:
        return ScheduleException(
            reason=reason,
            valid_from=valid_from,
            valid_to=valid_to,
            start_time=start,
            end_time=end,
        )

    return _make


@pytest.fixture
def make_schedule():
    """Factory for a resource schedule with one template valid through 2025."""

    def _make(
        availabilities: list[ScheduleAvailability],
        exceptions: list[ScheduleException] | None = None,
        valid_from: date = date(2025, 1, 1),
        valid_to: date = date(2025, 12, 31),
    ) -> ResourceSchedule:
        return ResourceSchedule(
            resource_id="dr-smith",
            templates=[
                ScheduleTemplate(
                    name="Regular OP",
                    valid_from=valid_from,
                    valid_to=valid_to,
                    availabilities=availabilities,
                )
            ],
            exceptions=exceptions or [],
        )

    return _make


@pytest.fixture
def morning_availability(make_availability) -> ScheduleAvailability:
    """09:00-10:00 on Mondays, 30 minute slots."""
    return make_availability()


@pytest.fixture
def weekday_schedule(make_availability, make_exception, make_schedule) -> ResourceSchedule:
    """Mon-Fri 09:00-12:00 in 30 minute slots with 2 tokens, lunch block on Monday."""
    return make_schedule(
        [
            make_availability(
                start="09:00",
                end="12:00",
                days=(0, 1, 2, 3, 4),
                tokens=2,
                name="Weekday OP",
            ),
            make_availability(
                start="14:00",
                end="16:00",
                days=(0, 2),
                slot_size=60,
                tokens=1,
                name="Afternoon OP",
            ),
        ],
        exceptions=[make_exception("10:00", "10:30")],
    )
