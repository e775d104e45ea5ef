"""Select which weekly availabilities and templates apply to a date."""

from datetime import date
from typing import Iterable, Optional

from slot_engine.schema import ScheduleAvailability, ScheduleTemplate
from slot_engine.timeutils import is_date_within_range, weekday_index


def select_applicable_availabilities(
    availabilities: Iterable[ScheduleAvailability],
    on: Optional[date] = None,
) -> list[ScheduleAvailability]:
    """
    Availabilities with at least one window on the weekday of `on` (default today).
    Input order is preserved.
    """
    weekday = weekday_index(on or date.today())
    return [
        availability
        for availability in availabilities
        if any(window.day_of_week == weekday for window in availability.availability)
    ]


def distinct_days_of_week(availabilities: Iterable[ScheduleAvailability]) -> set[int]:
    """All weekdays (0=Monday) covered by any window of any availability."""
    return {
        window.day_of_week
        for availability in availabilities
        for window in availability.availability
    }


def active_templates(
    templates: Iterable[ScheduleTemplate],
    on: date,
) -> list[ScheduleTemplate]:
    """Templates whose validity range contains `on`."""
    return [
        template
        for template in templates
        if is_date_within_range(on, template.valid_from, template.valid_to)
    ]
