"""Errors raised by the slot engine."""


class SchedulingError(ValueError):
    """Base class for malformed schedule input."""


class InvalidTimeFormat(SchedulingError):
    """A time-of-day value is not HH:MM or HH:MM:SS."""

    def __init__(self, value: object) -> None:
        self.value = value
        super().__init__(f"Invalid time of day {value!r}, expected HH:MM or HH:MM:SS")


class InvalidSlotSize(SchedulingError):
    """Slot size is missing or not a positive number of minutes."""

    def __init__(self, value: object) -> None:
        self.value = value
        super().__init__(f"Invalid slot size {value!r}, expected a positive number of minutes")


class InvalidTokenCount(SchedulingError):
    """Tokens per slot is missing or below one."""

    def __init__(self, value: object) -> None:
        self.value = value
        super().__init__(f"Invalid tokens per slot {value!r}, expected at least 1")
