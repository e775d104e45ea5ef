"""Pydantic models for schedule records, computed slots and request/response bodies."""

from datetime import date, datetime, time
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class AvailabilitySlotType(str, Enum):
    APPOINTMENT = "appointment"
    OPEN = "open"
    CLOSED = "closed"


class SchedulableResourceType(str, Enum):
    PRACTITIONER = "practitioner"
    LOCATION = "location"
    HEALTHCARE_SERVICE = "healthcare_service"


# --- Schedule records (fetched from the scheduling API) ---


class AvailabilityWindow(BaseModel):
    """One weekly recurrence: a weekday and a time-of-day span."""

    model_config = ConfigDict(frozen=True)

    day_of_week: int = Field(..., ge=0, le=6, description="0=Monday, 6=Sunday")
    start_time: str = Field(..., description="Start time HH:MM or HH:MM:SS")
    end_time: str = Field(..., description="End time HH:MM or HH:MM:SS")


class ScheduleAvailability(BaseModel):
    """A named recurring availability for one resource."""

    id: Optional[str] = None
    name: str
    reason: str = ""
    availability: list[AvailabilityWindow] = Field(..., min_length=1)
    slot_type: AvailabilitySlotType = AvailabilitySlotType.APPOINTMENT
    # Checked by the engine, not here, so bad sizing raises InvalidSlotSize.
    slot_size_in_minutes: Optional[int] = None
    tokens_per_slot: Optional[int] = None


class ScheduleTemplate(BaseModel):
    """A set of availabilities valid between two dates."""

    id: Optional[str] = None
    name: str
    valid_from: date
    valid_to: date
    availabilities: list[ScheduleAvailability] = Field(default_factory=list)


class ScheduleException(BaseModel):
    """A one-off block over a date range and time-of-day range."""

    model_config = ConfigDict(frozen=True)

    id: Optional[str] = None
    reason: str = ""
    valid_from: date
    valid_to: date
    start_time: str = Field(..., description="Start time HH:MM or HH:MM:SS")
    end_time: str = Field(..., description="End time HH:MM or HH:MM:SS")


class ResourceSchedule(BaseModel):
    """Everything needed to compute slots for one schedulable resource."""

    resource_type: SchedulableResourceType = SchedulableResourceType.PRACTITIONER
    resource_id: str
    templates: list[ScheduleTemplate] = Field(default_factory=list)
    exceptions: list[ScheduleException] = Field(default_factory=list)


# --- Engine output ---


class VirtualSlot(BaseModel):
    """A computed, bookable time interval. Never persisted."""

    slot_date: date
    start_time: time
    end_time: time
    is_available: bool = True
    conflicting_exceptions: list[ScheduleException] = Field(default_factory=list)
    availability_name: str = ""
    tokens_per_slot: int = 1
    token_minutes: Optional[float] = Field(default=None, description="Minutes per token, unrounded")

    @property
    def start_datetime(self) -> datetime:
        return datetime.combine(self.slot_date, self.start_time)

    @property
    def end_datetime(self) -> datetime:
        return datetime.combine(self.slot_date, self.end_time)


class SlotGroup(BaseModel):
    availability_name: str
    slots: list[VirtualSlot]


class AvailabilitySummary(BaseModel):
    """Display summary of one availability, e.g. "4 slots of 15 mins, 09:00 - 10:00"."""

    availability_name: str
    slot_type: AvailabilitySlotType
    days_of_week: list[int]
    window: str
    slot_size_in_minutes: Optional[int] = None
    tokens_per_slot: Optional[int] = None
    slots_per_session: Optional[int] = None
    token_minutes: Optional[float] = Field(default=None, description="Rounded to 2 decimals")


class HeatmapDay(BaseModel):
    total_slots: int = 0
    total_tokens: int = 0


# --- Request / Response ---


class SlotsRequest(BaseModel):
    """Request body for POST /slots."""

    schedule: ResourceSchedule
    target_date: date
    include_unavailable: bool = Field(
        default=False,
        description="Also return slots removed by exceptions, flagged unavailable",
    )


class SlotsResponse(BaseModel):
    """Response from the slot endpoints."""

    target_date: date
    slots: list[VirtualSlot] = Field(..., description="Slots ordered by start time")
    groups: list[SlotGroup] = Field(default_factory=list)


class HeatmapRequest(BaseModel):
    """Request body for POST /heatmap."""

    schedule: ResourceSchedule
    from_date: date
    to_date: date


class SummaryRequest(BaseModel):
    """Request body for POST /summary."""

    schedule: ResourceSchedule
    target_date: Optional[date] = Field(
        default=None,
        description="Only templates valid on this date; all templates when omitted",
    )
