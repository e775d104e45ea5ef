"""FastAPI application exposing the slot engine."""

import logging
from datetime import date

import httpx
from fastapi import FastAPI, HTTPException, Query
from pydantic import ValidationError

from slot_engine.client import ScheduleClient
from slot_engine.errors import SchedulingError
from slot_engine.scheduler import (
    availability_heatmap,
    get_bookable_slots,
    group_slots_by_availability,
    summarize_schedule,
)
from slot_engine.schema import (
    AvailabilitySummary,
    HeatmapDay,
    HeatmapRequest,
    ResourceSchedule,
    SchedulableResourceType,
    SlotsRequest,
    SlotsResponse,
    SummaryRequest,
)

logger = logging.getLogger(__name__)

app = FastAPI(title="Slot Engine", version="0.1.0")


def _slots_response(
    schedule: ResourceSchedule,
    target_date: date,
    include_unavailable: bool = False,
) -> SlotsResponse:
    # Bad schedule data is a 422 so the UI can tell it apart from "no slots".
    try:
        slots = get_bookable_slots(
            schedule, target_date, include_unavailable=include_unavailable
        )
    except SchedulingError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return SlotsResponse(
        target_date=target_date,
        slots=slots,
        groups=group_slots_by_availability(s for s in slots if s.is_available),
    )


@app.post("/slots", response_model=SlotsResponse)
def slots(request: SlotsRequest) -> SlotsResponse:
    """Compute bookable slots from a schedule supplied in the request body."""
    return _slots_response(
        request.schedule, request.target_date, request.include_unavailable
    )


@app.post("/heatmap", response_model=dict[str, HeatmapDay])
def heatmap(request: HeatmapRequest) -> dict[str, HeatmapDay]:
    """Bookable slot counts per day over a date range."""
    try:
        return availability_heatmap(request.schedule, request.from_date, request.to_date)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))


@app.post("/summary", response_model=list[AvailabilitySummary])
def summary(request: SummaryRequest) -> list[AvailabilitySummary]:
    """Window and slot sizing of each availability, e.g. for a schedule overview."""
    try:
        return summarize_schedule(request.schedule, request.target_date)
    except SchedulingError as e:
        raise HTTPException(status_code=422, detail=str(e))


@app.get("/facility/{facility_id}/slots", response_model=SlotsResponse)
def facility_slots(
    facility_id: str,
    resource_type: SchedulableResourceType = Query(...),
    resource_id: str = Query(...),
    on: date = Query(...),
) -> SlotsResponse:
    """
    Fetch the resource's schedule from the scheduling API and compute slots for `on`.
    """
    try:
        client = ScheduleClient()
        schedule = client.fetch_resource_schedule(facility_id, resource_type, resource_id)
    except ValidationError as e:
        raise HTTPException(status_code=502, detail=f"Scheduling API returned invalid records: {e}")
    except ValueError as e:
        raise HTTPException(status_code=503, detail=str(e))
    except httpx.HTTPStatusError as e:
        logger.warning(
            "Scheduling API returned %s for %s/%s",
            e.response.status_code,
            resource_type.value,
            resource_id,
        )
        msg = f"Scheduling API error ({e.response.status_code}): "
        if e.response.status_code in (401, 403):
            msg += "Invalid or missing API token. Set SCHEDULE_API_TOKEN in your environment."
        else:
            msg += str(e)
        raise HTTPException(status_code=502, detail=msg)
    except httpx.RequestError as e:
        logger.warning("Scheduling API unreachable: %s", e)
        raise HTTPException(status_code=502, detail=f"Scheduling API unreachable: {e}")

    return _slots_response(schedule, on)


@app.get("/health")
def health() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "ok"}
