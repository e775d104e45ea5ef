"""Client for the remote scheduling API that owns templates and exceptions."""

import logging
import os
from typing import Any, Optional

import httpx

from slot_engine.schema import (
    ResourceSchedule,
    SchedulableResourceType,
    ScheduleException,
    ScheduleTemplate,
)
from slot_engine.timeutils import from_sunday_based

logger = logging.getLogger(__name__)


class ScheduleClient:
    """Read-only client for schedule templates and exceptions."""

    def __init__(
        self,
        base_url: str | None = None,
        api_token: str | None = None,
        timeout: float | None = None,
        sunday_based_days: bool = False,
    ) -> None:
        self.base_url = (base_url or os.environ.get("SCHEDULE_API_BASE_URL", "")).rstrip("/")
        self.api_token = api_token or os.environ.get("SCHEDULE_API_TOKEN", "")
        self.timeout = timeout or float(os.environ.get("SCHEDULE_API_TIMEOUT", "30"))
        self.sunday_based_days = sunday_based_days

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.api_token:
            headers["Authorization"] = f"Bearer {self.api_token}"
        return headers

    def _get(self, path: str, params: dict[str, Any]) -> list[dict[str, Any]]:
        """GET a paginated list endpoint and return all results, following `next` links."""
        if not self.base_url:
            raise ValueError("SCHEDULE_API_BASE_URL is required")
        results: list[dict[str, Any]] = []
        url: Optional[str] = f"{self.base_url}{path}"
        query: Optional[dict[str, Any]] = params
        with httpx.Client(timeout=self.timeout) as client:
            while url:
                resp = client.get(url, headers=self._headers(), params=query)
                resp.raise_for_status()
                data = resp.json()
                if isinstance(data, list):
                    results.extend(data)
                    break
                results.extend(data.get("results", []))
                url = data.get("next")
                # `next` already carries the query string.
                query = None
        return results

    def _remap_days(self, template: ScheduleTemplate) -> ScheduleTemplate:
        availabilities = [
            availability.model_copy(
                update={
                    "availability": [
                        window.model_copy(
                            update={"day_of_week": from_sunday_based(window.day_of_week)}
                        )
                        for window in availability.availability
                    ]
                }
            )
            for availability in template.availabilities
        ]
        return template.model_copy(update={"availabilities": availabilities})

    def list_templates(
        self,
        facility_id: str,
        resource_type: SchedulableResourceType,
        resource_id: str,
    ) -> list[ScheduleTemplate]:
        """Schedule templates for one resource."""
        raw = self._get(
            f"/api/v1/facility/{facility_id}/schedule/",
            {"resource_type": resource_type.value, "resource_id": resource_id},
        )
        templates = [ScheduleTemplate.model_validate(item) for item in raw]
        if self.sunday_based_days:
            templates = [self._remap_days(t) for t in templates]
        logger.info(
            "Fetched %d schedule templates for %s/%s",
            len(templates),
            resource_type.value,
            resource_id,
        )
        return templates

    def list_exceptions(
        self,
        facility_id: str,
        resource_type: SchedulableResourceType,
        resource_id: str,
    ) -> list[ScheduleException]:
        """Schedule exceptions for one resource."""
        raw = self._get(
            f"/api/v1/facility/{facility_id}/schedule_exceptions/",
            {"resource_type": resource_type.value, "resource_id": resource_id},
        )
        exceptions = [ScheduleException.model_validate(item) for item in raw]
        logger.info(
            "Fetched %d schedule exceptions for %s/%s",
            len(exceptions),
            resource_type.value,
            resource_id,
        )
        return exceptions

    def fetch_resource_schedule(
        self,
        facility_id: str,
        resource_type: SchedulableResourceType,
        resource_id: str,
    ) -> ResourceSchedule:
        """Templates and exceptions for one resource, ready for the engine."""
        return ResourceSchedule(
            resource_type=resource_type,
            resource_id=resource_id,
            templates=self.list_templates(facility_id, resource_type, resource_id),
            exceptions=self.list_exceptions(facility_id, resource_type, resource_id),
        )
