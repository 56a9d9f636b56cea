from __future__ import annotations

from typing import Any, Sequence
from urllib.parse import quote

from ..api.envelope import parse_attendance_outcome, unwrap, unwrap_list
from ..api.transport import ApiClient
from .model import Activity, AttendanceOutcome
from .repository import ActivityRepository


class HttpActivityRepository(ActivityRepository):
    def __init__(self, client: ApiClient):
        self._client = client

    def list_for_date(self, fecha: str) -> Sequence[Activity]:
        raw = self._client.request("/actividades/semana", params={"fecha": fecha})
        return [Activity.from_api(obj) for obj in unwrap_list(raw) if isinstance(obj, dict)]

    def list_all(self) -> Sequence[Activity]:
        raw = self._client.request("/actividades")
        return [Activity.from_api(obj) for obj in unwrap_list(raw) if isinstance(obj, dict)]

    def create(self, payload: dict[str, Any]) -> Activity:
        raw = self._client.request("/actividades", method="POST", json=payload)
        created = unwrap(raw)
        return Activity.from_api(created if isinstance(created, dict) else {})

    def mark_attendance(self, activity_id: str, person_id: str) -> AttendanceOutcome:
        raw = self._client.request(
            f"/actividades/{quote(activity_id, safe='')}/asistir",
            method="POST",
            json={"personaId": person_id},
        )
        return parse_attendance_outcome(raw)
