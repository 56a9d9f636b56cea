from __future__ import annotations

from typing import Any, Protocol, Sequence

from .model import Activity, AttendanceOutcome


class ActivityRepository(Protocol):
    def list_for_date(self, fecha: str) -> Sequence[Activity]:
        """Activities the backend schedules around `fecha` (YYYY-MM-DD, local)."""
        raise NotImplementedError

    def list_all(self) -> Sequence[Activity]:
        raise NotImplementedError

    def create(self, payload: dict[str, Any]) -> Activity:
        raise NotImplementedError

    def mark_attendance(self, activity_id: str, person_id: str) -> AttendanceOutcome:
        """Idempotent on the backend: a repeat call reports registered=False."""
        raise NotImplementedError
