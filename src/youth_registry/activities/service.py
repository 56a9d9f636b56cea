from __future__ import annotations

import logging
from datetime import date
from typing import Callable, Optional, Sequence

from ..common.datetime_utils import format_local_date, today_local
from ..common.validators import require_non_empty
from ..core.exceptions import ValidationError
from .model import Activity, AttendanceOutcome, NewActivity
from .repository import ActivityRepository

logger = logging.getLogger(__name__)


class ActivityService:
    """Use case: find today's activity and mark attendance against it."""

    def __init__(self, activities: ActivityRepository, *, clock: Callable[[], date] = today_local):
        self._activities = activities
        self._clock = clock

    def todays_activities(self, *, today: Optional[date] = None) -> Sequence[Activity]:
        fecha = format_local_date(today or self._clock())
        return self._activities.list_for_date(fecha)

    def resolve_target(self, activity_id: Optional[str] = None, *, today: Optional[date] = None) -> Optional[str]:
        """Activity to mark against: the explicit id, else the first of today's
        activities in backend order, else None."""
        if activity_id:
            return activity_id
        activities = self.todays_activities(today=today)
        if not activities:
            logger.info("No activities scheduled for %s", format_local_date(today or self._clock()))
            return None
        first = activities[0]
        if not first.activity_id:
            logger.warning("First activity for %s has no id: %r", format_local_date(today or self._clock()), first.titulo)
            raise ValidationError("La actividad de hoy no tiene identificador")
        return first.activity_id

    def mark(self, activity_id: str, person_id: str) -> AttendanceOutcome:
        if not activity_id:
            raise ValidationError("Se requiere el id de la actividad")
        if not person_id:
            raise ValidationError("Se requiere el id de la persona")
        outcome = self._activities.mark_attendance(activity_id, person_id)
        logger.debug("Marked %s at %s: registered=%s", person_id, activity_id, outcome.registered)
        return outcome

    def list_all(self) -> Sequence[Activity]:
        return self._activities.list_all()

    def create(self, new: NewActivity) -> Activity:
        require_non_empty(new.titulo, "Título")
        if not new.fecha:
            raise ValidationError("La fecha es requerida")
        return self._activities.create(new.to_payload())
