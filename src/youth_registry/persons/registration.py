from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import date
from typing import Callable, Optional

from ..activities.service import ActivityService
from ..common.datetime_utils import today_local
from ..core import constants as C
from ..core.exceptions import DomainError, HttpError, RegistrationError
from .model import NewPerson, Person
from .repository import PersonRepository

logger = logging.getLogger(__name__)

_LEADING_THANKS = re.compile(r"^\s*¡?Gracias[.,!\s-]*", re.IGNORECASE)

# Backend duplicate-key field -> (form field, default message)
_DUPLICATE_FIELDS = {
    "cedula": ("cedula", "La cédula ya está registrada."),
    "email": ("correo", "El correo ya está registrado."),
}


@dataclass(frozen=True)
class RegistrationResult:
    person: Optional[Person]
    message: str
    attendance_message: Optional[str] = None


def validate_new_person(form: NewPerson) -> dict[str, str]:
    errors: dict[str, str] = {}
    if not form.nombre or not form.nombre.strip():
        errors["nombre"] = "El nombre es requerido."
    if not form.apellido or not form.apellido.strip():
        errors["apellido"] = "El apellido es requerido."
    if not form.fecha_nacimiento:
        errors["fechaNacimiento"] = "La fecha de nacimiento es requerida."
    return errors


def duplicate_field_errors(err: HttpError) -> dict[str, str]:
    """Field-level messages for a DUPLICATE_KEY error; empty for anything else."""
    payload = err.payload
    if err.code != C.DUPLICATE_KEY_CODE or not isinstance(payload.get("errors"), list):
        return {}
    field_errors: dict[str, str] = {}
    for item in payload["errors"]:
        if not isinstance(item, dict):
            continue
        mapped = _DUPLICATE_FIELDS.get(item.get("field"))
        if mapped:
            form_field, default = mapped
            message = item.get("message")
            field_errors[form_field] = message if isinstance(message, str) and message else default
    return field_errors


class RegistrationService:
    """Use case: sign a newcomer up, then try to check them in for today."""

    def __init__(self, persons: PersonRepository, activities: ActivityService, *, clock: Callable[[], date] = today_local):
        self._persons = persons
        self._activities = activities
        self._clock = clock

    def register(self, form: NewPerson) -> RegistrationResult:
        errors = validate_new_person(form)
        if errors:
            raise RegistrationError("Faltan datos requeridos", field_errors=errors)

        try:
            created = self._persons.create(form.to_payload())
        except HttpError as e:
            logger.exception("Creating persona failed")
            field_errors = duplicate_field_errors(e)
            if field_errors:
                raise RegistrationError(e.payload.get("message") or C.MSG_REGISTRATION_FAILED, field_errors=field_errors) from e
            raise RegistrationError(C.MSG_REGISTRATION_FAILED) from e
        except DomainError as e:
            logger.exception("Creating persona failed")
            raise RegistrationError(C.MSG_REGISTRATION_FAILED) from e

        message = C.MSG_REGISTERED
        attendance_message = self.auto_mark_attendance(created, cedula=form.cedula)
        if attendance_message:
            message = f"{message}\n{C.MSG_REGISTERED_ATTENDED}"
        if form.has_contact:
            message = f"{message}{C.MSG_REGISTERED_FOLLOWUP}"
        return RegistrationResult(person=created, message=message, attendance_message=attendance_message)

    def auto_mark_attendance(self, created: Optional[Person], *, cedula: str = "") -> Optional[str]:
        """Best effort: mark the new person present at today's first activity.

        Never raises. Returns the backend's attendance message with any leading
        thank-you stripped, or None.
        """
        try:
            today = self._clock()
            activities = self._activities.todays_activities(today=today)
        except Exception:
            logger.exception("Checking today's activities after registration failed")
            return None
        if not activities:
            return None
        activity = activities[0]

        person_id = created.person_id if created else ""
        if not person_id and cedula:
            try:
                found = self._persons.search(cedula=cedula)
                if found.items:
                    person_id = found.items[0].person_id
            except Exception:
                logger.exception("Looking up persona by cedula after registration failed")
        if not person_id:
            logger.warning("No persona id available after registration; skipping attendance")
            return None

        try:
            outcome = self._activities.mark(activity.activity_id, person_id)
        except Exception:
            logger.exception("Automatic attendance after registration failed")
            return None

        if not outcome.message:
            return None
        return _LEADING_THANKS.sub("", outcome.message).strip() or None
