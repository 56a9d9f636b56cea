from __future__ import annotations

import json
from datetime import date
from typing import Optional

import pytest

from youth_registry.activities.model import Activity, AttendanceOutcome
from youth_registry.activities.service import ActivityService
from youth_registry.api.envelope import Page
from youth_registry.core.exceptions import HttpError
from youth_registry.persons.model import Person


TODAY = date(2026, 3, 14)


class InMemoryPersons:
    def __init__(self, people=()):
        self.people: list[Person] = list(people)
        self.search_calls: list[dict] = []
        self.created_payloads: list[dict] = []
        self.search_error: Optional[Exception] = None
        self.create_error: Optional[Exception] = None
        self.return_id_on_create = True

    def search(self, *, cedula=None, nombre_completo=None, page=None, limit=None):
        self.search_calls.append({"cedula": cedula, "nombre_completo": nombre_completo, "limit": limit})
        if self.search_error:
            raise self.search_error
        items = [
            p
            for p in self.people
            if (cedula is None or cedula in p.cedula)
            and (nombre_completo is None or nombre_completo.lower() in p.nombre_completo.lower())
        ]
        return Page.of(items)

    def create(self, payload):
        self.created_payloads.append(payload)
        if self.create_error:
            raise self.create_error
        person = Person(
            person_id=f"p-{len(self.people) + 1}",
            cedula=str(payload.get("cedula", "")),
            nombre_completo=f"{payload.get('nombre', '')} {payload.get('apellido', '')}".strip(),
        )
        self.people.append(person)
        if not self.return_id_on_create:
            return Person(person_id="", cedula=person.cedula, nombre_completo=person.nombre_completo)
        return person


class InMemoryActivities:
    """Backend stand-in: marking is idempotent per (activity, person)."""

    def __init__(self, by_date: Optional[dict[str, list[Activity]]] = None):
        self.by_date = dict(by_date or {})
        self.date_calls: list[str] = []
        self.mark_calls: list[tuple[str, str]] = []
        self.fail_for: set[str] = set()
        self.list_error: Optional[Exception] = None
        self.messages: dict[str, str] = {}
        self._attended: set[tuple[str, str]] = set()

    def list_for_date(self, fecha: str):
        self.date_calls.append(fecha)
        if self.list_error:
            raise self.list_error
        return list(self.by_date.get(fecha, []))

    def list_all(self):
        return [a for items in self.by_date.values() for a in items]

    def create(self, payload):
        return Activity(activity_id="new", titulo=payload["titulo"], fecha=None)

    def mark_attendance(self, activity_id: str, person_id: str) -> AttendanceOutcome:
        self.mark_calls.append((activity_id, person_id))
        if person_id in self.fail_for:
            raise HttpError("Internal Server Error", status=500, payload=None)
        key = (activity_id, person_id)
        if key in self._attended:
            return AttendanceOutcome(registered=False, message=self.messages.get("again"))
        self._attended.add(key)
        return AttendanceOutcome(registered=True, message=self.messages.get("new"))


def make_person(person_id: str, cedula: str, nombre: str) -> Person:
    return Person(person_id=person_id, cedula=cedula, nombre_completo=nombre)


class FakeResponse:
    def __init__(self, status: int = 200, body="", reason: str = "OK"):
        self.status_code = status
        self.text = body if isinstance(body, str) else json.dumps(body)
        self.reason = reason

    @property
    def ok(self) -> bool:
        return self.status_code < 400

    def json(self):
        return json.loads(self.text)


class FakeSession:
    """Replays queued responses (or raises queued exceptions) in order."""

    def __init__(self, responses=()):
        self.responses = list(responses)
        self.calls: list[dict] = []

    def request(self, method, url, **kwargs):
        self.calls.append({"method": method, "url": url, **kwargs})
        item = self.responses.pop(0)
        if isinstance(item, Exception):
            raise item
        return item


class RoutingSession:
    """Answers by (method, path suffix); handlers get the call kwargs."""

    def __init__(self, routes):
        self.routes = dict(routes)
        self.calls: list[dict] = []

    def request(self, method, url, **kwargs):
        self.calls.append({"method": method, "url": url, **kwargs})
        for (m, suffix), handler in self.routes.items():
            if m == method and url.endswith(suffix):
                return handler(kwargs) if callable(handler) else handler
        return FakeResponse(404, {"message": "Not Found"}, reason="Not Found")


@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def people():
    return [
        make_person("p-1", "12345678", "Ana Pérez"),
        make_person("p-2", "87654321", "Ana María Gómez"),
        make_person("p-3", "11223344", "Anabel Ruiz"),
        make_person("p-4", "55667788", "Luis Torres"),
    ]


@pytest.fixture
def persons_repo(people) -> InMemoryPersons:
    return InMemoryPersons(people)


@pytest.fixture
def activities_repo(today) -> InMemoryActivities:
    return InMemoryActivities(
        {
            today.strftime("%Y-%m-%d"): [
                Activity(activity_id="act-1", titulo="Reunión de jóvenes", fecha=today),
                Activity(activity_id="act-2", titulo="Ensayo", fecha=today),
            ]
        }
    )


@pytest.fixture
def activity_service(activities_repo, today) -> ActivityService:
    return ActivityService(activities_repo, clock=lambda: today)
