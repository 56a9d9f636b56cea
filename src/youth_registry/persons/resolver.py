from __future__ import annotations

import logging

from ..common.validators import is_digits
from ..core.constants import PERSON_SEARCH_LIMIT
from ..core.enums import QueryKind
from ..core.exceptions import ValidationError
from .model import Person
from .repository import PersonRepository

logger = logging.getLogger(__name__)


def classify_query(query: str) -> tuple[QueryKind, str]:
    """Digits only -> cedula filter; any other non-blank text -> full-name filter."""
    q = (query or "").strip()
    if not q:
        raise ValidationError("Ingresa una cédula o un nombre")
    if is_digits(q):
        return QueryKind.CEDULA, q
    return QueryKind.NAME, q


class PersonResolver:
    """Resolves a free-text check-in query to candidate records.

    One backend round-trip per call; cedula and name filters are never combined.
    """

    def __init__(self, persons: PersonRepository, *, limit: int = PERSON_SEARCH_LIMIT):
        self._persons = persons
        self._limit = int(limit)

    def resolve(self, query: str) -> list[Person]:
        kind, value = classify_query(query)
        if kind == QueryKind.CEDULA:
            page = self._persons.search(cedula=value, limit=self._limit)
        else:
            page = self._persons.search(nombre_completo=value, limit=self._limit)
        logger.debug("Resolved %s=%r to %d record(s)", kind.value, value, len(page.items))
        return list(page.items)
