from __future__ import annotations

from typing import Optional

from ..api.envelope import Page
from ..core.constants import DIRECTORY_LIMIT
from .repository import PersonRepository


class PersonDirectory:
    """Use case: browse/filter the member list.

    Unlike the check-in resolver, both filters may be sent together.
    """

    def __init__(self, persons: PersonRepository, *, limit: int = DIRECTORY_LIMIT):
        self._persons = persons
        self._limit = int(limit)

    def search(self, *, cedula: Optional[str] = None, nombre_completo: Optional[str] = None, limit: Optional[int] = None) -> Page:
        return self._persons.search(
            cedula=(cedula or "").strip() or None,
            nombre_completo=(nombre_completo or "").strip() or None,
            limit=int(limit) if limit else self._limit,
        )
