from __future__ import annotations

from typing import Any, Optional, Protocol

from ..api.envelope import Page
from .model import Person


class PersonRepository(Protocol):
    """Repository interface for Person.

    Note (DIP): services depend on this interface, not on the HTTP client.
    """

    def search(
        self,
        *,
        cedula: Optional[str] = None,
        nombre_completo: Optional[str] = None,
        page: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> Page:
        """Page of Person."""
        raise NotImplementedError

    def create(self, payload: dict[str, Any]) -> Optional[Person]:
        """Returns the created Person, or None when the backend body was not a record."""
        raise NotImplementedError
