from __future__ import annotations

from dataclasses import replace
from typing import Any, Optional

from ..api.envelope import Page, unwrap, unwrap_page
from ..api.transport import ApiClient
from .model import Person
from .repository import PersonRepository


class HttpPersonRepository(PersonRepository):
    def __init__(self, client: ApiClient):
        self._client = client

    def search(
        self,
        *,
        cedula: Optional[str] = None,
        nombre_completo: Optional[str] = None,
        page: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> Page:
        raw = self._client.request(
            "/personas",
            params={
                "cedula": cedula,
                "nombreCompleto": nombre_completo,
                "currentPage": page,
                "limit": limit,
            },
        )
        result = unwrap_page(raw)
        return replace(result, items=[Person.from_api(obj) for obj in result.items if isinstance(obj, dict)])

    def create(self, payload: dict[str, Any]) -> Optional[Person]:
        raw = self._client.request("/personas", method="POST", json=payload)
        created = unwrap(raw)
        if not isinstance(created, dict):
            return None
        return Person.from_api(created)
