from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Optional

from ..common.datetime_utils import format_local_date, parse_iso_date_as_local


@dataclass(frozen=True)
class Activity:
    """Scheduled group event (actividad)."""

    activity_id: str
    titulo: str
    fecha: Optional[date]
    descripcion: Optional[str] = None
    asistentes: tuple[str, ...] = ()

    @classmethod
    def from_api(cls, obj: dict) -> "Activity":
        asistentes = obj.get("asistentes")
        return cls(
            activity_id=str(obj.get("_id") or obj.get("id") or ""),
            titulo=str(obj.get("titulo") or ""),
            fecha=parse_iso_date_as_local(obj.get("fecha")) if isinstance(obj.get("fecha"), str) else None,
            descripcion=obj.get("descripcion") if isinstance(obj.get("descripcion"), str) else None,
            asistentes=tuple(str(a) for a in asistentes) if isinstance(asistentes, list) else (),
        )

    def to_dict(self) -> dict:
        return {
            "_id": self.activity_id,
            "titulo": self.titulo,
            "fecha": format_local_date(self.fecha) if self.fecha else None,
            "descripcion": self.descripcion,
            "asistentes": list(self.asistentes),
        }


@dataclass(frozen=True)
class NewActivity:
    titulo: str
    fecha: date
    descripcion: Optional[str] = None
    asistentes: list[str] = field(default_factory=list)
    ponentes: list[str] = field(default_factory=list)

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"titulo": self.titulo, "fecha": format_local_date(self.fecha)}
        if self.descripcion:
            payload["descripcion"] = self.descripcion
        if self.asistentes:
            payload["asistentes"] = list(self.asistentes)
        if self.ponentes:
            payload["ponentes"] = list(self.ponentes)
        return payload


@dataclass(frozen=True)
class AttendanceOutcome:
    """Normalized result of a mark-attendance call.

    registered: True = newly marked, False = was already marked (still a success),
    None = the response shape could not be read.
    """

    registered: Optional[bool]
    message: Optional[str] = None

    @property
    def already_marked(self) -> bool:
        return self.registered is False
