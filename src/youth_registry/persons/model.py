from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Optional

from ..common.datetime_utils import format_local_date


def _opt_str(obj: dict, key: str) -> Optional[str]:
    value = obj.get(key)
    return value if isinstance(value, str) else None


@dataclass(frozen=True)
class Person:
    """Domain entity: a registered member (persona).

    Note: plain data object, built from whatever the backend returns.
    """

    person_id: str
    cedula: str
    nombre_completo: str
    email: Optional[str] = None
    telefono: Optional[str] = None
    fecha_nacimiento: Optional[str] = None
    direccion: Optional[str] = None
    bautizado: Optional[bool] = None
    genero: Optional[str] = None
    ministerio: Optional[str] = None
    nivel_academico: Optional[str] = None
    ocupacion: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @property
    def display_name(self) -> str:
        return self.nombre_completo or self.person_id

    @classmethod
    def from_api(cls, obj: dict) -> "Person":
        nombre = obj.get("nombre") if isinstance(obj.get("nombre"), str) else ""
        apellido = obj.get("apellido") if isinstance(obj.get("apellido"), str) else ""
        nombre_completo = obj.get("nombreCompleto")
        if not isinstance(nombre_completo, str):
            nombre_completo = f"{nombre} {apellido}".strip()
        telefono = obj.get("telefono")
        return cls(
            person_id=str(obj.get("_id") or ""),
            cedula=str(obj["cedula"]) if obj.get("cedula") is not None else "",
            nombre_completo=nombre_completo,
            email=_opt_str(obj, "email"),
            telefono=str(telefono) if isinstance(telefono, (str, int)) and not isinstance(telefono, bool) else None,
            fecha_nacimiento=_opt_str(obj, "fecha_nacimiento") or _opt_str(obj, "fechaNacimiento"),
            direccion=_opt_str(obj, "direccion"),
            bautizado=obj.get("bautizado") if isinstance(obj.get("bautizado"), bool) else None,
            genero=_opt_str(obj, "genero"),
            ministerio=_opt_str(obj, "ministerio"),
            nivel_academico=_opt_str(obj, "nivel_academico"),
            ocupacion=_opt_str(obj, "ocupacion"),
            created_at=_opt_str(obj, "createdAt"),
            updated_at=_opt_str(obj, "updatedAt"),
        )

    def to_dict(self) -> dict:
        return {
            "_id": self.person_id,
            "cedula": self.cedula,
            "nombreCompleto": self.nombre_completo,
            "email": self.email,
            "telefono": self.telefono,
            "fechaNacimiento": self.fecha_nacimiento,
            "direccion": self.direccion,
            "bautizado": self.bautizado,
            "genero": self.genero,
            "ministerio": self.ministerio,
            "nivel_academico": self.nivel_academico,
            "ocupacion": self.ocupacion,
        }


@dataclass(frozen=True)
class NewPerson:
    """Sign-up form data, before it reaches the backend."""

    nombre: str
    apellido: str
    fecha_nacimiento: Optional[date]
    cedula: str = ""
    correo: str = ""
    telefono: str = ""
    bautizado: bool = False
    genero: str = ""
    ministerio: str = ""
    nivel_academico: str = ""
    ocupacion: str = ""

    @property
    def has_contact(self) -> bool:
        return bool(self.correo or self.telefono)

    def to_payload(self) -> dict[str, Any]:
        """snake_case body expected by POST /personas; empty optionals are left out."""
        payload: dict[str, Any] = {
            "cedula": self.cedula or None,
            "nombre": self.nombre,
            "apellido": self.apellido,
            "email": self.correo or None,
            "telefono": self.telefono or None,
            "fecha_nacimiento": format_local_date(self.fecha_nacimiento) if self.fecha_nacimiento else None,
            "ministerio": self.ministerio or None,
            "nivel_academico": self.nivel_academico or None,
            "ocupacion": self.ocupacion or None,
            "bautizado": bool(self.bautizado),
            "genero": self.genero or None,
        }
        return {k: v for k, v in payload.items() if v is not None}
