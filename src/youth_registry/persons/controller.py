from __future__ import annotations

from flask import Flask, jsonify, request, session

from ..checkin.handoff import SessionPrefillStore
from ..common.datetime_utils import parse_iso_date_as_local
from ..common.validators import normalize_cedula, normalize_phone
from ..core.constants import MSG_RETRY
from ..core.exceptions import DomainError, RegistrationError
from ..container import Container
from .model import NewPerson


def _form_from_json(data: dict) -> NewPerson:
    def _s(key: str) -> str:
        value = data.get(key)
        return str(value).strip() if value is not None else ""

    return NewPerson(
        nombre=_s("nombre"),
        apellido=_s("apellido"),
        fecha_nacimiento=parse_iso_date_as_local(_s("fechaNacimiento") or _s("fecha_nacimiento")),
        cedula=normalize_cedula(_s("cedula")),
        correo=_s("correo") or _s("email"),
        telefono=normalize_phone(_s("telefono")),
        bautizado=bool(data.get("bautizado", False)),
        genero=_s("genero"),
        ministerio=_s("ministerio"),
        nivel_academico=_s("nivel_academico"),
        ocupacion=_s("ocupacion"),
    )


def register(app: Flask, container: Container) -> None:
    @app.route("/api/personas", methods=["GET"], endpoint="personas_list")
    def personas_list():
        try:
            limit = int(request.args.get("limit") or 0) or None
        except ValueError:
            limit = None
        try:
            page = container.person_directory.search(
                cedula=request.args.get("cedula"),
                nombre_completo=request.args.get("nombreCompleto"),
                limit=limit,
            )
        except DomainError as e:
            app.logger.warning("Directory search failed: %s", e)
            return jsonify({"success": False, "message": str(e) or "Error al cargar jóvenes"}), 502
        return jsonify(
            {
                "success": True,
                "data": [p.to_dict() for p in page.items],
                "currentPage": page.current_page,
                "totalPages": page.total_pages,
                "totalItems": page.total_items or len(page.items),
                "limit": page.limit,
            }
        ), 200

    @app.route("/api/personas", methods=["POST"], endpoint="personas_create")
    def personas_create():
        form = _form_from_json(request.get_json(silent=True) or {})
        try:
            result = container.registration_service.register(form)
        except RegistrationError as e:
            return jsonify({"success": False, "message": str(e), "field_errors": e.field_errors}), 400
        except Exception:
            app.logger.exception("Unexpected error while registering persona")
            return jsonify({"success": False, "message": MSG_RETRY}), 500
        return jsonify(
            {
                "success": True,
                "message": result.message,
                "persona": result.person.to_dict() if result.person else None,
            }
        ), 201

    @app.route("/api/personas/prefill", methods=["GET"], endpoint="personas_prefill")
    def personas_prefill():
        # Read-once: the stored prefill is gone after this call.
        prefill = SessionPrefillStore(session).consume()
        return jsonify({"success": True, "prefill": prefill or {}}), 200
