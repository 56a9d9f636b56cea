from __future__ import annotations

from flask import Flask, jsonify, request, session

from ..core.enums import CheckInState
from ..core.exceptions import ValidationError
from ..container import Container
from .handoff import SessionPrefillStore


def register(app: Flask, container: Container) -> None:
    def _payload() -> dict:
        return request.get_json(silent=True) or {}

    def _coordinator(data: dict):
        return container.new_coordinator(
            handoff=SessionPrefillStore(session),
            activity_id=str(data.get("actividadId") or "").strip() or None,
        )

    def _respond(coordinator):
        snap = coordinator.snapshot()
        ok = coordinator.session.state != CheckInState.ERROR
        return jsonify({"success": ok, **snap}), (200 if ok else 502)

    def _invalid(e: ValidationError):
        return jsonify({"success": False, "message": str(e)}), 400

    @app.route("/api/checkin/search", methods=["POST"], endpoint="checkin_search")
    def checkin_search():
        data = _payload()
        query = str(data.get("query", "")).strip()
        if not query:
            return jsonify({"success": False, "message": "Ingresa una cédula o un nombre"}), 400
        coordinator = _coordinator(data)
        coordinator.submit(query)
        return _respond(coordinator)

    @app.route("/api/checkin/confirm", methods=["POST"], endpoint="checkin_confirm")
    def checkin_confirm():
        data = _payload()
        coordinator = _coordinator(data)
        coordinator.submit(str(data.get("query", "")))
        if coordinator.session.state != CheckInState.ONE_MATCH:
            return _respond(coordinator)
        try:
            coordinator.confirm()
        except ValidationError as e:
            return _invalid(e)
        return _respond(coordinator)

    @app.route("/api/checkin/batch", methods=["POST"], endpoint="checkin_batch")
    def checkin_batch():
        data = _payload()
        ids = data.get("personaIds") or []
        if not isinstance(ids, list):
            return jsonify({"success": False, "message": "personaIds debe ser una lista"}), 400
        coordinator = _coordinator(data)
        coordinator.submit(str(data.get("query", "")))
        if coordinator.session.state != CheckInState.MANY_MATCHES:
            return _respond(coordinator)
        try:
            coordinator.select([str(i) for i in ids])
            coordinator.mark_selected()
        except ValidationError as e:
            return _invalid(e)
        return _respond(coordinator)

    @app.route("/api/checkin/redirect", methods=["POST"], endpoint="checkin_redirect")
    def checkin_redirect():
        data = _payload()
        coordinator = _coordinator(data)
        coordinator.submit(str(data.get("query", "")))
        try:
            prefill = coordinator.redirect_to_registration()
        except ValidationError as e:
            return _invalid(e)
        return jsonify({"success": True, "prefill": prefill}), 200
