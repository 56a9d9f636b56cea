from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date_as_local
from ..core.constants import MSG_RETRY
from ..core.exceptions import DomainError, ValidationError
from ..container import Container
from .model import NewActivity


def register(app: Flask, container: Container) -> None:
    @app.route("/api/actividades", methods=["GET"], endpoint="actividades_list")
    def actividades_list():
        try:
            items = container.activity_service.list_all()
        except DomainError as e:
            app.logger.warning("Listing activities failed: %s", e)
            return jsonify({"success": False, "message": MSG_RETRY}), 502
        return jsonify({"success": True, "data": [a.to_dict() for a in items]}), 200

    @app.route("/api/actividades/hoy", methods=["GET"], endpoint="actividades_hoy")
    def actividades_hoy():
        try:
            items = container.activity_service.todays_activities()
        except DomainError as e:
            app.logger.warning("Listing today's activities failed: %s", e)
            return jsonify({"success": False, "message": MSG_RETRY}), 502
        return jsonify({"success": True, "data": [a.to_dict() for a in items]}), 200

    @app.route("/api/actividades", methods=["POST"], endpoint="actividades_create")
    def actividades_create():
        data = request.get_json(silent=True) or {}
        fecha = parse_iso_date_as_local(str(data.get("fecha") or ""))
        new = NewActivity(
            titulo=str(data.get("titulo") or ""),
            fecha=fecha,
            descripcion=(str(data["descripcion"]) if data.get("descripcion") else None),
            asistentes=[str(x) for x in data.get("asistentes") or []],
            ponentes=[str(x) for x in data.get("ponentes") or []],
        )
        try:
            activity = container.activity_service.create(new)
        except ValidationError as e:
            return jsonify({"success": False, "message": str(e)}), 400
        except DomainError as e:
            app.logger.warning("Creating activity failed: %s", e)
            return jsonify({"success": False, "message": MSG_RETRY}), 502
        return jsonify({"success": True, "data": activity.to_dict()}), 201
