from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_optional_date
from ..common.http import arg_bool, arg_date, arg_int, error_response, json_body, to_int
from ..core.constants import DEFAULT_PAGE_SIZE, DEFAULT_UPCOMING_SESSIONS_LIMIT
from ..core.exceptions import NotFoundError, ValidationError
from .serializers import session_to_dict, stats_to_dict, type_to_dict
from .service import parse_status

logger = logging.getLogger(__name__)


def _session_payload(data: dict) -> dict:
    payload = dict(data)
    for field in ("start_date", "end_date"):
        if field in payload:
            payload[field] = parse_optional_date(payload[field])
    for field in ("type_id", "max_capacity"):
        if payload.get(field) is not None:
            payload[field] = to_int(payload[field], field)
    return payload


def register(app: Flask, container) -> None:
    service = container.onboarding_service

    @app.route("/onboarding/tipos", methods=["GET"], endpoint="onboarding_types")
    def list_types():
        try:
            return jsonify({"success": True, "data": [type_to_dict(t) for t in service.list_types()]})
        except Exception:
            logger.exception("Error listing onboarding types")
            return error_response("Error del sistema al listar tipos de onboarding", 500)

    @app.route("/onboarding/sesiones", methods=["POST"], endpoint="onboarding_session_create")
    def create_session():
        try:
            data = _session_payload(json_body())
            if data.get("start_date") is None:
                raise ValidationError("La fecha de inicio es obligatoria")
            if data.get("type_id") is None:
                raise ValidationError("El tipo de onboarding es obligatorio")
            session_id = service.create_session(
                title=data.get("title", ""),
                type_id=data["type_id"],
                start_date=data["start_date"],
                end_date=data.get("end_date"),
                max_capacity=data.get("max_capacity") or 1,
                status=data.get("status") or "programada",
                description=data.get("description"),
                location=data.get("location"),
                virtual_link=data.get("virtual_link"),
                notes=data.get("notes"),
            )
            return jsonify({"success": True, "data": session_to_dict(service.get_session(session_id))}), 201
        except ValidationError as e:
            return error_response(str(e), 400)
        except NotFoundError as e:
            return error_response(str(e), 404)
        except Exception:
            logger.exception("Error creating onboarding session")
            return error_response("Error del sistema al crear la sesión", 500)

    @app.route("/onboarding/sesiones", methods=["GET"], endpoint="onboarding_session_list")
    def list_sessions():
        try:
            status = request.args.get("estado")
            result = service.list_sessions(
                type_id=arg_int("tipo_id"),
                status=parse_status(status) if status else None,
                date_from=arg_date("fecha_desde"),
                date_to=arg_date("fecha_hasta"),
                is_active=arg_bool("activo"),
                page=arg_int("page", 1),
                limit=arg_int("limit", DEFAULT_PAGE_SIZE),
            )
            return jsonify({"success": True, "data": [session_to_dict(s) for s in result.data], "meta": result.meta})
        except ValidationError as e:
            return error_response(str(e), 400)
        except Exception:
            logger.exception("Error listing onboarding sessions")
            return error_response("Error del sistema al listar sesiones", 500)

    @app.route("/onboarding/sesiones/<int:session_id>", methods=["GET"], endpoint="onboarding_session_detail")
    def get_session(session_id: int):
        try:
            return jsonify({"success": True, "data": session_to_dict(service.get_session(session_id))})
        except NotFoundError as e:
            return error_response(str(e), 404)
        except Exception:
            logger.exception("Error loading onboarding session %s", session_id)
            return error_response("Error del sistema al obtener la sesión", 500)

    @app.route("/onboarding/sesiones/<int:session_id>", methods=["PUT"], endpoint="onboarding_session_update")
    def update_session(session_id: int):
        try:
            session = service.update_session(session_id, **_session_payload(json_body()))
            return jsonify({"success": True, "data": session_to_dict(session)})
        except ValidationError as e:
            return error_response(str(e), 400)
        except NotFoundError as e:
            return error_response(str(e), 404)
        except Exception:
            logger.exception("Error updating onboarding session %s", session_id)
            return error_response("Error del sistema al actualizar la sesión", 500)

    @app.route("/onboarding/sesiones/<int:session_id>", methods=["DELETE"], endpoint="onboarding_session_delete")
    def delete_session(session_id: int):
        try:
            service.delete_session(session_id)
            return "", 204
        except NotFoundError as e:
            return error_response(str(e), 404)
        except Exception:
            logger.exception("Error deleting onboarding session %s", session_id)
            return error_response("Error del sistema al eliminar la sesión", 500)

    @app.route("/onboarding/sesiones/<int:session_id>/estado", methods=["PUT"], endpoint="onboarding_session_status")
    def change_status(session_id: int):
        try:
            session = service.change_status(session_id, json_body().get("status"))
            return jsonify({"success": True, "data": session_to_dict(session)})
        except ValidationError as e:
            return error_response(str(e), 400)
        except NotFoundError as e:
            return error_response(str(e), 404)
        except Exception:
            logger.exception("Error changing status of onboarding session %s", session_id)
            return error_response("Error del sistema al cambiar el estado", 500)

    @app.route("/onboarding/sesiones/stats", methods=["GET"], endpoint="onboarding_session_stats")
    def session_stats():
        try:
            return jsonify({"success": True, "data": stats_to_dict(service.stats())})
        except Exception:
            logger.exception("Error computing onboarding stats")
            return error_response("Error del sistema al obtener estadísticas", 500)

    @app.route("/onboarding/sesiones/proximas", methods=["GET"], endpoint="onboarding_session_upcoming")
    def upcoming_sessions():
        try:
            sessions = service.upcoming_sessions(arg_int("limite", DEFAULT_UPCOMING_SESSIONS_LIMIT))
            return jsonify({"success": True, "data": [session_to_dict(s) for s in sessions]})
        except ValidationError as e:
            return error_response(str(e), 400)
        except Exception:
            logger.exception("Error listing upcoming onboarding sessions")
            return error_response("Error del sistema al listar sesiones", 500)

    @app.route("/onboarding/sesiones/mes/<year>/<month>", methods=["GET"], endpoint="onboarding_session_by_month")
    def sessions_by_month(year: str, month: str):
        try:
            sessions = service.sessions_by_month(to_int(year, "Año"), to_int(month, "Mes"))
            return jsonify({"success": True, "data": [session_to_dict(s) for s in sessions]})
        except ValidationError as e:
            return error_response(str(e), 400)
        except Exception:
            logger.exception("Error listing onboarding sessions for %s-%s", year, month)
            return error_response("Error del sistema al listar sesiones", 500)
