from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_optional_date
from ..common.http import arg_date, arg_int, error_response, json_body, to_int
from ..core.constants import DEFAULT_UPCOMING_LIMIT
from ..core.exceptions import NotFoundError, ValidationError
from .serializers import event_to_dict, month_to_dict

logger = logging.getLogger(__name__)

_DATE_FIELDS = ("start_date", "end_date")


def _event_payload(data: dict) -> dict:
    payload = dict(data)
    for field in _DATE_FIELDS:
        if field in payload:
            payload[field] = parse_optional_date(payload[field])
    if payload.get("session_id") is not None:
        payload["session_id"] = to_int(payload["session_id"], "session_id")
    return payload


def register(app: Flask, container) -> None:
    service = container.calendar_service

    @app.route("/calendario/eventos", methods=["POST"], endpoint="calendar_event_create")
    def create_event():
        try:
            data = _event_payload(json_body())
            if data.get("start_date") is None:
                raise ValidationError("La fecha de inicio es obligatoria")
            event_id = service.create_event(
                title=data.get("title", ""),
                start_date=data["start_date"],
                end_date=data.get("end_date"),
                color=data.get("color", ""),
                kind=data.get("kind") or "otro",
                is_all_day=data.get("is_all_day", False),
                description=data.get("description"),
                session_id=data.get("session_id"),
            )
            return jsonify({"success": True, "data": event_to_dict(service.get_event(event_id))}), 201
        except ValidationError as e:
            return error_response(str(e), 400)
        except NotFoundError as e:
            return error_response(str(e), 404)
        except Exception:
            logger.exception("Error creating calendar event")
            return error_response("Error del sistema al crear el evento", 500)

    @app.route("/calendario/eventos", methods=["GET"], endpoint="calendar_event_list")
    def list_events():
        try:
            events = service.list_events(
                date_from=arg_date("fecha_desde"),
                date_to=arg_date("fecha_hasta"),
                kind=request.args.get("tipo") or None,
            )
            return jsonify({"success": True, "data": [event_to_dict(e) for e in events]})
        except ValidationError as e:
            return error_response(str(e), 400)
        except Exception:
            logger.exception("Error listing calendar events")
            return error_response("Error del sistema al listar eventos", 500)

    @app.route("/calendario/eventos/proximos", methods=["GET"], endpoint="calendar_event_upcoming")
    def upcoming_events():
        try:
            limit = arg_int("limite", DEFAULT_UPCOMING_LIMIT)
            events = service.upcoming_events(limit)
            return jsonify({"success": True, "data": [event_to_dict(e) for e in events]})
        except ValidationError as e:
            return error_response(str(e), 400)
        except Exception:
            logger.exception("Error listing upcoming events")
            return error_response("Error del sistema al listar eventos", 500)

    @app.route("/calendario/eventos/tipo/<kind>", methods=["GET"], endpoint="calendar_event_by_kind")
    def events_by_kind(kind: str):
        try:
            events = service.events_by_kind(kind)
            return jsonify({"success": True, "data": [event_to_dict(e) for e in events]})
        except ValidationError as e:
            return error_response(str(e), 400)
        except Exception:
            logger.exception("Error listing events by kind")
            return error_response("Error del sistema al listar eventos", 500)

    @app.route("/calendario/eventos/<int:event_id>", methods=["GET"], endpoint="calendar_event_detail")
    def get_event(event_id: int):
        try:
            return jsonify({"success": True, "data": event_to_dict(service.get_event(event_id))})
        except NotFoundError as e:
            return error_response(str(e), 404)
        except Exception:
            logger.exception("Error loading calendar event %s", event_id)
            return error_response("Error del sistema al obtener el evento", 500)

    @app.route("/calendario/eventos/<int:event_id>", methods=["PUT"], endpoint="calendar_event_update")
    def update_event(event_id: int):
        try:
            event = service.update_event(event_id, **_event_payload(json_body()))
            return jsonify({"success": True, "data": event_to_dict(event)})
        except ValidationError as e:
            return error_response(str(e), 400)
        except NotFoundError as e:
            return error_response(str(e), 404)
        except Exception:
            logger.exception("Error updating calendar event %s", event_id)
            return error_response("Error del sistema al actualizar el evento", 500)

    @app.route("/calendario/eventos/<int:event_id>", methods=["DELETE"], endpoint="calendar_event_delete")
    def delete_event(event_id: int):
        try:
            service.delete_event(event_id)
            return "", 204
        except NotFoundError as e:
            return error_response(str(e), 404)
        except Exception:
            logger.exception("Error deleting calendar event %s", event_id)
            return error_response("Error del sistema al eliminar el evento", 500)

    @app.route("/calendario/mes/<year>/<month>", methods=["GET"], endpoint="calendar_month")
    def calendar_month(year: str, month: str):
        try:
            view = service.get_month(
                to_int(year, "Año"),
                to_int(month, "Mes"),
                locale=request.args.get("locale"),
            )
            return jsonify({"success": True, "data": month_to_dict(view)})
        except ValidationError as e:
            return error_response(str(e), 400)
        except Exception:
            logger.exception("Error building calendar for %s-%s", year, month)
            return error_response("Error del sistema al generar el calendario", 500)
