"""Request/response helpers shared by the JSON controllers."""

from __future__ import annotations

from datetime import date
from typing import Any, Optional

from flask import jsonify, request
from werkzeug.exceptions import BadRequest

from ..core.exceptions import ValidationError
from .datetime_utils import parse_optional_date
from .validators import parse_bool


def error_response(message: str, status: int):
    return jsonify({"success": False, "message": message}), status


def json_body() -> dict:
    try:
        data = request.get_json(force=True)
    except BadRequest as e:
        raise ValidationError("El cuerpo de la petición debe ser JSON válido") from e
    if not isinstance(data, dict):
        raise ValidationError("El cuerpo de la petición debe ser un objeto JSON")
    return data


def arg_date(name: str) -> Optional[date]:
    return parse_optional_date(request.args.get(name))


def arg_int(name: str, default: Optional[int] = None) -> Optional[int]:
    raw = request.args.get(name)
    if raw is None or raw == "":
        return default
    return to_int(raw, name)


def arg_bool(name: str) -> Optional[bool]:
    raw = (request.args.get(name) or "").strip()
    if not raw:
        return None
    return parse_bool(raw, f"Parámetro {name}")


def to_int(value: Any, field_name: str) -> int:
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} debe ser un número entero")
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"{field_name} debe ser un número entero") from e
