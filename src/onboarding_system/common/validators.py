from __future__ import annotations

import re
from datetime import date
from typing import Any, Optional

from ..core.exceptions import ValidationError

_HEX_COLOR = re.compile(r"^#(?:[0-9a-fA-F]{3}){1,2}$")


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} es obligatorio")
    return str(value).strip()


def require_max_length(value: str, field_name: str, max_len: int) -> str:
    if len(value) > max_len:
        raise ValidationError(f"{field_name} admite como máximo {max_len} caracteres")
    return value


def require_color(value: Optional[str], field_name: str = "Color") -> str:
    color = require_non_empty(value, field_name)
    if not _HEX_COLOR.match(color):
        raise ValidationError(f"{field_name} debe tener formato hexadecimal (#RRGGBB)")
    return color


def require_date_range(start: date, end: Optional[date]) -> None:
    if end is not None and start > end:
        raise ValidationError("La fecha de inicio debe ser anterior a la fecha de fin")


def require_positive(value: Any, field_name: str) -> int:
    if value is None or isinstance(value, bool):
        raise ValidationError(f"{field_name} debe ser un número entero")
    try:
        number = int(value)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"{field_name} debe ser un número entero") from e
    if number < 1:
        raise ValidationError(f"{field_name} debe ser al menos 1")
    return number


_TRUE_VALUES = {"1", "true", "si", "sí", "yes"}
_FALSE_VALUES = {"0", "false", "no"}


def parse_bool(value: Any, field_name: str) -> bool:
    """Strict boolean: JSON booleans, 0/1 or the usual yes/no words."""
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    raw = str(value if value is not None else "").strip().lower()
    if raw in _TRUE_VALUES:
        return True
    if raw in _FALSE_VALUES:
        return False
    raise ValidationError(f"{field_name} debe ser verdadero o falso: {value!r}")
