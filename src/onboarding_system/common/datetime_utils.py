from __future__ import annotations

import calendar
import re
from datetime import date, datetime
from typing import Any, Optional

from ..core.constants import OPEN_RANGE_START
from ..core.exceptions import InvalidArgument, ValidationError

_ISO_DATE_PREFIX = re.compile(r"^(\d{4})-(\d{2})-(\d{2})")


def parse_iso_date(value: str) -> date:
    """Parse ``YYYY-MM-DD`` (optionally followed by a time part) into a date.

    Only the calendar date written in the string is used. A trailing
    ``THH:MM:SSZ`` is ignored instead of being shifted into local time.
    """
    if isinstance(value, date) and not isinstance(value, datetime):
        return value

    match = _ISO_DATE_PREFIX.match(str(value or "").strip())
    if not match:
        raise ValidationError(f"Fecha inválida: {value!r}")

    year, month, day = (int(part) for part in match.groups())
    try:
        return date(year, month, day)
    except ValueError as e:
        raise ValidationError(f"Fecha inválida: {value!r}") from e


def parse_optional_date(value: Any) -> Optional[date]:
    if value is None or value == "":
        return None
    return parse_iso_date(value)


def require_date_only(value: Any, field_name: str) -> date:
    # datetime is a date subclass; it must not leak time-of-day into comparisons.
    if isinstance(value, datetime) or not isinstance(value, date):
        raise InvalidArgument(f"{field_name} debe ser una fecha sin hora")
    return value


def format_iso(value: date) -> str:
    return value.strftime("%Y-%m-%d")


def format_display(value: date) -> str:
    """DD/MM/YYYY, as shown to users."""
    return value.strftime("%d/%m/%Y")


def month_bounds(year: int, month: int) -> tuple[date, date]:
    """First and last calendar day of ``month``."""
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)


def is_valid_date_range(start: date, end: date) -> bool:
    return start <= end


def today_local() -> date:
    """Current local date.

    Note: Wrapped so tests can patch/mock easier.
    """
    return date.today()


def start_date_window(date_from: Optional[date], date_to: Optional[date]) -> tuple[Optional[date], Optional[date]]:
    """Resolve an optional start-date filter into concrete bounds.

    Only ``date_from`` means "from then until today"; only ``date_to`` means
    "from 2000-01-01 until then".
    """
    if date_from and date_to:
        return date_from, date_to
    if date_from:
        return date_from, today_local()
    if date_to:
        return OPEN_RANGE_START, date_to
    return None, None
