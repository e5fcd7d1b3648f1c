"""Month grid construction for the onboarding calendar.

The grid always starts on an ISO Monday and ends on an ISO Sunday, so it may
include padding days from the previous and the next month.
"""

from __future__ import annotations

from datetime import MAXYEAR, MINYEAR, date, timedelta
from typing import Iterable, Optional, Union

from ..common.datetime_utils import month_bounds
from ..core.constants import DAYS_PER_WEEK, DEFAULT_LOCALE
from ..core.enums import Locale
from ..core.exceptions import InvalidArgument
from .model import CalendarDay, CalendarMonth, EventSummary, SessionSummary

MONTH_NAMES: dict[Locale, tuple[str, ...]] = {
    Locale.ES: (
        "Enero", "Febrero", "Marzo", "Abril", "Mayo", "Junio",
        "Julio", "Agosto", "Septiembre", "Octubre", "Noviembre", "Diciembre",
    ),
    Locale.EN: (
        "January", "February", "March", "April", "May", "June",
        "July", "August", "September", "October", "November", "December",
    ),
}


def resolve_locale(locale: Union[Locale, str, None]) -> Locale:
    """Unknown or missing locales fall back to the default one."""
    if isinstance(locale, Locale):
        return locale
    try:
        return Locale(str(locale or "").strip().lower())
    except ValueError:
        return DEFAULT_LOCALE


def month_name(month: int, locale: Union[Locale, str, None] = None) -> str:
    return MONTH_NAMES[resolve_locale(locale)][month - 1]


def validate_year_month(year: int, month: int) -> None:
    if isinstance(month, bool) or not isinstance(month, int) or not 1 <= month <= 12:
        raise InvalidArgument(f"Mes inválido: {month!r} (debe estar entre 1 y 12)")
    if isinstance(year, bool) or not isinstance(year, int) or not MINYEAR <= year <= MAXYEAR:
        raise InvalidArgument(f"Año inválido: {year!r}")


def grid_bounds(year: int, month: int) -> tuple[date, date]:
    """First (Monday) and last (Sunday) day shown for ``year``/``month``."""
    validate_year_month(year, month)
    first_of_month, last_of_month = month_bounds(year, month)

    try:
        grid_start = first_of_month - timedelta(days=first_of_month.isoweekday() - 1)
        grid_end = last_of_month + timedelta(days=(DAYS_PER_WEEK - last_of_month.isoweekday()) % DAYS_PER_WEEK)
    except OverflowError as e:
        raise InvalidArgument(f"El calendario de {year}-{month:02d} excede el rango de fechas soportado") from e

    return grid_start, grid_end


class CalendarGridBuilder:
    """Builds a week-partitioned month grid with sessions and events per day.

    Stateless: one instance can be shared by concurrent requests.
    """

    def build(
        self,
        year: int,
        month: int,
        sessions: Optional[Iterable[SessionSummary]] = None,
        events: Optional[Iterable[EventSummary]] = None,
        *,
        locale: Union[Locale, str, None] = None,
    ) -> CalendarMonth:
        grid_start, grid_end = grid_bounds(year, month)

        # Materialize once; inputs are never mutated.
        session_list = tuple(sessions or ())
        event_list = tuple(events or ())

        weeks: list[tuple[CalendarDay, ...]] = []
        week: list[CalendarDay] = []
        current = grid_start
        while current <= grid_end:
            week.append(
                CalendarDay(
                    date=current,
                    in_target_month=(current.year == year and current.month == month),
                    sessions=tuple(s for s in session_list if s.occurs_on(current)),
                    events=tuple(e for e in event_list if e.occurs_on(current)),
                )
            )
            if len(week) == DAYS_PER_WEEK:
                weeks.append(tuple(week))
                week = []
            if current == grid_end:
                break
            current += timedelta(days=1)

        return CalendarMonth(
            year=year,
            month=month,
            month_name=month_name(month, locale),
            weeks=tuple(weeks),
        )


def build_month(
    year: int,
    month: int,
    sessions: Optional[Iterable[SessionSummary]] = None,
    events: Optional[Iterable[EventSummary]] = None,
    *,
    locale: Union[Locale, str, None] = None,
) -> CalendarMonth:
    return CalendarGridBuilder().build(year, month, sessions, events, locale=locale)
