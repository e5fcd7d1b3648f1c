from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import Any, Optional, Union

from ..common.datetime_utils import start_date_window, today_local
from ..common.validators import (
    parse_bool,
    require_color,
    require_date_range,
    require_max_length,
    require_non_empty,
    require_positive,
)
from ..core.constants import DEFAULT_LOCALE, DEFAULT_UPCOMING_DAYS, DEFAULT_UPCOMING_LIMIT
from ..core.enums import EventKind, Locale
from ..core.exceptions import NotFoundError, ValidationError
from ..onboarding.model import OnboardingSession
from ..onboarding.repository import OnboardingSessionRepository
from .builder import CalendarGridBuilder, grid_bounds
from .model import CalendarEvent, CalendarMonth, EventSummary, SessionSummary
from .repository import EventRepository

logger = logging.getLogger(__name__)

_EDITABLE_FIELDS = {
    "title",
    "description",
    "kind",
    "start_date",
    "end_date",
    "is_all_day",
    "color",
    "session_id",
}


def parse_kind(value: Any) -> EventKind:
    try:
        return EventKind(value)
    except ValueError as e:
        raise ValidationError(f"Tipo de evento inválido: {value!r}") from e


def to_session_summary(session: OnboardingSession) -> SessionSummary:
    return SessionSummary(
        id=session.session_id,
        title=session.title,
        type_color=session.type_color or "",
        start_date=session.start_date,
        end_date=session.end_date,
        status=session.status.value,
    )


def to_event_summary(event: CalendarEvent) -> EventSummary:
    return EventSummary(
        id=event.event_id,
        title=event.title,
        kind=event.kind,
        start_date=event.start_date,
        end_date=event.end_date,
        is_all_day=event.is_all_day,
        color=event.color,
    )


class CalendarService:
    """Use case: calendar events and the monthly calendar view."""

    def __init__(
        self,
        events: EventRepository,
        sessions: OnboardingSessionRepository,
        *,
        builder: Optional[CalendarGridBuilder] = None,
        default_locale: Union[Locale, str] = DEFAULT_LOCALE,
    ):
        self._events = events
        self._sessions = sessions
        self._builder = builder or CalendarGridBuilder()
        self._default_locale = default_locale

    def _require_session(self, session_id: Optional[int]) -> Optional[int]:
        if session_id is None:
            return None
        if not self._sessions.get_by_id(int(session_id)):
            raise NotFoundError("Sesión de onboarding no encontrada")
        return int(session_id)

    def create_event(
        self,
        *,
        title: str,
        start_date: date,
        color: str,
        kind: Union[EventKind, str] = EventKind.OTHER,
        end_date: Optional[date] = None,
        is_all_day: bool = False,
        description: Optional[str] = None,
        session_id: Optional[int] = None,
    ) -> int:
        title = require_max_length(require_non_empty(title, "Título"), "Título", 150)
        color = require_color(color)
        require_date_range(start_date, end_date)
        session_id = self._require_session(session_id)

        event_id = self._events.create(
            title=title,
            kind=parse_kind(kind),
            start_date=start_date,
            end_date=end_date,
            is_all_day=parse_bool(is_all_day, "is_all_day"),
            color=color,
            description=description,
            session_id=session_id,
        )
        logger.info("Calendar event %s created on %s", event_id, start_date)
        return event_id

    def list_events(
        self,
        *,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
        kind: Union[EventKind, str, None] = None,
    ) -> list[CalendarEvent]:
        start_from, start_to = start_date_window(date_from, date_to)
        return list(
            self._events.list_by_start(
                start_from=start_from,
                start_to=start_to,
                kind=parse_kind(kind) if kind else None,
            )
        )

    def get_event(self, event_id: int) -> CalendarEvent:
        event = self._events.get_by_id(int(event_id))
        if not event or not event.is_active:
            raise NotFoundError(f"Evento con ID {event_id} no encontrado")
        return event

    def update_event(self, event_id: int, /, **changes: Any) -> CalendarEvent:
        event = self._events.get_by_id(int(event_id))
        if not event:
            raise NotFoundError(f"Evento con ID {event_id} no encontrado")

        unknown = set(changes) - _EDITABLE_FIELDS
        if unknown:
            raise ValidationError(f"Campos no editables: {', '.join(sorted(unknown))}")

        if "title" in changes:
            changes["title"] = require_max_length(require_non_empty(changes["title"], "Título"), "Título", 150)
        if "color" in changes:
            changes["color"] = require_color(changes["color"])
        if "kind" in changes:
            changes["kind"] = parse_kind(changes["kind"])
        if "is_all_day" in changes:
            changes["is_all_day"] = parse_bool(changes["is_all_day"], "is_all_day")
        if "session_id" in changes:
            changes["session_id"] = self._require_session(changes["session_id"])
        if "start_date" in changes and changes["start_date"] is None:
            raise ValidationError("La fecha de inicio es obligatoria")

        require_date_range(
            changes.get("start_date", event.start_date),
            changes.get("end_date", event.end_date),
        )

        if changes:
            self._events.update(event_id=event.event_id, changes=changes)
            logger.info("Calendar event %s updated: %s", event.event_id, ", ".join(sorted(changes)))

        updated = self._events.get_by_id(event.event_id)
        if not updated:
            raise NotFoundError(f"Evento con ID {event_id} no encontrado")
        return updated

    def delete_event(self, event_id: int) -> None:
        event = self._events.get_by_id(int(event_id))
        if not event:
            raise NotFoundError(f"Evento con ID {event_id} no encontrado")
        self._events.deactivate(event_id=event.event_id)
        logger.info("Calendar event %s deactivated", event.event_id)

    def upcoming_events(
        self,
        limit: int = DEFAULT_UPCOMING_LIMIT,
        *,
        today: Optional[date] = None,
    ) -> list[CalendarEvent]:
        limit = require_positive(limit, "El límite")
        start = today or today_local()
        return list(
            self._events.list_by_start(
                start_from=start,
                start_to=start + timedelta(days=DEFAULT_UPCOMING_DAYS),
                limit=limit,
            )
        )

    def events_by_kind(self, kind: Union[EventKind, str]) -> list[CalendarEvent]:
        return list(self._events.list_by_start(kind=parse_kind(kind)))

    def get_month(self, year: int, month: int, locale: Union[Locale, str, None] = None) -> CalendarMonth:
        """Monthly calendar view, including entities that only touch padding days."""
        grid_start, grid_end = grid_bounds(year, month)

        sessions = [to_session_summary(s) for s in self._sessions.list_overlapping(start=grid_start, end=grid_end)]
        events = [to_event_summary(e) for e in self._events.list_overlapping(start=grid_start, end=grid_end)]

        return self._builder.build(year, month, sessions, events, locale=locale or self._default_locale)
