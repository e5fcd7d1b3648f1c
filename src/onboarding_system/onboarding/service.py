from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Any, Optional

from ..calendar.builder import validate_year_month
from ..calendar.model import SessionSummary
from ..calendar.service import to_session_summary
from ..common.datetime_utils import month_bounds, start_date_window, today_local
from ..common.validators import parse_bool, require_date_range, require_max_length, require_non_empty, require_positive
from ..core.constants import DEFAULT_PAGE_SIZE, DEFAULT_UPCOMING_DAYS, DEFAULT_UPCOMING_SESSIONS_LIMIT
from ..core.enums import SessionStatus
from ..core.exceptions import NotFoundError, ValidationError
from .model import OnboardingSession, OnboardingType, SessionStats
from .repository import OnboardingSessionRepository, OnboardingTypeRepository

logger = logging.getLogger(__name__)

_EDITABLE_FIELDS = {
    "title",
    "description",
    "type_id",
    "start_date",
    "end_date",
    "status",
    "max_capacity",
    "location",
    "virtual_link",
    "notes",
    "is_active",
}

# Columns that are NOT NULL in onboarding_sessions.
_REQUIRED_ON_UPDATE = {
    "type_id": "El tipo de onboarding es obligatorio",
    "start_date": "La fecha de inicio es obligatoria",
    "end_date": "La fecha de fin es obligatoria",
    "max_capacity": "La capacidad máxima es obligatoria",
    "status": "El estado es obligatorio",
}


@dataclass(frozen=True)
class SessionPage:
    data: list[OnboardingSession]
    total: int
    page: int
    limit: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.limit) if self.limit else 0

    @property
    def meta(self) -> dict:
        return {
            "total": self.total,
            "page": self.page,
            "limit": self.limit,
            "total_pages": self.total_pages,
            "has_next_page": self.page < self.total_pages,
            "has_previous_page": self.page > 1,
        }


def parse_status(value: Any) -> SessionStatus:
    try:
        return SessionStatus(value)
    except ValueError as e:
        raise ValidationError(f"Estado de sesión inválido: {value!r}") from e


class OnboardingService:
    """Use case: manage onboarding sessions and their types."""

    def __init__(self, sessions: OnboardingSessionRepository, types: OnboardingTypeRepository):
        self._sessions = sessions
        self._types = types

    def list_types(self) -> list[OnboardingType]:
        return list(self._types.list_active())

    def _require_active_type(self, type_id: int) -> OnboardingType:
        onboarding_type = self._types.get_by_id(int(type_id))
        if not onboarding_type or not onboarding_type.is_active:
            raise NotFoundError("Tipo de onboarding no encontrado")
        return onboarding_type

    def create_session(
        self,
        *,
        title: str,
        type_id: int,
        start_date: date,
        end_date: Optional[date] = None,
        max_capacity: int = 1,
        status: SessionStatus = SessionStatus.SCHEDULED,
        description: Optional[str] = None,
        location: Optional[str] = None,
        virtual_link: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> int:
        title = require_max_length(require_non_empty(title, "Título"), "Título", 150)
        require_date_range(start_date, end_date)
        onboarding_type = self._require_active_type(type_id)
        max_capacity = require_positive(max_capacity, "La capacidad máxima")

        if end_date is None:
            # Default length comes from the onboarding type.
            end_date = start_date + timedelta(days=max(onboarding_type.duration_days, 1) - 1)

        session_id = self._sessions.create(
            title=title,
            type_id=onboarding_type.type_id,
            start_date=start_date,
            end_date=end_date,
            status=parse_status(status),
            max_capacity=max_capacity,
            description=description,
            location=location,
            virtual_link=virtual_link,
            notes=notes,
        )
        logger.info("Onboarding session %s created (%s..%s)", session_id, start_date, end_date)
        return session_id

    def get_session(self, session_id: int) -> OnboardingSession:
        session = self._sessions.get_by_id(int(session_id))
        if not session:
            raise NotFoundError(f"Sesión con ID {session_id} no encontrada")
        return session

    def list_sessions(
        self,
        *,
        type_id: Optional[int] = None,
        status: Optional[SessionStatus] = None,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
        is_active: Optional[bool] = None,
        page: int = 1,
        limit: int = DEFAULT_PAGE_SIZE,
    ) -> SessionPage:
        page = require_positive(page, "La página")
        limit = require_positive(limit, "El límite")
        start_from, start_to = start_date_window(date_from, date_to)

        rows, total = self._sessions.list_filtered(
            type_id=type_id,
            status=status,
            start_from=start_from,
            start_to=start_to,
            is_active=is_active,
            offset=(page - 1) * limit,
            limit=limit,
        )
        return SessionPage(data=list(rows), total=int(total), page=page, limit=limit)

    def update_session(self, session_id: int, /, **changes: Any) -> OnboardingSession:
        session = self.get_session(session_id)

        unknown = set(changes) - _EDITABLE_FIELDS
        if unknown:
            raise ValidationError(f"Campos no editables: {', '.join(sorted(unknown))}")

        if "title" in changes:
            changes["title"] = require_max_length(require_non_empty(changes["title"], "Título"), "Título", 150)
        for field, message in _REQUIRED_ON_UPDATE.items():
            if field in changes and changes[field] is None:
                raise ValidationError(message)
        if "type_id" in changes:
            changes["type_id"] = self._require_active_type(changes["type_id"]).type_id
        if "max_capacity" in changes:
            changes["max_capacity"] = require_positive(changes["max_capacity"], "La capacidad máxima")
        if "status" in changes:
            changes["status"] = parse_status(changes["status"])
        if "is_active" in changes:
            changes["is_active"] = parse_bool(changes["is_active"], "is_active")

        start = changes.get("start_date", session.start_date)
        end = changes.get("end_date", session.end_date)
        require_date_range(start, end)

        if not changes:
            return session

        # rowcount is 0 when MySQL sees identical values, so it is not checked here.
        self._sessions.update(session_id=session.session_id, changes=changes)
        logger.info("Onboarding session %s updated: %s", session.session_id, ", ".join(sorted(changes)))
        return self.get_session(session.session_id)

    def delete_session(self, session_id: int) -> None:
        if not self._sessions.delete(session_id=int(session_id)):
            raise NotFoundError(f"Sesión con ID {session_id} no encontrada")
        logger.info("Onboarding session %s deleted", session_id)

    def sessions_for_calendar(self, start: date, end: date) -> list[SessionSummary]:
        """Active sessions overlapping ``start``..``end``, ordered by start date."""
        require_date_range(start, end)
        return [to_session_summary(s) for s in self._sessions.list_overlapping(start=start, end=end)]

    def change_status(self, session_id: int, status: Any) -> OnboardingSession:
        if status is None or status == "":
            raise ValidationError("El estado es obligatorio")
        new_status = parse_status(status)
        session = self.get_session(session_id)

        self._sessions.update(session_id=session.session_id, changes={"status": new_status})
        logger.info("Onboarding session %s: %s -> %s", session.session_id, session.status.value, new_status.value)
        return self.get_session(session.session_id)

    def stats(self) -> SessionStats:
        return self._sessions.stats()

    def upcoming_sessions(
        self,
        limit: int = DEFAULT_UPCOMING_SESSIONS_LIMIT,
        *,
        today: Optional[date] = None,
    ) -> list[OnboardingSession]:
        """Scheduled sessions starting within the next 30 days."""
        limit = require_positive(limit, "El límite")
        start = today or today_local()
        return list(
            self._sessions.list_starting_between(
                start=start,
                end=start + timedelta(days=DEFAULT_UPCOMING_DAYS),
                status=SessionStatus.SCHEDULED,
                limit=limit,
            )
        )

    def sessions_by_month(self, year: int, month: int) -> list[OnboardingSession]:
        """Active sessions starting inside ``year``/``month``."""
        validate_year_month(year, month)
        first, last = month_bounds(year, month)
        return list(self._sessions.list_starting_between(start=first, end=last))
