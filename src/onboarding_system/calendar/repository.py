from __future__ import annotations

from datetime import date
from typing import Any, Mapping, Optional, Protocol, Sequence

from ..core.enums import EventKind
from .model import CalendarEvent


class EventRepository(Protocol):
    def get_by_id(self, event_id: int) -> Optional[CalendarEvent]:
        raise NotImplementedError

    def create(
        self,
        *,
        title: str,
        kind: EventKind,
        start_date: date,
        color: str,
        end_date: Optional[date] = None,
        is_all_day: bool = False,
        description: Optional[str] = None,
        session_id: Optional[int] = None,
    ) -> int:
        raise NotImplementedError

    def update(self, *, event_id: int, changes: Mapping[str, Any]) -> bool:
        raise NotImplementedError

    def deactivate(self, *, event_id: int) -> bool:
        """Soft delete: the row stays but is no longer listed."""

        raise NotImplementedError

    def list_by_start(
        self,
        *,
        start_from: Optional[date] = None,
        start_to: Optional[date] = None,
        kind: Optional[EventKind] = None,
        limit: Optional[int] = None,
    ) -> Sequence[CalendarEvent]:
        """Active events whose start date is within the bounds, ordered by start date."""

        raise NotImplementedError

    def list_overlapping(self, *, start: date, end: date) -> Sequence[CalendarEvent]:
        """Active events whose [start_date, end_date or start_date] intersects [start, end]."""

        raise NotImplementedError
