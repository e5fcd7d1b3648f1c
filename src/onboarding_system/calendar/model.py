from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from ..common.datetime_utils import require_date_only
from ..core.enums import EventKind


@dataclass(frozen=True)
class CalendarEvent:
    """Evento persistido en el calendario (reunión, feriado, ...)."""

    event_id: int
    title: str
    kind: EventKind
    start_date: date
    color: str
    end_date: Optional[date] = None
    is_all_day: bool = False
    description: Optional[str] = None
    session_id: Optional[int] = None
    is_active: bool = True


@dataclass(frozen=True)
class SessionSummary:
    """Onboarding session as shown on the calendar."""

    id: int
    title: str
    type_color: str
    start_date: date
    end_date: Optional[date] = None
    status: Optional[str] = None

    def __post_init__(self) -> None:
        require_date_only(self.start_date, "start_date")
        if self.end_date is not None:
            require_date_only(self.end_date, "end_date")

    @property
    def last_date(self) -> date:
        return self.end_date if self.end_date is not None else self.start_date

    def occurs_on(self, day: date) -> bool:
        return self.start_date <= day <= self.last_date


@dataclass(frozen=True)
class EventSummary:
    id: int
    title: str
    kind: EventKind
    start_date: date
    end_date: Optional[date] = None
    is_all_day: bool = False
    color: str = ""

    def __post_init__(self) -> None:
        require_date_only(self.start_date, "start_date")
        if self.end_date is not None:
            require_date_only(self.end_date, "end_date")

    @property
    def last_date(self) -> date:
        return self.end_date if self.end_date is not None else self.start_date

    def occurs_on(self, day: date) -> bool:
        return self.start_date <= day <= self.last_date


@dataclass(frozen=True)
class CalendarDay:
    date: date
    in_target_month: bool
    sessions: tuple[SessionSummary, ...] = ()
    events: tuple[EventSummary, ...] = ()


@dataclass(frozen=True)
class CalendarMonth:
    year: int
    month: int
    month_name: str
    weeks: tuple[tuple[CalendarDay, ...], ...] = field(default_factory=tuple)

    @property
    def days(self) -> list[CalendarDay]:
        return [day for week in self.weeks for day in week]
