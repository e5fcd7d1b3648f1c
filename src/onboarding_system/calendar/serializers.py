from __future__ import annotations

from datetime import date
from typing import Optional

from ..common.datetime_utils import format_iso
from .model import CalendarDay, CalendarEvent, CalendarMonth, EventSummary, SessionSummary


def _iso_or_none(value: Optional[date]) -> Optional[str]:
    return format_iso(value) if value is not None else None


def event_to_dict(event: CalendarEvent) -> dict:
    return {
        "id": event.event_id,
        "title": event.title,
        "description": event.description or "",
        "kind": event.kind.value,
        "start_date": format_iso(event.start_date),
        "end_date": _iso_or_none(event.end_date),
        "is_all_day": event.is_all_day,
        "color": event.color,
        "session_id": event.session_id,
    }


def session_summary_to_dict(session: SessionSummary) -> dict:
    return {
        "id": session.id,
        "title": session.title,
        "type_color": session.type_color,
        "start_date": format_iso(session.start_date),
        "end_date": _iso_or_none(session.end_date),
        "status": session.status,
    }


def event_summary_to_dict(event: EventSummary) -> dict:
    return {
        "id": event.id,
        "title": event.title,
        "kind": event.kind.value,
        "start_date": format_iso(event.start_date),
        "end_date": _iso_or_none(event.end_date),
        "is_all_day": event.is_all_day,
        "color": event.color,
    }


def day_to_dict(day: CalendarDay) -> dict:
    return {
        "date": format_iso(day.date),
        "in_target_month": day.in_target_month,
        "sessions": [session_summary_to_dict(s) for s in day.sessions],
        "events": [event_summary_to_dict(e) for e in day.events],
    }


def month_to_dict(calendar_month: CalendarMonth) -> dict:
    return {
        "year": calendar_month.year,
        "month": calendar_month.month,
        "month_name": calendar_month.month_name,
        "weeks": [[day_to_dict(day) for day in week] for week in calendar_month.weeks],
    }
