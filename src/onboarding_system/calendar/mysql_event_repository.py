from __future__ import annotations

from datetime import date
from typing import Any, Mapping, Optional, Sequence

from ..core.enums import EventKind
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_date
from .model import CalendarEvent
from .repository import EventRepository

_SELECT = """
    SELECT event_id, title, description, kind, start_date, end_date,
           is_all_day, color, session_id, is_active
    FROM calendar_events
"""

_UPDATABLE_COLUMNS = {
    "title",
    "description",
    "kind",
    "start_date",
    "end_date",
    "is_all_day",
    "color",
    "session_id",
}


def _row_to_event(r: dict) -> CalendarEvent:
    return CalendarEvent(
        event_id=int(r["event_id"]),
        title=r["title"],
        kind=EventKind(r["kind"]),
        start_date=normalize_mysql_date(r["start_date"]),
        end_date=normalize_mysql_date(r.get("end_date")),
        is_all_day=bool(r.get("is_all_day")),
        color=r["color"],
        description=r.get("description"),
        session_id=int(r["session_id"]) if r.get("session_id") is not None else None,
        is_active=bool(r.get("is_active", 1)),
    )


class MySQLEventRepository(EventRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, event_id: int) -> Optional[CalendarEvent]:
        with db_cursor(self._conn_factory) as cur:
            cur.execute(_SELECT + " WHERE event_id=%s", (int(event_id),))
            r = fetchone(cur)
            return _row_to_event(r) if r else None

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
        with db_cursor(self._conn_factory) as cur:
            cur.execute(
                """
                INSERT INTO calendar_events(
                    title, description, kind, start_date, end_date, is_all_day, color, session_id
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    title,
                    description,
                    kind.value,
                    start_date,
                    end_date,
                    1 if is_all_day else 0,
                    color,
                    session_id,
                ),
            )
            return int(cur.lastrowid)

    def update(self, *, event_id: int, changes: Mapping[str, Any]) -> bool:
        columns = [c for c in changes if c in _UPDATABLE_COLUMNS]
        if not columns:
            return False

        params: list[object] = []
        for c in columns:
            value = changes[c]
            if isinstance(value, EventKind):
                value = value.value
            elif isinstance(value, bool):
                value = 1 if value else 0
            params.append(value)
        params.append(int(event_id))

        assignments = ", ".join(f"{c}=%s" for c in columns)
        with db_cursor(self._conn_factory) as cur:
            cur.execute(f"UPDATE calendar_events SET {assignments} WHERE event_id=%s", tuple(params))
            return cur.rowcount > 0

    def deactivate(self, *, event_id: int) -> bool:
        with db_cursor(self._conn_factory) as cur:
            cur.execute("UPDATE calendar_events SET is_active=0 WHERE event_id=%s", (int(event_id),))
            return cur.rowcount > 0

    def list_by_start(
        self,
        *,
        start_from: Optional[date] = None,
        start_to: Optional[date] = None,
        kind: Optional[EventKind] = None,
        limit: Optional[int] = None,
    ) -> Sequence[CalendarEvent]:
        clauses = ["is_active=1"]
        params: list[object] = []
        if start_from is not None:
            clauses.append("start_date >= %s")
            params.append(start_from)
        if start_to is not None:
            clauses.append("start_date <= %s")
            params.append(start_to)
        if kind is not None:
            clauses.append("kind=%s")
            params.append(kind.value)

        sql = _SELECT + f" WHERE {' AND '.join(clauses)} ORDER BY start_date ASC, event_id ASC"
        if limit is not None:
            sql += " LIMIT %s"
            params.append(int(limit))

        with db_cursor(self._conn_factory) as cur:
            cur.execute(sql, tuple(params))
            return [_row_to_event(r) for r in fetchall(cur)]

    def list_overlapping(self, *, start: date, end: date) -> Sequence[CalendarEvent]:
        with db_cursor(self._conn_factory) as cur:
            cur.execute(
                _SELECT
                + """
                WHERE is_active=1 AND start_date <= %s AND COALESCE(end_date, start_date) >= %s
                ORDER BY start_date ASC, event_id ASC
                """,
                (end, start),
            )
            return [_row_to_event(r) for r in fetchall(cur)]
