from __future__ import annotations

from datetime import date
from typing import Any, Mapping, Optional, Sequence

from ..core.enums import SessionStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_date
from .model import OnboardingSession, SessionStats, TypeCount
from .repository import OnboardingSessionRepository

_SELECT = """
    SELECT
        s.session_id, s.title, s.description, s.type_id, s.start_date, s.end_date,
        s.status, s.max_capacity, s.location, s.virtual_link, s.notes, s.is_active,
        t.name AS type_name, t.color AS type_color
    FROM onboarding_sessions s
    JOIN onboarding_types t ON t.type_id = s.type_id
"""

# Columns the service layer may change through update().
_UPDATABLE_COLUMNS = {
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


def _row_to_session(r: dict) -> OnboardingSession:
    return OnboardingSession(
        session_id=int(r["session_id"]),
        title=r["title"],
        type_id=int(r["type_id"]),
        start_date=normalize_mysql_date(r["start_date"]),
        end_date=normalize_mysql_date(r["end_date"]),
        status=SessionStatus(r["status"]),
        max_capacity=int(r["max_capacity"]),
        description=r.get("description"),
        location=r.get("location"),
        virtual_link=r.get("virtual_link"),
        notes=r.get("notes"),
        is_active=bool(r.get("is_active", 1)),
        type_name=r.get("type_name"),
        type_color=r.get("type_color"),
    )


class MySQLOnboardingSessionRepository(OnboardingSessionRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, session_id: int) -> Optional[OnboardingSession]:
        with db_cursor(self._conn_factory) as cur:
            cur.execute(_SELECT + " WHERE s.session_id=%s", (int(session_id),))
            r = fetchone(cur)
            return _row_to_session(r) if r else None

    def create(
        self,
        *,
        title: str,
        type_id: int,
        start_date: date,
        end_date: date,
        status: SessionStatus,
        max_capacity: int,
        description: Optional[str] = None,
        location: Optional[str] = None,
        virtual_link: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> int:
        with db_cursor(self._conn_factory) as cur:
            cur.execute(
                """
                INSERT INTO onboarding_sessions(
                    title, description, type_id, start_date, end_date, status,
                    max_capacity, location, virtual_link, notes
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    title,
                    description,
                    int(type_id),
                    start_date,
                    end_date,
                    status.value,
                    int(max_capacity),
                    location,
                    virtual_link,
                    notes,
                ),
            )
            return int(cur.lastrowid)

    def update(self, *, session_id: int, changes: Mapping[str, Any]) -> bool:
        columns = [c for c in changes if c in _UPDATABLE_COLUMNS]
        if not columns:
            return False

        params: list[object] = []
        for c in columns:
            value = changes[c]
            params.append(value.value if isinstance(value, SessionStatus) else value)
        params.append(int(session_id))

        assignments = ", ".join(f"{c}=%s" for c in columns)
        with db_cursor(self._conn_factory) as cur:
            cur.execute(f"UPDATE onboarding_sessions SET {assignments} WHERE session_id=%s", tuple(params))
            return cur.rowcount > 0

    def delete(self, *, session_id: int) -> bool:
        with db_cursor(self._conn_factory) as cur:
            cur.execute("DELETE FROM onboarding_sessions WHERE session_id=%s", (int(session_id),))
            return cur.rowcount > 0

    def list_filtered(
        self,
        *,
        type_id: Optional[int] = None,
        status: Optional[SessionStatus] = None,
        start_from: Optional[date] = None,
        start_to: Optional[date] = None,
        is_active: Optional[bool] = None,
        offset: int = 0,
        limit: int = 10,
    ) -> tuple[list[OnboardingSession], int]:
        clauses = ["1=1"]
        params: list[object] = []
        if type_id is not None:
            clauses.append("s.type_id=%s")
            params.append(int(type_id))
        if status is not None:
            clauses.append("s.status=%s")
            params.append(status.value)
        if start_from is not None:
            clauses.append("s.start_date >= %s")
            params.append(start_from)
        if start_to is not None:
            clauses.append("s.start_date <= %s")
            params.append(start_to)
        if is_active is not None:
            clauses.append("s.is_active=%s")
            params.append(1 if is_active else 0)

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as cur:
            cur.execute(f"SELECT COUNT(*) AS total FROM onboarding_sessions s WHERE {where}", tuple(params))
            total = int((fetchone(cur) or {}).get("total") or 0)

            cur.execute(
                _SELECT + f" WHERE {where} ORDER BY s.start_date ASC, s.session_id ASC LIMIT %s OFFSET %s",
                tuple(params) + (int(limit), int(offset)),
            )
            return [_row_to_session(r) for r in fetchall(cur)], total

    def list_overlapping(self, *, start: date, end: date) -> Sequence[OnboardingSession]:
        with db_cursor(self._conn_factory) as cur:
            cur.execute(
                _SELECT
                + """
                WHERE s.is_active=1 AND s.start_date <= %s AND s.end_date >= %s
                ORDER BY s.start_date ASC, s.session_id ASC
                """,
                (end, start),
            )
            return [_row_to_session(r) for r in fetchall(cur)]

    def list_starting_between(
        self,
        *,
        start: date,
        end: date,
        status: Optional[SessionStatus] = None,
        limit: Optional[int] = None,
    ) -> Sequence[OnboardingSession]:
        sql = _SELECT + " WHERE s.is_active=1 AND s.start_date BETWEEN %s AND %s"
        params: list[object] = [start, end]
        if status is not None:
            sql += " AND s.status=%s"
            params.append(status.value)
        sql += " ORDER BY s.start_date ASC, s.session_id ASC"
        if limit is not None:
            sql += " LIMIT %s"
            params.append(int(limit))

        with db_cursor(self._conn_factory) as cur:
            cur.execute(sql, tuple(params))
            return [_row_to_session(r) for r in fetchall(cur)]

    def stats(self) -> SessionStats:
        with db_cursor(self._conn_factory) as cur:
            cur.execute(
                "SELECT COUNT(*) AS total, COALESCE(SUM(max_capacity), 0) AS capacity FROM onboarding_sessions"
            )
            totals = fetchone(cur) or {}

            cur.execute("SELECT status, COUNT(*) AS n FROM onboarding_sessions GROUP BY status")
            by_status = {s: 0 for s in SessionStatus}
            for r in fetchall(cur):
                by_status[SessionStatus(r["status"])] = int(r["n"])

            cur.execute(
                """
                SELECT t.name, t.color, COUNT(s.session_id) AS n
                FROM onboarding_sessions s
                JOIN onboarding_types t ON t.type_id = s.type_id
                GROUP BY t.type_id, t.name, t.color
                ORDER BY t.name ASC
                """
            )
            by_type = tuple(TypeCount(name=r["name"], color=r["color"], count=int(r["n"])) for r in fetchall(cur))

        return SessionStats(
            total=int(totals.get("total") or 0),
            by_status=by_status,
            total_capacity=int(totals.get("capacity") or 0),
            by_type=by_type,
        )
